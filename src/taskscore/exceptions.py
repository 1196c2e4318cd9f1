"""
TaskScore Exception Hierarchy

Provides structured exception types for event ingestion, storage and
judge-based scoring. All taskscore-specific exceptions inherit from
TaskScoreError.

Usage:
    from src.taskscore.exceptions import JudgeError, StorageError

    try:
        verdict = await judge.evaluate(rubric, expected, transcript)
    except JudgeError as e:
        logger.warning(f"Judge failed: {e}")
"""

from __future__ import annotations


class TaskScoreError(Exception):
    """
    Base exception for all TaskScore errors.

    Attributes:
        message: Human-readable error description
        code: Optional machine-readable error code for programmatic handling
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code
        super().__init__(message)

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(TaskScoreError):
    """Base class for configuration-related errors."""

    pass


class MissingConfigError(ConfigurationError):
    """Required configuration is missing."""

    def __init__(self, field: str, hint: str | None = None) -> None:
        message = f"Missing required configuration: '{field}'"
        if hint:
            message += f". {hint}"
        super().__init__(message, code="CONFIG_MISSING")
        self.field = field


# =============================================================================
# Ingestion Errors
# =============================================================================


class EventValidationError(TaskScoreError):
    """An inbound event body is malformed and was rejected before storage."""

    def __init__(self, reason: str, field: str | None = None) -> None:
        super().__init__(reason, code="EVENT_INVALID")
        self.reason = reason
        self.field = field


# =============================================================================
# Storage Errors
# =============================================================================


class StorageError(TaskScoreError):
    """Base class for storage/repository errors."""

    pass


class StorageConnectionError(StorageError):
    """Failed to connect to storage backend."""

    def __init__(self, backend: str, reason: str) -> None:
        super().__init__(
            f"Failed to connect to {backend} storage: {reason}",
            code="STORAGE_CONNECTION",
        )
        self.backend = backend
        self.reason = reason


class StorageWriteError(StorageError):
    """Failed to write to storage."""

    def __init__(self, entity: str, reason: str) -> None:
        super().__init__(
            f"Failed to write {entity}: {reason}",
            code="STORAGE_WRITE",
        )
        self.entity = entity
        self.reason = reason


class EntityNotFoundError(StorageError):
    """Requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: str) -> None:
        super().__init__(
            f"{entity_type} not found: {entity_id}",
            code="STORAGE_NOT_FOUND",
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


# =============================================================================
# Evaluation Errors
# =============================================================================


class EvaluationError(TaskScoreError):
    """Base class for evaluation-related errors."""

    pass


class JudgeError(EvaluationError):
    """
    LLM-as-Judge evaluation failed.

    `reason` carries the bare failure description; it is what gets persisted
    on the failed EvalScore row.
    """

    def __init__(
        self,
        reason: str,
        model: str | None = None,
        code: str = "EVAL_JUDGE",
    ) -> None:
        message = f"Judge evaluation failed: {reason}"
        if model:
            message = f"Judge ({model}) evaluation failed: {reason}"
        super().__init__(message, code=code)
        self.reason = reason
        self.model = model


class JudgeTransportError(JudgeError):
    """The judge provider could not be reached or answered with a non-2xx status."""

    def __init__(
        self,
        reason: str,
        model: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(reason, model=model, code="EVAL_JUDGE_TRANSPORT")
        self.status_code = status_code


class JudgeResponseFormatError(JudgeError):
    """The judge answered, but not with the expected JSON object."""

    def __init__(self, reason: str, model: str | None = None) -> None:
        super().__init__(reason, model=model, code="EVAL_JUDGE_FORMAT")


class JudgeScoreOutOfRangeError(JudgeError):
    """The judge returned a score outside the closed range [1, 10]."""

    def __init__(self, score: float, model: str | None = None) -> None:
        super().__init__(
            f"Score out of range: {score}. Must be 1-10.",
            model=model,
            code="EVAL_JUDGE_RANGE",
        )
        self.score = score


__all__ = [
    # Base
    "TaskScoreError",
    # Configuration
    "ConfigurationError",
    "MissingConfigError",
    # Ingestion
    "EventValidationError",
    # Storage
    "StorageError",
    "StorageConnectionError",
    "StorageWriteError",
    "EntityNotFoundError",
    # Evaluation
    "EvaluationError",
    "JudgeError",
    "JudgeTransportError",
    "JudgeResponseFormatError",
    "JudgeScoreOutOfRangeError",
]
