"""
Core Types

Enumerations and helpers shared by every TaskScore contract.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4


def _now_utc() -> datetime:
    """Return current UTC datetime."""
    return datetime.now(UTC)


def _generate_id() -> str:
    """Generate a unique identifier."""
    return str(uuid4())


def _ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes and normalize aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


# =============================================================================
# Enumerations
# =============================================================================


class InteractionType(str, Enum):
    """Closed set of roles an agent event can play within a task."""

    USER_INPUT = "UserInput"
    TOOL_CALL = "ToolCall"
    MCP_CALL = "McpCall"
    SKILL_CALL = "SkillCall"
    REASONING = "Reasoning"
    RESULT = "Result"
    ERROR = "Error"


# Kinds counted as tool usage in task summaries
TOOL_INTERACTION_TYPES: frozenset[InteractionType] = frozenset(
    {
        InteractionType.TOOL_CALL,
        InteractionType.MCP_CALL,
        InteractionType.SKILL_CALL,
    }
)

# Kinds the judge gets to see: intent and final output, not process
TRANSCRIPT_INTERACTION_TYPES: frozenset[InteractionType] = frozenset(
    {
        InteractionType.USER_INPUT,
        InteractionType.RESULT,
    }
)


class TaskStatus(str, Enum):
    """Lifecycle status derived from a task's events."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    UNKNOWN = "unknown"
