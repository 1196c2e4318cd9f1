"""
Evaluation Models

EvaluationConfig is the scoring policy for one (tenant, agent) pair.
EvalScore is the outcome of one scoring attempt. JudgeVerdict is what a judge
returns on success.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.taskscore.contracts.core import _generate_id, _now_utc

# =============================================================================
# Evaluation Config
# =============================================================================


class EvaluationConfig(BaseModel):
    """
    Current scoring policy for an agent.

    There is at most one row per (tenant_id, agent_name). Updates mutate the
    row and bump `version`; the version is copied onto every score produced
    under it.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_generate_id)
    tenant_id: str = Field(..., min_length=1)
    agent_name: str = Field(..., min_length=1)
    rubric_text: str | None = None
    expected_text: str | None = None
    is_enabled: bool = True
    version: int = Field(default=1, ge=1)
    created_at: datetime = Field(default_factory=_now_utc)
    updated_at: datetime = Field(default_factory=_now_utc)

    def to_view(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "agent_name": self.agent_name,
            "rubric_text": self.rubric_text,
            "expected_text": self.expected_text,
            "is_enabled": self.is_enabled,
            "version": self.version,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


class EvaluationConfigUpdate(BaseModel):
    """
    Partial PUT body for an evaluation config.

    A field left as None keeps its prior value on update.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    rubric_text: str | None = None
    expected_text: str | None = None
    is_enabled: bool | None = None

    def create(
        self,
        tenant_id: str,
        agent_name: str,
        now: datetime | None = None,
    ) -> EvaluationConfig:
        """First PUT: version 1, empty texts stored as null, enabled by default."""
        now = now or _now_utc()
        return EvaluationConfig(
            tenant_id=tenant_id,
            agent_name=agent_name,
            rubric_text=self.rubric_text or None,
            expected_text=self.expected_text or None,
            is_enabled=True if self.is_enabled is None else self.is_enabled,
            version=1,
            created_at=now,
            updated_at=now,
        )

    def apply_to(
        self,
        existing: EvaluationConfig,
        now: datetime | None = None,
    ) -> EvaluationConfig:
        """Subsequent PUT: bump version, keep unspecified fields."""
        return existing.model_copy(
            update={
                "rubric_text": (
                    existing.rubric_text if self.rubric_text is None else self.rubric_text
                ),
                "expected_text": (
                    existing.expected_text if self.expected_text is None else self.expected_text
                ),
                "is_enabled": existing.is_enabled if self.is_enabled is None else self.is_enabled,
                "version": existing.version + 1,
                "updated_at": now or _now_utc(),
            }
        )


# =============================================================================
# Judge Output
# =============================================================================


class JudgeVerdict(BaseModel):
    """Validated judge output."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=1, le=10, description="Integer score from 1-10")
    verdict: str = Field(..., description="Brief explanation for the score")


# =============================================================================
# Eval Score
# =============================================================================


class EvalScore(BaseModel):
    """
    Outcome of one scoring attempt for one task.

    Success rows carry score and verdict with a null error; failure rows carry
    only the serialized error payload. Rows are append-only.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_generate_id)
    tenant_id: str = Field(..., min_length=1)
    task_id: str = Field(..., min_length=1)
    agent_name: str = Field(..., min_length=1)
    evaluation_id: str
    evaluation_version: int = Field(..., ge=1)
    score: int | None = Field(default=None, ge=1, le=10)
    verdict: str | None = None
    llm_model: str | None = None
    prompt_hash: str | None = None
    created_at: datetime = Field(default_factory=_now_utc)
    error_json: str | None = Field(default=None, description="Serialized failure payload")

    @property
    def error(self) -> dict[str, Any] | None:
        """Stored failure payload, decoded."""
        if self.error_json is None:
            return None
        return json.loads(self.error_json)

    @property
    def succeeded(self) -> bool:
        return self.error_json is None and self.score is not None

    @property
    def recency_key(self) -> tuple[datetime, str]:
        """Latest-wins ordering: creation time, then id."""
        return (self.created_at, self.id)

    def to_view(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "task_id": self.task_id,
            "score": self.score,
            "verdict": self.verdict,
            "evaluation_version": self.evaluation_version,
            "llm_model": self.llm_model,
            "prompt_hash": self.prompt_hash,
            "created_at": self.created_at.isoformat(),
            "error": self.error,
        }
