"""
Task Read Models

Derived views over a task's events and its scores. None of these are stored;
they are recomputed from events on every read.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.taskscore.contracts.core import TaskStatus
from src.taskscore.contracts.evaluation import EvalScore


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


class TaskSummary(BaseModel):
    """Status and aggregates derived from one task's events."""

    model_config = ConfigDict(frozen=True)

    task_id: str | None = None
    agent_name: str | None = None
    status: TaskStatus = TaskStatus.UNKNOWN
    started_at: datetime | None = None
    last_event_at: datetime | None = None
    duration_ms: int | None = Field(default=None, ge=0)
    event_count: int = Field(default=0, ge=0)
    error_count: int = Field(default=0, ge=0)
    tool_call_count: int = Field(default=0, ge=0)

    def to_view(self) -> dict[str, Any]:
        return {
            "task_id": self.task_id,
            "agent_name": self.agent_name,
            "status": self.status.value,
            "started_at": _iso(self.started_at),
            "last_event_at": _iso(self.last_event_at),
            "duration_ms": self.duration_ms,
            "event_count": self.event_count,
            "error_count": self.error_count,
            "tool_call_count": self.tool_call_count,
        }


class TaskDetail(BaseModel):
    """A task summary joined with its most recent score, if any."""

    model_config = ConfigDict(frozen=True)

    summary: TaskSummary
    latest_score: EvalScore | None = None

    @property
    def score(self) -> int | None:
        return self.latest_score.score if self.latest_score else None

    @property
    def verdict(self) -> str | None:
        return self.latest_score.verdict if self.latest_score else None

    @property
    def evaluation_version(self) -> int | None:
        return self.latest_score.evaluation_version if self.latest_score else None

    @property
    def score_error(self) -> dict[str, Any] | None:
        return self.latest_score.error if self.latest_score else None

    def to_view(self) -> dict[str, Any]:
        view = self.summary.to_view()
        view.update(
            {
                "score": self.score,
                "verdict": self.verdict,
                "evaluation_version": self.evaluation_version,
                "score_error": self.score_error,
            }
        )
        return view


class AgentTaskRow(BaseModel):
    """One row of an agent's task list."""

    model_config = ConfigDict(frozen=True)

    task_id: str
    status: TaskStatus
    started_at: datetime | None = None
    duration_ms: int | None = None
    event_count: int = 0
    score: int | None = None

    def to_view(self) -> dict[str, Any]:
        return {
            "task_id": self.task_id,
            "status": self.status.value,
            "started_at": _iso(self.started_at),
            "duration_ms": self.duration_ms,
            "event_count": self.event_count,
            "score": self.score,
        }


class AgentStats(BaseModel):
    """Per-agent totals for a tenant."""

    model_config = ConfigDict(frozen=True)

    agent_name: str
    tasks_count: int = 0
    success_count: int = 0
    error_count: int = 0
    last_seen: datetime | None = None

    def to_view(self) -> dict[str, Any]:
        return {
            "agent_name": self.agent_name,
            "tasks_count": self.tasks_count,
            "success_count": self.success_count,
            "error_count": self.error_count,
            "last_seen": _iso(self.last_seen),
        }
