"""
Repository Protocol Definitions

Uses typing.Protocol for duck-typed interface definitions.
No inheritance required - any class implementing these methods qualifies.

Every method takes the tenant id; no query ever crosses tenants.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from src.taskscore.contracts import (
        EvalScore,
        EvaluationConfig,
        EvaluationConfigUpdate,
        InteractionEvent,
    )


@runtime_checkable
class EventRepository(Protocol):
    """
    Append-only store of interaction events.

    Events are never updated or deleted.
    """

    async def insert(self, event: InteractionEvent) -> None:
        """Store a new event."""
        ...

    async def list_for_task(self, tenant_id: str, task_id: str) -> list[InteractionEvent]:
        """All events of a task in ascending (ts, id) order."""
        ...

    async def list_for_agent(self, tenant_id: str, agent_name: str) -> list[InteractionEvent]:
        """All events emitted by an agent, in ascending (ts, id) order."""
        ...

    async def list_agent_names(self, tenant_id: str) -> list[str]:
        """Distinct agent names with at least one event, sorted."""
        ...


@runtime_checkable
class EvaluationConfigRepository(Protocol):
    """
    Store of per-agent evaluation configs.

    At most one row per (tenant_id, agent_name), updated in place.
    """

    async def get(self, tenant_id: str, agent_name: str) -> EvaluationConfig | None:
        """Fetch the current config for an agent."""
        ...

    async def upsert(
        self,
        tenant_id: str,
        agent_name: str,
        update: EvaluationConfigUpdate,
    ) -> tuple[EvaluationConfig, bool]:
        """
        Create or update the config for an agent.

        A create starts at version 1. An update bumps the version by one and
        keeps any field the update leaves as None.

        Returns:
            Tuple of (stored config, True if it was created)
        """
        ...


@runtime_checkable
class ScoreRepository(Protocol):
    """Append-only store of scoring attempts."""

    async def insert(self, score: EvalScore) -> None:
        """Store a new score row."""
        ...

    async def list_for_task(self, tenant_id: str, task_id: str) -> list[EvalScore]:
        """All scores of a task, newest first."""
        ...

    async def list_for_agent(
        self,
        tenant_id: str,
        agent_name: str,
        limit: int = 20,
    ) -> list[EvalScore]:
        """Most recent scores for an agent, newest first (created_at desc, id desc)."""
        ...

    async def get_latest_for_task(self, tenant_id: str, task_id: str) -> EvalScore | None:
        """The score with the greatest (created_at, id), or None."""
        ...
