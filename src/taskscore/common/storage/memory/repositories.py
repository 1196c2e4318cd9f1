"""
In-Memory Repository Implementations

Simple dict-based storage for unit testing and local runs.
Implements the same protocols as the PostgreSQL backend.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from src.taskscore.contracts import _now_utc

if TYPE_CHECKING:
    from src.taskscore.contracts import (
        EvalScore,
        EvaluationConfig,
        EvaluationConfigUpdate,
        InteractionEvent,
    )


class InMemoryEventRepository:
    """
    In-memory implementation of EventRepository.

    Events are kept in insertion order per tenant; reads sort by (ts, id).
    """

    def __init__(self):
        self._store: dict[str, list[InteractionEvent]] = {}

    async def insert(self, event: InteractionEvent) -> None:
        self._store.setdefault(event.tenant_id, []).append(event)

    async def list_for_task(self, tenant_id: str, task_id: str) -> list[InteractionEvent]:
        results = [e for e in self._store.get(tenant_id, []) if e.task_id == task_id]
        return sorted(results, key=lambda e: e.sort_key)

    async def list_for_agent(self, tenant_id: str, agent_name: str) -> list[InteractionEvent]:
        results = [e for e in self._store.get(tenant_id, []) if e.agent_name == agent_name]
        return sorted(results, key=lambda e: e.sort_key)

    async def list_agent_names(self, tenant_id: str) -> list[str]:
        return sorted({e.agent_name for e in self._store.get(tenant_id, [])})


class InMemoryEvaluationConfigRepository:
    """In-memory implementation of EvaluationConfigRepository."""

    def __init__(self):
        self._store: dict[tuple[str, str], EvaluationConfig] = {}

    async def get(self, tenant_id: str, agent_name: str) -> EvaluationConfig | None:
        return self._store.get((tenant_id, agent_name))

    async def upsert(
        self,
        tenant_id: str,
        agent_name: str,
        update: EvaluationConfigUpdate,
    ) -> tuple[EvaluationConfig, bool]:
        key = (tenant_id, agent_name)
        existing = self._store.get(key)
        now = _now_utc()

        if existing is None:
            config = update.create(tenant_id, agent_name, now=now)
            created = True
        else:
            config = update.apply_to(existing, now=now)
            created = False

        self._store[key] = config
        return config, created


class InMemoryScoreRepository:
    """In-memory implementation of ScoreRepository."""

    def __init__(self):
        self._store: dict[str, list[EvalScore]] = {}

    async def insert(self, score: EvalScore) -> None:
        self._store.setdefault(score.tenant_id, []).append(score)

    def _newest_first(self, scores: list[EvalScore]) -> list[EvalScore]:
        return sorted(scores, key=lambda s: s.recency_key, reverse=True)

    async def list_for_task(self, tenant_id: str, task_id: str) -> list[EvalScore]:
        results = [s for s in self._store.get(tenant_id, []) if s.task_id == task_id]
        return self._newest_first(results)

    async def list_for_agent(
        self,
        tenant_id: str,
        agent_name: str,
        limit: int = 20,
    ) -> list[EvalScore]:
        results = [s for s in self._store.get(tenant_id, []) if s.agent_name == agent_name]
        return self._newest_first(results)[:limit]

    async def get_latest_for_task(self, tenant_id: str, task_id: str) -> EvalScore | None:
        results = [s for s in self._store.get(tenant_id, []) if s.task_id == task_id]
        if not results:
            return None
        return max(results, key=lambda s: s.recency_key)
