"""Shared fixtures for TaskScore unit tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import pytest
import pytest_asyncio

from src.taskscore.common.storage import RepositoryProvider, StorageConfig
from src.taskscore.contracts import InteractionEvent, InteractionType
from src.taskscore.judge import ScriptedJudge
from src.taskscore.scoring import ScoringOrchestrator

T0 = datetime(2025, 1, 15, 12, 0, 0, tzinfo=UTC)

TENANT = "ws-alpha"
AGENT = "support-bot"

EventFactory = Callable[..., InteractionEvent]


@pytest.fixture
def t0() -> datetime:
    return T0


@pytest.fixture
def make_event() -> EventFactory:
    """Factory for stored events, timed relative to T0 in seconds."""

    def _make(
        kind: InteractionType | str,
        message: str | None = None,
        *,
        at: float = 0,
        task_id: str = "task-1",
        agent_name: str = AGENT,
        tenant_id: str = TENANT,
        event_id: str | None = None,
        **fields,
    ) -> InteractionEvent:
        kwargs = {
            "tenant_id": tenant_id,
            "agent_name": agent_name,
            "task_id": task_id,
            "interaction_type": InteractionType(kind),
            "message": message,
            "ts": T0 + timedelta(seconds=at),
            **fields,
        }
        if event_id is not None:
            kwargs["id"] = event_id
        return InteractionEvent(**kwargs)

    return _make


@pytest_asyncio.fixture
async def repos():
    """Initialized in-memory RepositoryProvider."""
    async with RepositoryProvider(StorageConfig(backend="memory")) as provider:
        yield provider


@pytest.fixture
def judge() -> ScriptedJudge:
    """Scripted judge returning the default verdict (8, "Good job")."""
    return ScriptedJudge()


@pytest.fixture
def orchestrator(repos: RepositoryProvider, judge: ScriptedJudge) -> ScoringOrchestrator:
    return ScoringOrchestrator.from_provider(repos, judge=judge)
