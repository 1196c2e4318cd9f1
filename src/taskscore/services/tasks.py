"""
Task Read Operations

Task detail and event listing. Status and aggregates are derived from events
on every read.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from src.taskscore.contracts import TaskDetail
from src.taskscore.core import derive_task_summary
from src.taskscore.exceptions import EntityNotFoundError
from src.taskscore.services.pagination import clamp_limit

if TYPE_CHECKING:
    from src.taskscore.common.storage import RepositoryProvider
    from src.taskscore.contracts import InteractionEvent


async def get_task_detail(
    repos: RepositoryProvider,
    tenant_id: str,
    task_id: str,
) -> TaskDetail:
    """
    Summary of a task joined with its latest score.

    Raises:
        EntityNotFoundError: If the task has no events
    """
    events = await repos.events.list_for_task(tenant_id, task_id)
    if not events:
        raise EntityNotFoundError("Task", task_id)

    summary = derive_task_summary(events, task_id=task_id)
    latest = await repos.scores.get_latest_for_task(tenant_id, task_id)
    return TaskDetail(summary=summary, latest_score=latest)


async def list_task_events(
    repos: RepositoryProvider,
    tenant_id: str,
    task_id: str,
    limit: int = 50,
) -> list[InteractionEvent]:
    """A task's events in (ts, id) order, first `limit` of them."""
    events = await repos.events.list_for_task(tenant_id, task_id)
    return events[: clamp_limit(limit)]
