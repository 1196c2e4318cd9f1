"""
Agent Read Operations

Per-agent task lists and totals, derived from events.
"""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING

from src.taskscore.contracts import (
    AgentStats,
    AgentTaskRow,
    InteractionType,
    TaskStatus,
)
from src.taskscore.core import derive_task_summary
from src.taskscore.services.pagination import clamp_limit

if TYPE_CHECKING:
    from src.taskscore.common.storage import RepositoryProvider
    from src.taskscore.contracts import InteractionEvent


def _group_by_task(events: list[InteractionEvent]) -> dict[str, list[InteractionEvent]]:
    grouped: dict[str, list[InteractionEvent]] = defaultdict(list)
    for event in events:
        grouped[event.task_id].append(event)
    return grouped


async def list_agent_tasks(
    repos: RepositoryProvider,
    tenant_id: str,
    agent_name: str,
    limit: int = 20,
) -> list[AgentTaskRow]:
    """An agent's tasks ordered by task id, each with its latest score."""
    events = await repos.events.list_for_agent(tenant_id, agent_name)
    grouped = _group_by_task(events)

    rows: list[AgentTaskRow] = []
    for task_id in sorted(grouped)[: clamp_limit(limit)]:
        summary = derive_task_summary(grouped[task_id], task_id=task_id, agent_name=agent_name)
        latest = await repos.scores.get_latest_for_task(tenant_id, task_id)
        rows.append(
            AgentTaskRow(
                task_id=task_id,
                status=summary.status,
                started_at=summary.started_at,
                duration_ms=summary.duration_ms,
                event_count=summary.event_count,
                score=latest.score if latest else None,
            )
        )
    return rows


async def list_agents(
    repos: RepositoryProvider,
    tenant_id: str,
    limit: int = 20,
) -> list[AgentStats]:
    """
    Totals for each agent of a tenant, ordered by agent name.

    success_count counts tasks whose derived status is succeeded; error_count
    counts Error events.
    """
    stats: list[AgentStats] = []
    for agent_name in (await repos.events.list_agent_names(tenant_id))[: clamp_limit(limit)]:
        events = await repos.events.list_for_agent(tenant_id, agent_name)
        grouped = _group_by_task(events)
        statuses = [derive_task_summary(task_events).status for task_events in grouped.values()]

        stats.append(
            AgentStats(
                agent_name=agent_name,
                tasks_count=len(grouped),
                success_count=sum(1 for s in statuses if s == TaskStatus.SUCCEEDED),
                error_count=sum(1 for e in events if e.interaction_type == InteractionType.ERROR),
                last_seen=max((e.ts for e in events), default=None),
            )
        )
    return stats
