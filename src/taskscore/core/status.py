"""
Task Status Derivation

Pure functions that turn a task's events into a status and summary. No I/O
and no failure modes: any list of events, including an empty one, yields a
result.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import timedelta

from src.taskscore.contracts import (
    TOOL_INTERACTION_TYPES,
    InteractionEvent,
    InteractionType,
    TaskStatus,
    TaskSummary,
)


def sort_events(events: Iterable[InteractionEvent]) -> list[InteractionEvent]:
    """Return events in ascending (ts, id) order."""
    return sorted(events, key=lambda e: e.sort_key)


def derive_task_status(events: Iterable[InteractionEvent]) -> TaskStatus:
    """
    Derive task status from its events.

    An Error anywhere makes the task failed, even alongside a Result.
    Otherwise a Result makes it succeeded. Anything else is unknown.
    Input order does not matter.
    """
    kinds = {e.interaction_type for e in events}
    if InteractionType.ERROR in kinds:
        return TaskStatus.FAILED
    if InteractionType.RESULT in kinds:
        return TaskStatus.SUCCEEDED
    return TaskStatus.UNKNOWN


def derive_task_summary(
    events: Iterable[InteractionEvent],
    task_id: str | None = None,
    agent_name: str | None = None,
) -> TaskSummary:
    """
    Build a TaskSummary from a task's events.

    Args:
        events: All events of one task, in any order
        task_id: Task id to stamp on the summary (defaults to the events')
        agent_name: Agent name to stamp on the summary (defaults to the events')

    Returns:
        TaskSummary. Timestamps and duration are None for an empty task.
    """
    ordered = sort_events(events)
    if not ordered:
        return TaskSummary(task_id=task_id, agent_name=agent_name)

    first, last = ordered[0], ordered[-1]
    duration = last.ts - first.ts

    return TaskSummary(
        task_id=task_id or first.task_id,
        agent_name=agent_name or first.agent_name,
        status=derive_task_status(ordered),
        started_at=first.ts,
        last_event_at=last.ts,
        duration_ms=duration // timedelta(milliseconds=1),
        event_count=len(ordered),
        error_count=sum(1 for e in ordered if e.interaction_type == InteractionType.ERROR),
        tool_call_count=sum(1 for e in ordered if e.interaction_type in TOOL_INTERACTION_TYPES),
    )
