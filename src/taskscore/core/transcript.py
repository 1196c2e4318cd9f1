"""Judge transcript assembly."""

from __future__ import annotations

from collections.abc import Iterable

from src.taskscore.contracts import TRANSCRIPT_INTERACTION_TYPES, InteractionEvent
from src.taskscore.core.status import sort_events


def build_transcript(events: Iterable[InteractionEvent]) -> str:
    """
    Render the judge-visible part of a task as text.

    Keeps only UserInput and Result events in (ts, id) order, one
    `[<Kind>] <message>` line each. Identical event sets always produce
    identical text, which keeps prompt hashes stable.
    """
    lines = [
        f"[{e.interaction_type.value}] {e.message or ''}"
        for e in sort_events(events)
        if e.interaction_type in TRANSCRIPT_INTERACTION_TYPES
    ]
    return "\n".join(lines)
