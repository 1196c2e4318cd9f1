"""
Event Ingestion

Validates and stores one interaction event, then hands it to the scoring
orchestrator. A valid event is always stored; judge failures are recorded as
failed scores and never reach the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from src.taskscore.common.telemetry import add_span_attributes, get_scoring_metrics, trace_async
from src.taskscore.contracts import EvalScore, InteractionEvent, parse_event_input

if TYPE_CHECKING:
    from src.taskscore.common.storage import RepositoryProvider
    from src.taskscore.scoring import ScoringOrchestrator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestResult:
    """Stored event plus the score it triggered, if any."""

    event: InteractionEvent
    score: EvalScore | None = None

    @property
    def id(self) -> str:
        return self.event.id


@trace_async("taskscore.ingest_event")
async def ingest_event(
    repos: RepositoryProvider,
    orchestrator: ScoringOrchestrator,
    tenant_id: str,
    body: Any,
) -> IngestResult:
    """
    Ingest one event.

    Args:
        repos: Initialized repository provider
        orchestrator: Orchestrator that scores the task on Result events
        tenant_id: Tenant the event belongs to
        body: Decoded JSON body

    Returns:
        IngestResult with the stored event

    Raises:
        EventValidationError: If the body is malformed (nothing is stored)
        StorageError: If the event or its score cannot be stored
    """
    data = parse_event_input(body)
    event = InteractionEvent.from_input(tenant_id, data)

    await repos.events.insert(event)
    add_span_attributes(
        {
            "taskscore.agent_name": event.agent_name,
            "taskscore.interaction_type": event.interaction_type.value,
        }
    )
    get_scoring_metrics().record_event(event.interaction_type.value, event.agent_name)
    logger.debug(
        f"Ingested {event.interaction_type.value} event {event.id} "
        f"for task {event.task_id} (agent={event.agent_name})"
    )

    score = await orchestrator.handle_event(event)
    return IngestResult(event=event, score=score)
