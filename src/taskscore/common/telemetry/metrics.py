"""
Scoring Metrics.

Pre-defined OpenTelemetry instruments for ingestion and judge scoring.
"""

from __future__ import annotations

import logging
from typing import Any

from src.taskscore.common.telemetry.setup import get_meter, is_telemetry_enabled

logger = logging.getLogger(__name__)


class ScoringMetrics:
    """
    Metrics for the event-to-score pipeline.

    Tracks:
    - Ingested events by interaction type
    - Scoring attempts by outcome (success / error)
    - Skipped scoring by reason (no judge, no config, disabled config)
    - Judge latency and score distribution
    """

    def __init__(self, meter_name: str = "taskscore"):
        """Initialize scoring metrics."""
        self._meter = get_meter(meter_name)

        self._events_total = self._meter.create_counter(
            name="taskscore_events_ingested",
            description="Interaction events accepted by ingestion",
            unit="1",
        )

        self._attempts_total = self._meter.create_counter(
            name="taskscore_scoring_attempts",
            description="Scoring attempts that reached the judge",
            unit="1",
        )

        self._skipped_total = self._meter.create_counter(
            name="taskscore_scoring_skipped",
            description="Result events that did not trigger a judge call",
            unit="1",
        )

        self._judge_duration = self._meter.create_histogram(
            name="taskscore_judge_duration_ms",
            description="Judge call duration",
            unit="ms",
        )

        self._judge_score = self._meter.create_histogram(
            name="taskscore_judge_score",
            description="Judge score distribution (1-10)",
            unit="1",
        )

    def record_event(self, interaction_type: str, agent_name: str) -> None:
        """Record one ingested event."""
        if not is_telemetry_enabled():
            return
        self._events_total.add(1, {"interaction_type": interaction_type, "agent": agent_name})

    def record_skip(self, reason: str, agent_name: str) -> None:
        """Record a scoring trigger that ended without a judge call."""
        if not is_telemetry_enabled():
            return
        self._skipped_total.add(1, {"reason": reason, "agent": agent_name})

    def record_attempt(
        self,
        agent_name: str,
        model: str,
        duration_ms: float,
        score: int | None = None,
        error_type: str | None = None,
    ) -> None:
        """
        Record one judge call and its outcome.

        Args:
            agent_name: Agent whose task was scored
            model: Judge model identifier
            duration_ms: Wall time of the judge call
            score: Score on success
            error_type: Exception class name on failure
        """
        if not is_telemetry_enabled():
            return

        attrs: dict[str, Any] = {
            "agent": agent_name,
            "model": model,
            "outcome": "error" if error_type else "success",
        }
        if error_type:
            attrs["error_type"] = error_type

        self._attempts_total.add(1, attrs)
        self._judge_duration.record(duration_ms, attrs)
        if score is not None:
            self._judge_score.record(score, {"agent": agent_name, "model": model})


_scoring_metrics: ScoringMetrics | None = None


def get_scoring_metrics() -> ScoringMetrics:
    """Get the global scoring metrics instance."""
    global _scoring_metrics
    if _scoring_metrics is None:
        _scoring_metrics = ScoringMetrics()
    return _scoring_metrics
