"""
Telemetry Module for TaskScore.

OpenTelemetry tracing and metrics for ingestion, storage and scoring.

Usage:
    from src.taskscore.common.telemetry import init_telemetry, get_tracer

    init_telemetry(service_name="taskscore")

    tracer = get_tracer(__name__)
    with tracer.start_as_current_span("taskscore.score_task") as span:
        span.set_attribute("task_id", task_id)
"""

from src.taskscore.common.telemetry.metrics import ScoringMetrics, get_scoring_metrics
from src.taskscore.common.telemetry.setup import (
    TelemetryConfig,
    get_meter,
    get_tracer,
    init_telemetry,
    is_telemetry_enabled,
    shutdown_telemetry,
)
from src.taskscore.common.telemetry.tracing import (
    add_span_attributes,
    record_exception,
    trace_async,
)

__all__ = [
    # Setup
    "init_telemetry",
    "shutdown_telemetry",
    "get_tracer",
    "get_meter",
    "is_telemetry_enabled",
    "TelemetryConfig",
    # Metrics
    "ScoringMetrics",
    "get_scoring_metrics",
    # Tracing
    "trace_async",
    "add_span_attributes",
    "record_exception",
]
