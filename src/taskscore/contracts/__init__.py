"""
TaskScore Contracts Package

Data contracts for the event-to-score pipeline, split into focused modules:

- core: Enumerations and shared helpers
- events: Interaction events and the ingestion body
- evaluation: Evaluation configs, judge verdicts and scores
- tasks: Derived task and agent read models

All models can be imported from this package:
    from src.taskscore.contracts import InteractionEvent, EvalScore
"""

from src.taskscore.contracts.core import (
    TOOL_INTERACTION_TYPES,
    TRANSCRIPT_INTERACTION_TYPES,
    InteractionType,
    TaskStatus,
    _generate_id,
    _now_utc,
)
from src.taskscore.contracts.evaluation import (
    EvalScore,
    EvaluationConfig,
    EvaluationConfigUpdate,
    JudgeVerdict,
)
from src.taskscore.contracts.events import (
    EventInput,
    InteractionEvent,
    parse_event_input,
)
from src.taskscore.contracts.tasks import (
    AgentStats,
    AgentTaskRow,
    TaskDetail,
    TaskSummary,
)

__all__ = [
    # Core
    "InteractionType",
    "TaskStatus",
    "TOOL_INTERACTION_TYPES",
    "TRANSCRIPT_INTERACTION_TYPES",
    "_generate_id",
    "_now_utc",
    # Events
    "EventInput",
    "InteractionEvent",
    "parse_event_input",
    # Evaluation
    "EvaluationConfig",
    "EvaluationConfigUpdate",
    "JudgeVerdict",
    "EvalScore",
    # Tasks
    "TaskSummary",
    "TaskDetail",
    "AgentTaskRow",
    "AgentStats",
]
