"""
TaskScore Services

Framework-free operations over a RepositoryProvider: ingestion, evaluation
config management and read views.
"""

from src.taskscore.services.agents import list_agent_tasks, list_agents
from src.taskscore.services.evaluations import (
    PutEvaluationResult,
    get_evaluation,
    list_scores,
    put_evaluation,
)
from src.taskscore.services.ingest import IngestResult, ingest_event
from src.taskscore.services.pagination import MAX_PAGE_SIZE, clamp_limit
from src.taskscore.services.tasks import get_task_detail, list_task_events

__all__ = [
    "IngestResult",
    "ingest_event",
    "PutEvaluationResult",
    "put_evaluation",
    "get_evaluation",
    "list_scores",
    "get_task_detail",
    "list_task_events",
    "list_agent_tasks",
    "list_agents",
    "MAX_PAGE_SIZE",
    "clamp_limit",
]
