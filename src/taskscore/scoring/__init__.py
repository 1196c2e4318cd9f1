"""Automatic task scoring."""

from src.taskscore.scoring.orchestrator import ScoringOrchestrator, serialize_judge_failure

__all__ = [
    "ScoringOrchestrator",
    "serialize_judge_failure",
]
