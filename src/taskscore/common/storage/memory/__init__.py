"""
In-Memory Storage Backend

Dict-based repositories for unit tests and local runs.
"""

from src.taskscore.common.storage.memory.repositories import (
    InMemoryEvaluationConfigRepository,
    InMemoryEventRepository,
    InMemoryScoreRepository,
)

__all__ = [
    "InMemoryEventRepository",
    "InMemoryEvaluationConfigRepository",
    "InMemoryScoreRepository",
]
