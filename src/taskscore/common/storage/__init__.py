"""
Storage Abstraction Layer

Pluggable backends for events, evaluation configs and scores.

    from src.taskscore.common.storage import RepositoryProvider, StorageConfig

    async with RepositoryProvider(StorageConfig(backend="memory")) as provider:
        await provider.events.insert(event)
"""

from src.taskscore.common.storage.config import StorageConfig
from src.taskscore.common.storage.factory import RepositoryProvider
from src.taskscore.common.storage.protocols import (
    EvaluationConfigRepository,
    EventRepository,
    ScoreRepository,
)

__all__ = [
    # Config
    "StorageConfig",
    # Protocols
    "EventRepository",
    "EvaluationConfigRepository",
    "ScoreRepository",
    # Provider
    "RepositoryProvider",
]
