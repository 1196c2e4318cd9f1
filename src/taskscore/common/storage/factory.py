"""
Repository Factory

RepositoryProvider creates and owns the repositories for the configured
backend:

    async with RepositoryProvider(config) as provider:
        await provider.events.insert(event)
        latest = await provider.scores.get_latest_for_task(tenant_id, task_id)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.taskscore.common.storage.config import StorageConfig
from src.taskscore.common.storage.protocols import (
    EvaluationConfigRepository,
    EventRepository,
    ScoreRepository,
)
from src.taskscore.exceptions import StorageConnectionError

if TYPE_CHECKING:
    import asyncpg

logger = logging.getLogger(__name__)

_NOT_INITIALIZED = "Provider not initialized. Call initialize() or use as context manager."


class RepositoryProvider:
    """
    Repository provider with dependency injection and lifecycle management.

    Usage:
        # As context manager (recommended)
        async with RepositoryProvider(config) as provider:
            events = await provider.events.list_for_task(tenant_id, task_id)

        # Manual lifecycle management
        provider = RepositoryProvider(config)
        await provider.initialize()
        try:
            ...
        finally:
            await provider.close()

    Attributes:
        events: Repository for interaction events
        evaluations: Repository for evaluation configs
        scores: Repository for eval scores
    """

    def __init__(self, config: StorageConfig | None = None) -> None:
        """
        Initialize the repository provider.

        Args:
            config: Storage configuration. If None, reads from environment.
        """
        self._config = config or StorageConfig()
        self._pool: asyncpg.Pool | None = None
        self._event_repo: EventRepository | None = None
        self._evaluation_repo: EvaluationConfigRepository | None = None
        self._score_repo: ScoreRepository | None = None
        self._initialized = False

    @property
    def config(self) -> StorageConfig:
        return self._config

    @property
    def events(self) -> EventRepository:
        """Get the event repository."""
        if self._event_repo is None:
            raise RuntimeError(_NOT_INITIALIZED)
        return self._event_repo

    @property
    def evaluations(self) -> EvaluationConfigRepository:
        """Get the evaluation config repository."""
        if self._evaluation_repo is None:
            raise RuntimeError(_NOT_INITIALIZED)
        return self._evaluation_repo

    @property
    def scores(self) -> ScoreRepository:
        """Get the score repository."""
        if self._score_repo is None:
            raise RuntimeError(_NOT_INITIALIZED)
        return self._score_repo

    @property
    def is_initialized(self) -> bool:
        """Check if the provider has been initialized."""
        return self._initialized

    async def initialize(self) -> None:
        """
        Initialize repository connections.

        Creates the database pool (if applicable) and instantiates repositories.

        Raises:
            StorageConnectionError: If the PostgreSQL pool cannot be created
            ValueError: If unknown backend is specified
        """
        if self._initialized:
            logger.warning("Provider already initialized, skipping re-initialization")
            return

        if self._config.backend == "postgres":
            from src.taskscore.common.storage.postgres import (
                PostgresEvaluationConfigRepository,
                PostgresEventRepository,
                PostgresScoreRepository,
                close_pool,
                init_from_config,
            )

            try:
                self._pool = await init_from_config(self._config)

                # Validate connection by running a simple query
                async with self._pool.acquire() as conn:
                    await conn.fetchval("SELECT 1")
                logger.debug("PostgreSQL connection validated successfully")

            except Exception as e:
                await close_pool()
                self._pool = None
                raise StorageConnectionError("postgres", str(e)) from e

            self._event_repo = PostgresEventRepository(self._pool)
            self._evaluation_repo = PostgresEvaluationConfigRepository(self._pool)
            self._score_repo = PostgresScoreRepository(self._pool)

        elif self._config.backend == "memory":
            from src.taskscore.common.storage.memory import (
                InMemoryEvaluationConfigRepository,
                InMemoryEventRepository,
                InMemoryScoreRepository,
            )

            self._event_repo = InMemoryEventRepository()
            self._evaluation_repo = InMemoryEvaluationConfigRepository()
            self._score_repo = InMemoryScoreRepository()

        else:
            raise ValueError(f"Unknown storage backend: {self._config.backend}")

        self._initialized = True
        logger.debug(f"RepositoryProvider initialized with backend: {self._config.backend}")

    async def close(self) -> None:
        """
        Close repository connections and cleanup resources.

        Safe to call multiple times - subsequent calls are no-ops.
        """
        if not self._initialized:
            return

        if self._pool is not None:
            # Also resets the module-level pool so the next provider starts fresh
            from src.taskscore.common.storage.postgres import close_pool

            await close_pool()
            self._pool = None

        self._event_repo = None
        self._evaluation_repo = None
        self._score_repo = None
        self._initialized = False
        logger.debug("RepositoryProvider closed")

    async def __aenter__(self) -> RepositoryProvider:
        """Enter async context manager."""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context manager."""
        await self.close()
