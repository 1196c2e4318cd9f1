"""
PostgreSQL Storage Backend

asyncpg-backed repositories. Schema lives in migrations/ and is applied with
scripts/run_migrations.py.
"""

from src.taskscore.common.storage.postgres.client import (
    close_pool,
    create_pool,
    get_pool,
    init_from_config,
    storage_errors,
)
from src.taskscore.common.storage.postgres.evaluation_repo import (
    PostgresEvaluationConfigRepository,
)
from src.taskscore.common.storage.postgres.event_repo import PostgresEventRepository
from src.taskscore.common.storage.postgres.score_repo import PostgresScoreRepository

__all__ = [
    # Connection management
    "create_pool",
    "get_pool",
    "close_pool",
    "init_from_config",
    "storage_errors",
    # Repositories
    "PostgresEventRepository",
    "PostgresEvaluationConfigRepository",
    "PostgresScoreRepository",
]
