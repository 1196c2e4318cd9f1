"""
PostgreSQL Connection Pool Management

Provides async connection pooling using asyncpg.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

import asyncpg

from src.taskscore.exceptions import StorageError, StorageWriteError

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from src.taskscore.common.storage.config import StorageConfig

# Module-level pool for connection reuse
_pool: asyncpg.Pool | None = None


async def create_pool(
    postgres_url: str,
    min_size: int = 2,
    max_size: int = 10,
    command_timeout: int = 60,
) -> asyncpg.Pool:
    """
    Create a connection pool, or return the existing one.

    Args:
        postgres_url: PostgreSQL connection URL
        min_size: Minimum pool connections
        max_size: Maximum pool connections
        command_timeout: Timeout for commands in seconds

    Returns:
        asyncpg connection pool
    """
    global _pool
    if _pool is not None:
        return _pool

    _pool = await asyncpg.create_pool(
        postgres_url,
        min_size=min_size,
        max_size=max_size,
        command_timeout=command_timeout,
    )
    logger.debug(f"PostgreSQL pool created (min={min_size}, max={max_size})")
    return _pool


async def get_pool() -> asyncpg.Pool:
    """Get the existing pool or raise if not initialized."""
    if _pool is None:
        raise RuntimeError("Connection pool not initialized. Call create_pool() first.")
    return _pool


async def close_pool() -> None:
    """Close the connection pool."""
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None


async def init_from_config(config: StorageConfig) -> asyncpg.Pool:
    """Initialize pool from StorageConfig."""
    return await create_pool(
        config.postgres_url,
        min_size=config.postgres_pool_min,
        max_size=config.postgres_pool_max,
        command_timeout=config.postgres_pool_command_timeout,
    )


@contextmanager
def storage_errors(entity: str, operation: str) -> Iterator[None]:
    """
    Translate asyncpg failures into StorageError subclasses.

    Usage:
        with storage_errors("eval_score", "write"):
            await pool.execute(...)
    """
    try:
        yield
    except (asyncpg.PostgresError, asyncpg.InterfaceError) as e:
        if operation == "write":
            raise StorageWriteError(entity, str(e)) from e
        raise StorageError(f"Failed to {operation} {entity}: {e}", code="STORAGE_READ") from e
