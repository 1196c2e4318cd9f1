"""Unit tests for RepositoryProvider lifecycle."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from src.taskscore.common.storage import RepositoryProvider, StorageConfig
from src.taskscore.common.storage.memory import InMemoryEventRepository
from src.taskscore.exceptions import StorageConnectionError


@pytest.mark.asyncio
async def test_memory_backend_lifecycle():
    provider = RepositoryProvider(StorageConfig(backend="memory"))
    assert not provider.is_initialized

    async with provider:
        assert provider.is_initialized
        assert isinstance(provider.events, InMemoryEventRepository)

    assert not provider.is_initialized


def test_access_before_initialize_raises():
    provider = RepositoryProvider(StorageConfig(backend="memory"))

    with pytest.raises(RuntimeError, match="not initialized"):
        _ = provider.events
    with pytest.raises(RuntimeError):
        _ = provider.scores


@pytest.mark.asyncio
async def test_double_initialize_is_noop():
    provider = RepositoryProvider(StorageConfig(backend="memory"))
    await provider.initialize()
    events = provider.events

    await provider.initialize()

    assert provider.events is events
    await provider.close()
    await provider.close()


@pytest.mark.asyncio
async def test_unknown_backend():
    config = StorageConfig.model_construct(backend="sqlite")
    with pytest.raises(ValueError, match="Unknown storage backend"):
        await RepositoryProvider(config).initialize()


@pytest.mark.asyncio
async def test_postgres_connection_failure_wrapped():
    """Test pool creation errors surface as StorageConnectionError."""
    config = StorageConfig(backend="postgres", postgres_url="postgresql://u:p@nowhere/db")

    with (
        patch(
            "src.taskscore.common.storage.postgres.init_from_config",
            side_effect=OSError("connection refused"),
        ),
        patch("src.taskscore.common.storage.postgres.close_pool") as close_pool,
    ):
        provider = RepositoryProvider(config)
        with pytest.raises(StorageConnectionError) as exc_info:
            await provider.initialize()

    assert exc_info.value.backend == "postgres"
    assert "connection refused" in exc_info.value.reason
    close_pool.assert_awaited_once()
    assert not provider.is_initialized
