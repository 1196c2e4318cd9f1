"""
PostgreSQL Evaluation Config Repository

Implements EvaluationConfigRepository protocol for PostgreSQL.
"""

from __future__ import annotations

import uuid
from typing import Any

import asyncpg

from src.taskscore.common.storage.postgres.client import storage_errors
from src.taskscore.common.telemetry import get_tracer
from src.taskscore.contracts import (
    EvaluationConfig,
    EvaluationConfigUpdate,
    _generate_id,
    _now_utc,
)

tracer = get_tracer(__name__)


class PostgresEvaluationConfigRepository:
    """
    PostgreSQL implementation of EvaluationConfigRepository.

    The upsert is a single statement, so concurrent PUTs for the same agent
    serialize on the (tenant_id, agent_name) unique constraint and each one
    gets its own version.
    """

    def __init__(self, pool: asyncpg.Pool):
        self.pool = pool

    async def get(self, tenant_id: str, agent_name: str) -> EvaluationConfig | None:
        """Fetch the current config for an agent."""
        with tracer.start_as_current_span("db.evaluation_config.get") as span:
            span.set_attribute("db.operation", "get")
            span.set_attribute("db.agent_name", agent_name[:64])

            with storage_errors("evaluation_config", "read"):
                row = await self.pool.fetchrow(
                    """
                    SELECT * FROM evaluation_configs
                    WHERE tenant_id = $1 AND agent_name = $2
                    """,
                    tenant_id,
                    agent_name,
                )
            span.set_attribute("db.found", row is not None)
            return self._row_to_config(row) if row else None

    async def upsert(
        self,
        tenant_id: str,
        agent_name: str,
        update: EvaluationConfigUpdate,
    ) -> tuple[EvaluationConfig, bool]:
        """Create at version 1, or bump the version and coalesce unspecified fields."""
        with tracer.start_as_current_span("db.evaluation_config.upsert") as span:
            span.set_attribute("db.operation", "upsert")
            span.set_attribute("db.agent_name", agent_name[:64])

            with storage_errors("evaluation_config", "write"):
                row = await self.pool.fetchrow(
                    """
                    INSERT INTO evaluation_configs (
                        id, tenant_id, agent_name,
                        rubric_text, expected_text, is_enabled,
                        version, created_at, updated_at
                    ) VALUES (
                        $1, $2, $3,
                        NULLIF($4::text, ''), NULLIF($5::text, ''), COALESCE($6::boolean, TRUE),
                        1, $7, $7
                    )
                    ON CONFLICT (tenant_id, agent_name) DO UPDATE SET
                        rubric_text = COALESCE($4::text, evaluation_configs.rubric_text),
                        expected_text = COALESCE($5::text, evaluation_configs.expected_text),
                        is_enabled = COALESCE($6::boolean, evaluation_configs.is_enabled),
                        version = evaluation_configs.version + 1,
                        updated_at = $7
                    RETURNING *, (xmax = 0) AS inserted
                    """,
                    uuid.UUID(_generate_id()),
                    tenant_id,
                    agent_name,
                    update.rubric_text,
                    update.expected_text,
                    update.is_enabled,
                    _now_utc(),
                )

            created = bool(row["inserted"])
            span.set_attribute("db.created", created)
            span.set_attribute("db.version", row["version"])
            return self._row_to_config(row), created

    def _row_to_config(self, row: Any) -> EvaluationConfig:
        """Convert database row to EvaluationConfig."""
        return EvaluationConfig(
            id=str(row["id"]),
            tenant_id=row["tenant_id"],
            agent_name=row["agent_name"],
            rubric_text=row["rubric_text"],
            expected_text=row["expected_text"],
            is_enabled=row["is_enabled"],
            version=row["version"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
