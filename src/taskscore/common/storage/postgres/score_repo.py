"""
PostgreSQL Score Repository

Implements ScoreRepository protocol for PostgreSQL.
"""

from __future__ import annotations

import uuid
from typing import Any

import asyncpg

from src.taskscore.common.storage.postgres.client import storage_errors
from src.taskscore.common.telemetry import get_tracer
from src.taskscore.contracts import EvalScore

tracer = get_tracer(__name__)


class PostgresScoreRepository:
    """
    PostgreSQL implementation of ScoreRepository.

    Rows are append-only. "Latest" is always an explicit
    ORDER BY created_at DESC, id DESC, never insertion order.
    """

    def __init__(self, pool: asyncpg.Pool):
        self.pool = pool

    async def insert(self, score: EvalScore) -> None:
        """Store a new score row."""
        with tracer.start_as_current_span("db.eval_score.insert") as span:
            span.set_attribute("db.operation", "insert")
            span.set_attribute("db.task_id", score.task_id[:64])
            span.set_attribute("db.succeeded", score.succeeded)

            with storage_errors("eval_score", "write"):
                await self.pool.execute(
                    """
                    INSERT INTO eval_scores (
                        id, tenant_id, task_id, agent_name,
                        evaluation_id, evaluation_version,
                        score, verdict, llm_model, prompt_hash,
                        created_at, error_json
                    ) VALUES (
                        $1, $2, $3, $4,
                        $5, $6,
                        $7, $8, $9, $10,
                        $11, $12::jsonb
                    )
                    """,
                    uuid.UUID(score.id),
                    score.tenant_id,
                    score.task_id,
                    score.agent_name,
                    uuid.UUID(score.evaluation_id),
                    score.evaluation_version,
                    score.score,
                    score.verdict,
                    score.llm_model,
                    score.prompt_hash,
                    score.created_at,
                    score.error_json,
                )

    async def list_for_task(self, tenant_id: str, task_id: str) -> list[EvalScore]:
        """All scores of a task, newest first."""
        with storage_errors("eval_scores", "read"):
            rows = await self.pool.fetch(
                """
                SELECT * FROM eval_scores
                WHERE tenant_id = $1 AND task_id = $2
                ORDER BY created_at DESC, id DESC
                """,
                tenant_id,
                task_id,
            )
        return [self._row_to_score(row) for row in rows]

    async def list_for_agent(
        self,
        tenant_id: str,
        agent_name: str,
        limit: int = 20,
    ) -> list[EvalScore]:
        """Most recent scores for an agent, newest first."""
        with tracer.start_as_current_span("db.eval_score.list_for_agent") as span:
            span.set_attribute("db.operation", "list_for_agent")
            span.set_attribute("db.limit", limit)

            with storage_errors("eval_scores", "read"):
                rows = await self.pool.fetch(
                    """
                    SELECT * FROM eval_scores
                    WHERE tenant_id = $1 AND agent_name = $2
                    ORDER BY created_at DESC, id DESC
                    LIMIT $3
                    """,
                    tenant_id,
                    agent_name,
                    limit,
                )
            span.set_attribute("db.row_count", len(rows))
            return [self._row_to_score(row) for row in rows]

    async def get_latest_for_task(self, tenant_id: str, task_id: str) -> EvalScore | None:
        """The score with the greatest (created_at, id), or None."""
        with storage_errors("eval_score", "read"):
            row = await self.pool.fetchrow(
                """
                SELECT * FROM eval_scores
                WHERE tenant_id = $1 AND task_id = $2
                ORDER BY created_at DESC, id DESC
                LIMIT 1
                """,
                tenant_id,
                task_id,
            )
        return self._row_to_score(row) if row else None

    def _row_to_score(self, row: Any) -> EvalScore:
        """Convert database row to EvalScore."""
        return EvalScore(
            id=str(row["id"]),
            tenant_id=row["tenant_id"],
            task_id=row["task_id"],
            agent_name=row["agent_name"],
            evaluation_id=str(row["evaluation_id"]),
            evaluation_version=row["evaluation_version"],
            score=row["score"],
            verdict=row["verdict"],
            llm_model=row["llm_model"],
            prompt_hash=row["prompt_hash"],
            created_at=row["created_at"],
            error_json=row["error_json"],
        )
