"""
PostgreSQL Event Repository

Implements EventRepository protocol for PostgreSQL.
"""

from __future__ import annotations

import uuid
from typing import Any

import asyncpg

from src.taskscore.common.storage.postgres.client import storage_errors
from src.taskscore.common.telemetry import get_tracer
from src.taskscore.contracts import InteractionEvent, InteractionType

tracer = get_tracer(__name__)


class PostgresEventRepository:
    """
    PostgreSQL implementation of EventRepository.

    Append-only: there is no update or delete path.
    """

    def __init__(self, pool: asyncpg.Pool):
        """
        Initialize repository with connection pool.

        Args:
            pool: asyncpg connection pool
        """
        self.pool = pool

    async def insert(self, event: InteractionEvent) -> None:
        """Store a new event."""
        with tracer.start_as_current_span("db.event.insert") as span:
            span.set_attribute("db.operation", "insert")
            span.set_attribute("db.task_id", event.task_id[:64])
            span.set_attribute("db.interaction_type", event.interaction_type.value)

            with storage_errors("interaction_event", "write"):
                await self.pool.execute(
                    """
                    INSERT INTO interaction_events (
                        id, tenant_id, agent_name, task_id, interaction_type,
                        message, payload_json, result_json, error_json,
                        ts, received_at
                    ) VALUES (
                        $1, $2, $3, $4, $5,
                        $6, $7::jsonb, $8::jsonb, $9::jsonb,
                        $10, $11
                    )
                    """,
                    uuid.UUID(event.id),
                    event.tenant_id,
                    event.agent_name,
                    event.task_id,
                    event.interaction_type.value,
                    event.message,
                    event.payload_json,
                    event.result_json,
                    event.error_json,
                    event.ts,
                    event.received_at,
                )

    async def list_for_task(self, tenant_id: str, task_id: str) -> list[InteractionEvent]:
        """All events of a task in ascending (ts, id) order."""
        with tracer.start_as_current_span("db.event.list_for_task") as span:
            span.set_attribute("db.operation", "list_for_task")
            span.set_attribute("db.task_id", task_id[:64])

            with storage_errors("interaction_events", "read"):
                rows = await self.pool.fetch(
                    """
                    SELECT * FROM interaction_events
                    WHERE tenant_id = $1 AND task_id = $2
                    ORDER BY ts ASC, id ASC
                    """,
                    tenant_id,
                    task_id,
                )
            span.set_attribute("db.row_count", len(rows))
            return [self._row_to_event(row) for row in rows]

    async def list_for_agent(self, tenant_id: str, agent_name: str) -> list[InteractionEvent]:
        """All events emitted by an agent, in ascending (ts, id) order."""
        with storage_errors("interaction_events", "read"):
            rows = await self.pool.fetch(
                """
                SELECT * FROM interaction_events
                WHERE tenant_id = $1 AND agent_name = $2
                ORDER BY ts ASC, id ASC
                """,
                tenant_id,
                agent_name,
            )
        return [self._row_to_event(row) for row in rows]

    async def list_agent_names(self, tenant_id: str) -> list[str]:
        """Distinct agent names with at least one event, sorted."""
        with storage_errors("interaction_events", "read"):
            rows = await self.pool.fetch(
                """
                SELECT DISTINCT agent_name FROM interaction_events
                WHERE tenant_id = $1
                ORDER BY agent_name
                """,
                tenant_id,
            )
        return [row["agent_name"] for row in rows]

    def _row_to_event(self, row: Any) -> InteractionEvent:
        """Convert database row to InteractionEvent."""
        return InteractionEvent(
            id=str(row["id"]),
            tenant_id=row["tenant_id"],
            agent_name=row["agent_name"],
            task_id=row["task_id"],
            interaction_type=InteractionType(row["interaction_type"]),
            message=row["message"],
            payload_json=row["payload_json"],
            result_json=row["result_json"],
            error_json=row["error_json"],
            ts=row["ts"],
            received_at=row["received_at"],
        )
