"""
Interaction Event Models

An InteractionEvent is one agent action or observation. Events are created
once on ingestion and never mutated; (tenant_id, task_id) groups them into a
task.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from src.taskscore.contracts.core import (
    InteractionType,
    _ensure_utc,
    _generate_id,
    _now_utc,
)
from src.taskscore.exceptions import EventValidationError


class EventInput(BaseModel):
    """
    Validated body of an inbound event.

    Only well-formed events get past this model; the status deriver and the
    transcript builder never see malformed input.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    agent_name: str = Field(..., min_length=1)
    task_id: str = Field(..., min_length=1)
    interaction_type: InteractionType
    ts: datetime
    message: str | None = None
    payload_json: Any = None
    result_json: Any = None
    error_json: Any = None

    @field_validator("ts", mode="before")
    @classmethod
    def _ts_must_be_iso_string(cls, value: Any) -> datetime:
        # fromisoformat, not pydantic's parser, which takes digit strings as unix epochs
        if not isinstance(value, str) or not value:
            raise ValueError("must be a valid ISO 8601 timestamp")
        try:
            return datetime.fromisoformat(value)
        except ValueError as e:
            raise ValueError("must be a valid ISO 8601 timestamp") from e

    @field_validator("ts")
    @classmethod
    def _ts_to_utc(cls, value: datetime) -> datetime:
        return _ensure_utc(value)

    @field_validator("message", mode="before")
    @classmethod
    def _drop_non_string_message(cls, value: Any) -> str | None:
        if isinstance(value, str) and value:
            return value
        return None


def parse_event_input(body: Any) -> EventInput:
    """
    Validate a raw event body.

    Args:
        body: Decoded JSON body (expected to be an object)

    Returns:
        EventInput

    Raises:
        EventValidationError: If the body is not an object or a field is invalid
    """
    if not isinstance(body, dict):
        raise EventValidationError("Request body must be a JSON object")

    try:
        return EventInput.model_validate(body)
    except ValidationError as e:
        raise _to_event_validation_error(e) from e


def _to_event_validation_error(error: ValidationError) -> EventValidationError:
    """Reduce a pydantic error to the first offending field."""
    first = error.errors()[0]
    field = str(first["loc"][0]) if first.get("loc") else None

    if first["type"] == "missing":
        return EventValidationError(f"Missing required field: {field}", field=field)

    if field == "interaction_type":
        allowed = ", ".join(t.value for t in InteractionType)
        return EventValidationError(
            f"Invalid interaction_type. Must be one of: {allowed}", field=field
        )

    if field == "ts":
        return EventValidationError(
            "Invalid ts: must be a valid ISO 8601 timestamp", field=field
        )

    return EventValidationError(f"Invalid {field}: {first['msg']}", field=field)


def _dump_blob(value: Any) -> str | None:
    """Serialize an opaque structured blob, keeping absent values absent."""
    if value is None:
        return None
    return json.dumps(value)


def _load_blob(value: str | None) -> Any:
    if value is None:
        return None
    return json.loads(value)


class InteractionEvent(BaseModel):
    """One stored agent event."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_generate_id)
    tenant_id: str = Field(..., min_length=1)
    agent_name: str = Field(..., min_length=1)
    task_id: str = Field(..., min_length=1)
    interaction_type: InteractionType
    message: str | None = None
    payload_json: str | None = Field(default=None, description="Serialized JSON payload")
    result_json: str | None = Field(default=None, description="Serialized JSON result")
    error_json: str | None = Field(default=None, description="Serialized JSON error")
    ts: datetime = Field(..., description="Caller-supplied event time, authoritative for ordering")
    received_at: datetime = Field(default_factory=_now_utc, description="Server receipt time")

    @property
    def sort_key(self) -> tuple[datetime, str]:
        """Ordering key within a task: event time, then id."""
        return (self.ts, self.id)

    @classmethod
    def from_input(cls, tenant_id: str, data: EventInput) -> InteractionEvent:
        """Build a new event from a validated ingestion body."""
        return cls(
            tenant_id=tenant_id,
            agent_name=data.agent_name,
            task_id=data.task_id,
            interaction_type=data.interaction_type,
            message=data.message,
            payload_json=_dump_blob(data.payload_json),
            result_json=_dump_blob(data.result_json),
            error_json=_dump_blob(data.error_json),
            ts=data.ts,
        )

    def to_view(self) -> dict[str, Any]:
        """Read-API representation with blobs decoded."""
        return {
            "id": self.id,
            "agent_name": self.agent_name,
            "task_id": self.task_id,
            "interaction_type": self.interaction_type.value,
            "message": self.message,
            "payload_json": _load_blob(self.payload_json),
            "result_json": _load_blob(self.result_json),
            "error_json": _load_blob(self.error_json),
            "ts": self.ts.isoformat(),
        }
