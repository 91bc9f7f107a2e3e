"""Pydantic models for the event query API responses."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from listeners.domain.value_objects import Acknowledge, ListenerSpec, ReadBack
from shared_kernel.recording.payloads import EventPayload, PayloadKind
from shared_kernel.recording.value_objects import RecordedEvent


class RecordedEventResponse(BaseModel):
    """Response model for a recorded event."""

    tenant: str = Field(..., description="Tenant the event was delivered for")
    operation_key: str = Field(..., description="Operation key, e.g. post-ledger")
    payload: str = Field(..., description="Raw message payload")
    kind: PayloadKind = Field(..., description="Payload type tag")
    recorded_at: datetime = Field(..., description="When the event was recorded")
    decoded: Any = Field(
        default=None,
        description="Identifier or structured event; null if the payload does not decode",
    )

    @classmethod
    def from_domain(cls, event: RecordedEvent) -> RecordedEventResponse:
        """Convert a recorded event to an API response.

        Args:
            event: Recorded event from the recorder

        Returns:
            RecordedEventResponse with the decoded payload when it is valid
        """
        try:
            decoded = event.decode()
        except ValidationError:
            decoded = None

        if isinstance(decoded, EventPayload):
            decoded = decoded.model_dump(by_alias=True)

        return cls(
            tenant=event.tenant,
            operation_key=event.operation_key,
            payload=event.payload,
            kind=event.kind,
            recorded_at=event.recorded_at,
            decoded=decoded,
        )


class RecordedEventListResponse(BaseModel):
    """Response model for the recorded event listing."""

    events: list[RecordedEventResponse] = Field(default_factory=list)
    count: int = Field(..., description="Number of recorded events")


class ListenerResponse(BaseModel):
    """Response model for one dispatch table entry."""

    destination: str
    selector: str = Field(..., description="Broker selector expression")
    operation_key: str
    kind: PayloadKind
    confirmation: str | None = Field(
        default=None, description="read-back, acknowledge or null for record-only"
    )
    service: str | None = None
    path: str | None = None
    forward: str | None = Field(
        default=None, description="Sync gateway resource and action, if forwarded"
    )

    @classmethod
    def from_domain(cls, spec: ListenerSpec) -> ListenerResponse:
        confirmation = spec.confirmation
        details: dict[str, str] = {}
        match confirmation:
            case ReadBack():
                details.update(
                    confirmation="read-back",
                    service=confirmation.service.value,
                    path=confirmation.path,
                )
            case Acknowledge():
                details["confirmation"] = "acknowledge"

        if confirmation is not None and confirmation.forward is not None:
            forward = confirmation.forward
            details["forward"] = f"{forward.action.value} {forward.resource}"

        return cls(
            destination=spec.destination,
            selector=spec.selector.expression,
            operation_key=spec.operation_key,
            kind=spec.kind,
            **details,
        )
