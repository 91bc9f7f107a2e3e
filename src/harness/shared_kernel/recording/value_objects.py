"""Value objects for recorded events."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from shared_kernel.recording.payloads import EventPayload, PayloadKind, decode_payload


@dataclass(frozen=True)
class EventKey:
    """Lookup key of a recorded event."""

    tenant: str
    operation_key: str


@dataclass(frozen=True)
class RecordedEvent:
    """An observed message, kept for later assertion by tests.

    Attributes:
        tenant: Tenant from the message header.
        operation_key: Operation the message announced (e.g. "post-ledger").
        payload: Raw message text, stored as received.
        kind: How test code should decode the payload.
        recorded_at: When the recorder stored the event.
    """

    tenant: str
    operation_key: str
    payload: str
    kind: PayloadKind
    recorded_at: datetime

    @property
    def key(self) -> EventKey:
        return EventKey(tenant=self.tenant, operation_key=self.operation_key)

    def decode(self) -> str | EventPayload:
        """Decode the payload according to its kind.

        Returns:
            The bare identifier for identifier payloads, otherwise the
            typed structured event.
        """
        return decode_payload(self.kind, self.payload)
