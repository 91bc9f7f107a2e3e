"""Protocol for the event recorder.

Listeners write through ``record``; test code reads through the query
methods. Implementations must tolerate concurrent writers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from shared_kernel.recording.payloads import PayloadKind
    from shared_kernel.recording.value_objects import RecordedEvent


@runtime_checkable
class EventRecorder(Protocol):
    """Sink for observed events, keyed by (tenant, operation key)."""

    def record(
        self,
        tenant: str,
        operation_key: str,
        payload: str,
        kind: PayloadKind,
    ) -> None:
        """Store an observation, replacing any earlier one with the same key.

        Never raises; failures are reported through the recorder's probe.
        """
        ...

    def get(self, tenant: str, operation_key: str) -> RecordedEvent | None:
        """Return the recorded event for the key, or None."""
        ...

    def pop(self, tenant: str, operation_key: str) -> RecordedEvent | None:
        """Return and remove the recorded event for the key, or None."""
        ...

    def clear(self) -> None:
        """Remove all recorded events."""
        ...

    def events(self) -> list[RecordedEvent]:
        """Return a snapshot of all recorded events."""
        ...

    async def wait_for(
        self,
        tenant: str,
        operation_key: str,
        timeout: float = 10.0,
        poll_interval: float = 0.1,
    ) -> RecordedEvent | None:
        """Poll until an event for the key exists or the timeout elapses."""
        ...
