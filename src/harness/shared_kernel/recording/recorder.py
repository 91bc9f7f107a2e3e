"""In-memory event recorder.

A lock-guarded dictionary; writers may run on any thread or task. There is
no eviction, the lifetime of a test process bounds the size.
"""

from __future__ import annotations

import asyncio
import threading
import time
from datetime import UTC, datetime

from shared_kernel.recording.observability import DefaultRecorderProbe, RecorderProbe
from shared_kernel.recording.payloads import PayloadKind
from shared_kernel.recording.value_objects import EventKey, RecordedEvent


class InMemoryEventRecorder:
    """Thread-safe recorder with last-write-wins semantics per key."""

    def __init__(self, probe: RecorderProbe | None = None) -> None:
        self._events: dict[EventKey, RecordedEvent] = {}
        self._lock = threading.Lock()
        self._probe = probe or DefaultRecorderProbe()

    def record(
        self,
        tenant: str,
        operation_key: str,
        payload: str,
        kind: PayloadKind,
    ) -> None:
        try:
            event = RecordedEvent(
                tenant=tenant,
                operation_key=operation_key,
                payload=payload,
                kind=PayloadKind(kind),
                recorded_at=datetime.now(UTC),
            )
            with self._lock:
                replaced = event.key in self._events
                self._events[event.key] = event
        except Exception as e:
            self._probe.recording_failed(tenant, operation_key, e)
            return

        self._probe.event_recorded(tenant, operation_key, replaced)

    def get(self, tenant: str, operation_key: str) -> RecordedEvent | None:
        with self._lock:
            return self._events.get(EventKey(tenant, operation_key))

    def pop(self, tenant: str, operation_key: str) -> RecordedEvent | None:
        with self._lock:
            return self._events.pop(EventKey(tenant, operation_key), None)

    def clear(self) -> None:
        with self._lock:
            self._events.clear()

    def events(self) -> list[RecordedEvent]:
        with self._lock:
            return list(self._events.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    async def wait_for(
        self,
        tenant: str,
        operation_key: str,
        timeout: float = 10.0,
        poll_interval: float = 0.1,
    ) -> RecordedEvent | None:
        """Poll for an event until it arrives or the timeout elapses.

        Args:
            tenant: Tenant to look up.
            operation_key: Operation to look up.
            timeout: Maximum seconds to wait.
            poll_interval: Seconds between lookups.

        Returns:
            The recorded event, or None if it did not arrive in time.
        """
        deadline = time.monotonic() + timeout
        while True:
            event = self.get(tenant, operation_key)
            if event is not None:
                return event
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                self._probe.wait_timed_out(tenant, operation_key, timeout)
                return None
            await asyncio.sleep(min(poll_interval, remaining))
