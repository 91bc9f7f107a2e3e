"""Event recording for test assertions."""

from shared_kernel.recording.payloads import (
    EventPayload,
    PayloadKind,
    decode_payload,
    strip_quotes,
)
from shared_kernel.recording.ports import EventRecorder
from shared_kernel.recording.recorder import InMemoryEventRecorder
from shared_kernel.recording.value_objects import EventKey, RecordedEvent

__all__ = [
    "EventKey",
    "EventPayload",
    "EventRecorder",
    "InMemoryEventRecorder",
    "PayloadKind",
    "RecordedEvent",
    "decode_payload",
    "strip_quotes",
]
