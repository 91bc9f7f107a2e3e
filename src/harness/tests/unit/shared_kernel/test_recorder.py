"""Unit tests for InMemoryEventRecorder."""

import asyncio
import threading
from unittest.mock import MagicMock

import pytest

from shared_kernel.recording import (
    EventRecorder,
    InMemoryEventRecorder,
    PayloadKind,
)


class TestRecord:
    """Tests for record() and the lookups."""

    def test_recorded_event_is_retrievable(self, recorder):
        recorder.record("tenant-a", "post-ledger", '"ledger-7"', PayloadKind.IDENTIFIER)

        event = recorder.get("tenant-a", "post-ledger")

        assert event is not None
        assert event.payload == '"ledger-7"'
        assert event.kind is PayloadKind.IDENTIFIER
        assert event.decode() == "ledger-7"

    def test_last_write_wins_per_key(self, recorder):
        recorder.record("tenant-a", "put-ledger", '"first"', PayloadKind.IDENTIFIER)
        recorder.record("tenant-a", "put-ledger", '"second"', PayloadKind.IDENTIFIER)

        assert len(recorder) == 1
        assert recorder.get("tenant-a", "put-ledger").payload == '"second"'

    def test_tenants_are_recorded_independently(self, recorder):
        recorder.record("tenant-a", "post-customer", '"c-1"', PayloadKind.IDENTIFIER)
        recorder.record("tenant-b", "post-customer", '"c-2"', PayloadKind.IDENTIFIER)

        assert recorder.get("tenant-a", "post-customer").payload == '"c-1"'
        assert recorder.get("tenant-b", "post-customer").payload == '"c-2"'

    def test_reports_replacement_to_probe(self):
        probe = MagicMock()
        recorder = InMemoryEventRecorder(probe=probe)

        recorder.record("tenant-a", "post-role", '"r"', PayloadKind.IDENTIFIER)
        recorder.record("tenant-a", "post-role", '"r"', PayloadKind.IDENTIFIER)

        assert probe.event_recorded.call_args_list[0].args == ("tenant-a", "post-role", False)
        assert probe.event_recorded.call_args_list[1].args == ("tenant-a", "post-role", True)

    def test_never_raises_on_bad_kind(self):
        probe = MagicMock()
        recorder = InMemoryEventRecorder(probe=probe)

        recorder.record("tenant-a", "post-role", '"r"', "no-such-kind")  # type: ignore[arg-type]

        assert len(recorder) == 0
        probe.recording_failed.assert_called_once()

    def test_pop_returns_and_clears(self, recorder):
        recorder.record("tenant-a", "delete-role", '"r"', PayloadKind.IDENTIFIER)

        assert recorder.pop("tenant-a", "delete-role") is not None
        assert recorder.get("tenant-a", "delete-role") is None
        assert recorder.pop("tenant-a", "delete-role") is None

    def test_clear_and_events(self, recorder):
        recorder.record("tenant-a", "initialize", "1", PayloadKind.IDENTIFIER)
        recorder.record("tenant-b", "initialize", "1", PayloadKind.IDENTIFIER)

        assert {event.tenant for event in recorder.events()} == {"tenant-a", "tenant-b"}

        recorder.clear()
        assert recorder.events() == []

    def test_concurrent_writers(self, recorder):
        def write(index: int) -> None:
            recorder.record(f"tenant-{index}", "post-user", f'"u-{index}"', PayloadKind.IDENTIFIER)

        threads = [threading.Thread(target=write, args=(i,)) for i in range(20)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(recorder) == 20

    def test_satisfies_protocol(self, recorder):
        assert isinstance(recorder, EventRecorder)


class TestWaitFor:
    """Tests for the polling wait_for()."""

    @pytest.mark.asyncio
    async def test_returns_event_recorded_while_waiting(self, recorder):
        async def record_later() -> None:
            await asyncio.sleep(0.05)
            recorder.record("tenant-a", "post-product", '"p-1"', PayloadKind.IDENTIFIER)

        task = asyncio.create_task(record_later())
        event = await recorder.wait_for("tenant-a", "post-product", timeout=2.0, poll_interval=0.01)
        await task

        assert event is not None
        assert event.decode() == "p-1"

    @pytest.mark.asyncio
    async def test_returns_none_after_timeout(self):
        probe = MagicMock()
        recorder = InMemoryEventRecorder(probe=probe)

        event = await recorder.wait_for("tenant-a", "post-product", timeout=0.05, poll_interval=0.01)

        assert event is None
        probe.wait_timed_out.assert_called_once_with("tenant-a", "post-product", 0.05)
