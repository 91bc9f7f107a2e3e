"""Unit tests for InMemoryMessageBroker."""

import asyncio
from unittest.mock import MagicMock

import pytest

from infrastructure.messaging import InMemoryMessageBroker
from shared_kernel.messaging import Message, Selector


class TestInMemoryMessageBroker:
    """Tests for delivery through the in-memory broker."""

    @pytest.mark.asyncio
    async def test_delivers_in_publish_order(self):
        broker = InMemoryMessageBroker(probe=MagicMock())
        received: list[Message] = []

        async def on_message(message: Message) -> None:
            received.append(message)

        task = asyncio.create_task(broker.start(frozenset({"accounting-v1"}), on_message))
        await broker.publish("accounting-v1", '"l-1"', {"action": "post-ledger"})
        await broker.publish_event(
            "accounting-v1", Selector("action", "put-ledger"), "tenant-a", '"l-1"'
        )
        await broker.join()
        await broker.stop()
        await task

        assert [message.headers["action"] for message in received] == [
            "post-ledger",
            "put-ledger",
        ]
        assert received[1].tenant == "tenant-a"
        assert not broker.is_running

    @pytest.mark.asyncio
    async def test_drops_unsubscribed_destinations(self):
        probe = MagicMock()
        broker = InMemoryMessageBroker(probe=probe)
        received: list[Message] = []

        async def on_message(message: Message) -> None:
            received.append(message)

        task = asyncio.create_task(broker.start(frozenset({"office-v1"}), on_message))
        await broker.publish("unknown-v1", "x")
        await broker.join()
        await broker.stop()
        await task

        assert received == []
        probe.invalid_message_ignored.assert_called_once()

    @pytest.mark.asyncio
    async def test_stop_before_start_does_not_hang(self):
        broker = InMemoryMessageBroker(probe=MagicMock())

        async def on_message(message: Message) -> None:
            pass

        await broker.stop()
        await asyncio.wait_for(
            broker.start(frozenset({"office-v1"}), on_message), timeout=1.0
        )
