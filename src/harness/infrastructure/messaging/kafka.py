"""Kafka message source.

Consumes one topic per destination with aiokafka. The tenant and the
selector tag travel as record headers; the record value is the payload.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

from aiokafka import AIOKafkaConsumer

from shared_kernel.messaging.observability import (
    DefaultMessageSourceProbe,
    MessageSourceProbe,
)
from shared_kernel.messaging.ports import MessageSource
from shared_kernel.messaging.value_objects import Message


class KafkaMessageSource(MessageSource):
    """Kafka-backed implementation of the MessageSource protocol."""

    def __init__(
        self,
        bootstrap_servers: str,
        group_id: str,
        auto_offset_reset: str = "latest",
        probe: MessageSourceProbe | None = None,
        consumer_factory: Callable[..., Any] = AIOKafkaConsumer,
    ) -> None:
        """Initialize the Kafka source.

        Args:
            bootstrap_servers: Comma separated broker addresses
            group_id: Consumer group shared by harness instances
            auto_offset_reset: Where a new group starts reading
            probe: Optional observability probe
            consumer_factory: Builds the consumer; replaced in tests
        """
        self._bootstrap_servers = bootstrap_servers
        self._group_id = group_id
        self._auto_offset_reset = auto_offset_reset
        self._probe = probe or DefaultMessageSourceProbe("kafka_source")
        self._consumer_factory = consumer_factory
        self._consumer: Any = None
        self._consume_task: asyncio.Task[None] | None = None
        self._running = False

    async def start(
        self,
        destinations: frozenset[str],
        on_message: Callable[[Message], Awaitable[None]],
    ) -> None:
        """Subscribe to the destinations and block until stop() is called."""
        self._consumer = self._consumer_factory(
            *sorted(destinations),
            bootstrap_servers=self._bootstrap_servers,
            group_id=self._group_id,
            auto_offset_reset=self._auto_offset_reset,
            enable_auto_commit=True,
        )
        self._running = True

        try:
            await self._consumer.start()
            self._probe.source_started(frozenset(destinations))
            self._consume_task = asyncio.create_task(self._consume(on_message))
            await self._consume_task
        except asyncio.CancelledError:
            # Task was cancelled via stop(), this is expected
            pass
        except Exception as e:
            self._probe.source_error(str(e))
        finally:
            self._running = False
            await self._consumer.stop()

    async def _consume(self, on_message: Callable[[Message], Awaitable[None]]) -> None:
        async for record in self._consumer:
            if not self._running:
                break

            try:
                message = self._to_message(record)
            except (UnicodeDecodeError, ValueError) as e:
                self._probe.invalid_message_ignored(record.topic, str(e))
                continue

            self._probe.message_received(message.destination)
            await on_message(message)

    @staticmethod
    def _to_message(record: Any) -> Message:
        """Convert a consumer record into a Message.

        Raises:
            ValueError: If the record has no value.
            UnicodeDecodeError: If the value or a header is not UTF-8.
        """
        if record.value is None:
            raise ValueError("Record has no payload")

        headers = {
            key: value.decode("utf-8")
            for key, value in (record.headers or ())
            if value is not None
        }
        return Message(
            destination=record.topic,
            payload=record.value.decode("utf-8"),
            headers=headers,
        )

    async def stop(self) -> None:
        """Stop consuming and close the consumer."""
        self._running = False

        if self._consume_task and not self._consume_task.done():
            self._consume_task.cancel()
            try:
                await self._consume_task
            except asyncio.CancelledError:
                pass

        self._probe.source_stopped()
