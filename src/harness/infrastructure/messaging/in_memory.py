"""In-process message broker.

Used for local runs and tests: messages published here are delivered to the
subscribed callback in publish order.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping

from shared_kernel.messaging.observability import (
    DefaultMessageSourceProbe,
    MessageSourceProbe,
)
from shared_kernel.messaging.ports import MessageSource
from shared_kernel.messaging.value_objects import Message, Selector


class InMemoryMessageBroker(MessageSource):
    """Queue-backed broker implementing the MessageSource protocol.

    Messages for destinations that were not subscribed are dropped, the
    same way a broker drops messages nobody listens to.
    """

    def __init__(self, probe: MessageSourceProbe | None = None) -> None:
        self._probe = probe or DefaultMessageSourceProbe("in_memory_broker")
        self._queue: asyncio.Queue[Message | None] = asyncio.Queue()
        self._destinations: frozenset[str] = frozenset()
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    async def publish(
        self,
        destination: str,
        payload: str,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        """Queue a message for delivery."""
        await self._queue.put(
            Message(destination=destination, payload=payload, headers=headers or {})
        )

    async def publish_event(
        self,
        destination: str,
        selector: Selector,
        tenant: str,
        payload: str,
    ) -> None:
        """Queue a message tagged with a tenant and a selector value."""
        await self._queue.put(
            Message.for_selector(destination, selector, tenant, payload)
        )

    async def join(self) -> None:
        """Wait until every queued message has been handed to the callback."""
        await self._queue.join()

    async def start(
        self,
        destinations: frozenset[str],
        on_message: Callable[[Message], Awaitable[None]],
    ) -> None:
        """Deliver queued messages until stop() is called."""
        self._destinations = frozenset(destinations)
        self._running = True
        self._probe.source_started(self._destinations)

        while True:
            message = await self._queue.get()
            try:
                if message is None:
                    break
                if message.destination not in self._destinations:
                    self._probe.invalid_message_ignored(
                        message.destination, "No subscription for destination"
                    )
                    continue
                self._probe.message_received(message.destination)
                await on_message(message)
            finally:
                self._queue.task_done()

        self._running = False

    async def stop(self) -> None:
        """Stop delivery after the messages queued so far are handed over."""
        self._running = False
        self._queue.put_nowait(None)
        self._probe.source_stopped()
