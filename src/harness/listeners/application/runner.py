"""Listener runner.

Subscribes a message source to every destination of the dispatch table and
handles deliveries concurrently, one asyncio task per message.
"""

from __future__ import annotations

import asyncio
from collections import Counter

from listeners.application.dispatcher import ListenerDispatcher
from listeners.application.observability import DefaultRunnerProbe, RunnerProbe
from shared_kernel.messaging.ports import MessageSource
from shared_kernel.messaging.value_objects import Message

CRASHED_OUTCOME = "crashed"


class ListenerRunner:
    """Background worker connecting a message source to the dispatcher.

    A semaphore bounds the number of handlers in flight; when the limit is
    reached the source waits before handing over the next message.
    """

    def __init__(
        self,
        source: MessageSource,
        dispatcher: ListenerDispatcher,
        probe: RunnerProbe | None = None,
        max_concurrent_handlers: int = 8,
        stop_grace_seconds: float = 5.0,
    ) -> None:
        """Initialize the runner.

        Args:
            source: Where messages come from
            dispatcher: Routes and handles each message
            probe: Optional observability probe
            max_concurrent_handlers: Handler tasks allowed at the same time
            stop_grace_seconds: How long stop() waits for the source to return
        """
        if max_concurrent_handlers < 1:
            raise ValueError("max_concurrent_handlers must be at least 1")

        self._source = source
        self._dispatcher = dispatcher
        self._probe = probe or DefaultRunnerProbe()
        self._max_concurrent_handlers = max_concurrent_handlers
        self._stop_grace_seconds = stop_grace_seconds
        self._semaphore = asyncio.Semaphore(max_concurrent_handlers)
        self._in_flight: set[asyncio.Task[None]] = set()
        self._source_task: asyncio.Task[None] | None = None
        self._outcomes: Counter[str] = Counter()
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    def outcome_counts(self) -> dict[str, int]:
        """Return how many messages ended with each outcome."""
        return dict(self._outcomes)

    async def start(self) -> None:
        """Start consuming in a background task."""
        if self._running:
            return
        self._running = True
        destinations = self._dispatcher.destinations()
        self._source_task = asyncio.create_task(self._run_source(destinations))
        self._probe.runner_started(destinations, self._max_concurrent_handlers)

    async def _run_source(self, destinations: frozenset[str]) -> None:
        try:
            await self._source.start(destinations, self._on_message)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self._probe.source_exited(str(e))
        else:
            self._probe.source_exited(None)

    async def _on_message(self, message: Message) -> None:
        await self._semaphore.acquire()
        task = asyncio.create_task(self._handle(message))
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def _handle(self, message: Message) -> None:
        try:
            result = await self._dispatcher.dispatch(message)
        except Exception as e:
            self._outcomes[CRASHED_OUTCOME] += 1
            self._probe.handler_crashed(message.destination, e)
        else:
            self._outcomes[result.outcome] += 1
            self._probe.message_dispatched(message.destination, result.outcome)
        finally:
            self._semaphore.release()

    async def drain(self) -> None:
        """Wait until every handler started so far has finished."""
        while self._in_flight:
            await asyncio.gather(*list(self._in_flight), return_exceptions=True)

    async def stop(self) -> None:
        """Stop the source, then wait for in-flight handlers."""
        if not self._running:
            return
        self._running = False

        await self._source.stop()
        if self._source_task is not None:
            done, _ = await asyncio.wait(
                {self._source_task}, timeout=self._stop_grace_seconds
            )
            if not done:
                self._source_task.cancel()
                try:
                    await self._source_task
                except asyncio.CancelledError:
                    pass
            self._source_task = None

        await self.drain()
        self._probe.runner_stopped(self.outcome_counts())
