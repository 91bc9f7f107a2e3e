"""Protocols (ports) for inbound message delivery."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from shared_kernel.messaging.value_objects import Message


@runtime_checkable
class MessageSource(Protocol):
    """Source of broker messages.

    Implementations subscribe to a set of destinations and push every
    delivered message to a callback.
    """

    async def start(
        self,
        destinations: frozenset[str],
        on_message: Callable[["Message"], Awaitable[None]],
    ) -> None:
        """Subscribe to destinations and deliver messages until stopped.

        This method should not return until stop() is called or an error occurs.

        Args:
            destinations: Destinations to subscribe to
            on_message: Async callback invoked once per delivered message
        """
        ...

    async def stop(self) -> None:
        """Stop delivering messages and release broker resources."""
        ...
