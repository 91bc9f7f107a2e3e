"""Domain probe for message dispatch."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class DispatchProbe(Protocol):
    """Domain probe for routing and handling delivered messages."""

    def message_unrouted(self, destination: str, headers: dict[str, str]) -> None:
        """Record that no listener matched a message."""
        ...

    def message_rejected(self, destination: str, reason: str) -> None:
        """Record that a routed message could not be recorded."""
        ...

    def listener_matched(self, selector: str) -> None:
        """Record which listener a message was routed to."""
        ...

    def payload_malformed(self, error: Exception) -> None:
        """Record that identifiers could not be resolved from the payload."""
        ...

    def confirmation_failed(self, error: Exception) -> None:
        """Record that the confirmation step failed for a message."""
        ...

    def listeners_registered(self, destination: str, count: int) -> None:
        """Record the listeners registered for a destination."""
        ...

    def with_context(self, context: ObservationContext) -> DispatchProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultDispatchProbe:
    """Default implementation of DispatchProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultDispatchProbe:
        """Create a new probe with observation context bound."""
        return DefaultDispatchProbe(logger=self._logger, context=context)

    def message_unrouted(self, destination: str, headers: dict[str, str]) -> None:
        self._logger.warning(
            "message_unrouted",
            message_destination=destination,
            headers=headers,
            **self._get_context_kwargs(),
        )

    def message_rejected(self, destination: str, reason: str) -> None:
        self._logger.warning(
            "message_rejected",
            message_destination=destination,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def listener_matched(self, selector: str) -> None:
        self._logger.debug(
            "listener_matched",
            selector=selector,
            **self._get_context_kwargs(),
        )

    def payload_malformed(self, error: Exception) -> None:
        self._logger.warning(
            "payload_malformed",
            error=str(error),
            **self._get_context_kwargs(),
        )

    def confirmation_failed(self, error: Exception) -> None:
        self._logger.error(
            "confirmation_failed",
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def listeners_registered(self, destination: str, count: int) -> None:
        self._logger.info(
            "listeners_registered",
            message_destination=destination,
            count=count,
            **self._get_context_kwargs(),
        )
