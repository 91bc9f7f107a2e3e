"""Observability probe for the listener runner."""

from __future__ import annotations

from typing import Protocol

import structlog

logger = structlog.get_logger()


class RunnerProbe(Protocol):
    """Protocol for listener runner observability."""

    def runner_started(self, destinations: frozenset[str], max_concurrency: int) -> None:
        """Called when the runner subscribes its source."""
        ...

    def runner_stopped(self, outcome_counts: dict[str, int]) -> None:
        """Called when the runner has drained and stopped."""
        ...

    def message_dispatched(self, destination: str, outcome: str) -> None:
        """Called after a message was fully handled."""
        ...

    def handler_crashed(self, destination: str, error: Exception) -> None:
        """Called when dispatch itself raised; the runner keeps going."""
        ...

    def source_exited(self, error: str | None) -> None:
        """Called when the message source returned or failed."""
        ...


class DefaultRunnerProbe:
    """Default implementation using structlog."""

    def __init__(self) -> None:
        """Initialize the probe with a logger."""
        self._log = logger.bind(component="listener_runner")

    def runner_started(self, destinations: frozenset[str], max_concurrency: int) -> None:
        """Log runner start."""
        self._log.info(
            "listener_runner_started",
            destinations=sorted(destinations),
            max_concurrency=max_concurrency,
        )

    def runner_stopped(self, outcome_counts: dict[str, int]) -> None:
        """Log runner stop with the handled message tally."""
        self._log.info("listener_runner_stopped", outcomes=outcome_counts)

    def message_dispatched(self, destination: str, outcome: str) -> None:
        """Log a handled message."""
        self._log.debug(
            "message_dispatched", message_destination=destination, outcome=outcome
        )

    def handler_crashed(self, destination: str, error: Exception) -> None:
        """Log an unexpected dispatch failure."""
        self._log.error(
            "listener_handler_crashed",
            message_destination=destination,
            error=str(error),
            error_type=type(error).__name__,
        )

    def source_exited(self, error: str | None) -> None:
        """Log the message source returning."""
        if error is None:
            self._log.info("message_source_exited")
        else:
            self._log.error("message_source_exited", error=error)
