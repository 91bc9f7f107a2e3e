"""Observability probes for message sources."""

from __future__ import annotations

from typing import Protocol

import structlog

logger = structlog.get_logger()


class MessageSourceProbe(Protocol):
    """Protocol for message source observability."""

    def source_started(self, destinations: frozenset[str]) -> None:
        """Called when the source subscribes to its destinations."""
        ...

    def source_stopped(self) -> None:
        """Called when the source stops."""
        ...

    def message_received(self, destination: str) -> None:
        """Called for every message handed to the callback."""
        ...

    def invalid_message_ignored(self, destination: str, reason: str) -> None:
        """Called when a message cannot be decoded and is skipped."""
        ...

    def source_error(self, error: str) -> None:
        """Called when the underlying consumer fails."""
        ...


class DefaultMessageSourceProbe:
    """Default implementation using structlog."""

    def __init__(self, source_name: str = "message_source") -> None:
        """Initialize the probe with a logger bound to the source name."""
        self._log = logger.bind(component=source_name)

    def source_started(self, destinations: frozenset[str]) -> None:
        """Log source start."""
        self._log.info("message_source_started", destinations=sorted(destinations))

    def source_stopped(self) -> None:
        """Log source stop."""
        self._log.info("message_source_stopped")

    def message_received(self, destination: str) -> None:
        """Log message receipt."""
        self._log.debug("message_received", destination=destination)

    def invalid_message_ignored(self, destination: str, reason: str) -> None:
        """Log undecodable message."""
        self._log.warning(
            "invalid_message_ignored", destination=destination, reason=reason
        )

    def source_error(self, error: str) -> None:
        """Log consumer failure."""
        self._log.error("message_source_error", error=error)
