"""Domain probe for the event recorder."""

from __future__ import annotations

from typing import Protocol

import structlog


class RecorderProbe(Protocol):
    """Domain probe for event recording."""

    def event_recorded(self, tenant: str, operation_key: str, replaced: bool) -> None:
        """Record that an event was stored (replaced=True on redelivery)."""
        ...

    def recording_failed(self, tenant: str, operation_key: str, error: Exception) -> None:
        """Record that storing an event failed."""
        ...

    def wait_timed_out(self, tenant: str, operation_key: str, timeout: float) -> None:
        """Record that a test wait ended without the event arriving."""
        ...


class DefaultRecorderProbe:
    """Default implementation of RecorderProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def event_recorded(self, tenant: str, operation_key: str, replaced: bool) -> None:
        self._logger.debug(
            "event_recorded",
            tenant=tenant,
            operation=operation_key,
            replaced=replaced,
        )

    def recording_failed(self, tenant: str, operation_key: str, error: Exception) -> None:
        self._logger.error(
            "event_recording_failed",
            tenant=tenant,
            operation=operation_key,
            error=str(error),
            error_type=type(error).__name__,
        )

    def wait_timed_out(self, tenant: str, operation_key: str, timeout: float) -> None:
        self._logger.warning(
            "event_wait_timed_out",
            tenant=tenant,
            operation=operation_key,
            timeout=timeout,
        )
