"""Domain probe for outbound service calls.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import Protocol

import structlog


class ServiceClientProbe(Protocol):
    """Domain probe for HTTP calls to platform services."""

    def request_completed(self, method: str, target: str, status_code: int) -> None:
        """Record that a service answered (with any status)."""
        ...

    def request_failed(self, method: str, target: str, error: Exception) -> None:
        """Record that a request never got an answer."""
        ...

    def login_succeeded(self, username: str) -> None:
        """Record that the sync account obtained a token."""
        ...

    def login_rejected(self, username: str, status_code: int) -> None:
        """Record that the identity service refused the credentials."""
        ...


class DefaultServiceClientProbe:
    """Default implementation of ServiceClientProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def request_completed(self, method: str, target: str, status_code: int) -> None:
        self._logger.debug(
            "service_request_completed",
            method=method,
            target=target,
            status_code=status_code,
        )

    def request_failed(self, method: str, target: str, error: Exception) -> None:
        self._logger.warning(
            "service_request_failed",
            method=method,
            target=target,
            error=str(error),
            error_type=type(error).__name__,
        )

    def login_succeeded(self, username: str) -> None:
        self._logger.debug("sync_user_logged_in", username=username)

    def login_rejected(self, username: str, status_code: int) -> None:
        self._logger.warning(
            "sync_user_login_rejected", username=username, status_code=status_code
        )
