"""Domain probe for identity scope transitions.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import Protocol

import structlog


class ScopeProbe(Protocol):
    """Domain probe for tenant and user scope lifecycles."""

    def tenant_scope_opened(self, tenant_id: str) -> None:
        """Record that a tenant scope was entered."""
        ...

    def tenant_scope_closed(self, tenant_id: str, failed: bool) -> None:
        """Record that a tenant scope was left, normally or by an error."""
        ...

    def user_scope_opened(self, tenant_id: str, user_id: str, guest: bool) -> None:
        """Record that a user scope was entered."""
        ...

    def user_scope_closed(self, tenant_id: str, user_id: str, failed: bool) -> None:
        """Record that a user scope was left."""
        ...


class DefaultScopeProbe:
    """Default implementation of ScopeProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def tenant_scope_opened(self, tenant_id: str) -> None:
        self._logger.debug("tenant_scope_opened", scope_tenant=tenant_id)

    def tenant_scope_closed(self, tenant_id: str, failed: bool) -> None:
        self._logger.debug(
            "tenant_scope_closed", scope_tenant=tenant_id, failed=failed
        )

    def user_scope_opened(self, tenant_id: str, user_id: str, guest: bool) -> None:
        self._logger.debug(
            "user_scope_opened",
            scope_tenant=tenant_id,
            scope_user=user_id,
            guest=guest,
        )

    def user_scope_closed(self, tenant_id: str, user_id: str, failed: bool) -> None:
        self._logger.debug(
            "user_scope_closed",
            scope_tenant=tenant_id,
            scope_user=user_id,
            failed=failed,
        )
