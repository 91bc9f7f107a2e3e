"""Scoped tenant and user identity.

Each scope yields an explicit context value and binds the identity into the
structlog context variables for its duration. Context variables are local to
the running asyncio task, and ``bound_contextvars`` restores the previous
values on exit, so nested scopes unwind in reverse order on every path.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import structlog

from shared_kernel.context.observability import DefaultScopeProbe, ScopeProbe
from shared_kernel.context.value_objects import (
    GUEST_USER_ID,
    TenantContext,
    UserContext,
)
from shared_kernel.exceptions import InvalidContextError

_default_probe = DefaultScopeProbe()


@contextmanager
def tenant_scope(
    tenant_id: str,
    probe: ScopeProbe | None = None,
) -> Iterator[TenantContext]:
    """Open a tenant scope for one handler invocation.

    Args:
        tenant_id: The tenant from the message header.
        probe: Optional observability probe.

    Yields:
        The tenant context to pass to nested scopes and service calls.

    Raises:
        InvalidContextError: If the tenant identifier is empty.
    """
    if not tenant_id or not tenant_id.strip():
        raise InvalidContextError("Tenant identifier must not be empty")

    probe = probe or _default_probe
    context = TenantContext(tenant_id=tenant_id)
    probe.tenant_scope_opened(tenant_id)
    failed = False
    try:
        with structlog.contextvars.bound_contextvars(tenant_id=tenant_id):
            yield context
    except BaseException:
        failed = True
        raise
    finally:
        probe.tenant_scope_closed(tenant_id, failed)


@contextmanager
def user_scope(
    tenant: TenantContext,
    user_id: str,
    access_token: str | None,
    probe: ScopeProbe | None = None,
) -> Iterator[UserContext]:
    """Open a user scope inside an active tenant scope.

    Args:
        tenant: The enclosing tenant context.
        user_id: The acting user.
        access_token: Bearer token obtained from login, None for guests.
        probe: Optional observability probe.

    Raises:
        InvalidContextError: If no tenant context is given or the user is empty.
    """
    if not isinstance(tenant, TenantContext):
        raise InvalidContextError("A user scope requires an active tenant context")
    if not user_id or not user_id.strip():
        raise InvalidContextError("User identifier must not be empty")

    probe = probe or _default_probe
    context = UserContext(tenant=tenant, user_id=user_id, access_token=access_token)
    probe.user_scope_opened(tenant.tenant_id, user_id, context.is_guest)
    failed = False
    try:
        with structlog.contextvars.bound_contextvars(user_id=user_id):
            yield context
    except BaseException:
        failed = True
        raise
    finally:
        probe.user_scope_closed(tenant.tenant_id, user_id, failed)


@contextmanager
def guest_scope(
    tenant: TenantContext,
    probe: ScopeProbe | None = None,
) -> Iterator[UserContext]:
    """Open the unauthenticated guest scope used for the login call."""
    with user_scope(tenant, GUEST_USER_ID, None, probe=probe) as context:
        yield context
