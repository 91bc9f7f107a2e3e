"""Explicit tenant and user identity scopes."""

from shared_kernel.context.observability import DefaultScopeProbe, ScopeProbe
from shared_kernel.context.scopes import guest_scope, tenant_scope, user_scope
from shared_kernel.context.value_objects import (
    AUTHORIZATION_HEADER,
    GUEST_USER_ID,
    TENANT_HEADER,
    USER_HEADER,
    TenantContext,
    UserContext,
)

__all__ = [
    "AUTHORIZATION_HEADER",
    "DefaultScopeProbe",
    "GUEST_USER_ID",
    "ScopeProbe",
    "TENANT_HEADER",
    "TenantContext",
    "USER_HEADER",
    "UserContext",
    "guest_scope",
    "tenant_scope",
    "user_scope",
]
