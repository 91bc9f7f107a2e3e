"""Identity context value objects.

Contexts are immutable and passed explicitly down the call chain. Nothing
here is stored in a module-level slot, so concurrent handlers never observe
each other's identity.
"""

from __future__ import annotations

from dataclasses import dataclass

TENANT_HEADER = "X-Tenant-Identifier"
USER_HEADER = "User"
AUTHORIZATION_HEADER = "Authorization"

GUEST_USER_ID = "guest"


@dataclass(frozen=True)
class TenantContext:
    """Tenant identity for the duration of one handler invocation.

    Attributes:
        tenant_id: The tenant the delivered message belongs to.
    """

    tenant_id: str

    def headers(self) -> dict[str, str]:
        """Return the request headers that carry this tenant."""
        return {TENANT_HEADER: self.tenant_id}


@dataclass(frozen=True)
class UserContext:
    """User identity layered inside a tenant context.

    The guest variant carries no access token and is only valid for the
    login call that produces a real token.

    Attributes:
        tenant: The enclosing tenant context.
        user_id: Identifier of the acting user.
        access_token: Bearer token, None for the guest user.
    """

    tenant: TenantContext
    user_id: str
    access_token: str | None = None

    @property
    def is_guest(self) -> bool:
        return self.access_token is None

    def headers(self) -> dict[str, str]:
        """Return tenant, user and authorization headers for a service call."""
        result = self.tenant.headers()
        result[USER_HEADER] = self.user_id
        if self.access_token is not None:
            result[AUTHORIZATION_HEADER] = self.access_token
        return result
