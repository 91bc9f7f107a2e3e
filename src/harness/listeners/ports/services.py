"""Protocols for the outbound calls a confirmation makes.

Every call receives the acting UserContext explicitly; implementations
derive the tenant, user and authorization headers from it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from listeners.domain.value_objects import Authentication, ForwardAction, Service
    from shared_kernel.context.value_objects import UserContext


@runtime_checkable
class IdentityProvider(Protocol):
    """Logs users in against the identity service."""

    async def login(
        self,
        context: "UserContext",
        username: str,
        password: str,
    ) -> "Authentication":
        """Log in and return a short-lived access token.

        Args:
            context: Guest context of the tenant to log in to
            username: Account identifier
            password: Plain-text account password

        Raises:
            AuthenticationError: If the credentials are rejected
            ServiceUnavailableError: If the identity service cannot be reached
        """
        ...


@runtime_checkable
class EntityReader(Protocol):
    """Reads entities from the platform services."""

    async def fetch(
        self,
        service: "Service",
        path: str,
        context: "UserContext",
    ) -> dict[str, Any]:
        """Fetch one entity document.

        Args:
            service: Service owning the entity
            path: Path relative to the service base URL
            context: Authenticated user context

        Raises:
            EntityNotFoundError: If the service has no such entity
            ServiceUnavailableError: On transport failures
            ServiceRequestError: On other error statuses
        """
        ...


@runtime_checkable
class SyncGateway(Protocol):
    """Receives confirmed organization entities."""

    async def forward(
        self,
        resource: str,
        action: "ForwardAction",
        identifier: str,
        entity: dict[str, Any] | None,
        context: "UserContext",
    ) -> None:
        """Create, update or delete an entity on the gateway."""
        ...
