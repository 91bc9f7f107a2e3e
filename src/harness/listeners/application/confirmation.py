"""Confirmation of recorded events against the owning service.

After a message is recorded, the confirmation logs in as the sync account
and reads the entity back so the log shows the state the service reached.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any
from urllib.parse import quote

from listeners.application.observability import (
    ConfirmationProbe,
    DefaultConfirmationProbe,
)
from listeners.domain.identifiers import lookup
from listeners.domain.value_objects import (
    Acknowledge,
    ListenerSpec,
    ReadBack,
    SyncAccount,
    SyncForward,
)
from listeners.ports.services import EntityReader, IdentityProvider, SyncGateway
from shared_kernel.context.observability import ScopeProbe
from shared_kernel.context.scopes import guest_scope, tenant_scope, user_scope
from shared_kernel.context.value_objects import UserContext
from shared_kernel.observability_context import ObservationContext


class _SummaryValues(dict[str, Any]):
    def __missing__(self, key: str) -> str:
        return f"<{key}?>"


def render_summary(template: str, values: dict[str, Any]) -> str:
    """Format a summary template; unknown placeholders render as ``<name?>``."""
    return template.format_map(_SummaryValues(values))


class ConfirmationService:
    """Runs the confirmation step of a listener.

    Each call is independent: it logs in, performs at most one read-back and
    an optional forward, and propagates every failure to the caller.
    """

    def __init__(
        self,
        identity: IdentityProvider,
        reader: EntityReader,
        sync_account: SyncAccount,
        sync_gateway: SyncGateway | None = None,
        probe: ConfirmationProbe | None = None,
        scope_probe: ScopeProbe | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            identity: Login port of the identity service
            reader: Read port of the platform services
            sync_account: Account the read-back runs as
            sync_gateway: Optional gateway for organization forwards
            probe: Optional confirmation probe
            scope_probe: Optional probe for the identity scopes
        """
        self._identity = identity
        self._reader = reader
        self._sync_account = sync_account
        self._sync_gateway = sync_gateway
        self._probe = probe or DefaultConfirmationProbe()
        self._scope_probe = scope_probe

    async def confirm(
        self,
        tenant: str,
        spec: ListenerSpec,
        identifiers: dict[str, str],
    ) -> None:
        """Confirm one recorded event.

        Args:
            tenant: Tenant from the message header
            spec: The listener the message was routed to
            identifiers: Identifiers resolved from the payload

        Raises:
            HarnessError: Any login, lookup or transport failure.
        """
        probe = self._probe.with_context(
            ObservationContext(
                tenant_id=tenant,
                destination=spec.destination,
                operation=spec.operation_key,
            )
        )

        match spec.confirmation:
            case None:
                return

            case ReadBack() as read_back:

                async def read(user: UserContext) -> None:
                    await self._read_back(read_back, identifiers, user, probe)

                await self._as_sync_user(tenant, read)

            case Acknowledge() as acknowledge:
                summary = render_summary(acknowledge.summary, identifiers)
                forward = acknowledge.forward
                gateway = self._sync_gateway
                if forward is not None and gateway is not None:

                    async def send(user: UserContext) -> None:
                        await self._forward(
                            gateway, forward, identifiers, None, user, probe
                        )

                    await self._as_sync_user(tenant, send)
                elif forward is not None:
                    probe.forward_skipped(forward.resource, forward.action)
                probe.event_acknowledged(summary)

    async def _as_sync_user(
        self,
        tenant: str,
        step: Callable[[UserContext], Awaitable[None]],
    ) -> None:
        """Run a step as the sync account inside tenant and user scopes."""
        account = self._sync_account
        with tenant_scope(tenant, probe=self._scope_probe) as tenant_context:
            with guest_scope(tenant_context, probe=self._scope_probe) as guest:
                authentication = await self._identity.login(
                    guest, account.identifier, account.password
                )

            with user_scope(
                tenant_context,
                account.identifier,
                authentication.access_token,
                probe=self._scope_probe,
            ) as user:
                await step(user)

    async def _read_back(
        self,
        read_back: ReadBack,
        identifiers: dict[str, str],
        user: UserContext,
        probe: ConfirmationProbe,
    ) -> None:
        path = read_back.path.format_map(
            {name: quote(value, safe="") for name, value in identifiers.items()}
        )
        entity = await self._reader.fetch(read_back.service, path, user)

        fields = {
            name: lookup(entity, field_path)
            for name, field_path in read_back.fields.items()
        }
        summary = render_summary(read_back.summary, {**identifiers, **fields})

        forward = read_back.forward
        if forward is not None:
            if self._sync_gateway is None:
                probe.forward_skipped(forward.resource, forward.action)
            else:
                await self._forward(
                    self._sync_gateway, forward, identifiers, entity, user, probe
                )

        probe.entity_confirmed(summary, fields)

    async def _forward(
        self,
        gateway: SyncGateway,
        forward: SyncForward,
        identifiers: dict[str, str],
        entity: dict[str, Any] | None,
        user: UserContext,
        probe: ConfirmationProbe,
    ) -> None:
        """Forward to the gateway, keyed by the last resolved identifier."""
        identifier = list(identifiers.values())[-1]
        await gateway.forward(
            forward.resource, forward.action, identifier, entity, user
        )
        probe.entity_forwarded(forward.resource, forward.action, identifier)
