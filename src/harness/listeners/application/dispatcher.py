"""Listener dispatch.

The dispatcher owns the static routing table and is the per-message error
boundary: recording happens first and unconditionally, and any failure of
the confirmation step is logged and turned into an outcome instead of
propagating to the message source.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING

from listeners.application.observability import DefaultDispatchProbe, DispatchProbe
from listeners.domain.identifiers import resolve_identifiers
from listeners.domain.value_objects import ListenerSpec
from shared_kernel.exceptions import MalformedPayloadError
from shared_kernel.messaging.value_objects import Message
from shared_kernel.observability_context import ObservationContext
from shared_kernel.recording.ports import EventRecorder

if TYPE_CHECKING:
    from listeners.application.confirmation import ConfirmationService


class DispatchOutcome(StrEnum):
    """How the handling of one message ended."""

    UNROUTED = "unrouted"
    REJECTED = "rejected"
    RECORDED = "recorded"
    CONFIRMED = "confirmed"
    MALFORMED = "malformed"
    FAILED = "failed"


@dataclass(frozen=True)
class DispatchResult:
    """Result of dispatching one message.

    Attributes:
        outcome: How handling ended.
        spec: The listener the message was routed to, if any.
        error: Error message for MALFORMED and FAILED outcomes.
    """

    outcome: DispatchOutcome
    spec: ListenerSpec | None = None
    error: str | None = None

    @property
    def recorded(self) -> bool:
        return self.outcome in (
            DispatchOutcome.RECORDED,
            DispatchOutcome.CONFIRMED,
            DispatchOutcome.MALFORMED,
            DispatchOutcome.FAILED,
        )


class ListenerDispatcher:
    """Routes messages to listener table entries and runs them."""

    def __init__(
        self,
        listeners: Iterable[ListenerSpec],
        recorder: EventRecorder,
        confirmation: ConfirmationService | None = None,
        probe: DispatchProbe | None = None,
    ) -> None:
        """Build the routing table.

        Args:
            listeners: Table entries; each (destination, selector) must be unique
            recorder: Sink every routed message is recorded into
            confirmation: Confirmation step; None records without confirming
            probe: Optional observability probe

        Raises:
            ValueError: If two entries share a (destination, selector) route.
        """
        self._recorder = recorder
        self._confirmation = confirmation
        self._probe = probe or DefaultDispatchProbe()

        by_destination: dict[str, list[ListenerSpec]] = defaultdict(list)
        seen: set[tuple[str, str]] = set()
        for spec in listeners:
            route = (spec.destination, spec.selector.expression)
            if route in seen:
                raise ValueError(
                    f"Duplicate listener for destination {spec.destination!r} "
                    f"and selector {spec.selector.expression!r}"
                )
            seen.add(route)
            by_destination[spec.destination].append(spec)

        self._routes = MappingProxyType(
            {destination: tuple(specs) for destination, specs in by_destination.items()}
        )
        for destination, specs in self._routes.items():
            self._probe.listeners_registered(destination, len(specs))

    @property
    def listeners(self) -> tuple[ListenerSpec, ...]:
        return tuple(spec for specs in self._routes.values() for spec in specs)

    def destinations(self) -> frozenset[str]:
        """Return every destination that has at least one listener."""
        return frozenset(self._routes)

    def resolve(self, message: Message) -> ListenerSpec | None:
        """Return the listener whose selector matches the message, if any."""
        for spec in self._routes.get(message.destination, ()):
            if spec.selector.matches(message.headers):
                return spec
        return None

    async def dispatch(self, message: Message) -> DispatchResult:
        """Record a message and run its confirmation step.

        Never raises; the result reports what happened.
        """
        spec = self.resolve(message)
        if spec is None:
            self._probe.message_unrouted(message.destination, dict(message.headers))
            return DispatchResult(DispatchOutcome.UNROUTED)

        tenant = message.tenant
        probe = self._probe.with_context(
            ObservationContext(
                tenant_id=tenant,
                destination=spec.destination,
                operation=spec.operation_key,
            )
        )
        if tenant is None:
            probe.message_rejected(message.destination, "Missing tenant header")
            return DispatchResult(DispatchOutcome.REJECTED, spec=spec)

        probe.listener_matched(spec.selector.expression)
        self._recorder.record(tenant, spec.operation_key, message.payload, spec.kind)

        if spec.confirmation is None or self._confirmation is None:
            return DispatchResult(DispatchOutcome.RECORDED, spec=spec)

        try:
            identifiers = resolve_identifiers(
                spec.kind, message.payload, spec.confirmation.identifiers
            )
        except MalformedPayloadError as e:
            probe.payload_malformed(e)
            return DispatchResult(DispatchOutcome.MALFORMED, spec=spec, error=str(e))

        try:
            await self._confirmation.confirm(tenant, spec, identifiers)
        except Exception as e:
            probe.confirmation_failed(e)
            return DispatchResult(DispatchOutcome.FAILED, spec=spec, error=str(e))

        return DispatchResult(DispatchOutcome.CONFIRMED, spec=spec)
