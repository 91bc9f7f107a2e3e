"""Domain probe for confirmation of recorded events."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ConfirmationProbe(Protocol):
    """Domain probe for read-back confirmation."""

    def entity_confirmed(self, summary: str, fields: dict[str, Any]) -> None:
        """Record that the read-back found the entity."""
        ...

    def event_acknowledged(self, summary: str) -> None:
        """Record a log-only confirmation."""
        ...

    def entity_forwarded(self, resource: str, action: str, identifier: str) -> None:
        """Record that an entity was forwarded to the sync gateway."""
        ...

    def forward_skipped(self, resource: str, action: str) -> None:
        """Record that forwarding was skipped because no gateway is configured."""
        ...

    def with_context(self, context: ObservationContext) -> ConfirmationProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultConfirmationProbe:
    """Default implementation of ConfirmationProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultConfirmationProbe:
        """Create a new probe with observation context bound."""
        return DefaultConfirmationProbe(logger=self._logger, context=context)

    def entity_confirmed(self, summary: str, fields: dict[str, Any]) -> None:
        """Record that the read-back found the entity."""
        self._logger.info(
            "entity_confirmed",
            summary=summary,
            entity=fields,
            **self._get_context_kwargs(),
        )

    def event_acknowledged(self, summary: str) -> None:
        """Record a log-only confirmation."""
        self._logger.info(
            "event_acknowledged",
            summary=summary,
            **self._get_context_kwargs(),
        )

    def entity_forwarded(self, resource: str, action: str, identifier: str) -> None:
        """Record that an entity was forwarded to the sync gateway."""
        self._logger.info(
            "entity_forwarded",
            resource=resource,
            action=action,
            identifier=identifier,
            **self._get_context_kwargs(),
        )

    def forward_skipped(self, resource: str, action: str) -> None:
        """Record that forwarding was skipped because no gateway is configured."""
        self._logger.debug(
            "entity_forward_skipped",
            resource=resource,
            action=action,
            **self._get_context_kwargs(),
        )
