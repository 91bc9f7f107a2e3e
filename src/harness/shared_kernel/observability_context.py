"""Observation context for domain-oriented observability.

Observation contexts collect and manage contextual metadata for instrumentation,
following the Domain Oriented Observability pattern.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable context containing metadata for observability.

    Captures message-scoped metadata that should be included with all
    instrumentation events raised while one delivered message is handled.

    Attributes:
        tenant_id: Tenant from the message header (if known).
        destination: Destination the message arrived on.
        operation: Operation key of the matched listener.
        user_id: Acting user for service calls (if applicable).
        extra: Additional contextual metadata.

    Example:
        context = ObservationContext(
            tenant_id="tenant-a",
            destination="accounting-v1",
            operation="post-ledger",
        )
        probe = DefaultDispatchProbe().with_context(context)
    """

    tenant_id: str | None = None
    destination: str | None = None
    operation: str | None = None
    user_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.tenant_id is not None:
            result["tenant_id"] = self.tenant_id
        if self.destination is not None:
            result["destination"] = self.destination
        if self.operation is not None:
            result["operation"] = self.operation
        if self.user_id is not None:
            result["user_id"] = self.user_id
        result.update(self.extra)
        return result

    def with_user(self, user_id: str) -> ObservationContext:
        """Create a new context with the acting user set."""
        return replace(self, user_id=user_id)

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Create a new context with additional metadata."""
        return replace(self, extra={**self.extra, **kwargs})
