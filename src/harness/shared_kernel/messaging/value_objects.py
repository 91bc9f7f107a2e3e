"""Value objects for inbound broker messages."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from shared_kernel.context.value_objects import TENANT_HEADER

_SELECTOR_EXPRESSION = re.compile(r"^\s*([A-Za-z_][\w.-]*)\s*=\s*'([^']*)'\s*$")


@dataclass(frozen=True)
class Selector:
    """Broker-level filter matching one message header against a value.

    The broker expression form is ``header = 'value'``, e.g.
    ``action = 'post-ledger'``.

    Attributes:
        header: Name of the message header to match.
        value: Required header value.
    """

    header: str
    value: str

    @classmethod
    def parse(cls, expression: str) -> Selector:
        """Parse a ``header = 'value'`` selector expression.

        Raises:
            ValueError: If the expression is not an equality selector.
        """
        match = _SELECTOR_EXPRESSION.match(expression)
        if match is None:
            raise ValueError(f"Unsupported selector expression: {expression!r}")
        return cls(header=match.group(1), value=match.group(2))

    @property
    def expression(self) -> str:
        return f"{self.header} = '{self.value}'"

    def matches(self, headers: Mapping[str, str]) -> bool:
        return headers.get(self.header) == self.value

    def __str__(self) -> str:
        return self.expression


@dataclass(frozen=True)
class Message:
    """A message delivered by the broker.

    Attributes:
        destination: Destination (topic/queue) the message arrived on.
        headers: Message headers; carries the tenant and the selector tag.
        payload: UTF-8 message body.
    """

    destination: str
    payload: str
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @property
    def tenant(self) -> str | None:
        tenant = self.headers.get(TENANT_HEADER)
        return tenant or None

    @classmethod
    def for_selector(
        cls,
        destination: str,
        selector: Selector,
        tenant: str,
        payload: str,
    ) -> Message:
        """Build a message that the given selector will match."""
        return cls(
            destination=destination,
            payload=payload,
            headers={TENANT_HEADER: tenant, selector.header: selector.value},
        )
