"""Dispatch table of every listener, grouped by business domain."""

from listeners.catalog import (
    accounting,
    cheques,
    customer,
    identity,
    organization,
    portfolio,
)
from listeners.domain.value_objects import ListenerSpec

DOMAINS = {
    "accounting": accounting,
    "identity": identity,
    "customer": customer,
    "organization": organization,
    "portfolio": portfolio,
    "cheques": cheques,
}

ALL_LISTENERS: tuple[ListenerSpec, ...] = tuple(
    spec for module in DOMAINS.values() for spec in module.LISTENERS
)

__all__ = ["ALL_LISTENERS", "DOMAINS"]
