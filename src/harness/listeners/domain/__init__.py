"""Listener domain: dispatch table entries and payload identifiers."""

from listeners.domain.identifiers import lookup, resolve_identifiers
from listeners.domain.value_objects import (
    Acknowledge,
    Authentication,
    Confirmation,
    ForwardAction,
    ListenerSpec,
    ReadBack,
    Service,
    SyncAccount,
    SyncForward,
)

__all__ = [
    "Acknowledge",
    "Authentication",
    "Confirmation",
    "ForwardAction",
    "ListenerSpec",
    "ReadBack",
    "Service",
    "SyncAccount",
    "SyncForward",
    "lookup",
    "resolve_identifiers",
]
