"""Ports of the listener context towards the platform services."""

from listeners.ports.services import EntityReader, IdentityProvider, SyncGateway

__all__ = ["EntityReader", "IdentityProvider", "SyncGateway"]
