"""HTTP adapters for the listener ports."""

from listeners.infrastructure.entity_reader import HttpEntityReader
from listeners.infrastructure.identity_client import HttpIdentityProvider
from listeners.infrastructure.sync_gateway_client import HttpSyncGateway

__all__ = ["HttpEntityReader", "HttpIdentityProvider", "HttpSyncGateway"]
