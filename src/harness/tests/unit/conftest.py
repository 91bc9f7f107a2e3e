"""Unit test fixtures with mocked dependencies."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from listeners.domain.value_objects import Authentication, SyncAccount
from shared_kernel.context.value_objects import TenantContext, UserContext
from shared_kernel.recording import InMemoryEventRecorder


@pytest.fixture
def recorder() -> InMemoryEventRecorder:
    """Provide a recorder with a mocked probe."""
    return InMemoryEventRecorder(probe=MagicMock())


@pytest.fixture
def tenant_context() -> TenantContext:
    return TenantContext(tenant_id="tenant-a")


@pytest.fixture
def sync_user(tenant_context: TenantContext) -> UserContext:
    return UserContext(tenant=tenant_context, user_id="sync-user", access_token="token-1")


@pytest.fixture
def sync_account() -> SyncAccount:
    return SyncAccount(identifier="sync-user", password="s3cret")


@pytest.fixture
def mock_identity() -> AsyncMock:
    """Provide an identity provider that always logs in."""
    identity = AsyncMock()
    identity.login.return_value = Authentication(access_token="token-1")
    return identity


@pytest.fixture
def mock_reader() -> AsyncMock:
    """Provide an entity reader returning a named entity."""
    reader = AsyncMock()
    reader.fetch.return_value = {"identifier": "emp-001", "name": "Head Office"}
    return reader
