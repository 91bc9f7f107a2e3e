"""Unit tests for tenant, guest and user scopes."""

import asyncio
from unittest.mock import MagicMock

import pytest
import structlog

from shared_kernel.context import (
    AUTHORIZATION_HEADER,
    TENANT_HEADER,
    USER_HEADER,
    TenantContext,
    UserContext,
    guest_scope,
    tenant_scope,
    user_scope,
)
from shared_kernel.exceptions import InvalidContextError


class TestTenantScope:
    """Tests for tenant_scope()."""

    def test_yields_tenant_context(self):
        with tenant_scope("tenant-a", probe=MagicMock()) as context:
            assert context == TenantContext(tenant_id="tenant-a")

    @pytest.mark.parametrize("tenant_id", ["", "   "])
    def test_rejects_empty_tenant(self, tenant_id):
        with pytest.raises(InvalidContextError):
            with tenant_scope(tenant_id, probe=MagicMock()):
                pass

    def test_binds_tenant_into_log_context_and_restores_it(self):
        structlog.contextvars.clear_contextvars()

        with tenant_scope("tenant-a", probe=MagicMock()):
            assert structlog.contextvars.get_contextvars()["tenant_id"] == "tenant-a"
            with tenant_scope("tenant-b", probe=MagicMock()):
                assert structlog.contextvars.get_contextvars()["tenant_id"] == "tenant-b"
            assert structlog.contextvars.get_contextvars()["tenant_id"] == "tenant-a"

        assert "tenant_id" not in structlog.contextvars.get_contextvars()

    def test_restores_log_context_on_error(self):
        structlog.contextvars.clear_contextvars()
        probe = MagicMock()

        with pytest.raises(RuntimeError):
            with tenant_scope("tenant-a", probe=probe):
                raise RuntimeError("boom")

        assert "tenant_id" not in structlog.contextvars.get_contextvars()
        probe.tenant_scope_closed.assert_called_once_with("tenant-a", True)

    def test_reports_clean_close(self):
        probe = MagicMock()

        with tenant_scope("tenant-a", probe=probe):
            pass

        probe.tenant_scope_opened.assert_called_once_with("tenant-a")
        probe.tenant_scope_closed.assert_called_once_with("tenant-a", False)


class TestUserScope:
    """Tests for user_scope() and guest_scope()."""

    def test_requires_tenant_context(self):
        with pytest.raises(InvalidContextError):
            with user_scope("tenant-a", "sync-user", "token", probe=MagicMock()):
                pass

    def test_rejects_empty_user(self, tenant_context):
        with pytest.raises(InvalidContextError):
            with user_scope(tenant_context, "", "token", probe=MagicMock()):
                pass

    def test_user_context_headers(self, tenant_context):
        with user_scope(tenant_context, "sync-user", "token-1", probe=MagicMock()) as user:
            assert user.headers() == {
                TENANT_HEADER: "tenant-a",
                USER_HEADER: "sync-user",
                AUTHORIZATION_HEADER: "token-1",
            }
            assert not user.is_guest

    def test_guest_scope_has_no_token(self, tenant_context):
        with guest_scope(tenant_context, probe=MagicMock()) as guest:
            assert guest.is_guest
            assert guest.user_id == "guest"
            assert AUTHORIZATION_HEADER not in guest.headers()

    def test_scopes_close_in_reverse_order(self):
        calls = []
        probe = MagicMock()
        probe.tenant_scope_closed.side_effect = lambda *args: calls.append("tenant")
        probe.user_scope_closed.side_effect = lambda *args: calls.append("user")

        with pytest.raises(ValueError):
            with tenant_scope("tenant-a", probe=probe) as tenant:
                with user_scope(tenant, "sync-user", "token", probe=probe):
                    raise ValueError("read-back failed")

        assert calls == ["user", "tenant"]
        probe.user_scope_closed.assert_called_once_with("tenant-a", "sync-user", True)

    @pytest.mark.asyncio
    async def test_concurrent_tasks_do_not_share_identity(self):
        """Each task sees only the tenant it opened."""
        seen: dict[str, str] = {}

        async def handle(tenant_id: str) -> None:
            with tenant_scope(tenant_id, probe=MagicMock()):
                await asyncio.sleep(0.01)
                seen[tenant_id] = structlog.contextvars.get_contextvars()["tenant_id"]

        await asyncio.gather(handle("tenant-a"), handle("tenant-b"))

        assert seen == {"tenant-a": "tenant-a", "tenant-b": "tenant-b"}

    def test_user_context_is_immutable(self, tenant_context):
        user = UserContext(tenant=tenant_context, user_id="sync-user")
        with pytest.raises(AttributeError):
            user.user_id = "other"  # type: ignore[misc]
