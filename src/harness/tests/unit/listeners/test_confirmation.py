"""Unit tests for ConfirmationService."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from listeners.application import ConfirmationService
from listeners.application.confirmation import render_summary
from listeners.catalog import organization
from listeners.domain import (
    Acknowledge,
    ForwardAction,
    ListenerSpec,
    ReadBack,
    Service,
    SyncForward,
)
from shared_kernel.exceptions import AuthenticationError
from shared_kernel.messaging import Selector


def _spec(confirmation, operation="put-ledger", destination="accounting-v1"):
    return ListenerSpec(
        destination=destination,
        selector=Selector("action", operation),
        operation_key=operation,
        confirmation=confirmation,
    )


def _organization_spec(operation: str) -> ListenerSpec:
    return next(spec for spec in organization.LISTENERS if spec.operation_key == operation)


@pytest.fixture
def probe() -> MagicMock:
    probe = MagicMock()
    probe.with_context.return_value = probe
    return probe


@pytest.fixture
def gateway() -> AsyncMock:
    return AsyncMock()


def _service(identity, reader, account, probe, gateway=None, scope_probe=None):
    return ConfirmationService(
        identity=identity,
        reader=reader,
        sync_account=account,
        sync_gateway=gateway,
        probe=probe,
        scope_probe=scope_probe or MagicMock(),
    )


class TestRenderSummary:
    """Tests for render_summary()."""

    def test_formats_values(self):
        assert render_summary("Account closed: {name} {state}", {"name": "Cash", "state": "CLOSED"}) == (
            "Account closed: Cash CLOSED"
        )

    def test_unknown_placeholder(self):
        assert render_summary("Created {name}", {}) == "Created <name?>"


class TestReadBack:
    """Tests for read-back confirmations."""

    @pytest.mark.asyncio
    async def test_logs_in_as_sync_user_then_reads_back(
        self, mock_identity, mock_reader, sync_account, probe
    ):
        mock_reader.fetch.return_value = {"name": "Cash", "state": "OPEN"}
        read_back = ReadBack(
            service=Service.ACCOUNTING,
            path="/accounts/{identifier}",
            summary="Account reopened: {name} {state}",
            fields={"name": "name", "state": "state"},
        )
        service = _service(mock_identity, mock_reader, sync_account, probe)

        await service.confirm("tenant-a", _spec(read_back), {"identifier": "1000"})

        guest, username, password = mock_identity.login.await_args.args
        assert guest.is_guest
        assert guest.tenant.tenant_id == "tenant-a"
        assert (username, password) == ("sync-user", "s3cret")

        _, path, user = mock_reader.fetch.await_args.args
        assert path == "/accounts/1000"
        assert user.user_id == "sync-user"
        assert user.access_token == "token-1"

        probe.entity_confirmed.assert_called_once_with(
            "Account reopened: Cash OPEN", {"name": "Cash", "state": "OPEN"}
        )

    @pytest.mark.asyncio
    async def test_scopes_nest_guest_then_user(self, mock_identity, mock_reader, sync_account, probe):
        scope_probe = MagicMock()
        service = _service(
            mock_identity, mock_reader, sync_account, probe, scope_probe=scope_probe
        )
        read_back = ReadBack(Service.ACCOUNTING, "/ledgers/{identifier}", "Created {name}")

        await service.confirm("tenant-a", _spec(read_back), {"identifier": "l-1"})

        opened = [call.args for call in scope_probe.user_scope_opened.call_args_list]
        assert opened == [("tenant-a", "guest", True), ("tenant-a", "sync-user", False)]
        scope_probe.tenant_scope_closed.assert_called_once_with("tenant-a", False)

    @pytest.mark.asyncio
    async def test_login_failure_propagates(self, mock_identity, mock_reader, sync_account, probe):
        mock_identity.login.side_effect = AuthenticationError("rejected")
        service = _service(mock_identity, mock_reader, sync_account, probe)
        read_back = ReadBack(Service.IDENTITY, "/users/{identifier}", "Created user {identifier}")

        with pytest.raises(AuthenticationError):
            await service.confirm("tenant-a", _spec(read_back), {"identifier": "operator"})

        mock_reader.fetch.assert_not_awaited()
        probe.entity_confirmed.assert_not_called()

    @pytest.mark.asyncio
    async def test_forwards_fetched_entity_to_gateway(
        self, mock_identity, mock_reader, sync_account, probe, gateway
    ):
        service = _service(mock_identity, mock_reader, sync_account, probe, gateway)

        await service.confirm(
            "tenant-a", _organization_spec("post-employee"), {"identifier": "emp-001"}
        )

        resource, action, identifier, entity, user = gateway.forward.await_args.args
        assert (resource, action, identifier) == ("employees", ForwardAction.CREATE, "emp-001")
        assert entity == mock_reader.fetch.return_value
        assert user.access_token == "token-1"
        probe.entity_forwarded.assert_called_once_with(
            "employees", ForwardAction.CREATE, "emp-001"
        )

    @pytest.mark.asyncio
    async def test_forward_skipped_without_gateway(
        self, mock_identity, mock_reader, sync_account, probe
    ):
        service = _service(mock_identity, mock_reader, sync_account, probe)

        await service.confirm("tenant-a", _organization_spec("put-office"), {"identifier": "hq"})

        probe.forward_skipped.assert_called_once_with("offices", ForwardAction.UPDATE)
        probe.entity_confirmed.assert_called_once()


class TestAcknowledge:
    """Tests for acknowledge-only confirmations."""

    @pytest.mark.asyncio
    async def test_logs_summary_without_service_calls(
        self, mock_identity, mock_reader, sync_account, probe
    ):
        service = _service(mock_identity, mock_reader, sync_account, probe)

        await service.confirm(
            "tenant-a",
            _spec(Acknowledge("Deleted ledger account, {identifier}"), "delete-ledger"),
            {"identifier": "l-1"},
        )

        probe.event_acknowledged.assert_called_once_with("Deleted ledger account, l-1")
        mock_identity.login.assert_not_awaited()
        mock_reader.fetch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_forward_sends_identifier(
        self, mock_identity, mock_reader, sync_account, probe, gateway
    ):
        service = _service(mock_identity, mock_reader, sync_account, probe, gateway)
        acknowledge = Acknowledge(
            "Synced deleted office: {identifier}",
            forward=SyncForward("offices", ForwardAction.DELETE),
        )

        await service.confirm(
            "tenant-a", _spec(acknowledge, "delete-office", "office-v1"), {"identifier": "hq"}
        )

        gateway.forward.assert_awaited_once()
        assert gateway.forward.await_args.args[:4] == (
            "offices",
            ForwardAction.DELETE,
            "hq",
            None,
        )
        mock_reader.fetch.assert_not_awaited()
        probe.event_acknowledged.assert_called_once_with("Synced deleted office: hq")

    @pytest.mark.asyncio
    async def test_record_only_spec_does_nothing(
        self, mock_identity, mock_reader, sync_account, probe
    ):
        service = _service(mock_identity, mock_reader, sync_account, probe)

        await service.confirm("tenant-a", _spec(None, "initialize"), {})

        mock_identity.login.assert_not_awaited()
        probe.event_acknowledged.assert_not_called()
