"""Unit tests for domain probes.

Tests that domain probes correctly capture domain events
following the Domain Oriented Observability pattern.
"""

from unittest.mock import MagicMock

import structlog

from listeners.application.observability import (
    DefaultConfirmationProbe,
    DefaultDispatchProbe,
)
from listeners.infrastructure.observability import DefaultServiceClientProbe
from shared_kernel.context import DefaultScopeProbe
from shared_kernel.observability_context import ObservationContext
from shared_kernel.recording.observability import DefaultRecorderProbe


class TestObservationContext:
    """Tests for ObservationContext."""

    def test_as_dict_omits_unset_values(self):
        context = ObservationContext(tenant_id="tenant-a", operation="post-ledger")

        assert context.as_dict() == {"tenant_id": "tenant-a", "operation": "post-ledger"}

    def test_with_user_and_extra_return_new_contexts(self):
        context = ObservationContext(tenant_id="tenant-a")

        enriched = context.with_user("sync-user").with_extra(attempt=1)

        assert context.user_id is None
        assert enriched.as_dict() == {
            "tenant_id": "tenant-a",
            "user_id": "sync-user",
            "attempt": 1,
        }


class TestRecorderProbe:
    """Tests for DefaultRecorderProbe."""

    def test_default_probe_creates_with_default_logger(self):
        probe = DefaultRecorderProbe()
        assert probe._logger is not None

    def test_recording_failed_logs_error(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultRecorderProbe(logger=mock_logger)

        probe.recording_failed("tenant-a", "post-ledger", ValueError("bad kind"))

        mock_logger.error.assert_called_once_with(
            "event_recording_failed",
            tenant="tenant-a",
            operation="post-ledger",
            error="bad kind",
            error_type="ValueError",
        )


class TestDispatchProbe:
    """Tests for DefaultDispatchProbe."""

    def test_with_context_adds_metadata(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultDispatchProbe(logger=mock_logger).with_context(
            ObservationContext(
                tenant_id="tenant-a", destination="office-v1", operation="post-office"
            )
        )

        probe.confirmation_failed(RuntimeError("boom"))

        mock_logger.error.assert_called_once_with(
            "confirmation_failed",
            error="boom",
            error_type="RuntimeError",
            tenant_id="tenant-a",
            destination="office-v1",
            operation="post-office",
        )

    def test_unrouted_uses_message_destination_key(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultDispatchProbe(logger=mock_logger)

        probe.message_unrouted("office-v1", {"operation": "x"})

        mock_logger.warning.assert_called_once_with(
            "message_unrouted",
            message_destination="office-v1",
            headers={"operation": "x"},
        )


class TestConfirmationProbe:
    """Tests for DefaultConfirmationProbe."""

    def test_entity_confirmed_logs_summary_and_fields(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultConfirmationProbe(logger=mock_logger)

        probe.entity_confirmed("Created ledger account Assets", {"name": "Assets"})

        mock_logger.info.assert_called_once_with(
            "entity_confirmed",
            summary="Created ledger account Assets",
            entity={"name": "Assets"},
        )


class TestScopeProbe:
    """Tests for DefaultScopeProbe."""

    def test_tenant_scope_closed_logs_failure_flag(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultScopeProbe(logger=mock_logger)

        probe.tenant_scope_closed("tenant-a", True)

        mock_logger.debug.assert_called_once_with(
            "tenant_scope_closed", scope_tenant="tenant-a", failed=True
        )


class TestServiceClientProbe:
    """Tests for DefaultServiceClientProbe."""

    def test_login_rejected_logs_warning(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultServiceClientProbe(logger=mock_logger)

        probe.login_rejected("sync-user", 401)

        mock_logger.warning.assert_called_once_with(
            "sync_user_login_rejected", username="sync-user", status_code=401
        )
