"""Unit tests for Selector and Message."""

import pytest

from shared_kernel.context import TENANT_HEADER
from shared_kernel.messaging import Message, Selector


class TestSelector:
    """Tests for selector parsing and matching."""

    def test_parse_expression(self):
        selector = Selector.parse("action = 'post-ledger'")

        assert selector == Selector("action", "post-ledger")
        assert selector.expression == "action = 'post-ledger'"
        assert str(selector) == selector.expression

    def test_parse_tolerates_spacing(self):
        assert Selector.parse("  operation='post-user'  ") == Selector("operation", "post-user")

    @pytest.mark.parametrize(
        "expression",
        ["action", "action = post-ledger", "action <> 'x'", "= 'x'"],
    )
    def test_parse_rejects_other_expressions(self, expression):
        with pytest.raises(ValueError):
            Selector.parse(expression)

    def test_matches_header_value(self):
        selector = Selector("action", "post-ledger")

        assert selector.matches({"action": "post-ledger"})
        assert not selector.matches({"action": "put-ledger"})
        assert not selector.matches({"operation": "post-ledger"})


class TestMessage:
    """Tests for Message."""

    def test_tenant_from_header(self):
        message = Message("accounting-v1", '"l-1"', {TENANT_HEADER: "tenant-a"})
        assert message.tenant == "tenant-a"

    @pytest.mark.parametrize("headers", [{}, {TENANT_HEADER: ""}])
    def test_missing_tenant(self, headers):
        assert Message("accounting-v1", '"l-1"', headers).tenant is None

    def test_headers_are_read_only(self):
        message = Message("accounting-v1", '"l-1"', {"action": "post-ledger"})

        with pytest.raises(TypeError):
            message.headers["action"] = "put-ledger"  # type: ignore[index]

    def test_for_selector(self):
        selector = Selector("operation", "post-employee")

        message = Message.for_selector("office-v1", selector, "tenant-a", '"emp-001"')

        assert message.tenant == "tenant-a"
        assert selector.matches(message.headers)
