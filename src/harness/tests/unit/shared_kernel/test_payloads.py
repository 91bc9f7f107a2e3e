"""Unit tests for payload kinds and structured payload models."""

import pytest
from pydantic import ValidationError

from shared_kernel.recording import PayloadKind, decode_payload, strip_quotes
from shared_kernel.recording.payloads import (
    ApplicationSignatureEvent,
    ChargeDefinitionEvent,
    ScanEvent,
)


class TestStripQuotes:
    """Tests for strip_quotes()."""

    @pytest.mark.parametrize(
        ("payload", "expected"),
        [
            ('"abc123"', "abc123"),
            ("abc123", "abc123"),
            ('"abc123', "abc123"),
            ('abc123"', "abc123"),
            ('""', ""),
            ('"a"b"', 'a"b'),
        ],
    )
    def test_removes_one_layer_of_quotes(self, payload, expected):
        assert strip_quotes(payload) == expected


class TestDecodePayload:
    """Tests for decode_payload()."""

    def test_identifier_payload(self):
        assert decode_payload(PayloadKind.IDENTIFIER, '"emp-001"') == "emp-001"

    def test_structured_payload_uses_camel_case_fields(self):
        event = decode_payload(
            PayloadKind.CHARGE_DEFINITION,
            '{"productIdentifier": "p-1", "chargeDefinitionIdentifier": "fee"}',
        )

        assert event == ChargeDefinitionEvent(
            product_identifier="p-1", charge_definition_identifier="fee"
        )

    def test_scan_payload(self):
        event = decode_payload(
            PayloadKind.SCAN,
            '{"customerIdentifier": "c-1", "identificationCardNumber": "id-9",'
            ' "scanIdentifier": "front", "ignored": true}',
        )

        assert isinstance(event, ScanEvent)
        assert event.scan_identifier == "front"

    def test_signature_keeps_timestamp_text(self):
        event = decode_payload(
            PayloadKind.APPLICATION_SIGNATURE,
            '{"applicationIdentifier": "office-v1", "keyTimestamp": "2017-05-01T12:00:00"}',
        )

        assert isinstance(event, ApplicationSignatureEvent)
        assert event.key_timestamp == "2017-05-01T12:00:00"

    def test_malformed_structured_payload_raises(self):
        with pytest.raises(ValidationError):
            decode_payload(PayloadKind.CASE, "{not json")

    def test_is_structured(self):
        assert not PayloadKind.IDENTIFIER.is_structured
        assert PayloadKind.BALANCE_SEGMENT_SET.is_structured
