"""Payload kinds and typed models for structured event payloads.

Identifier payloads are bare JSON strings such as ``"ledger-7"``. Structured
payloads are small JSON objects; each kind has a pydantic model so test code
can decode a recorded payload into a typed value.
"""

from __future__ import annotations

import re
from enum import StrEnum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

_SURROUNDING_QUOTES = re.compile(r'^"|"$')


def strip_quotes(payload: str) -> str:
    """Remove one leading and one trailing double quote, if present.

    >>> strip_quotes('"abc123"')
    'abc123'
    >>> strip_quotes('abc123')
    'abc123'
    """
    return _SURROUNDING_QUOTES.sub("", payload)


class PayloadKind(StrEnum):
    """Deserialization contract of a recorded payload."""

    IDENTIFIER = "identifier"
    APPLICATION_PERMISSION = "application_permission"
    APPLICATION_SIGNATURE = "application_signature"
    APPLICATION_PERMISSION_USER = "application_permission_user"
    SCAN = "scan"
    CHARGE_DEFINITION = "charge_definition"
    CASE = "case"
    BALANCE_SEGMENT_SET = "balance_segment_set"

    @property
    def is_structured(self) -> bool:
        return self is not PayloadKind.IDENTIFIER


class EventPayload(BaseModel):
    """Base model for structured payloads; fields use camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class ApplicationPermissionEvent(EventPayload):
    application_identifier: str
    permittable_group_identifier: str


class ApplicationSignatureEvent(EventPayload):
    application_identifier: str
    key_timestamp: str


class ApplicationPermissionUserEvent(EventPayload):
    application_identifier: str
    permittable_group_identifier: str
    user_identifier: str


class ScanEvent(EventPayload):
    customer_identifier: str
    identification_card_number: str
    scan_identifier: str


class ChargeDefinitionEvent(EventPayload):
    product_identifier: str
    charge_definition_identifier: str


class CaseEvent(EventPayload):
    product_identifier: str
    case_identifier: str


class BalanceSegmentSetEvent(EventPayload):
    product_identifier: str
    balance_segment_set_identifier: str


PAYLOAD_MODELS: dict[PayloadKind, type[EventPayload]] = {
    PayloadKind.APPLICATION_PERMISSION: ApplicationPermissionEvent,
    PayloadKind.APPLICATION_SIGNATURE: ApplicationSignatureEvent,
    PayloadKind.APPLICATION_PERMISSION_USER: ApplicationPermissionUserEvent,
    PayloadKind.SCAN: ScanEvent,
    PayloadKind.CHARGE_DEFINITION: ChargeDefinitionEvent,
    PayloadKind.CASE: CaseEvent,
    PayloadKind.BALANCE_SEGMENT_SET: BalanceSegmentSetEvent,
}


def decode_payload(kind: PayloadKind, payload: str) -> str | EventPayload:
    """Decode a raw payload according to its kind.

    Raises:
        pydantic.ValidationError: If a structured payload does not match its model.
    """
    if kind is PayloadKind.IDENTIFIER:
        return strip_quotes(payload)
    return PAYLOAD_MODELS[kind].model_validate_json(payload)
