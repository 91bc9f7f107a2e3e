"""Identifier resolution from message payloads and entity documents."""

from __future__ import annotations

import json
from typing import Any

from listeners.domain.value_objects import IDENTIFIER_FIELD
from shared_kernel.exceptions import MalformedPayloadError
from shared_kernel.recording.payloads import PayloadKind, strip_quotes


def resolve_identifiers(
    kind: PayloadKind,
    payload: str,
    required: tuple[str, ...],
) -> dict[str, str]:
    """Extract the identifiers a confirmation needs from a payload.

    Identifier payloads yield a single ``identifier`` entry after stripping
    the surrounding quotes. Structured payloads are parsed as JSON objects
    and each required field is read from the top level.

    Raises:
        MalformedPayloadError: If the payload cannot be parsed or a
            required identifier is missing or empty.
    """
    if kind is PayloadKind.IDENTIFIER:
        identifier = strip_quotes(payload)
        if not identifier:
            raise MalformedPayloadError("Payload carries an empty identifier")
        return {IDENTIFIER_FIELD: identifier}

    try:
        document = json.loads(payload)
    except (json.JSONDecodeError, RecursionError) as e:
        raise MalformedPayloadError(f"Payload is not valid JSON: {e}") from e

    if not isinstance(document, dict):
        raise MalformedPayloadError(
            f"Expected a JSON object payload, got {type(document).__name__}"
        )

    identifiers: dict[str, str] = {}
    for name in required:
        value = document.get(name)
        if value is None or isinstance(value, (bool, dict, list)) or str(value) == "":
            raise MalformedPayloadError(f"Payload is missing identifier field {name!r}")
        identifiers[name] = str(value)
    return identifiers


def lookup(document: Any, path: str) -> Any:
    """Read a dotted path from a decoded JSON document.

    Segments are object keys or list indexes; ``*`` maps the rest of the
    path over every list element. Missing segments yield None.

    >>> lookup({"address": {"country": "DE"}}, "address.country")
    'DE'
    >>> lookup({"permissions": [{"group": "a"}, {"group": "b"}]}, "permissions.*.group")
    ['a', 'b']
    """
    head, _, rest = path.partition(".")

    if head == "*":
        if not isinstance(document, list):
            return None
        return [lookup(item, rest) if rest else item for item in document]

    if isinstance(document, dict):
        value = document.get(head)
    elif isinstance(document, list) and head.isdigit():
        index = int(head)
        value = document[index] if index < len(document) else None
    else:
        return None

    if not rest or value is None:
        return value
    return lookup(value, rest)
