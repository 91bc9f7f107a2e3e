"""Value objects describing listener table entries.

A ListenerSpec is one row of the dispatch table: which messages it matches,
which operation key they are recorded under, how the payload is decoded and
what confirmation follows the recording.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from shared_kernel.messaging.value_objects import Selector
from shared_kernel.recording.payloads import PayloadKind

IDENTIFIER_FIELD = "identifier"


class Service(StrEnum):
    """Platform services the harness reads back from."""

    IDENTITY = "identity"
    ACCOUNTING = "accounting"
    CUSTOMER = "customer"
    ORGANIZATION = "organization"
    PORTFOLIO = "portfolio"
    CHEQUES = "cheques"


class ForwardAction(StrEnum):
    """What the sync gateway is asked to do with a confirmed entity."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class SyncForward:
    """Forward a confirmed entity to the sync gateway.

    Attributes:
        resource: Gateway collection, e.g. "employees".
        action: Create, update or delete on that collection.
    """

    resource: str
    action: ForwardAction


@dataclass(frozen=True)
class ReadBack:
    """Authenticated read-back of the entity a message refers to.

    Attributes:
        service: Service owning the entity.
        path: Path template relative to the service base URL, formatted
            with the payload identifiers (e.g. "/ledgers/{identifier}").
        summary: Log line template, formatted with the identifiers and the
            extracted fields.
        fields: Log field name to dotted path in the fetched entity.
        identifiers: Payload fields required to build the path.
        forward: Optional sync gateway forward.
    """

    service: Service
    path: str
    summary: str
    fields: Mapping[str, str] = field(default_factory=dict)
    identifiers: tuple[str, ...] = (IDENTIFIER_FIELD,)
    forward: SyncForward | None = None


@dataclass(frozen=True)
class Acknowledge:
    """Log-only confirmation for events whose entity no longer exists.

    Attributes:
        summary: Log line template formatted with the identifiers.
        identifiers: Payload fields required by the summary.
        forward: Optional sync gateway forward (deletes).
    """

    summary: str
    identifiers: tuple[str, ...] = (IDENTIFIER_FIELD,)
    forward: SyncForward | None = None


Confirmation = ReadBack | Acknowledge


@dataclass(frozen=True)
class ListenerSpec:
    """One row of the dispatch table.

    Attributes:
        destination: Broker destination the listener subscribes to.
        selector: Header filter selecting this listener's messages.
        operation_key: Key the event is recorded under.
        kind: Deserialization contract of the payload.
        confirmation: Step after recording; None for record-only listeners.
    """

    destination: str
    selector: Selector
    operation_key: str
    kind: PayloadKind = PayloadKind.IDENTIFIER
    confirmation: Confirmation | None = None

    @property
    def record_only(self) -> bool:
        return self.confirmation is None


@dataclass(frozen=True)
class Authentication:
    """Result of the identity service login call."""

    access_token: str
    token_type: str | None = None
    access_token_expiration: datetime | None = None


@dataclass(frozen=True)
class SyncAccount:
    """Credentials of the sync service account."""

    identifier: str
    password: str = field(repr=False)
