"""Organization listeners: employees and offices.

Confirmed employees and offices are also forwarded to the sync gateway
when one is configured.
"""

from listeners.domain.value_objects import (
    Acknowledge,
    ForwardAction,
    ListenerSpec,
    ReadBack,
    Service,
    SyncForward,
)
from shared_kernel.messaging.value_objects import Selector

DESTINATION = "office-v1"
SELECTOR_HEADER = "operation"

EMPLOYEES = "employees"
OFFICES = "offices"


def _on(operation: str, confirmation: ReadBack | Acknowledge | None = None) -> ListenerSpec:
    return ListenerSpec(
        destination=DESTINATION,
        selector=Selector(SELECTOR_HEADER, operation),
        operation_key=operation,
        confirmation=confirmation,
    )


def _employee(summary: str, action: ForwardAction = ForwardAction.UPDATE) -> ReadBack:
    return ReadBack(
        service=Service.ORGANIZATION,
        path="/employees/{identifier}",
        summary=summary,
        fields={"employee": "identifier"},
        forward=SyncForward(EMPLOYEES, action),
    )


def _office(summary: str, action: ForwardAction = ForwardAction.UPDATE) -> ReadBack:
    return ReadBack(
        service=Service.ORGANIZATION,
        path="/offices/{identifier}",
        summary=summary,
        fields={"name": "name"},
        forward=SyncForward(OFFICES, action),
    )


LISTENERS: tuple[ListenerSpec, ...] = (
    _on("initialize"),
    _on(
        "post-employee",
        _employee("Synced newly created employee {employee}", ForwardAction.CREATE),
    ),
    _on("put-employee", _employee("Synced updated employee {employee}")),
    _on(
        "delete-employee",
        Acknowledge(
            "Synced deleted employee {identifier}",
            forward=SyncForward(EMPLOYEES, ForwardAction.DELETE),
        ),
    ),
    _on("put-contact-detail", _employee("Synced contact details {employee}")),
    _on("delete-contact-detail", _employee("Synced deleted contact details {employee}")),
    _on("post-office", _office("Synced created office: {name}", ForwardAction.CREATE)),
    _on("put-office", _office("Synced updated office: {name}")),
    _on(
        "delete-office",
        Acknowledge(
            "Synced deleted office: {identifier}",
            forward=SyncForward(OFFICES, ForwardAction.DELETE),
        ),
    ),
    _on("put-address", _office("Synced office address: {name}")),
    _on("delete-address", _office("Synced deleted office address: {name}")),
    _on("put-reference", _office("Synced office reference: {name}")),
)
