"""Customer listeners: customers, their documents and portraits."""

from listeners.domain.value_objects import ListenerSpec, ReadBack, Service
from shared_kernel.messaging.value_objects import Selector
from shared_kernel.recording.payloads import PayloadKind

DESTINATION = "customer-v1"
SELECTOR_HEADER = "action"


def _on(
    operation: str,
    confirmation: ReadBack | None = None,
    kind: PayloadKind = PayloadKind.IDENTIFIER,
) -> ListenerSpec:
    return ListenerSpec(
        destination=DESTINATION,
        selector=Selector(SELECTOR_HEADER, operation),
        operation_key=operation,
        kind=kind,
        confirmation=confirmation,
    )


def _customer(summary: str, **fields: str) -> ReadBack:
    return ReadBack(
        service=Service.CUSTOMER,
        path="/customers/{identifier}",
        summary=summary,
        fields={"name": "givenName", "state": "currentState", **fields},
    )


LISTENERS: tuple[ListenerSpec, ...] = (
    _on("initialize"),
    _on("post-customer", _customer("Created customer {name}")),
    _on("put-customer", _customer("Updated customer {name}")),
    _on("activate-customer", _customer("Customer activated: {name} {state}")),
    _on("lock-customer", _customer("Customer locked: {name} {state}")),
    _on("unlock-customer", _customer("Customer unlocked: {name} {state}")),
    _on("close-customer", _customer("Customer closed: {name} {state}")),
    _on("reopen-customer", _customer("Customer reopened: {name} {state}")),
    _on(
        "put-address",
        _customer("Customer address modified: {name} {country}", country="address.country"),
    ),
    _on(
        "put-contact-details",
        _customer(
            "Customer contact details modified: {name} {contact}",
            contact="contactDetails.0.value",
        ),
    ),
    _on("post-identification-card"),
    _on("put-identification-card"),
    _on("delete-identification-card"),
    _on("post-identification-card-scan", kind=PayloadKind.SCAN),
    _on("delete-identification-card-scan", kind=PayloadKind.SCAN),
    _on("post-portrait"),
    _on("delete-portrait"),
)
