"""Portfolio listeners: products, charge definitions, cases and segments."""

from listeners.domain.value_objects import Acknowledge, ListenerSpec, ReadBack, Service
from shared_kernel.messaging.value_objects import Selector
from shared_kernel.recording.payloads import PayloadKind

DESTINATION = "portfolio-v1"
SELECTOR_HEADER = "action"

PRODUCT = "productIdentifier"
CHARGE_DEFINITION = "chargeDefinitionIdentifier"
CASE = "caseIdentifier"
BALANCE_SEGMENT_SET = "balanceSegmentSetIdentifier"


def _on(
    operation: str,
    confirmation: ReadBack | Acknowledge | None = None,
    kind: PayloadKind = PayloadKind.IDENTIFIER,
) -> ListenerSpec:
    return ListenerSpec(
        destination=DESTINATION,
        selector=Selector(SELECTOR_HEADER, operation),
        operation_key=operation,
        kind=kind,
        confirmation=confirmation,
    )


def _product(summary: str) -> ReadBack:
    return ReadBack(
        service=Service.PORTFOLIO,
        path="/products/{identifier}",
        summary=summary,
        fields={"name": "name", "enabled": "enabled"},
    )


def _charge_definition(summary: str) -> ReadBack:
    return ReadBack(
        service=Service.PORTFOLIO,
        path=f"/products/{{{PRODUCT}}}/charges/{{{CHARGE_DEFINITION}}}",
        summary=summary,
        fields={"name": "name"},
        identifiers=(PRODUCT, CHARGE_DEFINITION),
    )


def _case(summary: str) -> ReadBack:
    return ReadBack(
        service=Service.PORTFOLIO,
        path=f"/products/{{{PRODUCT}}}/cases/{{{CASE}}}",
        summary=summary,
        fields={"product": "productIdentifier", "state": "currentState"},
        identifiers=(PRODUCT, CASE),
    )


def _balance_segment_set(summary: str) -> ReadBack:
    return ReadBack(
        service=Service.PORTFOLIO,
        path=f"/products/{{{PRODUCT}}}/balancesegmentsets/{{{BALANCE_SEGMENT_SET}}}",
        summary=summary,
        fields={"segment_set": "identifier"},
        identifiers=(PRODUCT, BALANCE_SEGMENT_SET),
    )


LISTENERS: tuple[ListenerSpec, ...] = (
    _on("initialize"),
    _on("post-product", _product("Created product {name}")),
    _on("put-product", _product("Updated product {name}")),
    _on("put-enable", _product("Enabled product: {name} {enabled}")),
    _on("delete-product", Acknowledge("Deleted product, {identifier}")),
    _on(
        "post-charge-definition",
        _charge_definition("Created product charge definition: {name}"),
        PayloadKind.CHARGE_DEFINITION,
    ),
    _on(
        "put-charge-definition",
        _charge_definition("Updated product charge definition: {name}"),
        PayloadKind.CHARGE_DEFINITION,
    ),
    _on(
        "delete-product-charge-definition",
        Acknowledge(
            f"Deleted product charge: {{{CHARGE_DEFINITION}}}, for product {{{PRODUCT}}}",
            identifiers=(PRODUCT, CHARGE_DEFINITION),
        ),
        PayloadKind.CHARGE_DEFINITION,
    ),
    _on("post-case", _case("Created case: {product} {state}"), PayloadKind.CASE),
    _on("put-case", _case("Updated case: {product} {state}"), PayloadKind.CASE),
    _on(
        "post-balance-segment-set",
        _balance_segment_set("Created balance segment set: {segment_set}"),
        PayloadKind.BALANCE_SEGMENT_SET,
    ),
    _on(
        "put-balance-segment-set",
        _balance_segment_set("Updated balance segment set: {segment_set}"),
        PayloadKind.BALANCE_SEGMENT_SET,
    ),
    _on(
        "delete-balance-segment-set",
        Acknowledge(
            f"Deleted balance segment set: {{{BALANCE_SEGMENT_SET}}} "
            f"for product {{{PRODUCT}}}",
            identifiers=(PRODUCT, BALANCE_SEGMENT_SET),
        ),
        PayloadKind.BALANCE_SEGMENT_SET,
    ),
)
