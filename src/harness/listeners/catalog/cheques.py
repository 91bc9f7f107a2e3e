"""Cheques listeners."""

from listeners.domain.value_objects import ListenerSpec
from shared_kernel.messaging.value_objects import Selector

DESTINATION = "cheque-v1"
SELECTOR_HEADER = "action"

LISTENERS: tuple[ListenerSpec, ...] = (
    ListenerSpec(
        destination=DESTINATION,
        selector=Selector(SELECTOR_HEADER, "initialize"),
        operation_key="initialize",
    ),
)
