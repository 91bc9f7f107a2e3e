"""Inbound broker message model and source port."""

from shared_kernel.messaging.ports import MessageSource
from shared_kernel.messaging.value_objects import Message, Selector

__all__ = ["Message", "MessageSource", "Selector"]
