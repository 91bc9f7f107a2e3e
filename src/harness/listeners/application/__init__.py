"""Listener application services."""

from listeners.application.confirmation import ConfirmationService
from listeners.application.dispatcher import (
    DispatchOutcome,
    DispatchResult,
    ListenerDispatcher,
)
from listeners.application.runner import ListenerRunner

__all__ = [
    "ConfirmationService",
    "DispatchOutcome",
    "DispatchResult",
    "ListenerDispatcher",
    "ListenerRunner",
]
