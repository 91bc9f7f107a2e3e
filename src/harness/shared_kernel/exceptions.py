"""Exceptions raised while handling a delivered message.

Every error a handler can raise derives from HarnessError so the dispatcher
can isolate failures per message.
"""


class HarnessError(Exception):
    """Base exception for harness errors."""

    pass


class InvalidContextError(HarnessError):
    """Raised when a tenant or user scope is opened with an empty identity."""

    pass


class MalformedPayloadError(HarnessError):
    """Raised when a payload lacks the identifier fields a listener expects."""

    pass


class AuthenticationError(HarnessError):
    """Raised when the sync account cannot log in."""

    pass


class EntityNotFoundError(HarnessError):
    """Raised when the read-back call finds no entity for the identifier."""

    pass


class ServiceUnavailableError(HarnessError):
    """Raised on transport failures or timeouts talking to a service."""

    pass


class ServiceRequestError(HarnessError):
    """Raised when a service answers with an unexpected error status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code
