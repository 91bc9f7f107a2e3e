"""Dependency wiring for the listeners package.

Composes infrastructure resources (recorder, HTTP client, message source)
with the listener table, the confirmation service and the runner.
"""

from __future__ import annotations

import httpx
from fastapi import HTTPException, Request, status

from infrastructure.settings import (
    ServiceSettings,
    SyncUserSettings,
    get_service_settings,
    get_sync_user_settings,
)
from listeners.application import (
    ConfirmationService,
    ListenerDispatcher,
    ListenerRunner,
)
from listeners.catalog import ALL_LISTENERS
from listeners.domain import ListenerSpec, SyncAccount
from listeners.infrastructure import (
    HttpEntityReader,
    HttpIdentityProvider,
    HttpSyncGateway,
)
from shared_kernel.messaging.ports import MessageSource
from shared_kernel.recording.ports import EventRecorder


def get_listener_table() -> tuple[ListenerSpec, ...]:
    """Get the static dispatch table."""
    return ALL_LISTENERS


def create_http_client(settings: ServiceSettings | None = None) -> httpx.AsyncClient:
    """Create the HTTP client shared by every service client."""
    settings = settings or get_service_settings()
    return httpx.AsyncClient(timeout=httpx.Timeout(settings.request_timeout_seconds))


def create_confirmation_service(
    client: httpx.AsyncClient,
    services: ServiceSettings | None = None,
    sync_user: SyncUserSettings | None = None,
) -> ConfirmationService:
    """Wire the confirmation service to the platform services.

    The sync gateway client is only created when a gateway URL is set.
    """
    services = services or get_service_settings()
    sync_user = sync_user or get_sync_user_settings()

    sync_gateway = None
    if services.sync_gateway_url:
        sync_gateway = HttpSyncGateway(client, services.sync_gateway_url)

    return ConfirmationService(
        identity=HttpIdentityProvider(client, services.identity_url),
        reader=HttpEntityReader.from_settings(client, services),
        sync_account=SyncAccount(
            identifier=sync_user.identifier,
            password=sync_user.password.get_secret_value(),
        ),
        sync_gateway=sync_gateway,
    )


def create_listener_runner(
    source: MessageSource,
    recorder: EventRecorder,
    confirmation: ConfirmationService | None,
    max_concurrent_handlers: int,
) -> ListenerRunner:
    """Build the dispatcher over the listener table and the runner around it."""
    dispatcher = ListenerDispatcher(
        get_listener_table(),
        recorder,
        confirmation=confirmation,
    )
    return ListenerRunner(
        source,
        dispatcher,
        max_concurrent_handlers=max_concurrent_handlers,
    )


def get_listener_runner(request: Request) -> ListenerRunner:
    """Get the runner the application lifespan started.

    Raises:
        HTTPException: 503 if the lifespan has not created a runner.
    """
    runner = getattr(request.app.state, "runner", None)
    if runner is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Listener runner is not available",
        )
    return runner
