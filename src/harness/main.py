"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Annotated

import structlog
from fastapi import Depends, FastAPI

from infrastructure.dependencies import create_message_source, get_event_recorder
from infrastructure.logging import configure_logging
from infrastructure.settings import get_settings
from infrastructure.version import __version__
from listeners.application import ListenerRunner
from listeners.dependencies import (
    create_confirmation_service,
    create_http_client,
    create_listener_runner,
    get_listener_runner,
)
from listeners.presentation import routes as listener_routes


@asynccontextmanager
async def harness_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - The shared HTTP client used for login and read-back calls
    - The message source and the listener runner consuming from it
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = structlog.get_logger()

    broker = settings.broker
    source = create_message_source(broker)
    client = create_http_client()
    runner = create_listener_runner(
        source,
        get_event_recorder(),
        confirmation=create_confirmation_service(client),
        max_concurrent_handlers=broker.max_concurrent_handlers,
    )
    app.state.source = source
    app.state.runner = runner

    await runner.start()
    logger.info("harness_started", version=__version__, broker=broker.kind)
    try:
        yield
    finally:
        await runner.stop()
        await client.aclose()
        app.state.runner = None
        logger.info("harness_stopped")


app = FastAPI(
    title=get_settings().app_name,
    description="Records tenant-scoped platform events for integration test assertions",
    version=__version__,
    lifespan=harness_lifespan,
)

app.include_router(listener_routes.router)


@app.get("/health")
def health(
    runner: Annotated[ListenerRunner, Depends(get_listener_runner)],
) -> dict:
    """Health check including the listener runner state."""
    return {
        "status": "ok" if runner.is_running else "stopped",
        "version": __version__,
        "runner_running": runner.is_running,
        "outcomes": runner.outcome_counts(),
    }
