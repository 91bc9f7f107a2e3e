"""HTTP routes exposing recorded events to out-of-process test code."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status

from infrastructure.dependencies import get_event_recorder
from listeners.dependencies import get_listener_table
from listeners.domain.value_objects import ListenerSpec
from listeners.presentation.models import (
    ListenerResponse,
    RecordedEventListResponse,
    RecordedEventResponse,
)
from shared_kernel.recording.ports import EventRecorder

router = APIRouter(tags=["events"])


def _not_found(tenant: str, operation: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"No event recorded for tenant {tenant!r} and operation {operation!r}",
    )


@router.get("/events")
async def list_events(
    recorder: Annotated[EventRecorder, Depends(get_event_recorder)],
    tenant: str | None = None,
) -> RecordedEventListResponse:
    """List recorded events, optionally for a single tenant."""
    events = [
        RecordedEventResponse.from_domain(event)
        for event in recorder.events()
        if tenant is None or event.tenant == tenant
    ]
    return RecordedEventListResponse(events=events, count=len(events))


@router.get("/events/{tenant}/{operation}")
async def get_event(
    tenant: str,
    operation: str,
    recorder: Annotated[EventRecorder, Depends(get_event_recorder)],
) -> RecordedEventResponse:
    """Get the event recorded for a tenant and operation.

    Raises:
        HTTPException: 404 if nothing was recorded for the key.
    """
    event = recorder.get(tenant, operation)
    if event is None:
        raise _not_found(tenant, operation)
    return RecordedEventResponse.from_domain(event)


@router.delete("/events/{tenant}/{operation}", status_code=status.HTTP_204_NO_CONTENT)
async def pop_event(
    tenant: str,
    operation: str,
    recorder: Annotated[EventRecorder, Depends(get_event_recorder)],
) -> Response:
    """Clear the event recorded for a tenant and operation.

    Raises:
        HTTPException: 404 if nothing was recorded for the key.
    """
    if recorder.pop(tenant, operation) is None:
        raise _not_found(tenant, operation)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/listeners")
async def list_listeners(
    listeners: Annotated[tuple[ListenerSpec, ...], Depends(get_listener_table)],
) -> list[ListenerResponse]:
    """List the dispatch table."""
    return [ListenerResponse.from_domain(spec) for spec in listeners]
