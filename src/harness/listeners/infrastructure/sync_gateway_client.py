"""HTTP implementation of the SyncGateway port."""

from __future__ import annotations

from typing import Any

import httpx

from listeners.domain.value_objects import ForwardAction
from listeners.infrastructure.http import join_url, raise_for_status, send
from listeners.infrastructure.observability import (
    DefaultServiceClientProbe,
    ServiceClientProbe,
)
from shared_kernel.context.value_objects import UserContext


class HttpSyncGateway:
    """Forwards organization entities to the sync gateway.

    Creates are POSTed to the collection, updates PUT and deletes DELETEd
    on the entity path.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        gateway_url: str,
        probe: ServiceClientProbe | None = None,
    ) -> None:
        self._client = client
        self._gateway_url = gateway_url
        self._probe = probe or DefaultServiceClientProbe()

    async def forward(
        self,
        resource: str,
        action: ForwardAction,
        identifier: str,
        entity: dict[str, Any] | None,
        context: UserContext,
    ) -> None:
        match action:
            case ForwardAction.CREATE:
                method, url = "POST", join_url(self._gateway_url, resource)
            case ForwardAction.UPDATE:
                method, url = "PUT", join_url(self._gateway_url, f"{resource}/{identifier}")
            case ForwardAction.DELETE:
                method, url = "DELETE", join_url(self._gateway_url, f"{resource}/{identifier}")

        response = await send(
            self._client,
            self._probe,
            method,
            url,
            headers=context.headers(),
            json=entity if action is not ForwardAction.DELETE else None,
        )
        raise_for_status(response, method, url)
