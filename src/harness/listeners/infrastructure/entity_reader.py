"""HTTP implementation of the EntityReader port."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import httpx

from listeners.domain.value_objects import Service
from listeners.infrastructure.http import decode_json, join_url, raise_for_status, send
from listeners.infrastructure.observability import (
    DefaultServiceClientProbe,
    ServiceClientProbe,
)
from shared_kernel.context.value_objects import UserContext
from shared_kernel.exceptions import ServiceRequestError

if TYPE_CHECKING:
    from infrastructure.settings import ServiceSettings


class HttpEntityReader:
    """Reads entity documents from the platform services over HTTP."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_urls: Mapping[Service, str],
        probe: ServiceClientProbe | None = None,
    ) -> None:
        """Initialize the reader.

        Args:
            client: Shared HTTP client (owns timeouts and connection pooling)
            base_urls: Base URL per service
            probe: Optional observability probe
        """
        self._client = client
        self._base_urls = dict(base_urls)
        self._probe = probe or DefaultServiceClientProbe()

    @classmethod
    def from_settings(
        cls,
        client: httpx.AsyncClient,
        settings: ServiceSettings,
        probe: ServiceClientProbe | None = None,
    ) -> HttpEntityReader:
        """Build a reader with the base URLs from the service settings."""
        base_urls = {
            Service.IDENTITY: settings.identity_url,
            Service.ACCOUNTING: settings.accounting_url,
            Service.CUSTOMER: settings.customer_url,
            Service.ORGANIZATION: settings.organization_url,
            Service.PORTFOLIO: settings.portfolio_url,
            Service.CHEQUES: settings.cheques_url,
        }
        return cls(client, base_urls, probe=probe)

    async def fetch(
        self,
        service: Service,
        path: str,
        context: UserContext,
    ) -> dict[str, Any]:
        base_url = self._base_urls.get(service)
        if base_url is None:
            raise ServiceRequestError(
                f"No base URL configured for service {service}", status_code=0
            )

        url = join_url(base_url, path)
        response = await send(
            self._client, self._probe, "GET", url, headers=context.headers()
        )
        raise_for_status(response, "GET", url)

        document = decode_json(response, "GET", url)
        if not isinstance(document, dict):
            raise ServiceRequestError(
                f"GET {url} returned {type(document).__name__}, expected an object",
                status_code=response.status_code,
            )
        return document
