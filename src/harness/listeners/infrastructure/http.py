"""Shared request handling for the service clients."""

from __future__ import annotations

from typing import Any

import httpx

from listeners.infrastructure.observability import ServiceClientProbe
from shared_kernel.exceptions import (
    EntityNotFoundError,
    ServiceRequestError,
    ServiceUnavailableError,
)


def join_url(base_url: str, path: str) -> str:
    """Join a service base URL and a relative path."""
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


async def send(
    client: httpx.AsyncClient,
    probe: ServiceClientProbe,
    method: str,
    url: str,
    *,
    headers: dict[str, str],
    params: dict[str, str] | None = None,
    json: Any = None,
) -> httpx.Response:
    """Send a request, translating transport failures.

    Query parameters are never logged; the login call carries the password
    in them.

    Raises:
        ServiceUnavailableError: On timeouts and transport errors.
    """
    try:
        response = await client.request(
            method, url, headers=headers, params=params, json=json
        )
    except httpx.TimeoutException as e:
        probe.request_failed(method, url, e)
        raise ServiceUnavailableError(f"Timed out calling {method} {url}") from e
    except httpx.TransportError as e:
        probe.request_failed(method, url, e)
        raise ServiceUnavailableError(f"Could not reach {method} {url}: {e}") from e

    probe.request_completed(method, url, response.status_code)
    return response


def raise_for_status(response: httpx.Response, method: str, url: str) -> None:
    """Raise the harness error matching an unsuccessful response.

    Raises:
        EntityNotFoundError: On 404.
        ServiceRequestError: On any other status >= 400.
    """
    if response.status_code == httpx.codes.NOT_FOUND:
        raise EntityNotFoundError(f"Nothing found at {method} {url}")
    if response.is_error:
        raise ServiceRequestError(
            f"{method} {url} answered {response.status_code}",
            status_code=response.status_code,
        )


def decode_json(response: httpx.Response, method: str, url: str) -> Any:
    """Decode a JSON body.

    Raises:
        ServiceRequestError: If the body is not JSON.
    """
    try:
        return response.json()
    except ValueError as e:
        raise ServiceRequestError(
            f"{method} {url} returned a non-JSON body",
            status_code=response.status_code,
        ) from e
