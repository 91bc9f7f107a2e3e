"""HTTP implementation of the IdentityProvider port."""

from __future__ import annotations

import base64
from datetime import datetime

import httpx

from listeners.domain.value_objects import Authentication
from listeners.infrastructure.http import decode_json, join_url, raise_for_status, send
from listeners.infrastructure.observability import (
    DefaultServiceClientProbe,
    ServiceClientProbe,
)
from shared_kernel.context.value_objects import UserContext
from shared_kernel.exceptions import AuthenticationError

_REJECTED_STATUSES = frozenset(
    {httpx.codes.UNAUTHORIZED, httpx.codes.FORBIDDEN, httpx.codes.NOT_FOUND}
)


class HttpIdentityProvider:
    """Logs in against the identity service's token endpoint.

    The identity service expects the password base64-encoded in the
    ``password`` query parameter of ``POST /token?grant_type=password``.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        identity_url: str,
        probe: ServiceClientProbe | None = None,
    ) -> None:
        self._client = client
        self._token_url = join_url(identity_url, "/token")
        self._probe = probe or DefaultServiceClientProbe()

    async def login(
        self,
        context: UserContext,
        username: str,
        password: str,
    ) -> Authentication:
        params = {
            "grant_type": "password",
            "username": username,
            "password": base64.b64encode(password.encode("utf-8")).decode("ascii"),
        }
        response = await send(
            self._client,
            self._probe,
            "POST",
            self._token_url,
            headers=context.headers(),
            params=params,
        )

        if response.status_code in _REJECTED_STATUSES:
            self._probe.login_rejected(username, response.status_code)
            raise AuthenticationError(
                f"Login for {username} rejected with status {response.status_code}"
            )
        raise_for_status(response, "POST", self._token_url)

        body = decode_json(response, "POST", self._token_url)
        access_token = body.get("accessToken") if isinstance(body, dict) else None
        if not access_token:
            raise AuthenticationError(f"Login for {username} returned no access token")

        self._probe.login_succeeded(username)
        return Authentication(
            access_token=access_token,
            token_type=body.get("tokenType"),
            access_token_expiration=_parse_timestamp(body.get("accessTokenExpiration")),
        )


def _parse_timestamp(value: object) -> datetime | None:
    if not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None
