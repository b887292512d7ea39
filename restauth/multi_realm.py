"""Client fetching an OIDC token per request, optionally for a given realm."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Any

from .client import Client, Plugin, set_header


class OidcTokenProvider(ABC):
    """Source of OIDC access tokens."""

    @abstractmethod
    def provide_token(self) -> str:
        """Return a token for the default realm."""

    @abstractmethod
    def provide_token_for_realm(self, realm: str) -> str:
        """Return a token for the given realm."""


class MultiRealmTokenClient:
    """Client adding a bearer token from the provider to every request."""

    def __init__(
        self, api_url: str, timeout: float | timedelta, token_provider: OidcTokenProvider
    ) -> None:
        self._client = Client(api_url, timeout)
        self._token_provider = token_provider
        self._realm = ""

    def for_realm(self, realm: str) -> MultiRealmTokenClient:
        """Return a client sharing this connection but using tokens of the realm."""
        other = copy.copy(self)
        other._realm = realm
        return other

    def _with_auth(self, plugins: tuple[Plugin, ...]) -> tuple[Plugin, ...]:
        if self._realm:
            token = self._token_provider.provide_token_for_realm(self._realm)
        else:
            token = self._token_provider.provide_token()
        return (*plugins, set_header("Authorization", "Bearer " + token))

    def get(self, *plugins: Plugin) -> Any:
        return self._client.get(*self._with_auth(plugins))

    def post(self, *plugins: Plugin) -> tuple[str, Any]:
        return self._client.post(*self._with_auth(plugins))

    def delete(self, *plugins: Plugin) -> None:
        self._client.delete(*self._with_auth(plugins))

    def put(self, *plugins: Plugin) -> None:
        self._client.put(*self._with_auth(plugins))