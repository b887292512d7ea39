"""Clients and plugins that authenticate requests."""

from __future__ import annotations

import base64
from datetime import timedelta
from typing import Callable
from urllib.parse import urlsplit

import jwt

from .client import Client, Plugin, Request
from .errors import (
    MSG_ERR_CANNOT_GET_ISSUER,
    MSG_ERR_CANNOT_PARSE,
    PRM_TOKEN_MSG,
    PRM_TOKEN_PROVIDER_URL,
    TokenError,
)


def basic_auth_client(
    api_url: str, timeout: float | timedelta, username: str, password: str
) -> Client:
    """Create a client sending basic authentication with every request."""
    credentials = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return Client(api_url, timeout, lambda request: request.set_header("Authorization", "Basic " + credentials))


def bearer_auth_client(
    api_url: str, timeout: float | timedelta, token_provider: Callable[[], str]
) -> Client:
    """Create a client asking the provider for a bearer token before every request."""

    def authorize(request: Request) -> Request:
        return request.set_header("Authorization", "Bearer " + token_provider())

    return Client(api_url, timeout, authorize)


def set_access_token(access_token: str) -> Plugin:
    """Plugin sending the token and targeting the host of its issuer."""
    host = host_from_token(access_token)

    def apply(request: Request) -> None:
        request.set_header("Authorization", f"Bearer {access_token}")
        request.set_header("X-Forwarded-Proto", "https")
        request.host = host

    return apply


def _issuer_from_token(token: str) -> str:
    try:
        claims = jwt.decode(token, options={"verify_signature": False})
    except jwt.InvalidTokenError as exc:
        raise TokenError(f"{MSG_ERR_CANNOT_PARSE}.{PRM_TOKEN_MSG}: {exc}") from exc
    issuer = claims.get("iss", "")
    if not isinstance(issuer, str):
        raise TokenError(f"{MSG_ERR_CANNOT_GET_ISSUER}.{PRM_TOKEN_MSG}: issuer is not a string")
    return issuer


def host_from_token(token: str) -> str:
    """Return the host (with port, if any) of the token's issuer URL."""
    issuer = _issuer_from_token(token)
    try:
        netloc = urlsplit(issuer).netloc
    except ValueError as exc:
        raise TokenError(f"{MSG_ERR_CANNOT_PARSE}.{PRM_TOKEN_PROVIDER_URL}: {exc}") from exc
    return netloc.rpartition("@")[2]