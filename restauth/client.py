"""HTTP client that applies request plugins and decodes responses."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import timedelta
from http import HTTPStatus
from typing import Any, Callable
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import requests
from requests.structures import CaseInsensitiveDict

from .errors import (
    MSG_ERR_CANNOT_OBTAIN,
    MSG_ERR_CANNOT_PARSE,
    MSG_ERR_UNKNOWN_HTTP_CONTENT_TYPE,
    PRM_API_URL,
    PRM_RESPONSE,
    HTTPError,
    HttpClientError,
    ResponseUnavailableError,
    UnknownContentTypeError,
)

_TEXT_TYPES = frozenset({"text/plain", "text/html"})
_BINARY_TYPES = frozenset(
    {"application/octet-stream", "application/zip", "application/pdf", "text/xml"}
)


@dataclass
class Request:
    """An outgoing request that plugins and updaters modify before it is sent."""

    method: str
    url: str
    path: str | None = None
    query: list[tuple[str, str]] = field(default_factory=list)
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)
    body: bytes | None = None
    host: str | None = None

    def set_header(self, name: str, value: str) -> Request:
        self.headers[name] = value
        return self

    def _target(self) -> str:
        parts = urlsplit(self.url)
        query = parse_qsl(parts.query, keep_blank_values=True) + self.query
        url_path = self.path if self.path is not None else parts.path
        return urlunsplit((parts.scheme, parts.netloc, url_path, urlencode(query), parts.fragment))


Plugin = Callable[[Request], None]
RequestUpdater = Callable[[Request], Request]


def _parse_url(address: str) -> str:
    problem = None
    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in address):
        problem = "invalid control character in URL"
    elif address.startswith(":"):
        problem = "missing protocol scheme"
    else:
        try:
            urlsplit(address)
        except ValueError as exc:
            problem = str(exc)
    if problem is not None:
        raise HttpClientError(f"{MSG_ERR_CANNOT_PARSE}.{PRM_API_URL}: {problem}")
    return address


def _error_message(response: requests.Response) -> str:
    try:
        decoded = json.loads(response.content)
    except ValueError:
        decoded = None
    if isinstance(decoded, dict) and isinstance(decoded.get("errorMessage"), str):
        return decoded["errorMessage"]
    return response.content.decode("utf-8", errors="replace")


def _check_status(response: requests.Response) -> None:
    status = response.status_code
    if status == HTTPStatus.UNAUTHORIZED:
        raise HTTPError(status, response.content.decode("utf-8", errors="replace"))
    if status >= HTTPStatus.BAD_REQUEST:
        raise HTTPError(status, _error_message(response))
    if status < HTTPStatus.OK:
        raise HTTPError(status, response.content.decode("utf-8", errors="replace"))


def _read_content(response: requests.Response) -> Any:
    content_type = response.headers.get("Content-Type", "")
    media_type = content_type.split(";")[0]
    if media_type == "application/json":
        return json.loads(response.content)
    if media_type in _TEXT_TYPES:
        return response.content.decode("utf-8", errors="replace")
    if media_type in _BINARY_TYPES:
        return response.content
    if not response.content:
        return None
    raise UnknownContentTypeError(f"{MSG_ERR_UNKNOWN_HTTP_CONTENT_TYPE}.{content_type}")


class Client:
    """Sends requests to one API address, applying updaters and plugins."""

    def __init__(
        self, api_url: str, timeout: float | timedelta, *updaters: RequestUpdater
    ) -> None:
        self._api_url = _parse_url(api_url)
        self._timeout = timeout.total_seconds() if isinstance(timeout, timedelta) else float(timeout)
        self._updaters = updaters

    def _prepare(self, method: str, plugins: tuple[Plugin, ...]) -> Request:
        request = Request(method, self._api_url)
        for updater in self._updaters:
            request = updater(request)
        for plugin in plugins:
            plugin(request)
        return request

    def _send(self, method: str, plugins: tuple[Plugin, ...]) -> requests.Response:
        request = self._prepare(method, plugins)
        headers = dict(request.headers)
        if request.host:
            headers["Host"] = request.host
        try:
            response = requests.request(
                method,
                request._target(),
                headers=headers,
                data=request.body,
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise ResponseUnavailableError(
                f"{MSG_ERR_CANNOT_OBTAIN}.{PRM_RESPONSE}: {exc}"
            ) from exc
        _check_status(response)
        return response

    def get(self, *plugins: Plugin) -> Any:
        """Send a GET request and return the decoded body."""
        return _read_content(self._send("GET", plugins))

    def post(self, *plugins: Plugin) -> tuple[str, Any]:
        """Send a POST request and return the Location header and the decoded body."""
        response = self._send("POST", plugins)
        return response.headers.get("Location", ""), _read_content(response)

    def delete(self, *plugins: Plugin) -> None:
        """Send a DELETE request."""
        self._send("DELETE", plugins)

    def put(self, *plugins: Plugin) -> None:
        """Send a PUT request."""
        self._send("PUT", plugins)


def path(value: str) -> Plugin:
    """Plugin replacing the request path."""

    def apply(request: Request) -> None:
        request.path = value

    return apply


def add_query(key: str, value: str) -> Plugin:
    """Plugin adding a query parameter."""

    def apply(request: Request) -> None:
        request.query.append((key, value))

    return apply


def set_header(name: str, value: str) -> Plugin:
    """Plugin setting a request header."""

    def apply(request: Request) -> None:
        request.set_header(name, value)

    return apply


def body_string(text: str) -> Plugin:
    """Plugin setting the request body to a text."""

    def apply(request: Request) -> None:
        request.body = text.encode("utf-8")

    return apply


def body_json(obj: Any) -> Plugin:
    """Plugin setting the request body to the JSON encoding of an object."""

    def apply(request: Request) -> None:
        request.body = json.dumps(obj).encode("utf-8")
        request.set_header("Content-Type", "application/json")

    return apply


def create_query_plugins(*args: str) -> list[Plugin]:
    """Build query plugins from alternating keys and values; a trailing key is ignored."""
    pairs = zip(args[0::2], args[1::2])
    return [add_query(key, value) for key, value in pairs]