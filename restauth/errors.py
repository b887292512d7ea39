"""Exceptions raised by the HTTP clients."""

from __future__ import annotations

from http import HTTPStatus

MSG_ERR_CANNOT_OBTAIN = "cannotObtain"
MSG_ERR_CANNOT_GET_ISSUER = "cannotGetIssuer"
MSG_ERR_CANNOT_PARSE = "cannotParse"
MSG_ERR_UNKNOWN_HTTP_CONTENT_TYPE = "unkownHTTPContentType"
MSG_ERR_UNKNOWN_RESPONSE_STATUS_CODE = "unknownResponseStatusCode"

PRM_TOKEN_PROVIDER_URL = "tokenProviderURL"
PRM_API_URL = "APIURL"
PRM_TOKEN_MSG = "token"
PRM_RESPONSE = "response"


class HttpClientError(Exception):
    """Base class of every error raised by this package."""


class ResponseUnavailableError(HttpClientError):
    """The server could not be reached or gave no response."""


class UnknownContentTypeError(HttpClientError):
    """A response body came with a content type the client cannot decode."""


class TokenError(HttpClientError):
    """An access token could not be parsed or lacks a usable issuer."""


class HTTPError(HttpClientError):
    """An HTTP response whose status code denotes a failure."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(status_code, message)
        self.status_code = status_code
        self.message = message

    def __str__(self) -> str:
        return f"{self.status_code}:{self.message}"

    def __repr__(self) -> str:
        return f"HTTPError({self.status_code!r}, {self.message!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HTTPError):
            return NotImplemented
        return (self.status_code, self.message) == (other.status_code, other.message)

    def __hash__(self) -> int:
        return hash((self.status_code, self.message))

    def is_success(self) -> bool:
        """True for 2xx and 3xx (and lower) status codes."""
        return self.status_code < HTTPStatus.BAD_REQUEST

    def is_error(self) -> bool:
        """True when the request failed."""
        return self.status_code >= HTTPStatus.BAD_REQUEST

    def is_error_from_client(self) -> bool:
        """True when the failure was caused by the client request."""
        return HTTPStatus.BAD_REQUEST <= self.status_code < HTTPStatus.INTERNAL_SERVER_ERROR

    def is_error_from_server(self) -> bool:
        """True when the failure was caused by the server."""
        return self.status_code >= HTTPStatus.INTERNAL_SERVER_ERROR