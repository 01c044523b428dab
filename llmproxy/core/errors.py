from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    METHOD_NOT_ALLOWED = "method_not_allowed"
    INVALID_REQUEST = "invalid_request"
    MISSING_CONFIGURATION = "missing_configuration"
    UPSTREAM_REJECTED = "upstream_rejected"
    UPSTREAM_UNREACHABLE = "upstream_unreachable"
    UPSTREAM_INVALID_RESPONSE = "upstream_invalid_response"
    INTERNAL = "internal"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.METHOD_NOT_ALLOWED: 405,
    ErrorKind.INVALID_REQUEST: 400,
    ErrorKind.MISSING_CONFIGURATION: 500,
    ErrorKind.UPSTREAM_REJECTED: 502,
    ErrorKind.UPSTREAM_UNREACHABLE: 500,
    ErrorKind.UPSTREAM_INVALID_RESPONSE: 500,
    ErrorKind.INTERNAL: 500,
}


class ProxyError(Exception):
    """Base error for every stage of a proxied request.

    Each subclass names the stage that failed through ``kind``; the HTTP
    status defaults from ``STATUS_BY_KIND`` unless the stage knows better
    (an upstream rejection forwards the provider's own status).
    """

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, *, status_code: int | None = None, debug: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code or STATUS_BY_KIND[self.kind]
        self.debug = debug


class MethodNotAllowedError(ProxyError):
    kind = ErrorKind.METHOD_NOT_ALLOWED


class InvalidRequestError(ProxyError):
    kind = ErrorKind.INVALID_REQUEST


class MissingCredentialError(ProxyError):
    kind = ErrorKind.MISSING_CONFIGURATION


class UpstreamRejectedError(ProxyError):
    kind = ErrorKind.UPSTREAM_REJECTED


class UpstreamUnreachableError(ProxyError):
    kind = ErrorKind.UPSTREAM_UNREACHABLE


class InvalidUpstreamResponseError(ProxyError):
    kind = ErrorKind.UPSTREAM_INVALID_RESPONSE
