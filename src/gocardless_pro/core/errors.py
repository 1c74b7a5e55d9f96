"""
Exception hierarchy raised by the client.

Three families are kept apart: :class:`TransportError` when the HTTP exchange
did not complete, :class:`MalformedResponseError` when the server answered with
something that is not the expected JSON, and :class:`ApiException` (with its
subclasses) when the server returned a well-formed error body.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from .enums import WireEnum

__all__ = [
    "ApiError",
    "ApiErrorResponse",
    "ApiException",
    "AuthenticationError",
    "ConfigError",
    "ErrorType",
    "GoCardlessError",
    "InternalServerError",
    "InvalidApiUsageError",
    "InvalidSignatureError",
    "InvalidStateError",
    "MalformedResponseError",
    "PermissionDeniedError",
    "RateLimitError",
    "TransportError",
    "ValidationFailedError",
    "error_from_response",
]


class GoCardlessError(Exception):
    """Base class for every exception raised by this library."""


class ConfigError(GoCardlessError):
    """Raised when the supplied configuration is invalid."""


class TransportError(GoCardlessError):
    """Raised when the HTTP exchange could not be completed."""


class MalformedResponseError(GoCardlessError):
    """
    Raised when the server response is not the JSON document we expected, for
    example an HTML error page returned by a load balancer.
    """

    def __init__(self, response_body: str, detail: Optional[str] = None) -> None:
        message = "Malformed response received from server"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.response_body = response_body


class InvalidSignatureError(GoCardlessError):
    """Raised when a webhook signature does not match the request body."""

    def __init__(self) -> None:
        super().__init__("Webhook signature does not match the request body")


class ErrorType(WireEnum):
    GOCARDLESS = "gocardless"
    INVALID_API_USAGE = "invalid_api_usage"
    INVALID_STATE = "invalid_state"
    VALIDATION_FAILED = "validation_failed"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ApiError:
    """A single entry from the ``errors`` list of an error response."""

    message: Optional[str] = None
    reason: Optional[str] = None
    field: Optional[str] = None
    request_pointer: Optional[str] = None
    links: Mapping[str, str] = dataclasses.field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "ApiError":
        if not isinstance(payload, Mapping):
            raise TypeError(f"error entry must be an object, got {type(payload).__name__}")
        links = payload.get("links") or {}
        if not isinstance(links, Mapping):
            raise TypeError("error entry links must be an object")
        return cls(
            message=payload.get("message"),
            reason=payload.get("reason"),
            field=payload.get("field"),
            request_pointer=payload.get("request_pointer"),
            links=MappingProxyType(dict(links)),
        )

    def __str__(self) -> str:
        return " ".join(part for part in (self.field, self.message) if part)


@dataclass(frozen=True)
class ApiErrorResponse:
    message: Optional[str]
    type: ErrorType
    code: int
    documentation_url: Optional[str] = None
    request_id: Optional[str] = None
    errors: Tuple[ApiError, ...] = ()

    @classmethod
    def from_payload(
        cls,
        payload: Mapping[str, Any],
        *,
        status_code: Optional[int] = None,
    ) -> "ApiErrorResponse":
        error_type = ErrorType.decode(payload.get("type")) or ErrorType.UNKNOWN
        entries = payload.get("errors") or ()
        if not isinstance(entries, (list, tuple)):
            raise TypeError("errors must be an array")
        raw_code = payload.get("code", status_code)
        try:
            code = int(raw_code) if raw_code is not None else 0
        except (TypeError, ValueError):
            code = status_code or 0
        return cls(
            message=payload.get("message"),
            type=error_type,
            code=code,
            documentation_url=payload.get("documentation_url"),
            request_id=payload.get("request_id"),
            errors=tuple(ApiError.from_payload(item) for item in entries),
        )

    def __str__(self) -> str:
        if not self.errors:
            return self.message or ""
        return ", ".join(str(error) for error in self.errors)


class ApiException(GoCardlessError):
    """Base class for errors returned by the API as a structured error body."""

    def __init__(self, error: ApiErrorResponse) -> None:
        super().__init__(str(error))
        self.error = error

    @property
    def status_code(self) -> int:
        return self.error.code

    @property
    def error_type(self) -> ErrorType:
        return self.error.type

    @property
    def error_message(self) -> Optional[str]:
        return self.error.message

    @property
    def documentation_url(self) -> Optional[str]:
        return self.error.documentation_url

    @property
    def request_id(self) -> Optional[str]:
        return self.error.request_id

    @property
    def errors(self) -> Tuple[ApiError, ...]:
        return self.error.errors


class InternalServerError(ApiException):
    """The server failed while processing the request. Safe to retry."""


class InvalidApiUsageError(ApiException):
    """The request itself was invalid (URL, headers, syntax, limits)."""


class AuthenticationError(InvalidApiUsageError):
    """The access token is missing or invalid."""


class PermissionDeniedError(InvalidApiUsageError):
    """The access token is not allowed to perform the request."""


class RateLimitError(InvalidApiUsageError):
    """Too many requests were made in the rate limit window."""


class InvalidStateError(ApiException):
    """The action is not possible in the current state of the resource."""


class ValidationFailedError(ApiException):
    """One or more submitted parameters were invalid."""


_USAGE_ERRORS_BY_CODE: Dict[int, Type[InvalidApiUsageError]] = {
    401: AuthenticationError,
    403: PermissionDeniedError,
    429: RateLimitError,
}

_ERRORS_BY_TYPE: Dict[ErrorType, Type[ApiException]] = {
    ErrorType.GOCARDLESS: InternalServerError,
    ErrorType.INVALID_STATE: InvalidStateError,
    ErrorType.VALIDATION_FAILED: ValidationFailedError,
}


def error_from_response(error: ApiErrorResponse) -> ApiException:
    """Map a decoded error body to the matching exception instance."""
    if error.type is ErrorType.INVALID_API_USAGE:
        return _USAGE_ERRORS_BY_CODE.get(error.code, InvalidApiUsageError)(error)
    exc_cls = _ERRORS_BY_TYPE.get(error.type)
    if exc_cls is not None:
        return exc_cls(error)
    if error.code >= 500:
        return InternalServerError(error)
    return ApiException(error)
