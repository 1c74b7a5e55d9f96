"""
Immutable descriptions of API requests.

A :class:`RequestDescriptor` carries everything the execution pipeline needs
to reach the network and decode the answer. Resource services build them; the
pipeline consumes them.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Type

__all__ = [
    "DecodeMode",
    "HttpMethod",
    "IdempotentCreateRequest",
    "RequestDescriptor",
]


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class DecodeMode(Enum):
    SINGLE = "single"
    MULTIPLE = "multiple"
    PAGE = "page"


def _freeze(values: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    return MappingProxyType(dict(values or {}))


@dataclass(frozen=True)
class RequestDescriptor:
    """
    A single API call.

    ``body`` holds the fields that were explicitly set; ``None`` means the
    request sends no body at all. ``request_envelope`` overrides the envelope
    used to wrap the outgoing body when it differs from the response envelope.
    """

    method: HttpMethod
    path_template: str
    envelope: str
    response_shape: Type[Any]
    decode_mode: DecodeMode = DecodeMode.SINGLE
    path_params: Mapping[str, str] = dataclasses.field(default_factory=dict)
    query_params: Mapping[str, Any] = dataclasses.field(default_factory=dict)
    body: Optional[Mapping[str, Any]] = None
    headers: Mapping[str, str] = dataclasses.field(default_factory=dict)
    request_envelope: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", HttpMethod(self.method))
        object.__setattr__(self, "path_params", _freeze(self.path_params))
        object.__setattr__(self, "query_params", _freeze(self.query_params))
        object.__setattr__(self, "headers", _freeze(self.headers))
        if self.body is not None:
            object.__setattr__(self, "body", _freeze(self.body))

    @property
    def has_body(self) -> bool:
        return self.body is not None

    @property
    def body_envelope(self) -> str:
        return self.request_envelope or self.envelope

    def with_query(self, **params: Any) -> "RequestDescriptor":
        """
        Return a copy with ``params`` merged into the query parameters.

        A ``None`` value removes the parameter.
        """
        merged = dict(self.query_params)
        for key, value in params.items():
            if value is None:
                merged.pop(key, None)
            else:
                merged[key] = value
        return dataclasses.replace(self, query_params=merged)

    def with_header(self, name: str, value: str) -> "RequestDescriptor":
        merged = dict(self.headers)
        merged[name] = value
        return dataclasses.replace(self, headers=merged)


@dataclass(frozen=True)
class IdempotentCreateRequest:
    """
    A creation request that is safe to retry.

    ``on_conflict`` turns the id of an already-created resource into the GET
    descriptor that fetches it. ``idempotency_key`` is optional; when omitted a
    fresh key is generated for each execution.
    """

    descriptor: RequestDescriptor
    on_conflict: Callable[[str], RequestDescriptor]
    idempotency_key: Optional[str] = None

    def with_idempotency_key(self, key: str) -> "IdempotentCreateRequest":
        return dataclasses.replace(self, idempotency_key=key)
