"""
Helpers for constructing the JSON bodies sent to the API.
"""

from __future__ import annotations

import dataclasses
import json
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from .descriptors import HttpMethod, RequestDescriptor
from .enums import to_wire
from .fields import UNSET

__all__ = [
    "build_body_payload",
    "build_request_body",
    "encode_fields",
]


def _encode_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return to_wire(value)
    if isinstance(value, Mapping):
        return encode_fields(value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return encode_fields(
            {field.name: getattr(value, field.name) for field in dataclasses.fields(value)}
        )
    if isinstance(value, (list, tuple)):
        return [_encode_value(item) for item in value if item is not UNSET]
    if isinstance(value, Decimal):
        return str(value)
    return value


def encode_fields(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Encode explicitly set fields, recursing into nested structures.

    Fields holding :data:`UNSET` are omitted; an explicit ``None`` is sent as
    ``null``.
    """
    return {
        name: _encode_value(value)
        for name, value in fields.items()
        if value is not UNSET
    }


def build_body_payload(descriptor: RequestDescriptor) -> Optional[Dict[str, Any]]:
    """Build the enveloped body object, or ``None`` for requests without one."""
    if not descriptor.has_body:
        return None
    return {descriptor.body_envelope: encode_fields(descriptor.body or {})}


def build_request_body(descriptor: RequestDescriptor) -> Optional[bytes]:
    """
    Serialise the request body.

    GET requests without a body send nothing. Other methods without a body
    send an explicit empty body so strict servers still see a body frame.
    """
    payload = build_body_payload(descriptor)
    if payload is None:
        if descriptor.method is HttpMethod.GET:
            return None
        return b""
    return json.dumps(payload, separators=(",", ":")).encode("utf-8")
