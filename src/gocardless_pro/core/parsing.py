"""
Decoding of API response bodies into typed resources.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Generic, Iterator, List, Mapping, Optional, Tuple, Type, TypeVar

from .descriptors import DecodeMode, RequestDescriptor
from .errors import (
    ApiErrorResponse,
    ApiException,
    MalformedResponseError,
    error_from_response,
)
from .fields import decode_object

__all__ = [
    "ERROR_ENVELOPE",
    "Page",
    "decode_response",
    "parse_error",
    "parse_json",
    "parse_multiple",
    "parse_page",
    "parse_single",
]

ERROR_ENVELOPE = "error"

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """
    One page of a list endpoint.

    ``before`` is ``None`` on the first page and ``after`` is ``None`` on the
    last one.
    """

    items: Tuple[T, ...]
    before: Optional[str]
    after: Optional[str]
    limit: Optional[int]

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


def parse_json(body: str) -> Dict[str, Any]:
    try:
        document = json.loads(body)
    except (TypeError, ValueError) as exc:
        raise MalformedResponseError(body, "body is not valid JSON") from exc
    if not isinstance(document, dict):
        raise MalformedResponseError(body, "top-level JSON value is not an object")
    return document


def _envelope_object(document: Mapping[str, Any], envelope: str, body: str) -> Mapping[str, Any]:
    value = document.get(envelope)
    if not isinstance(value, dict):
        raise MalformedResponseError(body, f"expected an object under '{envelope}'")
    return value


def _envelope_array(document: Mapping[str, Any], envelope: str, body: str) -> List[Any]:
    value = document.get(envelope)
    if not isinstance(value, list):
        raise MalformedResponseError(body, f"expected an array under '{envelope}'")
    return value


def _decode(shape: Type[T], payload: Any, body: str) -> T:
    try:
        return decode_object(shape, payload)
    except TypeError as exc:
        raise MalformedResponseError(body, str(exc)) from exc


def parse_single(body: str, envelope: str, shape: Type[T]) -> T:
    document = parse_json(body)
    return _decode(shape, _envelope_object(document, envelope, body), body)


def _decode_items(
    document: Mapping[str, Any], envelope: str, shape: Type[T], body: str
) -> Tuple[T, ...]:
    return tuple(
        _decode(shape, item, body) for item in _envelope_array(document, envelope, body)
    )


def parse_multiple(body: str, envelope: str, shape: Type[T]) -> Tuple[T, ...]:
    return _decode_items(parse_json(body), envelope, shape, body)


def parse_page(body: str, envelope: str, shape: Type[T]) -> Page[T]:
    document = parse_json(body)
    items = _decode_items(document, envelope, shape, body)

    meta = document.get("meta") or {}
    if not isinstance(meta, dict):
        raise MalformedResponseError(body, "expected an object under 'meta'")
    cursors = meta.get("cursors") or {}
    if not isinstance(cursors, dict):
        raise MalformedResponseError(body, "expected an object under 'meta.cursors'")
    return Page(
        items=items,
        before=_cursor(cursors, "before", body),
        after=_cursor(cursors, "after", body),
        limit=_limit(meta.get("limit"), body),
    )


def _cursor(cursors: Mapping[str, Any], name: str, body: str) -> Optional[str]:
    value = cursors.get(name)
    if value is not None and not isinstance(value, str):
        raise MalformedResponseError(body, f"cursor '{name}' is not a string")
    return value


def _limit(value: Any, body: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise MalformedResponseError(body, "'meta.limit' is not an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise MalformedResponseError(body, "'meta.limit' is not an integer") from exc


def parse_error(body: str, status_code: Optional[int] = None) -> ApiException:
    """
    Build the exception for an error response.

    The caller raises the returned exception. A body that is not the expected
    error document raises :class:`MalformedResponseError` instead.
    """
    document = parse_json(body)
    payload = _envelope_object(document, ERROR_ENVELOPE, body)
    try:
        error = ApiErrorResponse.from_payload(payload, status_code=status_code)
    except TypeError as exc:
        raise MalformedResponseError(body, str(exc)) from exc
    return error_from_response(error)


def decode_response(descriptor: RequestDescriptor, body: str) -> Any:
    if descriptor.decode_mode is DecodeMode.PAGE:
        return parse_page(body, descriptor.envelope, descriptor.response_shape)
    if descriptor.decode_mode is DecodeMode.MULTIPLE:
        return parse_multiple(body, descriptor.envelope, descriptor.response_shape)
    return parse_single(body, descriptor.envelope, descriptor.response_shape)
