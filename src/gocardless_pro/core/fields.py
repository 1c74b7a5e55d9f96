"""
Declarative field model shared by request parameters and resource shapes.

Resource shapes are frozen dataclasses. A field that needs conversion on the
way in declares a decoder through :func:`wire_field`; everything else is copied
from the JSON object as-is. Request parameters use :data:`UNSET` to tell
"never set" (omitted from the body) apart from an explicit ``None``.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Type, TypeVar

from .enums import WireEnum

__all__ = [
    "UNSET",
    "Decoder",
    "decode_object",
    "enum_of",
    "list_of",
    "nested",
    "wire_field",
]

T = TypeVar("T")

Decoder = Callable[[Any], Any]

_DECODER_KEY = "decoder"
_WIRE_NAME_KEY = "wire_name"


class _Unset:
    _instance: Optional["_Unset"] = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "_Unset":
        return self

    def __deepcopy__(self, memo: Dict[int, Any]) -> "_Unset":
        return self


UNSET: Any = _Unset()


def wire_field(
    *,
    decoder: Optional[Decoder] = None,
    wire_name: Optional[str] = None,
    default: Any = None,
) -> Any:
    """Declare a resource field with an optional decoder and wire name."""
    metadata: Dict[str, Any] = {}
    if decoder is not None:
        metadata[_DECODER_KEY] = decoder
    if wire_name is not None:
        metadata[_WIRE_NAME_KEY] = wire_name
    return dataclasses.field(default=default, metadata=metadata)


def enum_of(enum_cls: Type[WireEnum]) -> Decoder:
    return enum_cls.decode


def nested(shape: Type[T]) -> Decoder:
    def _decode(value: Any) -> Optional[T]:
        if value is None:
            return None
        return decode_object(shape, value)

    return _decode


def list_of(decoder: Decoder) -> Decoder:
    def _decode(value: Any) -> Optional[Tuple[Any, ...]]:
        if value is None:
            return None
        return tuple(decoder(item) for item in value)

    return _decode


def decode_object(shape: Type[T], payload: Mapping[str, Any]) -> T:
    """
    Map a JSON object onto ``shape``.

    Unknown keys are ignored and missing keys default to ``None``. A ``null``
    on the wire is never handed to a decoder, so enum fields decode it to
    ``None`` rather than the unknown member.
    """
    if not isinstance(payload, Mapping):
        raise TypeError(
            f"Cannot decode {type(payload).__name__} into {shape.__name__}"
        )

    values: Dict[str, Any] = {}
    for field in dataclasses.fields(shape):  # type: ignore[arg-type]
        raw = payload.get(field.metadata.get(_WIRE_NAME_KEY, field.name))
        decoder = field.metadata.get(_DECODER_KEY)
        if raw is None:
            values[field.name] = None
        elif decoder is not None:
            values[field.name] = decoder(raw)
        else:
            values[field.name] = raw
    return shape(**values)
