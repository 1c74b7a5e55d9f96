"""
Forward-compatible enums for values exchanged with the API.

Every enum carries an ``UNKNOWN`` member. Decoding a value the client does not
recognise yields that member instead of failing, so new server-side values
never break older clients.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Type, TypeVar

__all__ = ["UNKNOWN_WIRE_VALUE", "WireEnum", "to_wire"]

UNKNOWN_WIRE_VALUE = "unknown"

E = TypeVar("E", bound="WireEnum")


class WireEnum(str, Enum):
    """
    Base class for enums whose values are the wire strings.

    Subclasses must declare ``UNKNOWN = "unknown"``.
    """

    @classmethod
    def _missing_(cls, value: Any) -> Optional["WireEnum"]:
        if value is None:
            return None
        return cls._value2member_map_.get(UNKNOWN_WIRE_VALUE)

    @classmethod
    def decode(cls: Type[E], value: Any) -> Optional[E]:
        if value is None:
            return None
        if not isinstance(value, str):
            value = str(value)
        return cls(value)

    @property
    def is_unknown(self) -> bool:
        return self.value == UNKNOWN_WIRE_VALUE

    def __str__(self) -> str:
        return self.value


def to_wire(member: Enum) -> str:
    """Return the wire string for ``member``; the unknown member cannot be sent."""
    if isinstance(member, WireEnum) and member.is_unknown:
        raise ValueError(
            f"{type(member).__name__}.UNKNOWN is a decode-only value and cannot be sent"
        )
    return str(member.value)
