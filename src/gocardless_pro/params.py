"""
Request parameter objects.

Every field defaults to :data:`UNSET` and only fields that were set are sent,
so ``None`` can still be used to clear a value on the server.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from .core.fields import UNSET
from .resources import Currency

__all__ = [
    "CustomerParams",
    "PaymentCreateLinks",
    "PaymentCreateParams",
    "PaymentUpdateParams",
]


@dataclass(frozen=True)
class PaymentCreateLinks:
    mandate: str = UNSET


@dataclass(frozen=True)
class PaymentCreateParams:
    amount: int = UNSET
    currency: Currency = UNSET
    app_fee: int = UNSET
    charge_date: str = UNSET
    description: str = UNSET
    metadata: Dict[str, Any] = UNSET
    reference: str = UNSET
    retry_if_possible: bool = UNSET
    links: PaymentCreateLinks = UNSET


@dataclass(frozen=True)
class PaymentUpdateParams:
    metadata: Dict[str, Any] = UNSET
    retry_if_possible: bool = UNSET


@dataclass(frozen=True)
class CustomerParams:
    address_line1: str = UNSET
    city: str = UNSET
    company_name: str = UNSET
    country_code: str = UNSET
    email: str = UNSET
    family_name: str = UNSET
    given_name: str = UNSET
    language: str = UNSET
    metadata: Dict[str, Any] = UNSET
    postal_code: str = UNSET
