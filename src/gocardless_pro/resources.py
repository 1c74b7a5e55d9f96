"""
Resource shapes decoded from API responses.

Each shape is a frozen dataclass describing the fields of one resource. Enum
fields fall back to ``UNKNOWN`` for values this version does not know about.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .core.enums import WireEnum
from .core.fields import enum_of, nested, wire_field

__all__ = [
    "Currency",
    "Customer",
    "Event",
    "EventAction",
    "EventDetails",
    "EventOrigin",
    "EventResourceType",
    "Payment",
    "PaymentLinks",
    "PaymentStatus",
]


class Currency(WireEnum):
    AUD = "AUD"
    CAD = "CAD"
    DKK = "DKK"
    EUR = "EUR"
    GBP = "GBP"
    NZD = "NZD"
    SEK = "SEK"
    USD = "USD"
    UNKNOWN = "unknown"


class PaymentStatus(WireEnum):
    PENDING_CUSTOMER_APPROVAL = "pending_customer_approval"
    PENDING_SUBMISSION = "pending_submission"
    SUBMITTED = "submitted"
    CONFIRMED = "confirmed"
    PAID_OUT = "paid_out"
    CANCELLED = "cancelled"
    CUSTOMER_APPROVAL_DENIED = "customer_approval_denied"
    FAILED = "failed"
    CHARGED_BACK = "charged_back"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class PaymentLinks:
    creditor: Optional[str] = None
    mandate: Optional[str] = None
    payout: Optional[str] = None
    subscription: Optional[str] = None


@dataclass(frozen=True)
class Payment:
    id: Optional[str] = None
    amount: Optional[int] = None
    amount_refunded: Optional[int] = None
    charge_date: Optional[str] = None
    created_at: Optional[str] = None
    currency: Optional[Currency] = wire_field(decoder=enum_of(Currency))
    description: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    reference: Optional[str] = None
    retry_if_possible: Optional[bool] = None
    status: Optional[PaymentStatus] = wire_field(decoder=enum_of(PaymentStatus))
    links: Optional[PaymentLinks] = wire_field(decoder=nested(PaymentLinks))


@dataclass(frozen=True)
class Customer:
    id: Optional[str] = None
    address_line1: Optional[str] = None
    city: Optional[str] = None
    company_name: Optional[str] = None
    country_code: Optional[str] = None
    created_at: Optional[str] = None
    email: Optional[str] = None
    family_name: Optional[str] = None
    given_name: Optional[str] = None
    language: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    postal_code: Optional[str] = None


class EventResourceType(WireEnum):
    CUSTOMERS = "customers"
    MANDATES = "mandates"
    PAYMENTS = "payments"
    PAYOUTS = "payouts"
    REFUNDS = "refunds"
    SUBSCRIPTIONS = "subscriptions"
    UNKNOWN = "unknown"


class EventAction(WireEnum):
    CREATED = "created"
    SUBMITTED = "submitted"
    CONFIRMED = "confirmed"
    PAID_OUT = "paid_out"
    CANCELLED = "cancelled"
    FAILED = "failed"
    UNKNOWN = "unknown"


class EventOrigin(WireEnum):
    API = "api"
    BANK = "bank"
    GOCARDLESS = "gocardless"
    CUSTOMER = "customer"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class EventDetails:
    cause: Optional[str] = None
    description: Optional[str] = None
    origin: Optional[EventOrigin] = wire_field(decoder=enum_of(EventOrigin))
    reason_code: Optional[str] = None
    scheme: Optional[str] = None


@dataclass(frozen=True)
class Event:
    id: Optional[str] = None
    action: Optional[EventAction] = wire_field(decoder=enum_of(EventAction))
    created_at: Optional[str] = None
    details: Optional[EventDetails] = wire_field(decoder=nested(EventDetails))
    links: Optional[Dict[str, str]] = None
    metadata: Optional[Dict[str, Any]] = None
    resource_type: Optional[EventResourceType] = wire_field(
        decoder=enum_of(EventResourceType)
    )
