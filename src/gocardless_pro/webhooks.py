"""
Validation and parsing of webhook request bodies.

Webhook bodies carry a list of events under the ``events`` envelope and are
decoded with the same path as list responses from the API.
"""

from __future__ import annotations

import hashlib
import hmac
from typing import Tuple, Union

from .core.errors import InvalidSignatureError
from .core.parsing import parse_multiple
from .resources import Event

__all__ = [
    "SIGNATURE_HEADER",
    "WEBHOOK_ENVELOPE",
    "compute_signature",
    "is_valid_signature",
    "parse_events",
    "parse_webhook",
]

SIGNATURE_HEADER = "Webhook-Signature"
WEBHOOK_ENVELOPE = "events"

Body = Union[str, bytes]


def _as_bytes(value: Body) -> bytes:
    return value if isinstance(value, bytes) else value.encode("utf-8")


def _as_text(value: Body) -> str:
    return value.decode("utf-8") if isinstance(value, bytes) else value


def compute_signature(request_body: Body, webhook_endpoint_secret: str) -> str:
    return hmac.new(
        _as_bytes(webhook_endpoint_secret),
        _as_bytes(request_body),
        hashlib.sha256,
    ).hexdigest()


def is_valid_signature(
    request_body: Body,
    signature_header: str,
    webhook_endpoint_secret: str,
) -> bool:
    """
    Check that a webhook was sent by the API.

    The HMAC-SHA256 of the body, keyed with the endpoint secret, must equal the
    value of the ``Webhook-Signature`` header.
    """
    expected = compute_signature(request_body, webhook_endpoint_secret)
    return hmac.compare_digest(_as_bytes(signature_header or ""), _as_bytes(expected))


def parse_events(request_body: Body) -> Tuple[Event, ...]:
    """Decode the events in a webhook body without checking its signature."""
    return parse_multiple(_as_text(request_body), WEBHOOK_ENVELOPE, Event)


def parse_webhook(
    request_body: Body,
    signature_header: str,
    webhook_endpoint_secret: str,
) -> Tuple[Event, ...]:
    """
    Validate the signature of a webhook and return the events it contains.

    Raises :class:`InvalidSignatureError` when the signature does not match.
    """
    if not is_valid_signature(request_body, signature_header, webhook_endpoint_secret):
        raise InvalidSignatureError()
    return parse_events(request_body)
