"""
Public facade for the API client package.

The module intentionally re-exports the most useful pieces for integrators so
they can ``from gocardless_pro import ...`` without navigating the package.
"""

from ._version import __version__
from .api import Client, create_client
from .core import (
    ApiError,
    ApiException,
    ApiResponse,
    AuthenticationError,
    ClientConfig,
    ClientParameters,
    ConfigError,
    Environment,
    GoCardlessError,
    InternalServerError,
    InvalidApiUsageError,
    InvalidSignatureError,
    InvalidStateError,
    MalformedResponseError,
    Page,
    PermissionDeniedError,
    RateLimitError,
    TransportError,
    UNSET,
    ValidationFailedError,
    load_client_config,
)
from .params import (
    CustomerParams,
    PaymentCreateLinks,
    PaymentCreateParams,
    PaymentUpdateParams,
)
from .resources import Currency, Customer, Event, Payment, PaymentStatus
from .webhooks import is_valid_signature, parse_events, parse_webhook

__all__ = (
    "ApiError",
    "ApiException",
    "ApiResponse",
    "AuthenticationError",
    "Client",
    "ClientConfig",
    "ClientParameters",
    "ConfigError",
    "Currency",
    "Customer",
    "CustomerParams",
    "Environment",
    "Event",
    "GoCardlessError",
    "InternalServerError",
    "InvalidApiUsageError",
    "InvalidSignatureError",
    "InvalidStateError",
    "MalformedResponseError",
    "Page",
    "Payment",
    "PaymentCreateLinks",
    "PaymentCreateParams",
    "PaymentStatus",
    "PaymentUpdateParams",
    "PermissionDeniedError",
    "RateLimitError",
    "TransportError",
    "UNSET",
    "ValidationFailedError",
    "__version__",
    "create_client",
    "is_valid_signature",
    "load_client_config",
    "parse_events",
    "parse_webhook",
)
