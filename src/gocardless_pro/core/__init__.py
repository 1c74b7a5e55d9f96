"""
Core primitives that execute API requests: URL and body building, the HTTP
pipeline with retries, idempotent creation, pagination and response decoding.
"""

from .client import ApiResponse, HttpClient
from .config import (
    ClientConfig,
    ClientParameters,
    ConfigError,
    Environment,
    load_client_config,
)
from .descriptors import (
    DecodeMode,
    HttpMethod,
    IdempotentCreateRequest,
    RequestDescriptor,
)
from .enums import WireEnum
from .environment import ENV_PREFIX, ClientEnvironment, build_environment, load_env_file
from .errors import (
    ApiError,
    ApiException,
    AuthenticationError,
    ErrorType,
    GoCardlessError,
    InternalServerError,
    InvalidApiUsageError,
    InvalidSignatureError,
    InvalidStateError,
    MalformedResponseError,
    PermissionDeniedError,
    RateLimitError,
    TransportError,
    ValidationFailedError,
)
from .fields import UNSET
from .idempotency import execute_idempotent, execute_idempotent_wrapped
from .pagination import PaginatingIterable, PaginatingIterator
from .parsing import Page
from .retry import RetryPolicy

__all__ = [
    "ENV_PREFIX",
    "ApiError",
    "ApiException",
    "ApiResponse",
    "AuthenticationError",
    "ClientConfig",
    "ClientEnvironment",
    "ClientParameters",
    "ConfigError",
    "DecodeMode",
    "Environment",
    "ErrorType",
    "GoCardlessError",
    "HttpClient",
    "HttpMethod",
    "IdempotentCreateRequest",
    "InternalServerError",
    "InvalidApiUsageError",
    "InvalidSignatureError",
    "InvalidStateError",
    "MalformedResponseError",
    "Page",
    "PaginatingIterable",
    "PaginatingIterator",
    "PermissionDeniedError",
    "RateLimitError",
    "RequestDescriptor",
    "RetryPolicy",
    "TransportError",
    "UNSET",
    "ValidationFailedError",
    "WireEnum",
    "build_environment",
    "execute_idempotent",
    "execute_idempotent_wrapped",
    "load_client_config",
    "load_env_file",
]
