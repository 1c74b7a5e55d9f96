"""
Configuration objects and helpers for the API client.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from .environment import build_environment
from .errors import ConfigError
from .urls import UrlFormatter

__all__ = [
    "ClientConfig",
    "ClientParameters",
    "ConfigError",
    "DEFAULT_API_VERSION",
    "Environment",
    "MAX_RETRIES",
    "load_client_config",
]

DEFAULT_API_VERSION = "2015-07-06"
MAX_RETRIES = 2
DEFAULT_RETRY_WAIT_MS = 500
DEFAULT_TIMEOUT_SECONDS = 30.0

_PARAMETER_TO_ENV_KEY = {
    "access_token": "GOCARDLESS_ACCESS_TOKEN",
    "environment": "GOCARDLESS_ENVIRONMENT",
    "base_url": "GOCARDLESS_BASE_URL",
    "api_version": "GOCARDLESS_API_VERSION",
    "max_retries": "GOCARDLESS_MAX_RETRIES",
    "retry_wait_ms": "GOCARDLESS_RETRY_WAIT_MS",
    "timeout_seconds": "GOCARDLESS_TIMEOUT_SECONDS",
    "error_on_idempotency_conflict": "GOCARDLESS_ERROR_ON_IDEMPOTENCY_CONFLICT",
}

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


class Environment(str, Enum):
    LIVE = "live"
    SANDBOX = "sandbox"

    @property
    def base_url(self) -> str:
        if self is Environment.SANDBOX:
            return "https://api-sandbox.gocardless.com"
        return "https://api.gocardless.com"


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


@dataclass(frozen=True)
class ClientParameters:
    """
    Explicit parameter bundle for constructing :class:`ClientConfig`.

    Callers can either instantiate this helper or pass the individual keyword
    arguments directly to :func:`load_client_config`.
    """

    access_token: Optional[str] = None
    environment: Optional[Environment | str] = None
    base_url: Optional[str] = None
    api_version: Optional[str] = None
    max_retries: Optional[int | str] = None
    retry_wait_ms: Optional[int | str] = None
    timeout_seconds: Optional[float | str] = None
    error_on_idempotency_conflict: Optional[bool | str] = None

    def as_overrides(self) -> Dict[str, str]:
        overrides: Dict[str, str] = {}
        for field_name, env_key in _PARAMETER_TO_ENV_KEY.items():
            value = getattr(self, field_name)
            if value is None:
                continue
            overrides[env_key] = _stringify(value)
        return overrides


def _collect_parameter_overrides(
    parameters: Optional[ClientParameters],
    explicit: Mapping[str, Any],
) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    if parameters is not None:
        overrides.update(parameters.as_overrides())

    for key, value in explicit.items():
        if value is None:
            continue
        try:
            env_key = _PARAMETER_TO_ENV_KEY[key]
        except KeyError as exc:
            raise TypeError(f"Unknown client parameter '{key}'") from exc
        overrides[env_key] = _stringify(value)
    return overrides


def _parse_int(raw: str, key: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ConfigError(f"{key} must be an integer, got '{raw}'") from exc


def _parse_float(raw: str, key: str) -> float:
    try:
        return float(raw.strip())
    except ValueError as exc:
        raise ConfigError(f"{key} must be a number, got '{raw}'") from exc


def _parse_bool(raw: str, key: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{key} must be a boolean, got '{raw}'")


def _parse_environment(raw: str) -> Environment:
    try:
        return Environment(raw.strip().lower())
    except ValueError as exc:
        choices = ", ".join(env.value for env in Environment)
        raise ConfigError(
            f"GOCARDLESS_ENVIRONMENT must be one of {choices}, got '{raw}'"
        ) from exc


@dataclass(frozen=True)
class ClientConfig:
    access_token: str
    base_url: str
    environment: Environment = Environment.LIVE
    api_version: str = DEFAULT_API_VERSION
    max_retries: int = MAX_RETRIES
    retry_wait_ms: int = DEFAULT_RETRY_WAIT_MS
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    error_on_idempotency_conflict: bool = False

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ConfigError("max_retries must not be negative")
        if self.max_retries > MAX_RETRIES:
            object.__setattr__(self, "max_retries", MAX_RETRIES)

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    @property
    def retry_wait_seconds(self) -> float:
        return self.retry_wait_ms / 1000.0

    @classmethod
    def create(
        cls,
        access_token: str,
        *,
        environment: Environment | str = Environment.LIVE,
        base_url: Optional[str] = None,
        **options: Any,
    ) -> "ClientConfig":
        """
        Build a configuration directly, without consulting the environment.
        """
        values = {"GOCARDLESS_ACCESS_TOKEN": access_token}
        values.update(
            _collect_parameter_overrides(
                None, {"environment": environment, "base_url": base_url, **options}
            )
        )
        return cls.from_mapping(values)

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "ClientConfig":
        access_token = (values.get("GOCARDLESS_ACCESS_TOKEN") or "").strip()
        if not access_token:
            raise ConfigError("GOCARDLESS_ACCESS_TOKEN must be provided")

        environment = _parse_environment(values.get("GOCARDLESS_ENVIRONMENT", "live"))
        base_url = (values.get("GOCARDLESS_BASE_URL") or environment.base_url).strip()
        UrlFormatter(base_url)

        max_retries = _parse_int(
            values.get("GOCARDLESS_MAX_RETRIES", str(MAX_RETRIES)),
            "GOCARDLESS_MAX_RETRIES",
        )
        if max_retries < 0:
            raise ConfigError("GOCARDLESS_MAX_RETRIES must not be negative")

        retry_wait_ms = _parse_int(
            values.get("GOCARDLESS_RETRY_WAIT_MS", str(DEFAULT_RETRY_WAIT_MS)),
            "GOCARDLESS_RETRY_WAIT_MS",
        )
        if retry_wait_ms < 0:
            raise ConfigError("GOCARDLESS_RETRY_WAIT_MS must not be negative")

        timeout_seconds = _parse_float(
            values.get("GOCARDLESS_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS)),
            "GOCARDLESS_TIMEOUT_SECONDS",
        )
        if timeout_seconds <= 0:
            raise ConfigError("GOCARDLESS_TIMEOUT_SECONDS must be positive")

        error_on_conflict = _parse_bool(
            values.get("GOCARDLESS_ERROR_ON_IDEMPOTENCY_CONFLICT", "false"),
            "GOCARDLESS_ERROR_ON_IDEMPOTENCY_CONFLICT",
        )

        return cls(
            access_token=access_token,
            base_url=base_url,
            environment=environment,
            api_version=values.get("GOCARDLESS_API_VERSION", DEFAULT_API_VERSION),
            max_retries=max_retries,
            retry_wait_ms=retry_wait_ms,
            timeout_seconds=timeout_seconds,
            error_on_idempotency_conflict=error_on_conflict,
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        parameters: Optional[ClientParameters] = None,
        access_token: Optional[str] = None,
        environment: Optional[Environment | str] = None,
        base_url: Optional[str] = None,
        api_version: Optional[str] = None,
        max_retries: Optional[int | str] = None,
        retry_wait_ms: Optional[int | str] = None,
        timeout_seconds: Optional[float | str] = None,
        error_on_idempotency_conflict: Optional[bool | str] = None,
    ) -> "ClientConfig":
        parameter_overrides = _collect_parameter_overrides(
            parameters,
            {
                "access_token": access_token,
                "environment": environment,
                "base_url": base_url,
                "api_version": api_version,
                "max_retries": max_retries,
                "retry_wait_ms": retry_wait_ms,
                "timeout_seconds": timeout_seconds,
                "error_on_idempotency_conflict": error_on_idempotency_conflict,
            },
        )
        merged_overrides = dict(overrides or {})
        merged_overrides.update(parameter_overrides)

        env = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(env.with_prefix().variables)


def load_client_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ClientParameters] = None,
    access_token: Optional[str] = None,
    environment: Optional[Environment | str] = None,
    base_url: Optional[str] = None,
    api_version: Optional[str] = None,
    max_retries: Optional[int | str] = None,
    retry_wait_ms: Optional[int | str] = None,
    timeout_seconds: Optional[float | str] = None,
    error_on_idempotency_conflict: Optional[bool | str] = None,
) -> ClientConfig:
    """
    Convenience wrapper that mirrors :meth:`ClientConfig.from_env`.

    The configuration can be provided entirely through environment variables,
    a ``.env`` file, direct keyword arguments, or any combination of the three.
    """
    return ClientConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=parameters,
        access_token=access_token,
        environment=environment,
        base_url=base_url,
        api_version=api_version,
        max_retries=max_retries,
        retry_wait_ms=retry_wait_ms,
        timeout_seconds=timeout_seconds,
        error_on_idempotency_conflict=error_on_idempotency_conflict,
    )
