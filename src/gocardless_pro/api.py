"""
Public, high-level entry points for talking to the API.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Mapping, Optional

import requests

from .core.client import HttpClient
from .core.config import (
    ClientConfig,
    ClientParameters,
    Environment,
    load_client_config,
)
from .services import CUSTOMERS, EVENTS, PAYMENTS, ResourceService

__all__ = ["Client", "create_client"]


class Client:
    """
    Entry point into the API.

    Exposes one service per resource; all services share a single
    :class:`HttpClient` and therefore the same session and configuration.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        session: Optional[requests.Session] = None,
        sleep_fn: Callable[[float], None] = time.sleep,
    ) -> None:
        self.config = config
        self.http_client = HttpClient(config, session=session, sleep_fn=sleep_fn)
        self.payments = ResourceService(self.http_client, PAYMENTS)
        self.customers = ResourceService(self.http_client, CUSTOMERS)
        self.events = ResourceService(self.http_client, EVENTS)

    def service(self, name: str) -> ResourceService:
        """Look up a service by its envelope name, e.g. ``"payments"``."""
        for service in (self.payments, self.customers, self.events):
            if service.endpoint.envelope == name:
                return service
        raise KeyError(f"Unknown resource '{name}'")

    def close(self) -> None:
        self.http_client.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, exc_type: Any, exc: Any, traceback: Any) -> None:
        self.close()


def create_client(
    *,
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
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
) -> Client:
    """
    Construct a :class:`Client`.

    Callers can either supply a ready-made :class:`ClientConfig` or let the
    helper assemble one from environment data.
    """
    if config is not None:
        extras = (
            overrides,
            base,
            parameters,
            access_token,
            environment,
            base_url,
            api_version,
            max_retries,
            retry_wait_ms,
            timeout_seconds,
            error_on_idempotency_conflict,
        )
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built ClientConfig or individual parameters, not both."
            )
        cfg = config
    else:
        cfg = load_client_config(
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
    return Client(cfg, session=session)
