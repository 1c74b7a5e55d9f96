"""
HTTP execution pipeline for API requests.
"""

from __future__ import annotations

import logging
import platform
import re
import time
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, Tuple, TypeVar

import requests

from .._version import __version__
from .config import ClientConfig
from .descriptors import RequestDescriptor
from .errors import TransportError
from .parsing import decode_response, parse_error
from .payloads import build_request_body
from .retry import RetryPolicy
from .urls import UrlFormatter

__all__ = ["ApiResponse", "HttpClient", "build_user_agent"]

T = TypeVar("T")

JSON_MEDIA_TYPE = "application/json"

_DISALLOWED_USER_AGENT_CHARS = re.compile(r"[^A-Za-z0-9._/+()-]")


def _user_agent_token(value: str) -> str:
    return _DISALLOWED_USER_AGENT_CHARS.sub("_", value.strip()) or "unknown"


def build_user_agent() -> str:
    return "gocardless-pro-python/{} {}/{} {}/{}".format(
        _user_agent_token(__version__),
        _user_agent_token(platform.python_implementation()),
        _user_agent_token(platform.python_version()),
        _user_agent_token(platform.system()),
        _user_agent_token(platform.release()),
    )


@dataclass(frozen=True)
class ApiResponse(Generic[T]):
    """
    A decoded resource together with the HTTP status and headers it came with.

    Header names map to every value the server sent for them, in order.
    """

    resource: T
    status_code: int
    headers: Mapping[str, Tuple[str, ...]]

    def header(self, name: str) -> Optional[str]:
        """Return the first value of header ``name`` (case-insensitive)."""
        lowered = name.lower()
        for key, values in self.headers.items():
            if key.lower() == lowered and values:
                return values[0]
        return None


def _header_multimap(response: requests.Response) -> Mapping[str, Tuple[str, ...]]:
    raw_headers = getattr(getattr(response, "raw", None), "headers", None)
    collected: Dict[str, List[str]] = {}
    if raw_headers is not None and hasattr(raw_headers, "getlist"):
        for name in raw_headers.keys():
            if name not in collected:
                collected[name] = list(raw_headers.getlist(name))
    else:
        for name, value in (response.headers or {}).items():
            collected.setdefault(name, []).append(value)
    return MappingProxyType({name: tuple(values) for name, values in collected.items()})


class HttpClient:
    """
    Executes :class:`RequestDescriptor` instances against the API.

    The client holds only read-only configuration, so independent requests can
    run on several threads at once.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        session: Optional[requests.Session] = None,
        sleep_fn: Callable[[float], None] = time.sleep,
        static_headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()
        self.url_formatter = UrlFormatter(config.base_url)
        self.retry_policy = RetryPolicy(
            max_attempts=config.max_attempts,
            wait_seconds=config.retry_wait_seconds,
            sleep_fn=sleep_fn,
        )
        self.user_agent = build_user_agent()
        headers = {"GoCardless-Version": config.api_version}
        headers.update(static_headers or {})
        self.static_headers: Mapping[str, str] = MappingProxyType(headers)

    @property
    def error_on_idempotency_conflict(self) -> bool:
        return self.config.error_on_idempotency_conflict

    def build_url(self, descriptor: RequestDescriptor) -> str:
        return self.url_formatter.format_url(
            descriptor.path_template,
            descriptor.path_params,
            descriptor.query_params,
        )

    def build_headers(self, descriptor: RequestDescriptor) -> Dict[str, str]:
        headers = {"Accept": JSON_MEDIA_TYPE}
        headers.update(self.static_headers)
        headers.update(descriptor.headers)
        headers["Authorization"] = f"Bearer {self.config.access_token}"
        headers["User-Agent"] = self.user_agent
        if descriptor.has_body:
            headers["Content-Type"] = JSON_MEDIA_TYPE
        return headers

    def _perform(self, descriptor: RequestDescriptor) -> requests.Response:
        method = descriptor.method.value
        url = self.build_url(descriptor)
        started = time.monotonic()
        try:
            response = self.session.request(
                method,
                url,
                headers=self.build_headers(descriptor),
                data=build_request_body(descriptor),
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise TransportError(f"Failed to execute {method} {url}: {exc}") from exc
        logging.info(
            "API request [%s] [%s] returned [%s] (took %.0f ms)",
            method,
            url,
            response.status_code,
            (time.monotonic() - started) * 1000,
        )
        return response

    def execute_wrapped(self, descriptor: RequestDescriptor) -> ApiResponse[Any]:
        """
        Perform a single attempt and wrap the decoded result.

        Non-2xx responses raise the matching :class:`ApiException` subclass;
        bodies that are not valid JSON raise :class:`MalformedResponseError`.
        """
        response = self._perform(descriptor)
        try:
            body = response.text
        except requests.RequestException as exc:
            raise TransportError(f"Failed to read response body: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise parse_error(body, status_code=response.status_code)

        return ApiResponse(
            resource=decode_response(descriptor, body),
            status_code=response.status_code,
            headers=_header_multimap(response),
        )

    def execute(self, descriptor: RequestDescriptor) -> Any:
        return self.execute_wrapped(descriptor).resource

    def execute_wrapped_with_retries(self, descriptor: RequestDescriptor) -> ApiResponse[Any]:
        return self.retry_policy.run(
            lambda: self.execute_wrapped(descriptor),
            description=f"{descriptor.method.value} {descriptor.path_template}",
        )

    def execute_with_retries(self, descriptor: RequestDescriptor) -> Any:
        return self.execute_wrapped_with_retries(descriptor).resource

    def close(self) -> None:
        self.session.close()
