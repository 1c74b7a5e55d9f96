"""Shared fixtures: an in-memory HTTP session that replays queued responses."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable

import pytest

from gocardless_pro.core.client import HttpClient
from gocardless_pro.core.config import ClientConfig

BASE_URL = "https://api.example.com"


@dataclass
class FakeResponse:
    status_code: int
    text: str
    headers: dict[str, str] = field(default_factory=dict)
    raw: Any = None


def json_response(status_code: int, payload: Any, headers: dict[str, str] | None = None) -> FakeResponse:
    return FakeResponse(status_code, json.dumps(payload), headers or {})


def error_response(
    status_code: int,
    error_type: str,
    *,
    message: str = "Something went wrong",
    errors: list[dict[str, Any]] | None = None,
) -> FakeResponse:
    return json_response(
        status_code,
        {
            "error": {
                "message": message,
                "type": error_type,
                "code": status_code,
                "request_id": "req-123",
                "documentation_url": "https://developer.example.com/errors",
                "errors": errors or [],
            }
        },
    )


class SessionStub:
    """Records every request and answers from a queue of responses or exceptions."""

    def __init__(self, *outcomes: FakeResponse | Exception) -> None:
        self.outcomes: list[FakeResponse | Exception] = list(outcomes)
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def enqueue(self, *outcomes: FakeResponse | Exception) -> None:
        self.outcomes.extend(outcomes)

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        data: bytes | None,
        timeout: float,
    ) -> FakeResponse:
        self.calls.append(
            {
                "method": method,
                "url": url,
                "headers": headers,
                "data": data,
                "timeout": timeout,
            }
        )
        if not self.outcomes:
            raise AssertionError(f"Unexpected request {method} {url}")
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self) -> None:
        self.closed = True

    def body(self, index: int) -> Any:
        data = self.calls[index]["data"]
        return json.loads(data) if data else data


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig.create("secret-token", base_url=BASE_URL)


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def make_client(config: ClientConfig, sleeps: list[float]) -> Callable[..., tuple[HttpClient, SessionStub]]:
    def _make(*outcomes: FakeResponse | Exception, client_config: ClientConfig | None = None) -> tuple[HttpClient, SessionStub]:
        session = SessionStub(*outcomes)
        client = HttpClient(
            client_config or config,
            session=session,  # type: ignore[arg-type]
            sleep_fn=sleeps.append,
        )
        return client, session

    return _make
