"""
Bounded retries for transient failures.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Tuple, Type, TypeVar

from .errors import InternalServerError, TransportError

__all__ = ["RETRYABLE_ERRORS", "RetryPolicy"]

T = TypeVar("T")

RETRYABLE_ERRORS: Tuple[Type[Exception], ...] = (TransportError, InternalServerError)


@dataclass(frozen=True)
class RetryPolicy:
    """
    Run an operation up to ``max_attempts`` times with a fixed wait.

    Only :data:`RETRYABLE_ERRORS` trigger another attempt. When the attempts
    run out the last error is re-raised unchanged.
    """

    max_attempts: int = 3
    wait_seconds: float = 0.5
    sleep_fn: Callable[[float], None] = time.sleep
    retryable: Tuple[Type[Exception], ...] = RETRYABLE_ERRORS

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.wait_seconds < 0:
            raise ValueError("wait_seconds must not be negative")

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait after failed ``attempt`` (1-based)."""
        return self.wait_seconds

    def run(self, operation: Callable[[], T], *, description: str = "request") -> T:
        attempt = 1
        while True:
            try:
                return operation()
            except self.retryable as exc:
                if attempt >= self.max_attempts:
                    logging.warning(
                        "Giving up on %s after %d attempt(s): %s",
                        description,
                        attempt,
                        exc,
                    )
                    raise
                delay = self.delay_for(attempt)
                logging.warning(
                    "Attempt %d/%d of %s failed (%s); retrying in %.0f ms",
                    attempt,
                    self.max_attempts,
                    description,
                    exc,
                    delay * 1000,
                )
                self.sleep_fn(delay)
                attempt += 1
