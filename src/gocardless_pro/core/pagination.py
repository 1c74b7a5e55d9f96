"""
Lazy iteration over every item of a cursor-paginated list endpoint.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Generic, Iterator, Optional, TypeVar

from .client import HttpClient
from .descriptors import DecodeMode, RequestDescriptor
from .parsing import Page

__all__ = ["PaginatingIterable", "PaginatingIterator"]

T = TypeVar("T")


def _require_page_mode(descriptor: RequestDescriptor) -> None:
    if descriptor.decode_mode is not DecodeMode.PAGE:
        raise ValueError(
            f"{descriptor.path_template} is not a paginated list request"
        )


class PaginatingIterator(Generic[T]):
    """
    Forward-only iterator that fetches pages as the buffer runs dry.

    The first page is fetched on construction. Each page goes through the
    client's retry policy. Instances hold mutable cursor state and must not be
    shared between consumers; build a new one to start again.
    """

    def __init__(
        self,
        client: HttpClient,
        descriptor: RequestDescriptor,
        *,
        start_after: Optional[str] = None,
    ) -> None:
        _require_page_mode(descriptor)
        self._client = client
        self._descriptor = descriptor
        self._items: Deque[T] = deque()
        self._next_cursor: Optional[str] = None
        self.pages_fetched = 0
        self._load_page(start_after)

    def _load_page(self, cursor: Optional[str]) -> None:
        page: Page[T] = self._client.execute_with_retries(
            self._descriptor.with_query(after=cursor)
        )
        self.pages_fetched += 1
        self._items.extend(page.items)
        self._next_cursor = page.after

    def __iter__(self) -> "PaginatingIterator[T]":
        return self

    def __next__(self) -> T:
        while not self._items:
            if self._next_cursor is None:
                raise StopIteration
            self._load_page(self._next_cursor)
        return self._items.popleft()


class PaginatingIterable(Generic[T]):
    """Re-iterable view over a list endpoint; each pass starts a fresh iterator."""

    def __init__(
        self,
        client: HttpClient,
        descriptor: RequestDescriptor,
        *,
        start_after: Optional[str] = None,
    ) -> None:
        _require_page_mode(descriptor)
        self._client = client
        self._descriptor = descriptor
        self._start_after = start_after

    def __iter__(self) -> Iterator[T]:
        return PaginatingIterator(
            self._client, self._descriptor, start_after=self._start_after
        )
