"""
Resource services built from declarative endpoint descriptions.

A :class:`ResourceEndpoint` describes one collection (path, envelope, shape and
the operations it supports) and turns calls into request descriptors. A
:class:`ResourceService` binds an endpoint to an :class:`HttpClient` and runs
those descriptors.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, FrozenSet, Mapping, Optional, Tuple, Type

from .core.client import ApiResponse, HttpClient
from .core.descriptors import (
    DecodeMode,
    HttpMethod,
    IdempotentCreateRequest,
    RequestDescriptor,
)
from .core.idempotency import execute_idempotent_wrapped
from .core.pagination import PaginatingIterable
from .core.parsing import Page
from .resources import Customer, Event, Payment

__all__ = [
    "CUSTOMERS",
    "EVENTS",
    "PAYMENTS",
    "ResourceEndpoint",
    "ResourceService",
]

ACTION_ENVELOPE = "data"

CREATE = "create"
GET = "get"
LIST = "list"
UPDATE = "update"
REMOVE = "remove"

ALL_OPERATIONS = frozenset({CREATE, GET, LIST, UPDATE, REMOVE})


def _params_mapping(params: Any) -> Mapping[str, Any]:
    if params is None:
        return {}
    if isinstance(params, Mapping):
        return params
    if dataclasses.is_dataclass(params) and not isinstance(params, type):
        return {field.name: getattr(params, field.name) for field in dataclasses.fields(params)}
    raise TypeError(f"Unsupported request parameters: {type(params).__name__}")


@dataclass(frozen=True)
class ResourceEndpoint:
    path: str
    envelope: str
    shape: Type[Any]
    operations: FrozenSet[str] = ALL_OPERATIONS
    actions: Tuple[str, ...] = ()

    @property
    def member_path(self) -> str:
        return f"{self.path}/:identity"

    def _require(self, operation: str) -> None:
        if operation not in self.operations:
            raise ValueError(f"'{operation}' is not supported for {self.envelope}")

    def create(
        self,
        params: Any,
        *,
        idempotency_key: Optional[str] = None,
    ) -> IdempotentCreateRequest:
        self._require(CREATE)
        return IdempotentCreateRequest(
            descriptor=RequestDescriptor(
                method=HttpMethod.POST,
                path_template=self.path,
                envelope=self.envelope,
                response_shape=self.shape,
                body=_params_mapping(params),
            ),
            on_conflict=self.get,
            idempotency_key=idempotency_key,
        )

    def get(self, identity: str) -> RequestDescriptor:
        self._require(GET)
        return RequestDescriptor(
            method=HttpMethod.GET,
            path_template=self.member_path,
            envelope=self.envelope,
            response_shape=self.shape,
            path_params={"identity": identity},
        )

    def list(self, **query: Any) -> RequestDescriptor:
        self._require(LIST)
        return RequestDescriptor(
            method=HttpMethod.GET,
            path_template=self.path,
            envelope=self.envelope,
            response_shape=self.shape,
            decode_mode=DecodeMode.PAGE,
            query_params={key: value for key, value in query.items() if value is not None},
        )

    def update(self, identity: str, params: Any) -> RequestDescriptor:
        self._require(UPDATE)
        return RequestDescriptor(
            method=HttpMethod.PUT,
            path_template=self.member_path,
            envelope=self.envelope,
            response_shape=self.shape,
            path_params={"identity": identity},
            body=_params_mapping(params),
        )

    def remove(self, identity: str) -> RequestDescriptor:
        self._require(REMOVE)
        return RequestDescriptor(
            method=HttpMethod.DELETE,
            path_template=self.member_path,
            envelope=self.envelope,
            response_shape=self.shape,
            path_params={"identity": identity},
        )

    def action(self, identity: str, name: str, params: Any = None) -> RequestDescriptor:
        if name not in self.actions:
            raise ValueError(f"'{name}' is not an action of {self.envelope}")
        return RequestDescriptor(
            method=HttpMethod.POST,
            path_template=f"{self.member_path}/actions/:action",
            envelope=self.envelope,
            response_shape=self.shape,
            path_params={"identity": identity, "action": name},
            body=_params_mapping(params),
            request_envelope=ACTION_ENVELOPE,
        )


PAYMENTS = ResourceEndpoint(
    path="/payments",
    envelope="payments",
    shape=Payment,
    operations=frozenset({CREATE, GET, LIST, UPDATE}),
    actions=("cancel", "retry"),
)

CUSTOMERS = ResourceEndpoint(
    path="/customers",
    envelope="customers",
    shape=Customer,
)

EVENTS = ResourceEndpoint(
    path="/events",
    envelope="events",
    shape=Event,
    operations=frozenset({GET, LIST}),
)


class ResourceService:
    """
    Runs the requests of one :class:`ResourceEndpoint`.

    Reads, deletes and idempotent creates go through the retry policy. Updates
    and actions are sent exactly once.
    """

    def __init__(self, client: HttpClient, endpoint: ResourceEndpoint) -> None:
        self._client = client
        self.endpoint = endpoint

    def create_wrapped(
        self,
        params: Any,
        *,
        idempotency_key: Optional[str] = None,
    ) -> ApiResponse[Any]:
        request = self.endpoint.create(params, idempotency_key=idempotency_key)
        return execute_idempotent_wrapped(self._client, request)

    def create(self, params: Any, *, idempotency_key: Optional[str] = None) -> Any:
        return self.create_wrapped(params, idempotency_key=idempotency_key).resource

    def get_wrapped(self, identity: str) -> ApiResponse[Any]:
        return self._client.execute_wrapped_with_retries(self.endpoint.get(identity))

    def get(self, identity: str) -> Any:
        return self.get_wrapped(identity).resource

    def list_wrapped(self, **query: Any) -> ApiResponse[Page[Any]]:
        return self._client.execute_wrapped_with_retries(self.endpoint.list(**query))

    def list(self, **query: Any) -> Page[Any]:
        return self.list_wrapped(**query).resource

    def all(self, *, start_after: Optional[str] = None, **query: Any) -> PaginatingIterable[Any]:
        """
        Iterate over every item, fetching further pages on demand.

        An ``after`` cursor in ``query`` is treated as ``start_after``.
        """
        after = query.pop("after", None)
        if after is not None:
            if start_after is not None and start_after != after:
                raise ValueError("Pass either 'after' or 'start_after', not both")
            start_after = after
        return PaginatingIterable(
            self._client, self.endpoint.list(**query), start_after=start_after
        )

    def update(self, identity: str, params: Any) -> Any:
        return self._client.execute(self.endpoint.update(identity, params))

    def remove(self, identity: str) -> Any:
        return self._client.execute_with_retries(self.endpoint.remove(identity))

    def action(self, identity: str, name: str, params: Any = None) -> Any:
        return self._client.execute(self.endpoint.action(identity, name, params))
