"""
Idempotent execution of creation requests.

A creation request carries an ``Idempotency-Key`` header. The key is chosen
once per execution and reused by every retry of that execution, so the server
can recognise a repeated attempt. When the server reports that the key was
already used to create a resource, the existing resource is fetched and
returned instead of raising.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Optional

from .client import ApiResponse, HttpClient
from .descriptors import IdempotentCreateRequest
from .errors import ApiError, InvalidStateError

__all__ = [
    "CONFLICT_REASON",
    "CONFLICTING_RESOURCE_LINK",
    "IDEMPOTENCY_KEY_HEADER",
    "execute_idempotent",
    "execute_idempotent_wrapped",
    "find_conflict",
    "new_idempotency_key",
]

IDEMPOTENCY_KEY_HEADER = "Idempotency-Key"
CONFLICT_REASON = "idempotent_creation_conflict"
CONFLICTING_RESOURCE_LINK = "conflicting_resource_id"


def new_idempotency_key() -> str:
    return str(uuid.uuid4())


def find_conflict(exc: InvalidStateError) -> Optional[ApiError]:
    for error in exc.errors:
        if error.reason == CONFLICT_REASON:
            return error
    return None


def execute_idempotent_wrapped(
    client: HttpClient,
    request: IdempotentCreateRequest,
) -> ApiResponse[Any]:
    """
    Execute ``request`` with retries, recovering from creation conflicts.

    Errors other than an idempotent creation conflict propagate unchanged, as
    does the conflict itself when the client is configured to raise on it or
    the server did not say which resource caused it.
    """
    key = request.idempotency_key or new_idempotency_key()
    descriptor = request.descriptor.with_header(IDEMPOTENCY_KEY_HEADER, key)

    try:
        return client.execute_wrapped_with_retries(descriptor)
    except InvalidStateError as exc:
        conflict = find_conflict(exc)
        if conflict is None or client.error_on_idempotency_conflict:
            raise
        resource_id = conflict.links.get(CONFLICTING_RESOURCE_LINK)
        if not resource_id:
            raise
        logging.info(
            "Idempotency key %s already used for %s; fetching existing resource %s",
            key,
            request.descriptor.path_template,
            resource_id,
        )
        return client.execute_wrapped_with_retries(request.on_conflict(resource_id))


def execute_idempotent(client: HttpClient, request: IdempotentCreateRequest) -> Any:
    return execute_idempotent_wrapped(client, request).resource
