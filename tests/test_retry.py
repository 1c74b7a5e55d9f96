import pytest
import requests

from gocardless_pro.core.config import ClientConfig
from gocardless_pro.core.descriptors import HttpMethod, RequestDescriptor
from gocardless_pro.core.errors import (
    ApiErrorResponse,
    ErrorType,
    InternalServerError,
    TransportError,
    ValidationFailedError,
)
from gocardless_pro.core.retry import RetryPolicy
from gocardless_pro.resources import Customer

from .conftest import BASE_URL, error_response, json_response


def _get_customer():
    return RequestDescriptor(
        method=HttpMethod.GET,
        path_template="/customers/:identity",
        envelope="customers",
        response_shape=Customer,
        path_params={"identity": "CU1"},
    )


def test_transport_errors_are_retried_three_times(make_client, sleeps):
    client, session = make_client(
        requests.ConnectionError("down"),
        requests.Timeout("slow"),
        requests.ConnectionError("still down"),
    )

    with pytest.raises(TransportError):
        client.execute_with_retries(_get_customer())

    assert len(session.calls) == 3
    assert sleeps == [0.5, 0.5]


def test_recovers_after_transient_failure(make_client, sleeps):
    client, session = make_client(
        error_response(500, "gocardless"),
        json_response(200, {"customers": {"id": "CU1", "email": "a@example.com"}}),
    )

    customer = client.execute_with_retries(_get_customer())

    assert customer.email == "a@example.com"
    assert len(session.calls) == 2
    assert sleeps == [0.5]


def test_last_error_is_raised_unchanged(make_client):
    client, _ = make_client(*(error_response(500, "gocardless", message=f"boom {i}") for i in range(3)))

    with pytest.raises(InternalServerError) as excinfo:
        client.execute_with_retries(_get_customer())

    assert excinfo.value.error_message == "boom 2"


def test_max_retries_zero_disables_retries(make_client, sleeps):
    config = ClientConfig.create("token", base_url=BASE_URL, max_retries=0)
    client, session = make_client(requests.ConnectionError("down"), client_config=config)

    with pytest.raises(TransportError):
        client.execute_with_retries(_get_customer())

    assert len(session.calls) == 1
    assert sleeps == []


def test_policy_only_retries_listed_errors():
    attempts = []

    def operation():
        attempts.append(1)
        raise ValidationFailedError(
            ApiErrorResponse(message="invalid", type=ErrorType.VALIDATION_FAILED, code=422)
        )

    policy = RetryPolicy(sleep_fn=lambda _: None)

    with pytest.raises(ValidationFailedError):
        policy.run(operation)

    assert len(attempts) == 1


def test_policy_returns_first_success():
    outcomes = [TransportError("x"), "done"]
    waits = []

    def operation():
        outcome = outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    policy = RetryPolicy(max_attempts=3, wait_seconds=0.25, sleep_fn=waits.append)

    assert policy.run(operation) == "done"
    assert waits == [0.25]


@pytest.mark.parametrize("kwargs", [{"max_attempts": 0}, {"wait_seconds": -1}])
def test_policy_rejects_invalid_settings(kwargs):
    with pytest.raises(ValueError):
        RetryPolicy(**kwargs)


def test_directly_built_config_cannot_exceed_three_attempts(make_client, sleeps):
    config = ClientConfig(access_token="token", base_url=BASE_URL, max_retries=9)
    client, session = make_client(
        *(requests.ConnectionError("down") for _ in range(10)), client_config=config
    )

    with pytest.raises(TransportError):
        client.execute_with_retries(_get_customer())

    assert config.max_attempts == 3
    assert len(session.calls) == 3
    assert sleeps == [0.5, 0.5]
