import json

import pytest

from gocardless_pro.core.errors import (
    ApiException,
    AuthenticationError,
    ErrorType,
    InternalServerError,
    InvalidApiUsageError,
    InvalidStateError,
    MalformedResponseError,
    PermissionDeniedError,
    RateLimitError,
    ValidationFailedError,
)
from gocardless_pro.core.parsing import parse_error, parse_multiple, parse_page, parse_single
from gocardless_pro.resources import Currency, Payment, PaymentStatus

PAYMENT = {
    "id": "PM123",
    "amount": 1000,
    "currency": "GBP",
    "status": "pending_submission",
    "links": {"mandate": "MD123", "creditor": "CR123"},
    "brand_new_field": "ignored",
}


def _error_body(error_type, code, errors=None, message="Request failed"):
    return json.dumps(
        {
            "error": {
                "message": message,
                "type": error_type,
                "code": code,
                "request_id": "req-1",
                "documentation_url": "https://developer.example.com/#errors",
                "errors": errors or [],
            }
        }
    )


def test_parse_single_decodes_nested_shapes():
    payment = parse_single(json.dumps({"payments": PAYMENT}), "payments", Payment)

    assert payment.id == "PM123"
    assert payment.currency is Currency.GBP
    assert payment.status is PaymentStatus.PENDING_SUBMISSION
    assert payment.links.mandate == "MD123"
    assert payment.description is None


@pytest.mark.parametrize(
    "wire, expected",
    [
        ("paid_out", PaymentStatus.PAID_OUT),
        ("teleported", PaymentStatus.UNKNOWN),
        (None, None),
    ],
)
def test_enum_values_fall_back_to_unknown(wire, expected):
    body = json.dumps({"payments": {"id": "PM1", "status": wire}})

    assert parse_single(body, "payments", Payment).status is expected


def test_parse_multiple_keeps_order():
    body = json.dumps({"payments": [{"id": "PM1"}, {"id": "PM2"}]})

    assert [p.id for p in parse_multiple(body, "payments", Payment)] == ["PM1", "PM2"]


def test_parse_page_reads_cursors():
    body = json.dumps(
        {
            "payments": [{"id": "PM1"}],
            "meta": {"cursors": {"before": None, "after": "PM1"}, "limit": 1},
        }
    )

    page = parse_page(body, "payments", Payment)

    assert [p.id for p in page] == ["PM1"]
    assert page.before is None
    assert page.after == "PM1"
    assert page.limit == 1
    assert len(page) == 1


@pytest.mark.parametrize(
    "body",
    [
        "<html>Bad Gateway</html>",
        "[]",
        json.dumps({"customers": {"id": "CU1"}}),
        json.dumps({"payments": "PM1"}),
    ],
)
def test_malformed_bodies_raise(body):
    with pytest.raises(MalformedResponseError) as excinfo:
        parse_single(body, "payments", Payment)

    assert excinfo.value.response_body == body


@pytest.mark.parametrize(
    "error_type, code, expected",
    [
        ("gocardless", 500, InternalServerError),
        ("invalid_api_usage", 400, InvalidApiUsageError),
        ("invalid_api_usage", 401, AuthenticationError),
        ("invalid_api_usage", 403, PermissionDeniedError),
        ("invalid_api_usage", 429, RateLimitError),
        ("invalid_state", 409, InvalidStateError),
        ("validation_failed", 422, ValidationFailedError),
        ("something_new", 503, InternalServerError),
    ],
)
def test_parse_error_maps_type_and_status(error_type, code, expected):
    exc = parse_error(_error_body(error_type, code), status_code=code)

    assert type(exc) is expected
    assert exc.status_code == code
    assert exc.request_id == "req-1"


def test_unknown_client_error_type_is_generic():
    exc = parse_error(_error_body("something_new", 418), status_code=418)

    assert type(exc) is ApiException
    assert exc.error_type is ErrorType.UNKNOWN


def test_parse_error_message_lists_field_errors():
    exc = parse_error(
        _error_body(
            "validation_failed",
            422,
            errors=[
                {"field": "amount", "message": "must be positive", "request_pointer": "/payments/amount"},
                {"field": "currency", "message": "is invalid"},
            ],
        ),
        status_code=422,
    )

    assert str(exc) == "amount must be positive, currency is invalid"
    assert exc.errors[0].request_pointer == "/payments/amount"
    assert exc.error_message == "Request failed"


@pytest.mark.parametrize(
    "meta",
    [
        "oops",
        {"cursors": "oops"},
        {"cursors": {"after": 42}},
        {"cursors": {}, "limit": "lots"},
        {"cursors": {}, "limit": True},
    ],
)
def test_page_with_malformed_meta_raises(meta):
    body = json.dumps({"payments": [], "meta": meta})

    with pytest.raises(MalformedResponseError) as excinfo:
        parse_page(body, "payments", Payment)

    assert excinfo.value.response_body == body


@pytest.mark.parametrize(
    "errors",
    [
        ["bad"],
        "bad",
        [{"reason": "idempotent_creation_conflict", "links": "ID123"}],
    ],
)
def test_error_with_malformed_entries_is_malformed(errors):
    body = json.dumps(
        {"error": {"message": "oops", "type": "invalid_state", "code": 409, "errors": errors}}
    )

    with pytest.raises(MalformedResponseError):
        parse_error(body, status_code=409)


def test_parse_error_without_error_envelope_is_malformed():
    with pytest.raises(MalformedResponseError):
        parse_error(json.dumps({"message": "nope"}), status_code=500)
