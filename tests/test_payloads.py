import json
from decimal import Decimal

from gocardless_pro.core.descriptors import HttpMethod, RequestDescriptor
from gocardless_pro.core.fields import UNSET
from gocardless_pro.core.payloads import build_body_payload, build_request_body, encode_fields
from gocardless_pro.params import PaymentCreateLinks, PaymentCreateParams
from gocardless_pro.resources import Currency, Payment


def _descriptor(method, body=None, **kwargs):
    return RequestDescriptor(
        method=method,
        path_template="/payments",
        envelope="payments",
        response_shape=Payment,
        body=body,
        **kwargs,
    )


def test_encode_fields_omits_unset_and_keeps_explicit_none():
    encoded = encode_fields({"amount": 100, "description": UNSET, "reference": None})

    assert encoded == {"amount": 100, "reference": None}


def test_encode_fields_recurses_into_parameter_objects():
    params = PaymentCreateParams(
        amount=1000,
        currency=Currency.GBP,
        links=PaymentCreateLinks(mandate="MD123"),
    )

    assert encode_fields({"params": params}) == {
        "params": {"amount": 1000, "currency": "GBP", "links": {"mandate": "MD123"}}
    }


def test_encode_fields_handles_lists_and_decimals():
    encoded = encode_fields({"amounts": [Decimal("1.50"), UNSET, 2], "tags": ("a",)})

    assert encoded == {"amounts": ["1.50", 2], "tags": ["a"]}


def test_body_is_wrapped_in_envelope():
    descriptor = _descriptor(HttpMethod.POST, body={"amount": 100, "currency": Currency.EUR})

    assert build_body_payload(descriptor) == {"payments": {"amount": 100, "currency": "EUR"}}
    assert json.loads(build_request_body(descriptor)) == {
        "payments": {"amount": 100, "currency": "EUR"}
    }


def test_action_body_uses_request_envelope():
    descriptor = _descriptor(HttpMethod.POST, body={}, request_envelope="data")

    assert build_body_payload(descriptor) == {"data": {}}


def test_requests_without_body():
    assert build_request_body(_descriptor(HttpMethod.GET)) is None
    assert build_request_body(_descriptor(HttpMethod.DELETE)) == b""
    assert build_request_body(_descriptor(HttpMethod.POST)) == b""
