import pytest

from gocardless_pro.core.errors import InvalidSignatureError, MalformedResponseError
from gocardless_pro.resources import EventAction, EventOrigin, EventResourceType
from gocardless_pro.webhooks import (
    compute_signature,
    is_valid_signature,
    parse_events,
    parse_webhook,
)

REQUEST_BODY = (
    '{"events":[{"id":"EV00BD05S5VM2T","created_at":"2018-07-05T09:13:51.404Z",'
    '"resource_type":"subscriptions","action":"created","links":{"subscription":"SB0003JJQ2MR06"},'
    '"details":{"origin":"api","cause":"subscription_created",'
    '"description":"Subscription created via the API."},"metadata":{}},'
    '{"id":"EV00BD05TB8K63","created_at":"2018-07-05T09:13:56.893Z",'
    '"resource_type":"mandates","action":"created","links":{"mandate":"MD000AMA19XGEC"},'
    '"details":{"origin":"api","cause":"mandate_created",'
    '"description":"Mandate created via the API."},"metadata":{}}]}'
)
SECRET = "ED7D658C-D8EB-4941-948B-3973214F2D49"
SIGNATURE = "2693754819d3e32d7e8fcb13c729631f316c6de8dc1cf634d6527f1c07276e7e"


def test_signature_matches_known_value():
    assert compute_signature(REQUEST_BODY, SECRET) == SIGNATURE
    assert is_valid_signature(REQUEST_BODY, SIGNATURE, SECRET)
    assert is_valid_signature(REQUEST_BODY.encode("utf-8"), SIGNATURE, SECRET)


@pytest.mark.parametrize("signature", ["dummy", "", SIGNATURE.upper()])
def test_wrong_signature_is_rejected(signature):
    assert not is_valid_signature(REQUEST_BODY, signature, SECRET)


def test_parse_webhook_returns_events():
    events = parse_webhook(REQUEST_BODY, SIGNATURE, SECRET)

    assert [event.id for event in events] == ["EV00BD05S5VM2T", "EV00BD05TB8K63"]
    first = events[0]
    assert first.resource_type is EventResourceType.SUBSCRIPTIONS
    assert first.action is EventAction.CREATED
    assert first.details.origin is EventOrigin.API
    assert first.details.cause == "subscription_created"
    assert first.links == {"subscription": "SB0003JJQ2MR06"}
    assert events[1].resource_type is EventResourceType.MANDATES


def test_parse_webhook_rejects_bad_signature():
    with pytest.raises(InvalidSignatureError):
        parse_webhook(REQUEST_BODY, "dummy", SECRET)


def test_parse_events_tolerates_new_values():
    events = parse_events(
        '{"events":[{"id":"EV1","resource_type":"instalment_schedules","action":"resumed"}]}'
    )

    assert events[0].resource_type is EventResourceType.UNKNOWN
    assert events[0].action is EventAction.UNKNOWN


def test_parse_events_requires_events_array():
    with pytest.raises(MalformedResponseError):
        parse_events('{"events":{}}')
