import io
import json

import pytest

from gocardless_pro import cli

from .conftest import BASE_URL, SessionStub, error_response, json_response


@pytest.fixture
def session(monkeypatch):
    stub = SessionStub()
    monkeypatch.setattr(cli.requests, "Session", lambda: stub)
    monkeypatch.delenv("GOCARDLESS_ACCESS_TOKEN", raising=False)
    return stub


def _run(tmp_path, *args):
    out = io.StringIO()
    argv = [
        "--env-file",
        str(tmp_path / "missing.env"),
        "--set",
        "GOCARDLESS_ACCESS_TOKEN=cli-token",
        "--set",
        f"GOCARDLESS_BASE_URL={BASE_URL}",
        *args,
    ]
    return cli.run_cli(argv, out=out), out.getvalue()


def test_get_prints_resource(session, tmp_path):
    session.enqueue(json_response(200, {"payments": {"id": "PM1", "status": "paid_out", "amount": 100}}))

    code, output = _run(tmp_path, "get", "payments", "PM1")

    assert code == 0
    document = json.loads(output)
    assert document["id"] == "PM1"
    assert document["status"] == "paid_out"
    assert session.calls[0]["headers"]["Authorization"] == "Bearer cli-token"
    assert session.closed


def test_list_prints_single_page(session, tmp_path):
    session.enqueue(
        json_response(
            200,
            {"customers": [{"id": "CU1"}], "meta": {"cursors": {"before": None, "after": "CU1"}, "limit": 1}},
        )
    )

    code, output = _run(tmp_path, "list", "customers", "--limit", "1")

    assert code == 0
    document = json.loads(output)
    assert [item["id"] for item in document["items"]] == ["CU1"]
    assert document["meta"]["cursors"]["after"] == "CU1"
    assert session.calls[0]["url"] == f"{BASE_URL}/customers?limit=1"


def test_list_all_follows_cursors(session, tmp_path):
    session.enqueue(
        json_response(200, {"events": [{"id": "EV1"}], "meta": {"cursors": {"after": "EV1"}}}),
        json_response(200, {"events": [{"id": "EV2"}], "meta": {"cursors": {"after": None}}}),
    )

    code, output = _run(tmp_path, "list", "events", "--all")

    assert code == 0
    assert [item["id"] for item in json.loads(output)] == ["EV1", "EV2"]


def test_api_errors_exit_non_zero(session, tmp_path):
    session.enqueue(error_response(404, "invalid_api_usage", message="Resource not found"))

    code, output = _run(tmp_path, "get", "customers", "CU404")

    assert code == 1
    assert output == ""


def test_missing_token_exits_non_zero(session, tmp_path):
    code = cli.run_cli(
        ["--env-file", str(tmp_path / "missing.env"), "get", "payments", "PM1"],
        out=io.StringIO(),
    )

    assert code == 1
    assert session.calls == []


def test_override_requires_key_value():
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args(["--set", "NOPE", "get", "payments", "PM1"])


def test_malformed_page_exits_non_zero(session, tmp_path):
    session.enqueue(json_response(200, {"customers": [], "meta": {"cursors": "oops"}}))

    code, output = _run(tmp_path, "list", "customers")

    assert code == 1
    assert output == ""
