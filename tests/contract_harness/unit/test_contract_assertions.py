"""Contract assertion tests."""

from __future__ import annotations

import json

import pytest
from auth_contract_tester.contract_harness import (
    ContractAssertionError,
    ParseError,
    RequestContext,
    ResponseRecord,
    assert_field_present,
    assert_status,
    assert_status_in,
)


def _response(status_code: int = 200, body: object | str = None) -> ResponseRecord:
    text = body if isinstance(body, str) else json.dumps(body)
    return ResponseRecord(
        status_code=status_code,
        reason_phrase="",
        headers=(("content-type", "application/json"),),
        text=text,
        elapsed_ms=1.0,
        request=RequestContext(method="POST", url="http://auth.test/auth", headers=(), body="{}"),
    )


def test_assert_status_passes_on_match() -> None:
    assert_status(_response(200, {"token": "t"}), 200)


def test_assert_status_reports_expected_and_actual() -> None:
    with pytest.raises(ContractAssertionError) as excinfo:
        assert_status(_response(500, {}), 200)

    assert excinfo.value.expected == 200
    assert excinfo.value.actual == 500
    assert "Expected HTTP 200 status code" in str(excinfo.value)
    assert isinstance(excinfo.value, AssertionError)


@pytest.mark.parametrize("status_code", [400, 401])
def test_assert_status_in_accepts_any_listed_code(status_code: int) -> None:
    assert_status_in(_response(status_code, {}), {400, 401})


def test_assert_status_in_rejects_unlisted_code() -> None:
    with pytest.raises(ContractAssertionError) as excinfo:
        assert_status_in(_response(200, {}), {401, 400})

    assert excinfo.value.expected == (400, 401)
    assert excinfo.value.actual == 200
    assert "400 or 401" in str(excinfo.value)


def test_assert_status_in_requires_codes() -> None:
    with pytest.raises(ValueError):
        assert_status_in(_response(200, {}), set())


def test_assert_field_present_returns_value() -> None:
    assert assert_field_present(_response(200, {"token": "abc"}), "token") == "abc"


def test_assert_field_present_supports_nested_paths() -> None:
    response = _response(200, {"data": {"tokens": [{"value": "abc"}]}})

    assert assert_field_present(response, "data.tokens.0.value") == "abc"


@pytest.mark.parametrize(
    ("body", "actual"),
    [
        ({"message": "nope"}, "absent"),
        ({"token": None}, None),
        ([], "absent"),
    ],
)
def test_assert_field_present_fails_for_absent_or_null(body: object, actual: object) -> None:
    with pytest.raises(ContractAssertionError) as excinfo:
        assert_field_present(_response(200, body), "token")

    assert excinfo.value.actual == actual


def test_assert_field_present_raises_parse_error_for_non_json_body() -> None:
    with pytest.raises(ParseError, match="not valid JSON"):
        assert_field_present(_response(502, "<html>Bad Gateway</html>"), "message")
