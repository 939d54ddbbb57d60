"""Composable contract checks for captured responses."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .exchange_records import ResponseRecord

_MISSING = object()


class ContractAssertionError(AssertionError):
    """Raised when a response breaks the expected contract."""

    def __init__(self, message: str, *, expected: Any, actual: Any) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"{message} (expected: {expected!r}, actual: {actual!r})")


def assert_status(response: ResponseRecord, expected_code: int) -> None:
    if response.status_code != expected_code:
        raise ContractAssertionError(
            f"Expected HTTP {expected_code} status code",
            expected=expected_code,
            actual=response.status_code,
        )


def assert_status_in(response: ResponseRecord, expected_codes: Iterable[int]) -> None:
    allowed = frozenset(expected_codes)
    if not allowed:
        raise ValueError("expected_codes must not be empty.")
    if response.status_code not in allowed:
        listed = " or ".join(str(code) for code in sorted(allowed))
        raise ContractAssertionError(
            f"Expected HTTP {listed} status code",
            expected=tuple(sorted(allowed)),
            actual=response.status_code,
        )


def assert_field_present(response: ResponseRecord, field_path: str) -> Any:
    """Fail unless ``field_path`` (dot separated) resolves to a non-null value.

    Returns the resolved value. Raises ``ParseError`` when the body is not JSON.
    """
    value = _resolve(response.json(), field_path)
    if value is _MISSING:
        raise ContractAssertionError(
            f"Field '{field_path}' should be present", expected="present", actual="absent"
        )
    if value is None:
        raise ContractAssertionError(
            f"Field '{field_path}' should not be null", expected="non-null", actual=None
        )
    return value


def _resolve(document: Any, field_path: str) -> Any:
    current = document
    for segment in field_path.split("."):
        if isinstance(current, dict):
            if segment not in current:
                return _MISSING
            current = current[segment]
        elif isinstance(current, list) and segment.isdigit():
            index = int(segment)
            if index >= len(current):
                return _MISSING
            current = current[index]
        else:
            return _MISSING
    return current
