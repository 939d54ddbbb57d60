"""HTTP exchange entities captured by the contract harness."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

_UNPARSED = object()


class ParseError(ValueError):
    """Raised when a response body cannot be read as JSON."""


@dataclass(frozen=True)
class RequestContext:
    """Request state owned by a single harness invocation."""

    method: str
    url: str
    headers: tuple[tuple[str, str], ...]
    body: str

    def json(self) -> Any:
        return json.loads(self.body)


@dataclass(frozen=True)
class ResponseRecord:  # pylint: disable=too-many-instance-attributes
    """Captured result of one HTTP exchange.

    The raw body is always kept. ``json()`` parses it on first use and caches
    the structured view; malformed bodies raise ``ParseError`` on every call.
    """

    status_code: int
    reason_phrase: str
    headers: tuple[tuple[str, str], ...]
    text: str
    elapsed_ms: float
    request: RequestContext
    _parsed: Any = field(default=_UNPARSED, init=False, repr=False, compare=False)

    @property
    def status_line(self) -> str:
        return f"HTTP {self.status_code} {self.reason_phrase}".rstrip()

    def header(self, name: str) -> str | None:
        """Return the first header value matching ``name`` case-insensitively."""
        lowered = name.lower()
        for header_name, value in self.headers:
            if header_name.lower() == lowered:
                return value
        return None

    def json(self) -> Any:
        if self._parsed is _UNPARSED:
            try:
                parsed = json.loads(self.text)
            except json.JSONDecodeError as exc:
                raise ParseError(
                    f"Response body is not valid JSON ({exc.msg} at position {exc.pos}): "
                    f"{_preview(self.text)}"
                ) from exc
            object.__setattr__(self, "_parsed", parsed)
        return self._parsed


def _preview(text: str, limit: int = 120) -> str:
    if not text:
        return "<empty body>"
    return text if len(text) <= limit else f"{text[:limit]}..."
