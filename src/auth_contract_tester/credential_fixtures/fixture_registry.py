"""Credential fixture provider."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from .fixture_models import CredentialSet

VALID_FIXTURE = "valid"
INVALID_FIXTURE = "invalid"
EMPTY_FIXTURE = "empty"

DEFAULT_FIXTURE_VALUES: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {
        VALID_FIXTURE: MappingProxyType({"user_name": "user", "password": "password"}),
        INVALID_FIXTURE: MappingProxyType({"user_name": "user", "password": "wrongpassword"}),
        EMPTY_FIXTURE: MappingProxyType({"user_name": "", "password": ""}),
    }
)


class UnknownFixtureError(KeyError):
    """Raised when a credential fixture name is not registered."""

    def __init__(self, name: str, known: Iterable[str]) -> None:
        self.name = name
        self.known = tuple(known)
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown credential fixture '{self.name}' (registered: {', '.join(self.known)})"


class FixtureRegistry:
    """Read-only lookup of named credential sets, safe to share between threads."""

    def __init__(self, fixtures: Iterable[CredentialSet]) -> None:
        registered: dict[str, CredentialSet] = {}
        for fixture in fixtures:
            if fixture.name in registered:
                raise ValueError(f"Duplicate credential fixture: {fixture.name}")
            registered[fixture.name] = fixture
        self._fixtures = MappingProxyType(registered)

    def get_fixture(self, name: str) -> CredentialSet:
        try:
            return self._fixtures[name]
        except KeyError:
            raise UnknownFixtureError(name, self._fixtures) from None

    def names(self) -> tuple[str, ...]:
        return tuple(self._fixtures)

    def __contains__(self, name: object) -> bool:
        return name in self._fixtures


def build_default_registry(
    overrides: Mapping[str, Mapping[str, str]] | None = None,
) -> FixtureRegistry:
    """Register the valid, invalid and empty fixtures, applying configured overrides."""
    values = dict(DEFAULT_FIXTURE_VALUES)
    for name, fields in (overrides or {}).items():
        if name == EMPTY_FIXTURE:
            raise ValueError("The empty credential fixture cannot be overridden.")
        values[name] = fields
    return FixtureRegistry(
        CredentialSet(name=name, fields=fields) for name, fields in values.items()
    )
