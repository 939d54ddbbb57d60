"""Credential fixture provider tests."""

from __future__ import annotations

import pytest
from auth_contract_tester.credential_fixtures import (
    CredentialSet,
    FixtureRegistry,
    UnknownFixtureError,
    build_default_registry,
)


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("valid", {"user_name": "user", "password": "password"}),
        ("invalid", {"user_name": "user", "password": "wrongpassword"}),
        ("empty", {"user_name": "", "password": ""}),
    ],
)
def test_default_registry_returns_registered_values(name: str, expected: dict) -> None:
    fixture = build_default_registry().get_fixture(name)

    assert fixture.name == name
    assert dict(fixture) == expected


def test_unknown_fixture_raises_with_registered_names() -> None:
    registry = build_default_registry()

    with pytest.raises(UnknownFixtureError) as excinfo:
        registry.get_fixture("admin")

    assert excinfo.value.name == "admin"
    assert "valid" in str(excinfo.value)
    assert isinstance(excinfo.value, KeyError)


def test_overrides_replace_only_named_fixtures() -> None:
    registry = build_default_registry({"valid": {"user_name": "qa", "password": "pw"}})

    assert registry.get_fixture("valid").user_name == "qa"
    assert registry.get_fixture("invalid").password == "wrongpassword"
    assert registry.names() == ("valid", "invalid", "empty")


def test_empty_fixture_cannot_be_overridden() -> None:
    with pytest.raises(ValueError):
        build_default_registry({"empty": {"user_name": "x", "password": "y"}})


def test_fixture_is_isolated_from_source_and_request_bodies() -> None:
    source = {"user_name": "user", "password": "password"}
    fixture = CredentialSet(name="valid", fields=source)
    registry = FixtureRegistry([fixture])

    source["password"] = "changed"
    body = registry.get_fixture("valid").as_request_body()
    body["password"] = "mutated"

    assert registry.get_fixture("valid").password == "password"
    with pytest.raises(TypeError):
        registry.get_fixture("valid").fields["password"] = "x"  # type: ignore[index]


def test_credential_set_requires_both_fields() -> None:
    with pytest.raises(ValueError, match="missing fields"):
        CredentialSet(name="broken", fields={"user_name": "user"})


def test_credential_set_repr_masks_password() -> None:
    fixture = build_default_registry().get_fixture("valid")

    assert repr(fixture) == "CredentialSet(name='valid', user_name='user', password='***')"


def test_duplicate_fixture_names_are_rejected() -> None:
    fixture = CredentialSet(name="valid", fields={"user_name": "a", "password": "b"})

    with pytest.raises(ValueError, match="Duplicate"):
        FixtureRegistry([fixture, fixture])
