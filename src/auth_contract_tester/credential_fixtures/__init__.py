"""Credential fixture exports."""

from .fixture_models import CREDENTIAL_FIELDS, CredentialSet
from .fixture_registry import (
    EMPTY_FIXTURE,
    INVALID_FIXTURE,
    VALID_FIXTURE,
    FixtureRegistry,
    UnknownFixtureError,
    build_default_registry,
)

__all__ = [
    "CREDENTIAL_FIELDS",
    "CredentialSet",
    "EMPTY_FIXTURE",
    "INVALID_FIXTURE",
    "VALID_FIXTURE",
    "FixtureRegistry",
    "UnknownFixtureError",
    "build_default_registry",
]
