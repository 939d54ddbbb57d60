"""Credential fixture entities."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

CREDENTIAL_FIELDS = ("user_name", "password")


@dataclass(frozen=True, repr=False)
class CredentialSet(Mapping[str, str]):
    """Named, read-only set of credential fields sent as an authentication body."""

    name: str
    fields: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        missing = [key for key in CREDENTIAL_FIELDS if key not in self.fields]
        if missing:
            raise ValueError(f"Credential set '{self.name}' is missing fields: {missing}")
        # Detach from the caller's dict so later mutation cannot reach the fixture.
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def __getitem__(self, key: str) -> str:
        return self.fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    @property
    def user_name(self) -> str:
        return self.fields["user_name"]

    @property
    def password(self) -> str:
        return self.fields["password"]

    def as_request_body(self) -> dict[str, str]:
        """Return a fresh, caller-owned copy suitable for JSON encoding."""
        return dict(self.fields)

    def __repr__(self) -> str:
        return f"CredentialSet(name={self.name!r}, user_name={self.user_name!r}, password='***')"
