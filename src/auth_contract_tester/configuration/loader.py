"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any
from urllib.parse import urlparse

import yaml

from auth_contract_tester.credential_fixtures.fixture_models import CREDENTIAL_FIELDS

from .runtime_settings import (
    DEFAULT_ENDPOINT_PATH,
    DEFAULT_REPORT_PATH,
    DEFAULT_TIMEOUT_SECONDS,
    Configuration,
    ReportSettings,
    RunSettings,
    TargetSettings,
)

OVERRIDABLE_FIXTURES = ("valid", "invalid")


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    target = _parse_target_section(parsed.get("target"))
    report = _parse_report_section(parsed.get("report"), path.parent)
    run = _parse_run_section(parsed.get("run"))
    credential_overrides = _parse_credentials_section(parsed.get("credentials"))

    return Configuration(
        path=path,
        target=target,
        report=report,
        run=run,
        credential_overrides=credential_overrides,
    )


def _parse_target_section(value: Any) -> TargetSettings:
    section = _require_mapping(value, "target")
    base_uri = _require_non_empty_string(section.get("base_uri"), "target.base_uri")
    parsed_uri = urlparse(base_uri)
    if parsed_uri.scheme not in ("http", "https") or not parsed_uri.netloc:
        raise ConfigurationError("target.base_uri must be an absolute http(s) URI.")
    endpoint_path = _require_non_empty_string(
        section.get("endpoint_path", DEFAULT_ENDPOINT_PATH), "target.endpoint_path"
    )
    if not endpoint_path.startswith("/"):
        raise ConfigurationError("target.endpoint_path must start with '/'.")
    timeout_seconds = _require_positive_int(
        section.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS), "target.timeout_seconds"
    )
    return TargetSettings(
        base_uri=base_uri.rstrip("/"),
        endpoint_path=endpoint_path,
        timeout_seconds=timeout_seconds,
    )


def _parse_report_section(value: Any, base_path: Path) -> ReportSettings:
    if value is None:
        return ReportSettings(path=_resolve_path(base_path, DEFAULT_REPORT_PATH))
    section = _require_mapping(value, "report")
    raw_path = _require_non_empty_string(
        section.get("path", DEFAULT_REPORT_PATH), "report.path"
    )
    return ReportSettings(path=_resolve_path(base_path, raw_path))


def _parse_run_section(value: Any) -> RunSettings:
    if value is None:
        return RunSettings()
    section = _require_mapping(value, "run")
    parallelism = _require_positive_int(section.get("parallelism", 1), "run.parallelism")
    return RunSettings(parallelism=parallelism)


def _parse_credentials_section(value: Any) -> Mapping[str, Mapping[str, str]]:
    if value is None:
        return MappingProxyType({})
    section = _require_mapping(value, "credentials")
    overrides: dict[str, Mapping[str, str]] = {}
    for fixture_name, definition in section.items():
        if fixture_name not in OVERRIDABLE_FIXTURES:
            allowed = ", ".join(OVERRIDABLE_FIXTURES)
            raise ConfigurationError(
                f"credentials.{fixture_name} is not supported (allowed: {allowed})."
            )
        fields = _require_mapping(definition, f"credentials.{fixture_name}")
        values = {}
        for field_name in CREDENTIAL_FIELDS:
            raw = fields.get(field_name)
            if not isinstance(raw, str):
                raise ConfigurationError(
                    f"credentials.{fixture_name}.{field_name} must be a string."
                )
            values[field_name] = raw
        overrides[fixture_name] = MappingProxyType(values)
    return MappingProxyType(overrides)


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
