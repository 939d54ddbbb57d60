"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_ENDPOINT_PATH = "/auth"
DEFAULT_TIMEOUT_SECONDS = 10
DEFAULT_REPORT_PATH = "reports/detailed-api-report.txt"


@dataclass(frozen=True)
class TargetSettings:
    """Authentication endpoint the harness talks to."""

    base_uri: str
    endpoint_path: str = DEFAULT_ENDPOINT_PATH
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS

    @property
    def url(self) -> str:
        return f"{self.base_uri.rstrip('/')}{self.endpoint_path}"


@dataclass(frozen=True)
class ReportSettings:
    """Detailed report artifact location."""

    path: Path


@dataclass(frozen=True)
class RunSettings:
    """Scenario scheduling options."""

    parallelism: int = 1


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    target: TargetSettings
    report: ReportSettings
    run: RunSettings = field(default_factory=RunSettings)
    credential_overrides: Mapping[str, Mapping[str, str]] = field(default_factory=dict)
