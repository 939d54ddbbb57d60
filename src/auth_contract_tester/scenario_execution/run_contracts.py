"""Run execution entities."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from auth_contract_tester.lifecycle_reporting.lifecycle_events import ResultStatus


@dataclass(frozen=True)
class RunRequest:
    """Input contract for executing one run."""

    config_path: str
    report_path: str | None = None
    scenario_names: tuple[str, ...] = ()


@dataclass(frozen=True)
class ScenarioResult:
    """Outcome of one executed scenario."""

    name: str
    status: ResultStatus
    duration: timedelta
    error_message: str | None = None


@dataclass(frozen=True)
class RunOutcome:
    """Output contract for one completed run."""

    report_path: Path
    results: tuple[ScenarioResult, ...]

    @property
    def counts(self) -> Counter[ResultStatus]:
        return Counter(result.status for result in self.results)

    @property
    def passed(self) -> bool:
        return all(result.status is ResultStatus.PASSED for result in self.results)
