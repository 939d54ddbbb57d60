"""Lifecycle event entities published by the host runner."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum


class ResultStatus(str, Enum):
    """Outcome of a test case or test step."""

    PASSED = "PASSED"
    FAILED = "FAILED"
    SKIPPED = "SKIPPED"
    ERROR = "ERROR"


@dataclass(frozen=True)
class TestResult:
    """Result attached to the finished events."""

    __test__ = False

    status: ResultStatus
    duration: timedelta = timedelta(0)
    error_message: str | None = None

    @property
    def duration_ms(self) -> int:
        return int(self.duration / timedelta(milliseconds=1))


@dataclass(frozen=True)
class TestCaseStarted:
    __test__ = False

    case_name: str
    location: str
    timestamp: datetime


@dataclass(frozen=True)
class TestCaseFinished:
    __test__ = False

    case_name: str
    location: str
    timestamp: datetime
    result: TestResult


@dataclass(frozen=True)
class TestStepStarted:
    __test__ = False

    case_name: str
    location: str
    timestamp: datetime


@dataclass(frozen=True)
class TestStepFinished:
    __test__ = False

    case_name: str
    location: str
    timestamp: datetime
    result: TestResult


LifecycleEvent = TestCaseStarted | TestCaseFinished | TestStepStarted | TestStepFinished

