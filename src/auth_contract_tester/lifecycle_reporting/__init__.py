"""Lifecycle reporting exports."""

from .detailed_report_writer import DetailedReporter, ReporterState, ReportIOError
from .event_publisher import EventPublisher
from .lifecycle_events import (
    LifecycleEvent,
    ResultStatus,
    TestCaseFinished,
    TestCaseStarted,
    TestResult,
    TestStepFinished,
    TestStepStarted,
)

__all__ = [
    "DetailedReporter",
    "ReporterState",
    "ReportIOError",
    "EventPublisher",
    "LifecycleEvent",
    "ResultStatus",
    "TestCaseFinished",
    "TestCaseStarted",
    "TestResult",
    "TestStepFinished",
    "TestStepStarted",
]
