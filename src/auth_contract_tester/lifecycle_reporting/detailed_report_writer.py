"""Plain-text detailed report written from lifecycle events."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import TextIO

from .event_publisher import EventPublisher
from .lifecycle_events import (
    TestCaseFinished,
    TestCaseStarted,
    TestResult,
    TestStepFinished,
    TestStepStarted,
)

LOGGER = logging.getLogger(__name__)

SESSION_RULE = "=" * 80
CASE_RULE = "-" * 60
SESSION_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
CASE_TIMESTAMP_FORMAT = "%H:%M:%S"


class ReportIOError(Exception):
    """Raised internally when the report artifact cannot be written."""

    def __init__(self, path: Path, cause: Exception) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Error writing to detailed report {path}: {cause}")


class ReporterState(str, Enum):
    """Report session lifecycle."""

    UNINITIALIZED = "uninitialized"
    OPEN = "open"
    CLOSED = "closed"


class DetailedReporter:
    """Appends one block per lifecycle event to a text report.

    Every block is written and flushed under a single lock, so events coming
    from concurrently running cases never interleave inside a block. Write
    failures are logged and swallowed: the report must never fail the run it
    describes.
    """

    def __init__(
        self,
        report_path: Path | str,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._path = Path(report_path)
        self._clock = clock
        self._lock = threading.Lock()
        self._handle: TextIO | None = None
        self._state = ReporterState.UNINITIALIZED

    @property
    def path(self) -> Path:
        return self._path

    @property
    def state(self) -> ReporterState:
        return self._state

    def open(self) -> None:
        """Open the report for append and write the session header."""
        with self._lock:
            if self._state is ReporterState.OPEN:
                return
            if self._state is ReporterState.CLOSED:
                LOGGER.warning("Detailed report %s is already closed; not reopening.", self._path)
                return
            header = (
                f"\n{SESSION_RULE}\n"
                f"DETAILED API TEST REPORT - {self._clock().strftime(SESSION_TIMESTAMP_FORMAT)}\n"
                f"{SESSION_RULE}\n\n"
            )
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                self._handle = self._path.open("a", encoding="utf-8")
                self._handle.write(header)
                self._handle.flush()
            except OSError as exc:
                self._report_failure(exc)
                self._release_handle()
                self._state = ReporterState.CLOSED
                return
            self._state = ReporterState.OPEN
        LOGGER.info("Detailed report session opened at %s", self._path)

    def set_event_publisher(self, publisher: EventPublisher) -> None:
        publisher.register_handler_for(TestStepStarted, self.handle_test_step_started)
        publisher.register_handler_for(TestStepFinished, self.handle_test_step_finished)
        publisher.register_handler_for(TestCaseStarted, self.handle_test_case_started)
        publisher.register_handler_for(TestCaseFinished, self.handle_test_case_finished)
        if self._state is ReporterState.UNINITIALIZED:
            self.open()

    def handle_test_case_started(self, event: TestCaseStarted) -> None:
        self._append(
            f"\n{CASE_RULE}\n"
            f"TEST CASE: {event.case_name}\n"
            f"FEATURE: {event.location}\n"
            f"STARTED AT: {event.timestamp.strftime(CASE_TIMESTAMP_FORMAT)}\n"
            f"{CASE_RULE}\n",
            event,
        )

    def handle_test_case_finished(self, event: TestCaseFinished) -> None:
        self._append(
            f"\nTEST CASE RESULT: {event.result.status.value}\n"
            f"FINISHED AT: {event.timestamp.strftime(CASE_TIMESTAMP_FORMAT)}\n"
            f"{_error_line(event.result)}"
            f"{CASE_RULE}\n",
            event,
        )

    def handle_test_step_started(self, event: TestStepStarted) -> None:
        self._append(
            f"\nSTEP: {event.location}\n"
            f"STARTED AT: {event.timestamp.time().isoformat(timespec='milliseconds')}\n",
            event,
        )

    def handle_test_step_finished(self, event: TestStepFinished) -> None:
        self._append(
            f"RESULT: {event.result.status.value}\n"
            f"DURATION: {event.result.duration_ms} ms\n"
            f"{_error_line(event.result)}"
            "\n",
            event,
        )

    def close(self) -> None:
        """Write the session footer once and release the handle. Safe to repeat."""
        with self._lock:
            if self._state is ReporterState.CLOSED:
                LOGGER.debug("Detailed report %s already closed.", self._path)
                return
            if self._state is ReporterState.OPEN and self._handle is not None:
                footer = (
                    f"\n{SESSION_RULE}\n"
                    f"REPORT END - {self._clock().strftime(SESSION_TIMESTAMP_FORMAT)}\n"
                    f"{SESSION_RULE}\n"
                )
                try:
                    self._handle.write(footer)
                    self._handle.flush()
                except (OSError, ValueError) as exc:
                    self._report_failure(exc)
            self._release_handle()
            self._state = ReporterState.CLOSED

    def __enter__(self) -> DetailedReporter:
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _append(self, text: str, event: object) -> None:
        with self._lock:
            if self._state is not ReporterState.OPEN or self._handle is None:
                LOGGER.warning(
                    "Ignoring %s for detailed report %s in state %s.",
                    type(event).__name__,
                    self._path,
                    self._state.value,
                )
                return
            try:
                self._handle.write(text)
                self._handle.flush()
            except (OSError, ValueError) as exc:
                # ValueError covers writes to a handle closed underneath us.
                self._report_failure(exc)

    def _release_handle(self) -> None:
        if self._handle is None:
            return
        try:
            self._handle.close()
        except OSError as exc:
            self._report_failure(exc)
        finally:
            self._handle = None

    def _report_failure(self, exc: Exception) -> None:
        LOGGER.error("%s", ReportIOError(self._path, exc))


def _error_line(result: TestResult) -> str:
    if result.error_message is None:
        return ""
    return f"ERROR: {result.error_message}\n"
