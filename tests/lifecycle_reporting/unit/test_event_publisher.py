"""Event publisher tests."""

from __future__ import annotations

from datetime import datetime

from auth_contract_tester.lifecycle_reporting import (
    EventPublisher,
    ResultStatus,
    TestCaseStarted,
    TestResult,
    TestStepFinished,
)


def test_publish_delivers_only_to_handlers_of_the_event_type() -> None:
    publisher = EventPublisher()
    received: list[object] = []
    publisher.register_handler_for(TestCaseStarted, received.append)
    case_started = TestCaseStarted("Case", "feature#case", datetime(2024, 1, 1, 10, 0, 0))
    step_finished = TestStepFinished(
        "Case", "step", datetime(2024, 1, 1, 10, 0, 1), TestResult(ResultStatus.PASSED)
    )

    publisher.publish(case_started)
    publisher.publish(step_finished)

    assert received == [case_started]


def test_handlers_run_in_registration_order() -> None:
    publisher = EventPublisher()
    calls: list[str] = []
    publisher.register_handler_for(TestCaseStarted, lambda event: calls.append("first"))
    publisher.register_handler_for(TestCaseStarted, lambda event: calls.append("second"))

    publisher.publish(TestCaseStarted("Case", "feature#case", datetime(2024, 1, 1)))

    assert calls == ["first", "second"]


def test_publishing_without_handlers_is_a_no_op() -> None:
    EventPublisher().publish(TestCaseStarted("Case", "feature#case", datetime(2024, 1, 1)))
