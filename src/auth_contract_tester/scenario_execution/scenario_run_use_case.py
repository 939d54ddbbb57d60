"""Run execution use-case service."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta
from pathlib import Path

import httpx

from auth_contract_tester.configuration import (
    Configuration,
    ConfigurationError,
    load_configuration,
)
from auth_contract_tester.contract_harness import AuthContractHarness
from auth_contract_tester.credential_fixtures import FixtureRegistry, build_default_registry
from auth_contract_tester.lifecycle_reporting import (
    DetailedReporter,
    EventPublisher,
    ResultStatus,
    TestCaseFinished,
    TestCaseStarted,
    TestResult,
    TestStepFinished,
    TestStepStarted,
)

from .auth_scenarios import AuthScenario, ScenarioContext, StepAction, select_scenarios
from .run_contracts import RunOutcome, RunRequest, ScenarioResult

LOGGER = logging.getLogger(__name__)

ClientFactory = Callable[[], httpx.Client]


class RunExecutionError(Exception):
    """Raised when a run use case cannot be completed."""


def execute_auth_contract_run(
    request: RunRequest,
    *,
    client_factory: ClientFactory | None = None,
    clock: Callable[[], datetime] = datetime.now,
) -> RunOutcome:
    """Execute the selected authentication scenarios and write the detailed report."""
    configuration = _load_run_configuration(request.config_path)
    try:
        scenarios = select_scenarios(request.scenario_names)
        registry = build_default_registry(configuration.credential_overrides)
    except ValueError as exc:
        raise RunExecutionError(str(exc)) from exc

    report_path = (
        Path(request.report_path).resolve() if request.report_path else configuration.report.path
    )
    publisher = EventPublisher()
    reporter = DetailedReporter(report_path, clock=clock)
    reporter.set_event_publisher(publisher)

    runner = _ScenarioRunner(
        configuration=configuration,
        registry=registry,
        publisher=publisher,
        client_factory=client_factory,
        clock=clock,
    )
    try:
        results = _run_all(runner, scenarios, configuration.run.parallelism)
    finally:
        reporter.close()

    outcome = RunOutcome(report_path=report_path, results=results)
    LOGGER.info(
        "Run finished: %s",
        ", ".join(f"{status.value}={count}" for status, count in sorted(outcome.counts.items())),
    )
    return outcome


def _load_run_configuration(config_path: str) -> Configuration:
    try:
        return load_configuration(config_path)
    except (ConfigurationError, OSError) as exc:
        raise RunExecutionError(str(exc)) from exc


def _run_all(
    runner: _ScenarioRunner, scenarios: Sequence[AuthScenario], parallelism: int
) -> tuple[ScenarioResult, ...]:
    if parallelism <= 1 or len(scenarios) <= 1:
        return tuple(runner.run(scenario) for scenario in scenarios)
    with ThreadPoolExecutor(max_workers=parallelism) as executor:
        return tuple(executor.map(runner.run, scenarios))


class _ScenarioRunner:  # pylint: disable=too-few-public-methods
    """Executes one scenario at a time per thread and publishes its lifecycle events."""

    def __init__(
        self,
        *,
        configuration: Configuration,
        registry: FixtureRegistry,
        publisher: EventPublisher,
        client_factory: ClientFactory | None,
        clock: Callable[[], datetime],
    ) -> None:
        self._configuration = configuration
        self._registry = registry
        self._publisher = publisher
        self._client_factory = client_factory
        self._clock = clock

    def run(self, scenario: AuthScenario) -> ScenarioResult:
        client = self._client_factory() if self._client_factory else None
        target = self._configuration.target
        with AuthContractHarness.from_settings(target, client=client) as harness:
            context = ScenarioContext(registry=self._registry, harness=harness)
            return self._run_steps(scenario, context)

    def _run_steps(self, scenario: AuthScenario, context: ScenarioContext) -> ScenarioResult:
        self._publisher.publish(
            TestCaseStarted(
                case_name=scenario.name, location=scenario.location, timestamp=self._clock()
            )
        )
        case_started = time.perf_counter()
        failure: TestResult | None = None

        for step in scenario.steps:
            self._publisher.publish(
                TestStepStarted(
                    case_name=scenario.name, location=step.text, timestamp=self._clock()
                )
            )
            if failure is not None:
                step_result = TestResult(status=ResultStatus.SKIPPED)
            else:
                step_result = _execute_step(step.action, context)
                if step_result.status is not ResultStatus.PASSED:
                    failure = step_result
            self._publisher.publish(
                TestStepFinished(
                    case_name=scenario.name,
                    location=step.text,
                    timestamp=self._clock(),
                    result=step_result,
                )
            )

        duration = timedelta(seconds=time.perf_counter() - case_started)
        case_result = TestResult(
            status=failure.status if failure else ResultStatus.PASSED,
            duration=duration,
            error_message=failure.error_message if failure else None,
        )
        self._publisher.publish(
            TestCaseFinished(
                case_name=scenario.name,
                location=scenario.location,
                timestamp=self._clock(),
                result=case_result,
            )
        )
        LOGGER.info("Scenario '%s': %s", scenario.name, case_result.status.value)
        return ScenarioResult(
            name=scenario.name,
            status=case_result.status,
            duration=duration,
            error_message=case_result.error_message,
        )


def _execute_step(action: StepAction, context: ScenarioContext) -> TestResult:
    started = time.perf_counter()
    try:
        action(context)
    except AssertionError as exc:
        status, message = ResultStatus.FAILED, str(exc)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        status, message = ResultStatus.ERROR, f"{type(exc).__name__}: {exc}"
    else:
        status, message = ResultStatus.PASSED, None
    return TestResult(
        status=status,
        duration=timedelta(seconds=time.perf_counter() - started),
        error_message=message,
    )
