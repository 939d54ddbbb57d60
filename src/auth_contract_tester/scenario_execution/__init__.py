"""Scenario execution domain exports."""

from .auth_scenarios import AUTH_SCENARIOS, AuthScenario, ScenarioStep, select_scenarios
from .run_contracts import RunOutcome, RunRequest, ScenarioResult
from .scenario_run_use_case import RunExecutionError, execute_auth_contract_run

__all__ = [
    "AUTH_SCENARIOS",
    "AuthScenario",
    "ScenarioStep",
    "select_scenarios",
    "RunRequest",
    "RunOutcome",
    "ScenarioResult",
    "RunExecutionError",
    "execute_auth_contract_run",
]
