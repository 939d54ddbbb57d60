"""Authentication contract scenarios composed from harness steps."""

from __future__ import annotations

from collections.abc import Callable, Collection
from dataclasses import dataclass

from auth_contract_tester.contract_harness import (
    AuthContractHarness,
    ResponseRecord,
    assert_field_present,
    assert_status,
    assert_status_in,
)
from auth_contract_tester.credential_fixtures import (
    EMPTY_FIXTURE,
    INVALID_FIXTURE,
    VALID_FIXTURE,
    CredentialSet,
    FixtureRegistry,
)

SCENARIO_SOURCE = "auth_contract_tester/scenarios/authentication"


@dataclass
class ScenarioContext:
    """Mutable state owned by one scenario execution."""

    registry: FixtureRegistry
    harness: AuthContractHarness
    credentials: CredentialSet | None = None
    response: ResponseRecord | None = None

    def require_credentials(self) -> CredentialSet:
        if self.credentials is None:
            raise RuntimeError("No credentials selected for this scenario.")
        return self.credentials

    def require_response(self) -> ResponseRecord:
        if self.response is None:
            raise RuntimeError("No authentication request has been sent in this scenario.")
        return self.response


StepAction = Callable[[ScenarioContext], None]


@dataclass(frozen=True)
class ScenarioStep:
    text: str
    action: StepAction


@dataclass(frozen=True)
class AuthScenario:
    key: str
    name: str
    steps: tuple[ScenarioStep, ...]

    @property
    def location(self) -> str:
        return f"{SCENARIO_SOURCE}#{self.key}"


def given_credentials(fixture_name: str) -> ScenarioStep:
    def action(context: ScenarioContext) -> None:
        context.credentials = context.registry.get_fixture(fixture_name)

    return ScenarioStep(f"Given the user has {fixture_name} credentials", action)


def when_credentials_are_posted() -> ScenarioStep:
    def action(context: ScenarioContext) -> None:
        context.response = context.harness.send(context.require_credentials())

    return ScenarioStep("When the user posts user_name and password to the auth endpoint", action)


def then_status_is(expected_code: int) -> ScenarioStep:
    def action(context: ScenarioContext) -> None:
        assert_status(context.require_response(), expected_code)

    return ScenarioStep(f"Then the response status is {expected_code}", action)


def then_status_is_one_of(expected_codes: Collection[int]) -> ScenarioStep:
    codes = tuple(sorted(expected_codes))

    def action(context: ScenarioContext) -> None:
        assert_status_in(context.require_response(), codes)

    listed = " or ".join(str(code) for code in codes)
    return ScenarioStep(f"Then the response status is {listed}", action)


def then_field_is_present(field_path: str) -> ScenarioStep:
    def action(context: ScenarioContext) -> None:
        assert_field_present(context.require_response(), field_path)

    return ScenarioStep(f"And the JSON response contains '{field_path}'", action)


AUTH_SCENARIOS: tuple[AuthScenario, ...] = (
    AuthScenario(
        key="valid-authentication",
        name="Valid authentication with correct credentials",
        steps=(
            given_credentials(VALID_FIXTURE),
            when_credentials_are_posted(),
            then_status_is(200),
            then_field_is_present("token"),
        ),
    ),
    AuthScenario(
        key="invalid-authentication",
        name="Invalid authentication with incorrect credentials",
        steps=(
            given_credentials(INVALID_FIXTURE),
            when_credentials_are_posted(),
            then_status_is(401),
            then_field_is_present("message"),
        ),
    ),
    AuthScenario(
        key="empty-credentials",
        name="Authentication with empty credentials",
        # Servers differ on empty input; both rejections satisfy the contract.
        steps=(
            given_credentials(EMPTY_FIXTURE),
            when_credentials_are_posted(),
            then_status_is_one_of({400, 401}),
        ),
    ),
)


def select_scenarios(keys: Collection[str] = ()) -> tuple[AuthScenario, ...]:
    """Return the scenarios named by ``keys`` in declaration order, or all of them."""
    if not keys:
        return AUTH_SCENARIOS
    known = {scenario.key for scenario in AUTH_SCENARIOS}
    unknown = sorted(set(keys) - known)
    if unknown:
        raise ValueError(f"Unknown scenario(s): {', '.join(unknown)}")
    return tuple(scenario for scenario in AUTH_SCENARIOS if scenario.key in keys)
