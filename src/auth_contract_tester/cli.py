"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from auth_contract_tester.configuration import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    load_configuration,
    write_placeholder_configuration,
)
from auth_contract_tester.credential_fixtures import build_default_registry
from auth_contract_tester.lifecycle_reporting import ResultStatus
from auth_contract_tester.scenario_execution import (
    AUTH_SCENARIOS,
    RunExecutionError,
    RunRequest,
    execute_auth_contract_run,
)

LOG_FORMAT = "%(asctime)s %(levelname)s:%(name)s:%(message)s"


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="auth-contract-tester")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log request/response details.")
def cli(verbose: bool) -> None:
    """Contract tester for authentication HTTP endpoints."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML test configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML test configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="list-fixtures")
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional YAML/JSON test configuration with credential overrides",
)
def list_fixtures(config_path: str | None) -> None:
    """List the registered credential fixtures and available scenarios."""
    overrides = {}
    if config_path:
        try:
            overrides = load_configuration(config_path).credential_overrides
        except ConfigurationError as exc:
            raise CliError(str(exc)) from exc
    registry = build_default_registry(overrides)
    for name in registry.names():
        fixture = registry.get_fixture(name)
        click.echo(f"fixture  {name}: user_name={fixture.user_name!r}")
    for scenario in AUTH_SCENARIOS:
        click.echo(f"scenario {scenario.key}: {scenario.name}")


@cli.command(name="run")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON test configuration file",
)
@click.option(
    "--report",
    "report_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional path of the detailed report; overrides report.path",
)
@click.option(
    "--scenario",
    "scenario_names",
    multiple=True,
    help="Scenario key to run; repeat to select several. Defaults to all.",
)
def run_scenarios(
    config_path: str, report_path: str | None, scenario_names: tuple[str, ...]
) -> None:
    """Run the authentication contract scenarios against the configured endpoint."""
    try:
        outcome = execute_auth_contract_run(
            RunRequest(
                config_path=config_path,
                report_path=report_path,
                scenario_names=scenario_names,
            )
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc

    for result in outcome.results:
        line = f"{result.status.value:<7} {result.name}"
        if result.error_message:
            line = f"{line} - {result.error_message}"
        click.echo(line)
    click.echo(str(outcome.report_path))
    if not outcome.passed:
        failed = sum(1 for result in outcome.results if result.status is not ResultStatus.PASSED)
        raise CliError(f"{failed} of {len(outcome.results)} scenario(s) did not pass.")


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
