"""CLI orchestration integration tests."""

from __future__ import annotations

import json
from functools import partial
from pathlib import Path

import httpx
import pytest
import yaml
from auth_contract_tester import cli as cli_module
from auth_contract_tester.cli import cli
from auth_contract_tester.scenario_execution import execute_auth_contract_run
from click.testing import CliRunner


def _write_config(tmp_path: Path) -> Path:
    config = {
        "target": {"base_uri": "http://auth.test:3000", "endpoint_path": "/auth"},
        "report": {"path": "reports/detailed-api-report.txt"},
    }
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(config), encoding="utf-8")
    return path


def _use_transport(monkeypatch: pytest.MonkeyPatch, handler) -> None:
    factory = lambda: httpx.Client(transport=httpx.MockTransport(handler))  # noqa: E731
    monkeypatch.setattr(
        cli_module,
        "execute_auth_contract_run",
        partial(execute_auth_contract_run, client_factory=factory),
    )


def _strict_auth_server(request: httpx.Request) -> httpx.Response:
    body = json.loads(request.content)
    if body == {"user_name": "user", "password": "password"}:
        return httpx.Response(200, json={"token": "abc"})
    return httpx.Response(401, json={"message": "Invalid credentials"})


def test_generate_config_command_writes_scaffold(tmp_path: Path) -> None:
    runner = CliRunner()
    output_path = tmp_path / "config.yaml"

    result = runner.invoke(cli, ["generate-config", "--output", str(output_path)])

    assert result.exit_code == 0
    assert output_path.exists()
    assert str(output_path.resolve()) in result.output


def test_run_command_reports_results_and_report_path(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    _use_transport(monkeypatch, _strict_auth_server)
    config_path = _write_config(tmp_path)

    result = CliRunner().invoke(cli, ["run", "--config", str(config_path)])

    assert result.exit_code == 0, result.output
    assert "PASSED  Valid authentication with correct credentials" in result.output
    assert "PASSED  Authentication with empty credentials" in result.output
    report_path = (tmp_path / "reports" / "detailed-api-report.txt").resolve()
    assert str(report_path) in result.output
    assert "DETAILED API TEST REPORT" in report_path.read_text(encoding="utf-8")


def test_run_command_fails_when_a_scenario_fails(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    _use_transport(monkeypatch, lambda request: httpx.Response(500, text="Internal error"))
    config_path = _write_config(tmp_path)
    report_path = tmp_path / "override.txt"

    result = CliRunner().invoke(
        cli,
        [
            "run",
            "--config",
            str(config_path),
            "--report",
            str(report_path),
            "--scenario",
            "valid-authentication",
        ],
    )

    assert result.exit_code == 1
    assert "FAILED  Valid authentication with correct credentials" in result.output
    assert "1 of 1 scenario(s) did not pass." in str(result.exception)
    assert report_path.exists()
