"""Tests for the root freightctl CLI."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from freightctl import __version__
from freightctl.cli import cli

pytestmark = pytest.mark.usefixtures("_isolated_cwd")


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "freightctl" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


@pytest.mark.parametrize("flag", ["--json", "-q", "-v", "--log-json"])
def test_global_flag_accepted(cli_runner: CliRunner, flag: str) -> None:
    result = cli_runner.invoke(cli, [flag, "--version"])
    assert result.exit_code == 0


@pytest.mark.parametrize("name", ["quote", "quote-multi", "tariffs"])
def test_commands_registered(cli_runner: CliRunner, name: str) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert name in result.output


def test_verbose_shows_telemetry(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(
        cli,
        ["-v", "quote", "-w", "5", "-l", "50", "-W", "40", "-H", "30", "-m", "AIR"]
        + ["--from", "FR", "--to", "CI"],
    )
    assert result.exit_code == 0
    assert "PricingService.quote" in result.stdout
    assert "volumetric_weight" in result.stdout


def test_config_flag(cli_runner: CliRunner, tmp_path: Path) -> None:
    custom = tmp_path / "rates.toml"
    custom.write_text("[tariffs.lanes.SN-FR]\nAIR = 5.5\n")
    result = cli_runner.invoke(
        cli, ["--json", "-c", str(custom), "tariffs", "lookup", "SN", "FR", "--mode", "AIR"]
    )
    assert result.exit_code == 0
    assert json.loads(result.stdout)["data"]["tariff"] == 5.5


def test_invalid_config_reports_error(cli_runner: CliRunner, tmp_path: Path) -> None:
    (tmp_path / "freightctl.toml").write_text("[pricing\n")
    result = cli_runner.invoke(cli, ["tariffs", "show"])
    assert result.exit_code == 1
    assert "Invalid TOML" in result.stderr


def test_invalid_tariff_mode_reports_error(cli_runner: CliRunner, tmp_path: Path) -> None:
    (tmp_path / "freightctl.toml").write_text("[tariffs.lanes.FR-CI]\nTRUCK = 5\n")
    result = cli_runner.invoke(cli, ["tariffs", "show"])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.stderr
    assert "Traceback" not in result.output
