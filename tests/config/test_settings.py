"""Tests for FreightSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from freightctl.config.settings import FreightSettings
from freightctl.domain.types import TransportMode


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("FREIGHTCTL_CONFIG", "FREIGHTCTL_QUIET", "FREIGHTCTL_PRICING__CURRENCY"):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = FreightSettings.from_cli(cwd=tmp_path)
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.verbose is False
        assert settings.log_json is False
        assert settings.pricing.currency == "EUR"
        assert settings.tariffs.include_reference is True

    def test_frozen(self, tmp_path: Path) -> None:
        settings = FreightSettings.from_cli(cwd=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        toml = tmp_path / "freightctl.toml"
        toml.write_text('[pricing]\ncurrency = "XOF"\n[tariffs.lanes.FR-CI]\nAIR = 5.9\n')
        settings = FreightSettings.from_cli(cwd=tmp_path)
        assert settings.config_path == toml
        assert settings.pricing.currency == "XOF"
        assert settings.tariffs.lane_tariffs()["FR-CI"][TransportMode.AIR] == 5.9
        assert settings.tariffs.lane_tariffs()["FR-BF"][TransportMode.SEA] == 465

    def test_discovered_from_subdirectory(self, tmp_path: Path) -> None:
        (tmp_path / "freightctl.toml").write_text('[pricing]\ncurrency = "USD"\n')
        sub = tmp_path / "quotes" / "2026"
        sub.mkdir(parents=True)
        assert FreightSettings.from_cli(cwd=sub).pricing.currency == "USD"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "rates.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text("[tariffs]\ninclude_reference = false\n")
        settings = FreightSettings.from_cli(config_path=str(custom), cwd=tmp_path)
        assert settings.config_path == custom
        assert settings.tariffs.lane_tariffs() == {}

    def test_missing_explicit_path_uses_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "freightctl.toml").write_text('[pricing]\ncurrency = "USD"\n')
        settings = FreightSettings.from_cli(config_path=str(tmp_path / "nope.toml"), cwd=tmp_path)
        assert settings.config_path is None
        assert settings.pricing.currency == "EUR"

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "freightctl.toml").write_text("[pricing\ncurrency = ")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            FreightSettings.from_cli(cwd=tmp_path)

    def test_unknown_mode_key(self, tmp_path: Path) -> None:
        toml = tmp_path / "freightctl.toml"
        toml.write_text("[tariffs.lanes.FR-CI]\nTRUCK = 5\n")
        with pytest.raises(click.ClickException, match="Invalid configuration in") as exc_info:
            FreightSettings.from_cli(cwd=tmp_path)
        assert str(toml) in exc_info.value.message


class TestPriority:
    def test_cli_flags(self, tmp_path: Path) -> None:
        settings = FreightSettings.from_cli(
            cwd=tmp_path, json_output=True, quiet=True, verbose=True, log_json=True
        )
        assert settings.json_output is True
        assert settings.quiet is True
        assert settings.verbose is True
        assert settings.log_json is True

    def test_cli_flags_override_toml(self, tmp_path: Path) -> None:
        (tmp_path / "freightctl.toml").write_text("quiet = true\n")
        assert FreightSettings.from_cli(cwd=tmp_path).quiet is True
        assert FreightSettings.from_cli(cwd=tmp_path, quiet=False).quiet is False

    def test_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FREIGHTCTL_QUIET", "true")
        assert FreightSettings.from_cli(cwd=tmp_path).quiet is True

    def test_nested_env_beats_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "freightctl.toml").write_text('[pricing]\ncurrency = "USD"\n')
        monkeypatch.setenv("FREIGHTCTL_PRICING__CURRENCY", "GBP")
        assert FreightSettings.from_cli(cwd=tmp_path).pricing.currency == "GBP"
