"""Shared pytest fixtures for freightctl tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from freightctl.domain.quote import QuotePricingInput
from freightctl.infrastructure.tariffs import TariffRepository, TariffTable
from freightctl.services.pricing import PricingService
from freightctl.services.telemetry import _current_span, disable_telemetry


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def reference_table() -> TariffTable:
    """The built-in reference tariff table."""
    return TariffTable.reference()


@pytest.fixture
def repository(reference_table: TariffTable) -> TariffRepository:
    return TariffRepository(reference_table)


@pytest.fixture
def pricing(repository: TariffRepository) -> PricingService:
    return PricingService(repository)


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path]:
    """Run in an empty directory so no stray freightctl.toml is discovered.

    Use via ``@pytest.mark.usefixtures("_isolated_cwd")`` on command test
    classes.
    """
    monkeypatch.delenv("FREIGHTCTL_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
    yield tmp_path


QUOTE_DEFAULTS: dict[str, object] = {
    "actual_weight_kg": 5,
    "length_cm": 50,
    "width_cm": 40,
    "height_cm": 30,
    "mode": "AIR",
    "origin_code": "FR",
    "destination_code": "CI",
}


@pytest.fixture
def make_input() -> Callable[..., QuotePricingInput]:
    """Factory for quote inputs. Defaults: 5 kg, 50×40×30 cm, AIR, FR → CI."""

    def _make(**overrides: object) -> QuotePricingInput:
        return QuotePricingInput(**{**QUOTE_DEFAULTS, **overrides})  # type: ignore[arg-type]

    return _make


@pytest.fixture(autouse=True)
def _reset_global_state() -> Generator[None]:
    """Undo what AppContext sets up: root log handlers and verbose telemetry."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("freightctl").setLevel(logging.NOTSET)
    structlog.reset_defaults()
    disable_telemetry()
    _current_span.set(None)
