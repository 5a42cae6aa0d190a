"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, freightctl.toml only contains
overrides. A fresh install prices every reference lane with no config
file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from freightctl.domain.types import TransportMode

# --- Reference tariffs (EUR per taxable unit; midpoints of published ranges) ---

REFERENCE_LANE_TARIFFS: dict[str, dict[TransportMode, float]] = {
    "FR-CI": {TransportMode.AIR: 6.0, TransportMode.SEA: 305},
    "FR-BF": {TransportMode.AIR: 7.25, TransportMode.SEA: 465},
    "CI-BF": {TransportMode.AIR: 4.0, TransportMode.ROAD: 135},
    "BF-FR": {TransportMode.AIR: 10.5, TransportMode.SEA: 375},
    "CI-FR": {TransportMode.AIR: 6.0, TransportMode.SEA: 305},
    "BF-CI": {TransportMode.AIR: 4.0, TransportMode.ROAD: 135},
}

DEFAULT_MODE_TARIFFS: dict[TransportMode, float] = {
    TransportMode.AIR: 8.0,
    TransportMode.SEA: 400,
    TransportMode.ROAD: 150,
    TransportMode.RAIL: 100,
}


def _check_positive(tariffs: dict[TransportMode, float], where: str) -> None:
    for mode, value in tariffs.items():
        if value <= 0:
            msg = f"{where}: tariff for {mode} must be positive (got {value})"
            raise ValueError(msg)


# --- freightctl.toml sections ---


class PricingConfig(BaseModel):
    """[pricing] section."""

    model_config = {"frozen": True}

    currency: str = "EUR"


class TariffsConfig(BaseModel):
    """[tariffs] section.

    ``lanes`` and ``defaults`` are overrides layered on top of the reference
    tables, mode by mode. Set ``include_reference = false`` to price only
    the lanes listed here.
    """

    model_config = {"frozen": True}

    include_reference: bool = True
    lanes: dict[str, dict[TransportMode, float]] = Field(default_factory=dict)
    defaults: dict[TransportMode, float] = Field(default_factory=dict)

    @field_validator("lanes")
    @classmethod
    def _normalize_lanes(
        cls, value: dict[str, dict[TransportMode, float]]
    ) -> dict[str, dict[TransportMode, float]]:
        normalized: dict[str, dict[TransportMode, float]] = {}
        for key, tariffs in value.items():
            lane_key = key.strip().upper()
            if lane_key.count("-") != 1 or not all(lane_key.split("-")):
                msg = f"Lane key must look like 'FR-CI' (got {key!r})"
                raise ValueError(msg)
            _check_positive(tariffs, lane_key)
            normalized.setdefault(lane_key, {}).update(tariffs)
        return normalized

    @field_validator("defaults")
    @classmethod
    def _positive_defaults(cls, value: dict[TransportMode, float]) -> dict[TransportMode, float]:
        _check_positive(value, "defaults")
        return value

    def lane_tariffs(self) -> dict[str, dict[TransportMode, float]]:
        """Effective lane table: reference (if included) plus overrides."""
        merged: dict[str, dict[TransportMode, float]] = {}
        if self.include_reference:
            merged = {k: dict(v) for k, v in REFERENCE_LANE_TARIFFS.items()}
        for key, tariffs in self.lanes.items():
            merged.setdefault(key, {}).update(tariffs)
        return merged

    def default_tariffs(self) -> dict[TransportMode, float]:
        """Effective per-mode fallback tariffs. Every mode always has one."""
        return {**DEFAULT_MODE_TARIFFS, **self.defaults}


class FreightConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    pricing: PricingConfig = Field(default_factory=PricingConfig)
    tariffs: TariffsConfig = Field(default_factory=TariffsConfig)
