"""Volumetric weight and taxable mass rules.

Light, bulky cargo is billed on the space it takes rather than its mass.
Each mode converts volume with its own ratio (``VOLUMETRIC_RATIOS``):
the costlier the space, the higher the ratio.

Sea freight bills in payable units: one unit is the greater of one tonne
or one cubic metre, so actual weight is compared in tonnes against the
raw volume.
"""

from __future__ import annotations

from dataclasses import dataclass

from freightctl.domain.types import (
    VOLUMETRIC_RATIOS,
    TaxableUnit,
    TransportMode,
    parse_mode,
)

KG_PER_TONNE = 1000


@dataclass(frozen=True)
class TaxableMass:
    """The billable quantity chosen for a shipment."""

    mass: float
    unit: TaxableUnit
    billed_on_volume: bool


def compute_volumetric_weight(volume_m3: float, mode: TransportMode | str) -> float:
    """Convert *volume_m3* to an equivalent weight for *mode*.

    Returns kg for AIR, ROAD and RAIL; tonnes-equivalent (same magnitude as
    m³) for SEA.

    Raises:
        UnsupportedModeError: If *mode* is not a known transport mode.
    """
    return volume_m3 * VOLUMETRIC_RATIOS[parse_mode(mode)]


def resolve_taxable_mass(
    actual_weight_kg: float,
    volumetric_weight: float,
    volume_m3: float,
    mode: TransportMode | str,
) -> TaxableMass:
    """Pick the billable mass between actual and volume-derived figures."""
    mode = parse_mode(mode)
    if mode is TransportMode.SEA:
        weight_t = actual_weight_kg / KG_PER_TONNE
        return TaxableMass(
            mass=max(weight_t, volume_m3),
            unit=TaxableUnit.PAYABLE_UNIT,
            billed_on_volume=volume_m3 > weight_t,
        )
    return TaxableMass(
        mass=max(actual_weight_kg, volumetric_weight),
        unit=TaxableUnit.KG,
        billed_on_volume=volumetric_weight > actual_weight_kg,
    )
