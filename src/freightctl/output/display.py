"""Human-readable presentation of a priced quote.

Pure and presentation-only: builds label strings from an already-valid
result and never raises.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from freightctl.domain.quote import QuotePricingResult
from freightctl.domain.types import TaxableUnit

ADVISORY_BILLED_ON_VOLUME = (
    "Billed on volume: the package is light for its size, "
    "so its volumetric weight is used for pricing."
)
ADVISORY_PAYABLE_UNIT = (
    "Sea freight is priced in payable units: 1 payable unit = max(1 tonne, 1 m³)."
)
ADVISORY_DEFAULT_TARIFF = (
    "Indicative price: this lane has no configured tariff, "
    "the default tariff for the transport mode was used."
)


@dataclass(frozen=True)
class QuoteDisplay:
    total_price_label: str
    detail_lines: list[str] = field(default_factory=list)
    advisories: list[str] = field(default_factory=list)


def _money(amount: float, currency: str) -> str:
    return f"{amount:.2f} {currency}"


def _coefficient(value: float) -> str:
    return f"{value:g}"


def format_for_display(result: QuotePricingResult) -> QuoteDisplay:
    """Turn a quote result into a total label, ordered detail lines, and advisories."""
    unit = result.taxable_unit.value
    currency = result.currency

    lines = [
        f"Lane: {result.lane.label} ({result.mode.value})",
        f"Volume: {result.volume_m3} m³",
        f"Volumetric weight: {result.volumetric_weight} {unit}",
        f"Taxable mass: {result.taxable_mass} {unit}",
        f"Tariff: {result.unit_tariff} {currency}/{unit}",
        f"Base cost: {_money(result.base_cost, currency)}",
    ]
    if result.priority_coefficient != 1:
        lines.append(
            f"Priority surcharge ({result.priority.value}, "
            f"×{_coefficient(result.priority_coefficient)}): "
            f"+{_money(result.priority_surcharge, currency)}"
        )

    advisories: list[str] = []
    if result.billed_on_volume:
        advisories.append(ADVISORY_BILLED_ON_VOLUME)
    if result.taxable_unit is TaxableUnit.PAYABLE_UNIT:
        advisories.append(ADVISORY_PAYABLE_UNIT)
    if not result.lane_tariff_used:
        advisories.append(ADVISORY_DEFAULT_TARIFF)

    return QuoteDisplay(
        total_price_label=_money(result.final_price, currency),
        detail_lines=lines,
        advisories=advisories,
    )
