"""Quote inputs, results, and the rounding policy.

Inputs are plain frozen dataclasses: they accept raw strings for mode and
priority so that the engine, not the constructor, reports unsupported
values with a typed error. Results are frozen pydantic models so the
service layer can serialize them as-is.

INVARIANT: rounding is applied once, when a result is built from
unrounded intermediates. Volumes keep 3 decimals, every weight, mass and
amount keeps 2.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, localcontext

from pydantic import BaseModel

from freightctl.domain.types import Priority, TaxableUnit, TransportMode

VOLUME_DECIMALS = 3
AMOUNT_DECIMALS = 2


def round_half_up(value: float, places: int) -> float:
    """Round *value* half away from zero on its decimal representation.

    ``round()`` works on the binary float and rounds half to even, so
    60.125 would come out as 60.12. Quantizing ``str(value)`` keeps what
    the user sees on a receipt.
    """
    exact = Decimal(str(value))
    exp = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        # room for every integer digit plus *places* decimals
        ctx.prec = max(ctx.prec, exact.adjusted() + places + 2)
        return float(exact.quantize(exp, rounding=ROUND_HALF_UP))


def round_volume(value: float) -> float:
    return round_half_up(value, VOLUME_DECIMALS)


def round_amount(value: float) -> float:
    return round_half_up(value, AMOUNT_DECIMALS)


# ---------------------------------------------------------------------------
# Lane
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Lane:
    """Origin/destination country pair, normalized to uppercase."""

    origin: str
    destination: str

    @classmethod
    def of(cls, origin: str, destination: str) -> Lane:
        return cls(origin.strip().upper(), destination.strip().upper())

    @property
    def key(self) -> str:
        """Tariff table key, e.g. ``FR-CI``."""
        return f"{self.origin}-{self.destination}"

    @property
    def label(self) -> str:
        """Display label, e.g. ``FR → CI``."""
        return f"{self.origin} → {self.destination}"


class LaneInfo(BaseModel):
    """Lane descriptor carried by results."""

    model_config = {"frozen": True}

    origin: str
    destination: str
    label: str

    @classmethod
    def from_lane(cls, lane: Lane) -> LaneInfo:
        return cls(origin=lane.origin, destination=lane.destination, label=lane.label)


# ---------------------------------------------------------------------------
# Single-package quote
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class QuotePricingInput:
    """Physical attributes and routing of one package.

    Weight in kg, dimensions in cm. *priority* defaults to STANDARD.
    """

    actual_weight_kg: float
    length_cm: float
    width_cm: float
    height_cm: float
    mode: TransportMode | str
    origin_code: str
    destination_code: str
    priority: Priority | str | None = None

    @property
    def lane(self) -> Lane:
        return Lane.of(self.origin_code, self.destination_code)


class QuotePricingResult(BaseModel):
    """Fully itemized price of one package.

    Attributes:
        volume_m3: Package volume, 3 decimals.
        volumetric_weight: Volume-derived weight (kg, or tonnes-equivalent
            for SEA).
        taxable_mass: Billable quantity, expressed in *taxable_unit*.
        unit_tariff: Tariff applied per taxable unit.
        base_cost: ``taxable_mass × unit_tariff`` before priority.
        priority_coefficient: Multiplier for *priority*.
        priority_surcharge: Amount added by the priority multiplier.
        final_price: ``base_cost × priority_coefficient``.
        billed_on_volume: True when the volume, not the actual weight,
            drove the taxable mass.
        lane_tariff_used: False when the mode's default tariff was used
            because the lane is not configured.
    """

    model_config = {"frozen": True}

    volume_m3: float
    volumetric_weight: float
    taxable_mass: float
    taxable_unit: TaxableUnit
    unit_tariff: float
    base_cost: float
    priority_coefficient: float
    priority_surcharge: float
    final_price: float
    currency: str
    lane: LaneInfo
    mode: TransportMode
    priority: Priority
    billed_on_volume: bool
    lane_tariff_used: bool


# ---------------------------------------------------------------------------
# Multi-package quote
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PackageLine:
    """*quantity* identical packages. Weight and dimensions are per unit."""

    weight_kg: float
    length_cm: float
    width_cm: float
    height_cm: float
    quantity: int = 1
    description: str | None = None


@dataclass(frozen=True)
class MultiPackageInput:
    """Several package lines shipped together on one lane and mode."""

    mode: TransportMode | str
    origin_code: str
    destination_code: str
    packages: list[PackageLine] = field(default_factory=list)
    priority: Priority | str | None = None

    @property
    def lane(self) -> Lane:
        return Lane.of(self.origin_code, self.destination_code)


class PackageLineResult(BaseModel):
    """Price of one package line. *detail* is the unit quote at STANDARD."""

    model_config = {"frozen": True}

    description: str | None = None
    quantity: int
    weight_kg: float
    unit_price: float
    line_total: float
    detail: QuotePricingResult


class MultiPackageResult(BaseModel):
    """Aggregated price of a multi-package shipment.

    The priority coefficient is applied once, to the sum of line totals.
    """

    model_config = {"frozen": True}

    lines: list[PackageLineResult]
    total_package_count: int
    total_weight_kg: float
    total_before_priority: float
    priority_coefficient: float
    priority_surcharge: float
    total_price: float
    currency: str
    lane: LaneInfo
    mode: TransportMode
    priority: Priority
    lane_tariff_used: bool
