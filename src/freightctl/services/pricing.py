"""Pricing engine and PricingService.

Pipeline: VOLUME → VOLUMETRIC WEIGHT → TAXABLE MASS → TARIFF → PRICE

``calculate_quote`` and ``calculate_multi_package_quote`` are pure
functions over their input and one tariff table snapshot; they raise
:class:`~freightctl.domain.errors.PricingError` subclasses on invalid
input. :class:`PricingService` wraps them in ServiceResult envelopes.
"""

from __future__ import annotations

import math

from freightctl.domain.errors import (
    AmountOverflowError,
    EmptyShipmentError,
    InvalidQuantityError,
    InvalidWeightError,
    PricingError,
)
from freightctl.domain.geometry import compute_volume
from freightctl.domain.quote import (
    LaneInfo,
    MultiPackageInput,
    MultiPackageResult,
    PackageLineResult,
    QuotePricingInput,
    QuotePricingResult,
    round_amount,
    round_volume,
)
from freightctl.domain.types import (
    PRIORITY_COEFFICIENTS,
    Priority,
    TransportMode,
    parse_mode,
    parse_priority,
)
from freightctl.domain.weights import compute_volumetric_weight, resolve_taxable_mass
from freightctl.infrastructure.tariffs import TariffTable
from freightctl.services.base import BaseService
from freightctl.services.result import ServiceResult
from freightctl.services.telemetry import trace_span, traced

DEFAULT_CURRENCY = "EUR"


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


def calculate_quote(
    pricing_input: QuotePricingInput,
    tariffs: TariffTable,
    *,
    currency: str = DEFAULT_CURRENCY,
) -> QuotePricingResult:
    """Price one package.

    Validation failures abort before the tariff lookup. Intermediates stay
    unrounded; rounding happens only when the result is built.

    Raises:
        InvalidWeightError: actual weight is zero, negative or not finite.
        InvalidDimensionError: a dimension is zero, negative or not finite.
        AmountOverflowError: an intermediate amount overflows a float.
        UnsupportedModeError: the mode is not a known transport mode.
        UnsupportedPriorityError: the priority is not a known level.
    """
    weight = pricing_input.actual_weight_kg
    if not (math.isfinite(weight) and weight > 0):
        raise InvalidWeightError(weight)
    priority = parse_priority(pricing_input.priority)

    with trace_span("volume"):
        volume = compute_volume(
            pricing_input.length_cm, pricing_input.width_cm, pricing_input.height_cm
        )

    with trace_span("volumetric_weight"):
        volumetric_weight = compute_volumetric_weight(volume, pricing_input.mode)
    mode = parse_mode(pricing_input.mode)

    with trace_span("taxable_mass") as span:
        taxable = resolve_taxable_mass(
            pricing_input.actual_weight_kg, volumetric_weight, volume, mode
        )
        if span:
            span.annotate("billed_on_volume", taxable.billed_on_volume)

    with trace_span("tariff") as span:
        lookup = tariffs.lookup(pricing_input.origin_code, pricing_input.destination_code, mode)
        if span:
            span.annotate("from_lane", lookup.from_lane)

    base_cost = taxable.mass * lookup.tariff
    coefficient = PRIORITY_COEFFICIENTS[priority]
    final_price = base_cost * coefficient
    _require_finite(final_price, "final_price")

    return QuotePricingResult(
        volume_m3=round_volume(volume),
        volumetric_weight=round_amount(volumetric_weight),
        taxable_mass=round_amount(taxable.mass),
        taxable_unit=taxable.unit,
        unit_tariff=lookup.tariff,
        base_cost=round_amount(base_cost),
        priority_coefficient=coefficient,
        priority_surcharge=round_amount(base_cost * (coefficient - 1)),
        final_price=round_amount(final_price),
        currency=currency,
        lane=LaneInfo.from_lane(lookup.lane),
        mode=mode,
        priority=priority,
        billed_on_volume=taxable.billed_on_volume,
        lane_tariff_used=lookup.from_lane,
    )


def calculate_multi_package_quote(
    shipment: MultiPackageInput,
    tariffs: TariffTable,
    *,
    currency: str = DEFAULT_CURRENCY,
) -> MultiPackageResult:
    """Price several package lines shipped together.

    Each line is priced per unit at STANDARD priority and multiplied by its
    quantity. The shipment priority is applied once, to the grand total.

    Raises:
        EmptyShipmentError: no package lines.
        InvalidQuantityError: a line has quantity below 1.
        AmountOverflowError: a shipment total overflows a float.
        PricingError: any single-package failure, with ``field`` prefixed
            by the line index.
    """
    if not shipment.packages:
        raise EmptyShipmentError()
    priority = parse_priority(shipment.priority)
    mode = parse_mode(shipment.mode)

    lines: list[PackageLineResult] = []
    total_before_priority = 0.0
    total_weight = 0.0
    total_count = 0
    lane_tariff_used = True

    for index, package in enumerate(shipment.packages):
        if package.quantity < 1:
            raise InvalidQuantityError(index, package.quantity)
        try:
            detail = calculate_quote(
                QuotePricingInput(
                    actual_weight_kg=package.weight_kg,
                    length_cm=package.length_cm,
                    width_cm=package.width_cm,
                    height_cm=package.height_cm,
                    mode=mode,
                    origin_code=shipment.origin_code,
                    destination_code=shipment.destination_code,
                    priority=Priority.STANDARD,
                ),
                tariffs,
                currency=currency,
            )
        except PricingError as exc:
            exc.field = f"packages[{index}].{exc.field}"
            raise

        unit_price = detail.final_price
        line_total = unit_price * package.quantity
        _require_finite(line_total, f"packages[{index}].line_total")
        lines.append(
            PackageLineResult(
                description=package.description,
                quantity=package.quantity,
                weight_kg=package.weight_kg,
                unit_price=unit_price,
                line_total=round_amount(line_total),
                detail=detail,
            )
        )
        total_before_priority += line_total
        total_weight += package.weight_kg * package.quantity
        total_count += package.quantity
        lane_tariff_used = lane_tariff_used and detail.lane_tariff_used

    coefficient = PRIORITY_COEFFICIENTS[priority]
    _require_finite(total_weight, "total_weight_kg")
    _require_finite(total_before_priority * coefficient, "total_price")
    return MultiPackageResult(
        lines=lines,
        total_package_count=total_count,
        total_weight_kg=round_amount(total_weight),
        total_before_priority=round_amount(total_before_priority),
        priority_coefficient=coefficient,
        priority_surcharge=round_amount(total_before_priority * (coefficient - 1)),
        total_price=round_amount(total_before_priority * coefficient),
        currency=currency,
        lane=LaneInfo.from_lane(shipment.lane),
        mode=mode,
        priority=priority,
        lane_tariff_used=lane_tariff_used,
    )


def _require_finite(value: float, field: str) -> None:
    if not math.isfinite(value):
        raise AmountOverflowError(field)


def _fallback_warning(lane_label: str, mode: TransportMode, tariff: float, currency: str) -> str:
    return (
        f"No tariff configured for {lane_label} ({mode.value}); "
        f"default tariff {tariff} {currency} used, price is indicative"
    )


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class PricingService(BaseService):
    """Quotes and tariff inspection over the repository's current table."""

    @traced
    def quote(self, pricing_input: QuotePricingInput) -> ServiceResult:
        """Price a single package."""
        op = "quote"
        table = self._snapshot()
        try:
            result = calculate_quote(pricing_input, table, currency=self._currency)
        except PricingError as exc:
            return ServiceResult.failure(op, exc)

        warnings: list[str] = []
        if not result.lane_tariff_used:
            warnings.append(
                _fallback_warning(
                    result.lane.label, result.mode, result.unit_tariff, result.currency
                )
            )
        return ServiceResult(
            ok=True,
            op=op,
            data=result.model_dump(mode="json"),
            warnings=warnings,
        )

    @traced
    def quote_multi(self, shipment: MultiPackageInput) -> ServiceResult:
        """Price a multi-package shipment."""
        op = "quote_multi"
        table = self._snapshot()
        try:
            result = calculate_multi_package_quote(shipment, table, currency=self._currency)
        except PricingError as exc:
            return ServiceResult.failure(op, exc)

        warnings: list[str] = []
        if not result.lane_tariff_used:
            tariff = result.lines[0].detail.unit_tariff
            warnings.append(
                _fallback_warning(result.lane.label, result.mode, tariff, result.currency)
            )
        return ServiceResult(
            ok=True,
            op=op,
            data=result.model_dump(mode="json"),
            warnings=warnings,
        )

    @traced
    def lookup_tariff(
        self,
        origin: str,
        destination: str,
        mode: TransportMode | str,
    ) -> ServiceResult:
        """Resolve the unit tariff for one lane and mode."""
        op = "lookup_tariff"
        try:
            lookup = self._snapshot().lookup(origin, destination, mode)
        except PricingError as exc:
            return ServiceResult.failure(op, exc)

        mode = parse_mode(mode)
        warnings: list[str] = []
        if not lookup.from_lane:
            warnings.append(
                _fallback_warning(lookup.lane.label, mode, lookup.tariff, self._currency)
            )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "lane": lookup.lane.key,
                "mode": mode.value,
                "tariff": lookup.tariff,
                "currency": self._currency,
                "from_lane": lookup.from_lane,
            },
            warnings=warnings,
        )

    @traced
    def list_tariffs(self, mode: TransportMode | str | None = None) -> ServiceResult:
        """List configured lane tariffs, optionally for one mode."""
        op = "list_tariffs"
        table = self._snapshot()
        try:
            rows = table.rows(mode)
        except PricingError as exc:
            return ServiceResult.failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "items": rows,
                "count": len(rows),
                "defaults": {m.value: value for m, value in table.defaults.items()},
                "currency": self._currency,
            },
            meta={"tariff_version": self._repository.version},
        )
