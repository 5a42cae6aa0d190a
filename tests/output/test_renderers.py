"""Tests for operation-specific renderers."""

from __future__ import annotations

from collections.abc import Callable

from freightctl.domain.quote import MultiPackageInput, PackageLine, QuotePricingInput
from freightctl.output.renderers import render_quiet, render_result
from freightctl.services.pricing import PricingService
from freightctl.services.result import ServiceError, ServiceResult
from freightctl.services.telemetry import enable_telemetry

MakeInput = Callable[..., QuotePricingInput]


class TestQuoteRenderer:
    def test_lines_total_and_advisory(self, pricing: PricingService, make_input: MakeInput) -> None:
        output = render_result(pricing.quote(make_input(priority="URGENT")))
        assert output.startswith("OK  quote")
        assert "Lane: FR → CI (AIR)" in output
        assert "Priority surcharge (URGENT, ×1.3): +18.04 EUR" in output
        assert "Total: 78.16 EUR" in output
        assert "! Billed on volume" in output

    def test_quiet(self, pricing: PricingService, make_input: MakeInput) -> None:
        assert render_quiet(pricing.quote(make_input())) == "60.12 EUR"

    def test_verbose_shows_spans(self, pricing: PricingService, make_input: MakeInput) -> None:
        enable_telemetry()
        output = render_result(pricing.quote(make_input()), verbose=True)
        assert "meta:" in output
        assert "PricingService.quote" in output
        assert "tariff" in output


class TestQuoteMultiRenderer:
    def test_table_and_totals(self, pricing: PricingService) -> None:
        shipment = MultiPackageInput(
            mode="AIR",
            origin_code="FR",
            destination_code="BF",
            packages=[
                PackageLine(2, 30, 20, 5, description="Tablet"),
                PackageLine(15, 60, 40, 40, quantity=3),
            ],
            priority="URGENT",
        )
        output = render_result(pricing.quote_multi(shipment))
        assert "FR → BF (AIR)" in output
        assert "Tablet" in output
        assert "348.69" in output
        assert "before_priority: 363.19 EUR" in output
        assert "URGENT ×1.3 (+108.96 EUR)" in output
        assert "total: 472.15 EUR" in output
        assert render_quiet(pricing.quote_multi(shipment)) == "472.15 EUR"


class TestTariffRenderers:
    def test_lookup(self, pricing: PricingService) -> None:
        output = render_result(pricing.lookup_tariff("FR", "XX", "ROAD"))
        assert "lane: FR-XX" in output
        assert "tariff: 150.0 EUR" in output
        assert "source: default" in output

    def test_lookup_quiet(self, pricing: PricingService) -> None:
        assert render_quiet(pricing.lookup_tariff("FR", "CI", "AIR")) == "6.0 EUR"

    def test_list(self, pricing: PricingService) -> None:
        output = render_result(pricing.list_tariffs("ROAD"))
        assert "BF-CI" in output
        assert "CI-BF" in output
        assert "FR-CI" not in output
        assert "defaults: AIR=8, SEA=400, ROAD=150, RAIL=100" in output

    def test_list_quiet(self, pricing: PricingService) -> None:
        assert render_quiet(pricing.list_tariffs("ROAD")).splitlines() == [
            "BF-CI ROAD 135.0",
            "CI-BF ROAD 135.0",
        ]


class TestErrorRenderer:
    def test_error_with_field(self, pricing: PricingService, make_input: MakeInput) -> None:
        output = render_result(pricing.quote(make_input(width_cm=-1)))
        assert output.startswith("ERROR  quote — non-positive dimension")
        assert "field: width_cm" in output
        assert output.splitlines()[1] == "  field: width_cm"
        assert "value" not in output.splitlines()[-1]

    def test_verbose_shows_all_detail(self, pricing: PricingService, make_input: MakeInput) -> None:
        output = render_result(pricing.quote(make_input(mode="TRUCK")), verbose=True)
        assert "field: mode" in output
        assert "value: TRUCK" in output

    def test_quiet_error(self) -> None:
        result = ServiceResult(
            ok=False, op="quote", error=ServiceError(code="E", message="bad input")
        )
        assert render_quiet(result) == "ERROR: quote — bad input"


class TestGenericRenderer:
    def test_unknown_op(self) -> None:
        output = render_result(ServiceResult(ok=True, op="custom", data={"answer": 42}))
        assert "OK  custom" in output
        assert "answer: 42" in output

    def test_exact_line_layout(self) -> None:
        output = render_result(ServiceResult(ok=True, op="custom", data={"answer": 42}))
        assert output.splitlines() == ["OK  custom", "  answer: 42"]
