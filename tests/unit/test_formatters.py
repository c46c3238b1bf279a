"""Tests for plain-text report formatters."""

from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace

from panelcut.application.services import RateChange, RateEntry
from panelcut.domain import PartConfiguration
from panelcut.domain.services import ValidationResult
from panelcut.domain.value_objects import (
    DeliveryOption,
    OrderStatus,
    OrderTotals,
    PriceBreakdown,
    RateCategory,
)
from panelcut.infrastructure import (
    OrderFormatter,
    QuoteFormatter,
    RateFormatter,
    ValidationFormatter,
)


class TestQuoteFormatter:
    def test_lists_non_zero_components(self, base_part) -> None:
        breakdown = PriceBreakdown.from_components(panel=Decimal("8"), cutting=Decimal("5"))
        output = QuoteFormatter().format(base_part, breakdown)

        assert "QUOTE: Side" in output
        assert "Panel" in output
        assert "Cutting" in output
        assert "Edge banding" not in output
        assert "13.00 EUR" in output

    def test_unpriced_part(self) -> None:
        output = QuoteFormatter().format(PartConfiguration(), PriceBreakdown.zero())
        assert "No panel selected" in output
        assert "(unnamed part)" in output

    def test_part_without_size(self) -> None:
        part = PartConfiguration(reference="Draft", panel_id="P1")
        output = QuoteFormatter().format(part, PriceBreakdown.zero())
        assert "Size incomplete" in output
        assert "No panel selected" not in output


class TestValidationFormatter:
    def test_valid(self) -> None:
        assert ValidationFormatter().format(ValidationResult()) == "Part configuration is valid."

    def test_errors_and_warnings(self) -> None:
        result = ValidationResult()
        result.add_error("length_mm", "Length must be positive")
        result.add_warning("width_mm", "Width is larger", suggestion="Swap them")
        output = ValidationFormatter().format(result)

        assert "ERROR: length_mm: Length must be positive" in output
        assert "WARNING: width_mm: Width is larger" in output
        assert "Suggestion: Swap them" in output


class TestRateFormatter:
    def test_rates(self) -> None:
        entry = RateEntry(
            key="COUPE_PANNEAU",
            value=Decimal("1.5"),
            unit="€/coupe",
            category=RateCategory.DECOUPE,
            description="Prix par coupe",
        )
        output = RateFormatter().format_rates({RateCategory.DECOUPE: [entry]})
        assert "[DECOUPE]" in output
        assert "COUPE_PANNEAU" in output

    def test_empty(self) -> None:
        assert RateFormatter().format_rates({}) == "Price list is empty."
        assert RateFormatter().format_history([]) == "No rate changes recorded."

    def test_history(self) -> None:
        change = RateChange(
            config_key="COUPE_PANNEAU",
            old_value=None,
            new_value=Decimal("1.5"),
            changed_by="seed",
            changed_at=datetime(2026, 10, 19, 8, 0),
            reason="Initial price list",
        )
        output = RateFormatter().format_history([change])
        assert "2026-10-19 08:00" in output
        assert "(Initial price list)" in output


class TestOrderFormatter:
    def test_order(self) -> None:
        order = SimpleNamespace(
            order_number="CMD-261019-0001",
            status=OrderStatus.PENDING,
            customer_id="cust-1",
            project_name="Kitchen",
            delivery_option=DeliveryOption.DELIVERY,
            parts=[
                SimpleNamespace(
                    reference="Side",
                    length_mm=800.0,
                    width_mm=400.0,
                    quantity=2,
                    calculated_price=Decimal("26.88"),
                )
            ],
        )
        totals = OrderTotals(
            parts_subtotal=Decimal("26.88"),
            delivery_surcharge=Decimal("35.00"),
            subtotal=Decimal("61.88"),
            tax_rate_percent=Decimal("20"),
            tax=Decimal("12.38"),
            total=Decimal("74.26"),
        )
        output = OrderFormatter().format(order, totals)

        assert "ORDER CMD-261019-0001 [PENDING]" in output
        assert "Project:   Kitchen" in output
        assert "800 x 400" in output
        assert "VAT 20%" in output
        assert "74.26 EUR" in output
