"""Tests for price breakdowns, order statuses and part value objects."""

from decimal import Decimal

import pytest

from panelcut.domain import PartConfiguration
from panelcut.domain.value_objects import (
    ALLOWED_TRANSITIONS,
    DrillingLine,
    EdgeSelection,
    EdgeSide,
    MachiningOperation,
    MachiningType,
    OrderStatus,
    PanelInfo,
    PriceBreakdown,
    fits_places,
    round_money,
    to_decimal,
)


class TestMoney:
    def test_half_up_rounding(self) -> None:
        assert round_money(Decimal("2.345")) == Decimal("2.35")
        assert round_money(Decimal("2.344")) == Decimal("2.34")

    def test_floats_convert_through_str(self) -> None:
        assert to_decimal(0.1) == Decimal("0.1")

    def test_booleans_are_not_amounts(self) -> None:
        with pytest.raises(TypeError):
            to_decimal(True)

    def test_fits_places(self) -> None:
        assert fits_places(Decimal("0.1235"), 4)
        assert not fits_places(Decimal("0.12345"), 4)
        assert fits_places(Decimal("1.50000"), 2)
        assert fits_places(Decimal("100"), 0)


class TestPriceBreakdown:
    def test_from_components_rounds_each_then_sums(self) -> None:
        """0.005 + 0.005 rounds to 0.02, where summing first would give 0.01."""
        breakdown = PriceBreakdown.from_components(
            panel=Decimal("0.005"), cutting=Decimal("0.005")
        )
        assert breakdown.panel == Decimal("0.01")
        assert breakdown.cutting == Decimal("0.01")
        assert breakdown.total == Decimal("0.02")

    def test_total_must_match_components(self) -> None:
        with pytest.raises(ValueError, match="sum"):
            PriceBreakdown(panel=Decimal("1.00"), total=Decimal("2.00"))

    def test_components_must_be_rounded(self) -> None:
        with pytest.raises(ValueError, match="rounded"):
            PriceBreakdown(panel=Decimal("1.001"), total=Decimal("1.001"))

    def test_negative_component_rejected(self) -> None:
        with pytest.raises(ValueError, match="negative"):
            PriceBreakdown.from_components(panel=Decimal("-1"))

    def test_unknown_component_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unknown"):
            PriceBreakdown.from_components(glue=Decimal("1"))

    def test_stored_form_reloads_identically(self) -> None:
        breakdown = PriceBreakdown.from_components(
            panel=Decimal("8.4830085"), cutting=Decimal("9"), finish=Decimal("3.392")
        )
        stored = breakdown.to_dict()
        assert stored["panel"] == "8.48"
        assert PriceBreakdown.from_dict(stored) == breakdown


class TestOrderStatus:
    @pytest.mark.parametrize(
        ("current", "target"),
        [
            (OrderStatus.DRAFT, OrderStatus.PENDING),
            (OrderStatus.PENDING, OrderStatus.CONFIRMED),
            (OrderStatus.CONFIRMED, OrderStatus.IN_PRODUCTION),
            (OrderStatus.IN_PRODUCTION, OrderStatus.READY),
            (OrderStatus.READY, OrderStatus.SHIPPED),
            (OrderStatus.READY, OrderStatus.COMPLETED),
            (OrderStatus.SHIPPED, OrderStatus.DELIVERED),
        ],
    )
    def test_allowed(self, current, target) -> None:
        assert current.can_transition_to(target)

    @pytest.mark.parametrize(
        ("current", "target"),
        [
            (OrderStatus.PENDING, OrderStatus.READY),
            (OrderStatus.CONFIRMED, OrderStatus.PENDING),
            (OrderStatus.SHIPPED, OrderStatus.COMPLETED),
            (OrderStatus.CANCELLED, OrderStatus.PENDING),
        ],
    )
    def test_forbidden(self, current, target) -> None:
        assert not current.can_transition_to(target)

    def test_cancellable_only_before_confirmation(self) -> None:
        cancellable = {s for s in OrderStatus if s.is_cancellable}
        assert cancellable == {OrderStatus.DRAFT, OrderStatus.PENDING}

    def test_terminal_states(self) -> None:
        terminal = {s for s in OrderStatus if s.is_terminal}
        assert terminal == {OrderStatus.DELIVERED, OrderStatus.COMPLETED, OrderStatus.CANCELLED}

    def test_every_status_has_transitions(self) -> None:
        assert set(ALLOWED_TRANSITIONS) == set(OrderStatus)


class TestPartValueObjects:
    def test_drilling_line_needs_a_hole(self) -> None:
        with pytest.raises(ValueError):
            DrillingLine(EdgeSide.LEFT, 37, 32, 0, 5, 13)

    def test_rebate_defaults_to_full_perimeter(self) -> None:
        assert MachiningOperation(type=MachiningType.REBATE).rebate_sides == 4

    def test_negative_panel_price(self) -> None:
        with pytest.raises(ValueError):
            PanelInfo(price_per_m2=Decimal("-1"))


class TestPartConfiguration:
    def test_defaults(self) -> None:
        part = PartConfiguration()
        assert part.quantity == 1
        assert [e.side for e in part.edges] == list(EdgeSide)
        assert part.selected_edge_ids() == []
        assert not part.has_panel
        assert not part.has_dimensions
        assert not part.is_priceable

    def test_priceable_needs_panel_and_size(self, base_part) -> None:
        assert base_part.is_priceable
        assert not base_part.with_updates(length_mm=0).is_priceable
        assert not base_part.with_updates(panel_id=None).is_priceable

    def test_edges_are_normalised_to_four_sides(self) -> None:
        part = PartConfiguration(edges=(EdgeSelection(EdgeSide.RIGHT, "E1"),))
        assert len(part.edges) == 4
        assert part.edge_for(EdgeSide.RIGHT).edge_id == "E1"
        assert not part.edge_for(EdgeSide.TOP).is_selected

    def test_duplicate_side_rejected(self) -> None:
        with pytest.raises(ValueError):
            PartConfiguration(
                edges=(EdgeSelection(EdgeSide.TOP, "E1"), EdgeSelection(EdgeSide.TOP, "E2"))
            )

    def test_selected_edge_ids_are_distinct(self, base_part) -> None:
        part = base_part.with_edge(EdgeSide.TOP, "E1").with_edge(EdgeSide.BOTTOM, "E1")
        assert part.selected_edge_ids() == ["E1"]

    def test_with_updates_copies(self, base_part) -> None:
        copy = base_part.with_updates(quantity=5)
        assert copy.quantity == 5
        assert base_part.quantity == 1
