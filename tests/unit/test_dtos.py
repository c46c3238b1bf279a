"""Tests for part configuration DTOs."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from panelcut.application.dtos import PartInput, PriceBreakdownOutput, SubmittedPartInput
from panelcut.domain.value_objects import (
    EdgeSide,
    Face,
    FinishType,
    MachiningType,
    PriceBreakdown,
)


class TestPartInput:
    def test_configurator_names(self) -> None:
        """camelCase names from the configurator are accepted."""
        part = PartInput.model_validate(
            {
                "reference": "Door",
                "panelId": "MEL-BLANC-18",
                "length": 720,
                "width": 396,
                "grainDirection": "length",
                "edges": [{"position": "top", "edgeId": "ABS-BLANC-23"}],
                "drillingLines": [{"side": "left", "startOffset": 37, "count": 3}],
                "hardwareDrillings": [
                    {"hardwareId": "HINGE-35", "position": {"x": 100, "y": 22}, "face": "back"}
                ],
                "machiningOperations": [{"type": "rebate", "position": {"sides": 2}}],
                "finish": {"type": "oil"},
            }
        ).to_domain()

        assert part.panel_id == "MEL-BLANC-18"
        assert part.length_mm == 720
        assert part.edge_for(EdgeSide.TOP).edge_id == "ABS-BLANC-23"
        assert part.edge_for(EdgeSide.LEFT).edge_id is None
        assert part.drilling_lines[0].spacing_mm == 32
        assert part.hardware_drillings[0].face is Face.BACK
        assert part.machining_operations[0].type is MachiningType.REBATE
        assert part.machining_operations[0].rebate_sides == 2
        assert part.finish.type is FinishType.OIL

    def test_incomplete_part_parses(self) -> None:
        part = PartInput().to_domain()
        assert not part.has_panel
        assert part.quantity == 1

    def test_empty_edge_id_means_no_edge(self) -> None:
        part = PartInput.model_validate({"edges": [{"side": "top", "edge_id": ""}]})
        assert part.to_domain().selected_edge_ids() == []

    @pytest.mark.parametrize(
        "payload",
        [
            {"quantity": 0},
            {"length_mm": -10},
            {"colour": "red"},
            {"edges": [{"side": "top"}, {"side": "top"}]},
            {"machining_operations": [{"type": "rebate", "position": {"sides": 5}}]},
            {"drilling_lines": [{"side": "left", "start_offset_mm": 37, "count": 0}]},
        ],
    )
    def test_impossible_values_rejected(self, payload) -> None:
        with pytest.raises(ValidationError):
            PartInput.model_validate(payload)

    def test_storage_form_reloads(self) -> None:
        original = PartInput.model_validate(
            {"reference": "A", "panel_id": "P", "length_mm": 800, "width_mm": 400,
             "finish": {"type": "wax"}}
        )
        assert PartInput.model_validate(original.to_storage()) == original


class TestSubmittedPartInput:
    def test_submitted_price_is_not_stored(self) -> None:
        part = SubmittedPartInput.model_validate(
            {"reference": "A", "calculatedPrice": "13.00"}
        )
        assert part.calculated_price == Decimal("13.00")
        stored = part.to_storage()
        assert "calculated_price" not in stored
        assert "price_breakdown" not in stored

    def test_negative_price_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SubmittedPartInput.model_validate({"calculated_price": -1})


class TestPriceBreakdownOutput:
    def test_from_domain(self) -> None:
        breakdown = PriceBreakdown.from_components(panel=Decimal("8"), cutting=Decimal("5"))
        output = PriceBreakdownOutput.from_domain(breakdown)
        assert output.total == Decimal("13.00")
        assert output.finish == Decimal("0.00")
