"""Input and output data transfer objects for the application layer.

Pydantic models describe the JSON shape of a part configuration as sent by
the configurator (or stored with an order) and convert it to domain
objects. Field names follow the domain (``length_mm``), and the
configurator's camelCase names are accepted as aliases.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from panelcut.domain.entities import PartConfiguration
from panelcut.domain.value_objects import (
    DrillingLine,
    DrillingPoint,
    DrillingType,
    EdgeSelection,
    EdgeSide,
    Face,
    Finish,
    FinishFace,
    FinishType,
    GrainDirection,
    HardwareDrilling,
    MachiningOperation,
    MachiningType,
    PriceBreakdown,
)


def _alias(*names: str) -> AliasChoices:
    return AliasChoices(*names)


class _Model(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class EdgeSelectionInput(_Model):
    side: EdgeSide = Field(..., validation_alias=_alias("side", "position"))
    edge_id: str | None = Field(default=None, validation_alias=_alias("edge_id", "edgeId"))
    edge_name: str | None = Field(
        default=None, validation_alias=_alias("edge_name", "edgeName")
    )


class DrillingLineInput(_Model):
    side: EdgeSide
    start_offset_mm: float = Field(
        ..., ge=0, validation_alias=_alias("start_offset_mm", "startOffset")
    )
    spacing_mm: float = Field(
        default=32, gt=0, validation_alias=_alias("spacing_mm", "spacing")
    )
    count: int = Field(..., ge=1)
    diameter_mm: float = Field(
        default=5, gt=0, validation_alias=_alias("diameter_mm", "diameter")
    )
    depth_mm: float = Field(default=13, gt=0, validation_alias=_alias("depth_mm", "depth"))


class DrillingPointInput(_Model):
    x: float = Field(..., ge=0)
    y: float = Field(..., ge=0)
    diameter: float = Field(..., gt=0)
    depth: float = Field(..., gt=0)
    type: DrillingType = DrillingType.BLIND


class PointInput(_Model):
    x: float
    y: float


class HardwareDrillingInput(_Model):
    hardware_id: str = Field(..., min_length=1, validation_alias=_alias("hardware_id", "hardwareId"))
    hardware_name: str | None = Field(
        default=None, validation_alias=_alias("hardware_name", "hardwareName")
    )
    position: PointInput
    face: Face = Face.FRONT


class MachiningOperationInput(_Model):
    type: MachiningType
    dimensions: dict[str, float] = Field(default_factory=dict)
    position: dict[str, float] = Field(default_factory=dict)

    @field_validator("position")
    @classmethod
    def _check_sides(cls, position: dict[str, float]) -> dict[str, float]:
        sides = position.get("sides")
        if sides is not None and not (1 <= sides <= 4 and float(sides).is_integer()):
            raise ValueError("sides must be a whole number between 1 and 4")
        return position


class FinishInput(_Model):
    type: FinishType
    faces: list[FinishFace] = Field(default_factory=lambda: [FinishFace.FRONT])
    color: str | None = None


class PartInput(_Model):
    """A part configuration as exchanged with the configurator.

    Completeness (reference, panel, dimensions) is deliberately not enforced
    here so that half-configured parts can still be previewed; those rules
    belong to ``PartValidator``. Only values that can never be valid, such
    as negative sizes, are rejected at parse time.
    """

    reference: str = ""
    quantity: int = Field(default=1, ge=1)
    panel_id: str | None = Field(default=None, validation_alias=_alias("panel_id", "panelId"))
    length_mm: float = Field(default=0, ge=0, validation_alias=_alias("length_mm", "length"))
    width_mm: float = Field(default=0, ge=0, validation_alias=_alias("width_mm", "width"))
    grain_direction: GrainDirection | None = Field(
        default=None, validation_alias=_alias("grain_direction", "grainDirection")
    )
    edges: list[EdgeSelectionInput] = Field(default_factory=list, max_length=4)
    drilling_lines: list[DrillingLineInput] = Field(
        default_factory=list, validation_alias=_alias("drilling_lines", "drillingLines")
    )
    drilling_points: list[DrillingPointInput] = Field(
        default_factory=list, validation_alias=_alias("drilling_points", "drillingPoints")
    )
    hardware_drillings: list[HardwareDrillingInput] = Field(
        default_factory=list,
        validation_alias=_alias("hardware_drillings", "hardwareDrillings"),
    )
    machining_operations: list[MachiningOperationInput] = Field(
        default_factory=list,
        validation_alias=_alias("machining_operations", "machiningOperations"),
    )
    finish: FinishInput | None = None
    notes: str | None = None

    @field_validator("edges")
    @classmethod
    def _one_edge_per_side(
        cls, edges: list[EdgeSelectionInput]
    ) -> list[EdgeSelectionInput]:
        sides = [edge.side for edge in edges]
        if len(set(sides)) != len(sides):
            raise ValueError("each side may appear only once in edges")
        return edges

    def to_domain(self) -> PartConfiguration:
        """Convert to a domain PartConfiguration."""
        return PartConfiguration(
            reference=self.reference,
            quantity=self.quantity,
            panel_id=self.panel_id,
            length_mm=self.length_mm,
            width_mm=self.width_mm,
            grain_direction=self.grain_direction,
            edges=tuple(
                EdgeSelection(side=edge.side, edge_id=edge.edge_id or None)
                for edge in self.edges
            ),
            drilling_lines=[
                DrillingLine(
                    side=line.side,
                    start_offset_mm=line.start_offset_mm,
                    spacing_mm=line.spacing_mm,
                    count=line.count,
                    diameter_mm=line.diameter_mm,
                    depth_mm=line.depth_mm,
                )
                for line in self.drilling_lines
            ],
            drilling_points=[
                DrillingPoint(
                    x=point.x,
                    y=point.y,
                    diameter=point.diameter,
                    depth=point.depth,
                    type=point.type,
                )
                for point in self.drilling_points
            ],
            hardware_drillings=[
                HardwareDrilling(
                    hardware_id=hw.hardware_id,
                    x=hw.position.x,
                    y=hw.position.y,
                    face=hw.face,
                )
                for hw in self.hardware_drillings
            ],
            machining_operations=[
                MachiningOperation(
                    type=op.type,
                    dimensions=dict(op.dimensions),
                    position=dict(op.position),
                )
                for op in self.machining_operations
            ],
            finish=(
                Finish(
                    type=self.finish.type,
                    faces=tuple(self.finish.faces),
                    color=self.finish.color,
                )
                if self.finish is not None
                else None
            ),
            notes=self.notes,
        )

    def to_storage(self) -> dict[str, Any]:
        """JSON-compatible dict stored alongside an order part."""
        return self.model_dump(mode="json")


class PriceBreakdownOutput(BaseModel):
    """Serialized price breakdown (amounts as strings with two decimals)."""

    panel: Decimal
    cutting: Decimal
    edges: Decimal
    drilling: Decimal
    hardware: Decimal
    machining: Decimal
    finish: Decimal
    total: Decimal

    @classmethod
    def from_domain(cls, breakdown: PriceBreakdown) -> "PriceBreakdownOutput":
        return cls(**breakdown.components(), total=breakdown.total)


class SubmittedPartInput(PartInput):
    """A part sent with an order, with the price the client displayed.

    The submitted price is only compared against the server computation;
    it is never stored as-is.
    """

    calculated_price: Decimal | None = Field(
        default=None, ge=0, validation_alias=_alias("calculated_price", "calculatedPrice")
    )
    price_breakdown: PriceBreakdownOutput | None = Field(
        default=None, validation_alias=_alias("price_breakdown", "priceBreakdown")
    )

    def to_storage(self) -> dict[str, Any]:
        return self.model_dump(
            mode="json", exclude={"calculated_price", "price_breakdown"}
        )
