"""Domain entities."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from .value_objects import (
    DrillingLine,
    DrillingPoint,
    EdgeSelection,
    EdgeSide,
    Finish,
    GrainDirection,
    HardwareDrilling,
    MachiningOperation,
)


def _default_edges() -> tuple[EdgeSelection, ...]:
    return tuple(EdgeSelection(side=side) for side in EdgeSide)


@dataclass
class PartConfiguration:
    """One orderable cut piece, built up step by step in the configurator.

    Dimensions are in millimetres; by convention ``length_mm`` is the larger
    dimension. A freshly created part is deliberately incomplete (no panel,
    zero dimensions) and prices to zero until the panel and size are set.

    Attributes:
        reference: Customer label, unique within an order.
        quantity: Number of identical pieces on this line.
        panel_id: Catalog panel the piece is cut from.
        length_mm: Size along the length (top/bottom edges).
        width_mm: Size along the width (left/right edges).
        grain_direction: Grain orientation, only meaningful on grained panels.
        edges: One edge selection per side.
        drilling_lines: Rows of assembly holes.
        drilling_points: Individual holes.
        hardware_drillings: Hardware fitting drillings.
        machining_operations: Grooves, rebates, notches and cutouts.
        finish: Optional surface finish.
        notes: Free text for the workshop.
    """

    reference: str = ""
    quantity: int = 1
    panel_id: str | None = None
    length_mm: float = 0
    width_mm: float = 0
    grain_direction: GrainDirection | None = None
    edges: tuple[EdgeSelection, ...] = field(default_factory=_default_edges)
    drilling_lines: list[DrillingLine] = field(default_factory=list)
    drilling_points: list[DrillingPoint] = field(default_factory=list)
    hardware_drillings: list[HardwareDrilling] = field(default_factory=list)
    machining_operations: list[MachiningOperation] = field(default_factory=list)
    finish: Finish | None = None
    notes: str | None = None

    def __post_init__(self) -> None:
        by_side = {edge.side: edge for edge in self.edges}
        if len(by_side) != len(self.edges):
            raise ValueError("Each side may carry at most one edge selection")
        self.edges = tuple(by_side.get(side, EdgeSelection(side=side)) for side in EdgeSide)

    def edge_for(self, side: EdgeSide) -> EdgeSelection:
        """Get the edge selection for a side."""
        for edge in self.edges:
            if edge.side is side:
                return edge
        return EdgeSelection(side=side)

    def selected_edge_ids(self) -> list[str]:
        """Distinct edge ids selected on any side, in side order."""
        ids: list[str] = []
        for edge in self.edges:
            if edge.edge_id and edge.edge_id not in ids:
                ids.append(edge.edge_id)
        return ids

    def with_edge(self, side: EdgeSide, edge_id: str | None) -> "PartConfiguration":
        """Return a copy with the edge on ``side`` replaced."""
        edges = tuple(
            EdgeSelection(side=e.side, edge_id=edge_id) if e.side is side else e
            for e in self.edges
        )
        return replace(self, edges=edges)

    def with_updates(self, **changes: Any) -> "PartConfiguration":
        """Return a copy with the given fields changed (wizard step update)."""
        return replace(self, **changes)

    @property
    def has_panel(self) -> bool:
        return bool(self.panel_id)

    @property
    def has_dimensions(self) -> bool:
        return self.length_mm > 0 and self.width_mm > 0

    @property
    def is_priceable(self) -> bool:
        """Panel and both dimensions set; anything less prices to zero."""
        return self.has_panel and self.has_dimensions
