"""Geometry helpers for rectangular cut parts.

Top and bottom edges run along the part length, left and right edges along
its width. Everything here takes millimetres and returns Decimal metres or
square metres where the result feeds a price.
"""

from __future__ import annotations

import math
from decimal import Decimal

from ..value_objects import MM_PER_M, DrillingLine, EdgeSide, to_decimal

__all__ = [
    "SYSTEM32_DEPTH_MM",
    "SYSTEM32_DIAMETER_MM",
    "SYSTEM32_PITCH_MM",
    "SYSTEM32_START_OFFSET_MM",
    "edge_run_mm",
    "linear_metres",
    "perimeter_mm",
    "rebate_run_m",
    "surface_m2",
    "system32_line",
]

SYSTEM32_PITCH_MM = 32
SYSTEM32_START_OFFSET_MM = 37
SYSTEM32_DIAMETER_MM = 5
SYSTEM32_DEPTH_MM = 13


def surface_m2(length_mm: float, width_mm: float) -> Decimal:
    """Face area of one piece in square metres."""
    return (to_decimal(length_mm) / MM_PER_M) * (to_decimal(width_mm) / MM_PER_M)


def edge_run_mm(side: EdgeSide, length_mm: float, width_mm: float) -> Decimal:
    """Length of the cut edge on ``side``."""
    if side in (EdgeSide.TOP, EdgeSide.BOTTOM):
        return to_decimal(length_mm)
    return to_decimal(width_mm)


def linear_metres(run_mm: float | Decimal, quantity: int = 1) -> Decimal:
    """Running metres for ``quantity`` pieces of a ``run_mm`` edge."""
    return to_decimal(run_mm) / MM_PER_M * quantity


def perimeter_mm(length_mm: float, width_mm: float) -> Decimal:
    return to_decimal(length_mm) * 2 + to_decimal(width_mm) * 2


def rebate_run_m(length_mm: float, width_mm: float, sides: int = 4) -> Decimal:
    """Rebate length in metres, as a share of the perimeter.

    ``sides`` out of 4 scales the full perimeter linearly, so two sides is
    always exactly half of four regardless of which sides they are.
    """
    if not 1 <= sides <= 4:
        raise ValueError("A rebate covers between 1 and 4 sides")
    return perimeter_mm(length_mm, width_mm) / MM_PER_M * Decimal(sides) / Decimal(4)


def system32_line(side: EdgeSide, length_mm: float, width_mm: float) -> DrillingLine:
    """Standard 32 mm system drilling line along ``side``.

    Holes start 37 mm from the end and stop 37 mm before the other end.
    """
    run = float(edge_run_mm(side, length_mm, width_mm))
    margin = 2 * SYSTEM32_START_OFFSET_MM
    if run < margin:
        raise ValueError(
            f"Side {side.value} is too short ({run:g} mm) for a 32 mm system line"
        )
    count = math.floor((run - margin) / SYSTEM32_PITCH_MM) + 1
    return DrillingLine(
        side=side,
        start_offset_mm=SYSTEM32_START_OFFSET_MM,
        spacing_mm=SYSTEM32_PITCH_MM,
        count=count,
        diameter_mm=SYSTEM32_DIAMETER_MM,
        depth_mm=SYSTEM32_DEPTH_MM,
    )
