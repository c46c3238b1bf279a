"""Value objects for the panel quoting domain.

All money amounts, rates and multipliers are ``Decimal``. Geometry is kept
in millimetres and only converted to metres where a rate is expressed per
metre or per square metre.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Mapping

CENT = Decimal("0.01")
ZERO = Decimal("0")
MM_PER_M = Decimal("1000")


def to_decimal(value: Any) -> Decimal:
    """Convert ints, floats and strings to Decimal without float artefacts."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("Booleans are not numeric amounts")
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round_money(value: Decimal) -> Decimal:
    """Round half-up to the cent."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def fits_places(value: Decimal, places: int) -> bool:
    """True if ``value`` needs no more than ``places`` decimals (trailing zeros ignored)."""
    return -value.normalize().as_tuple().exponent <= places


class EdgeSide(str, Enum):
    """Side of a rectangular part.

    Top and bottom run along the length, left and right along the width.
    """

    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


class GrainDirection(str, Enum):
    """Orientation of a visible wood grain on the finished part."""

    LENGTH = "length"
    WIDTH = "width"


class DrillingType(str, Enum):
    THROUGH = "through"
    BLIND = "blind"


class Face(str, Enum):
    FRONT = "front"
    BACK = "back"


class FinishFace(str, Enum):
    FRONT = "front"
    BACK = "back"
    BOTH = "both"


class MachiningType(str, Enum):
    """Machining operations offered on a part."""

    GROOVE = "groove"
    REBATE = "rebate"
    NOTCH = "notch"
    CUTOUT = "cutout"


class FinishType(str, Enum):
    """Surface finish applied to the part."""

    NONE = "none"
    VARNISH = "varnish"
    OIL = "oil"
    WAX = "wax"
    PAINT = "paint"


class RateCategory(str, Enum):
    """Grouping of price list entries."""

    DECOUPE = "DECOUPE"
    CHANT = "CHANT"
    PERCAGE = "PERCAGE"
    USINAGE = "USINAGE"
    QUINCAILLERIE = "QUINCAILLERIE"
    FINITION = "FINITION"
    LIVRAISON = "LIVRAISON"


class DeliveryOption(str, Enum):
    """How an order leaves the workshop."""

    PICKUP = "PICKUP"
    DELIVERY = "DELIVERY"
    EXPRESS = "EXPRESS"
    TRANSPORT = "TRANSPORT"


class OrderStatus(str, Enum):
    """Order lifecycle states."""

    DRAFT = "DRAFT"
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    IN_PRODUCTION = "IN_PRODUCTION"
    READY = "READY"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    def can_transition_to(self, target: "OrderStatus") -> bool:
        """Check whether the lifecycle allows moving to ``target``."""
        return target in ALLOWED_TRANSITIONS.get(self, frozenset())

    @property
    def is_cancellable(self) -> bool:
        return OrderStatus.CANCELLED in ALLOWED_TRANSITIONS.get(self, frozenset())

    @property
    def is_terminal(self) -> bool:
        return not ALLOWED_TRANSITIONS.get(self)


ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.DRAFT: frozenset({OrderStatus.PENDING, OrderStatus.CANCELLED}),
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.IN_PRODUCTION}),
    OrderStatus.IN_PRODUCTION: frozenset({OrderStatus.READY}),
    OrderStatus.READY: frozenset({OrderStatus.SHIPPED, OrderStatus.COMPLETED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


@dataclass(frozen=True)
class EdgeSelection:
    """Edge banding choice for one side of a part (``None`` = no banding)."""

    side: EdgeSide
    edge_id: str | None = None

    @property
    def is_selected(self) -> bool:
        return bool(self.edge_id)


@dataclass(frozen=True)
class DrillingLine:
    """A row of equally spaced holes along one side."""

    side: EdgeSide
    start_offset_mm: float
    spacing_mm: float
    count: int
    diameter_mm: float
    depth_mm: float

    def __post_init__(self) -> None:
        if self.count < 1:
            raise ValueError("Drilling line must have at least one hole")
        if self.spacing_mm <= 0:
            raise ValueError("Drilling line spacing must be positive")
        if self.diameter_mm <= 0 or self.depth_mm <= 0:
            raise ValueError("Hole diameter and depth must be positive")
        if self.start_offset_mm < 0:
            raise ValueError("Drilling line start offset must be non-negative")


@dataclass(frozen=True)
class DrillingPoint:
    """A single hole at an explicit position on the part face."""

    x: float
    y: float
    diameter: float
    depth: float
    type: DrillingType = DrillingType.BLIND

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError("Drilling point coordinates must be non-negative")
        if self.diameter <= 0 or self.depth <= 0:
            raise ValueError("Hole diameter and depth must be positive")


@dataclass(frozen=True)
class HardwareDrilling:
    """Drilling for a hardware fitting (hinge cup, connector...)."""

    hardware_id: str
    x: float
    y: float
    face: Face = Face.FRONT


@dataclass(frozen=True)
class MachiningOperation:
    """A groove, rebate, notch or cutout.

    ``dimensions`` and ``position`` are free-form numeric maps as entered in
    the configurator. Only ``position["sides"]`` on a rebate affects price.
    """

    type: MachiningType
    dimensions: Mapping[str, float] = field(default_factory=dict)
    position: Mapping[str, float] = field(default_factory=dict)

    @property
    def rebate_sides(self) -> int:
        """Number of rebated sides, 1 to 4 (full perimeter when unset)."""
        sides = self.position.get("sides") or 4
        sides = int(sides)
        if not 1 <= sides <= 4:
            raise ValueError("A rebate covers between 1 and 4 sides")
        return sides


@dataclass(frozen=True)
class Finish:
    """Finish applied to the part faces."""

    type: FinishType
    faces: tuple[FinishFace, ...] = (FinishFace.FRONT,)
    color: str | None = None

    @property
    def is_paid(self) -> bool:
        return self.type is not FinishType.NONE


@dataclass(frozen=True)
class PanelInfo:
    """The panel data the pricing engine needs."""

    price_per_m2: Decimal
    thickness_mm: float = 0
    grain_direction: bool = False
    length_mm: float | None = None
    width_mm: float | None = None

    def __post_init__(self) -> None:
        if to_decimal(self.price_per_m2) < 0:
            raise ValueError("Panel price per m2 must be non-negative")


@dataclass(frozen=True)
class EdgeInfo:
    """The edge banding data the pricing engine needs."""

    price_per_meter: Decimal
    is_laser: bool = False

    def __post_init__(self) -> None:
        if to_decimal(self.price_per_meter) < 0:
            raise ValueError("Edge price per meter must be non-negative")


_BREAKDOWN_COMPONENTS = (
    "panel",
    "cutting",
    "edges",
    "drilling",
    "hardware",
    "machining",
    "finish",
)


@dataclass(frozen=True)
class PriceBreakdown:
    """Itemized price of one part line, every field rounded to the cent.

    ``total`` is always the exact sum of the seven rounded components.
    """

    panel: Decimal = ZERO
    cutting: Decimal = ZERO
    edges: Decimal = ZERO
    drilling: Decimal = ZERO
    hardware: Decimal = ZERO
    machining: Decimal = ZERO
    finish: Decimal = ZERO
    total: Decimal = ZERO

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if value < 0:
                raise ValueError(f"Breakdown component '{f.name}' is negative")
            if value != round_money(value):
                raise ValueError(f"Breakdown component '{f.name}' is not rounded")
        if self.total != sum(self.components().values(), ZERO):
            raise ValueError("Breakdown total must equal the sum of its components")

    @classmethod
    def zero(cls) -> "PriceBreakdown":
        return cls(*(Decimal("0.00") for _ in range(len(_BREAKDOWN_COMPONENTS) + 1)))

    @classmethod
    def from_components(cls, **components: Decimal) -> "PriceBreakdown":
        """Round each component to the cent, then sum the rounded values."""
        unknown = set(components) - set(_BREAKDOWN_COMPONENTS)
        if unknown:
            raise ValueError(f"Unknown breakdown components: {sorted(unknown)}")
        rounded = {
            name: round_money(components.get(name, ZERO))
            for name in _BREAKDOWN_COMPONENTS
        }
        return cls(**rounded, total=sum(rounded.values(), Decimal("0.00")))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PriceBreakdown":
        return cls(**{f.name: to_decimal(data[f.name]) for f in fields(cls)})

    def components(self) -> dict[str, Decimal]:
        return {name: getattr(self, name) for name in _BREAKDOWN_COMPONENTS}

    def to_dict(self) -> dict[str, str]:
        """Serialize with string amounts so reloads are exact."""
        return {f.name: str(getattr(self, f.name)) for f in fields(self)}

    @property
    def is_zero(self) -> bool:
        return self.total == 0


@dataclass(frozen=True)
class OrderTotals:
    """Order-level amounts derived from already priced parts."""

    parts_subtotal: Decimal
    delivery_surcharge: Decimal
    subtotal: Decimal
    tax_rate_percent: Decimal
    tax: Decimal
    total: Decimal

    def to_dict(self) -> dict[str, str]:
        return {f.name: str(getattr(self, f.name)) for f in fields(self)}
