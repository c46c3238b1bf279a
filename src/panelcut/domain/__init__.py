"""Domain layer - core pricing logic."""

from .entities import PartConfiguration
from .exceptions import (
    DuplicateReferenceError,
    EdgeNotFoundError,
    EmptyOrderError,
    InvalidRateError,
    InvalidStatusTransitionError,
    MissingRateError,
    NotFoundError,
    OrderLockedError,
    OrderNotFoundError,
    PanelcutError,
    PanelNotFoundError,
    PartValidationError,
    PriceMismatchError,
    PricingConfigurationError,
    RateNotFoundError,
    UnknownEdgeError,
)
from .rate_table import RateKey, RateTable
from .services import (
    OrderTotalsCalculator,
    PartValidator,
    PricingEngine,
    ValidationResult,
    WizardStep,
    compute_breakdown,
)
from .value_objects import (
    DeliveryOption,
    DrillingLine,
    DrillingPoint,
    DrillingType,
    EdgeInfo,
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
    OrderStatus,
    OrderTotals,
    PanelInfo,
    PriceBreakdown,
    RateCategory,
)

__all__ = [
    "DeliveryOption",
    "DrillingLine",
    "DrillingPoint",
    "DrillingType",
    "DuplicateReferenceError",
    "EdgeInfo",
    "EdgeNotFoundError",
    "EdgeSelection",
    "EdgeSide",
    "EmptyOrderError",
    "Face",
    "Finish",
    "FinishFace",
    "FinishType",
    "GrainDirection",
    "HardwareDrilling",
    "InvalidRateError",
    "InvalidStatusTransitionError",
    "MachiningOperation",
    "MachiningType",
    "MissingRateError",
    "NotFoundError",
    "OrderLockedError",
    "OrderNotFoundError",
    "OrderStatus",
    "OrderTotals",
    "OrderTotalsCalculator",
    "PanelInfo",
    "PanelNotFoundError",
    "PanelcutError",
    "PartConfiguration",
    "PartValidationError",
    "PartValidator",
    "PriceBreakdown",
    "PriceMismatchError",
    "PricingConfigurationError",
    "PricingEngine",
    "RateCategory",
    "RateKey",
    "RateNotFoundError",
    "RateTable",
    "UnknownEdgeError",
    "ValidationResult",
    "WizardStep",
    "compute_breakdown",
]
