"""Domain services for pricing, validation and order totals."""

from .geometry import (
    edge_run_mm,
    linear_metres,
    perimeter_mm,
    rebate_run_m,
    surface_m2,
    system32_line,
)
from .order_totals import (
    DEFAULT_TAX_RATE_PERCENT,
    OrderTotalsCalculator,
    generate_order_number,
)
from .part_validator import (
    PartValidator,
    ValidationError,
    ValidationResult,
    ValidationWarning,
    WizardStep,
)
from .pricing import PricingEngine, compute_breakdown

__all__ = [
    "DEFAULT_TAX_RATE_PERCENT",
    "OrderTotalsCalculator",
    "PartValidator",
    "PricingEngine",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "WizardStep",
    "compute_breakdown",
    "edge_run_mm",
    "generate_order_number",
    "linear_metres",
    "perimeter_mm",
    "rebate_run_m",
    "surface_m2",
    "system32_line",
]
