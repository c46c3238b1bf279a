"""Domain exceptions for quoting, catalog and order handling."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .services.part_validator import ValidationResult
    from .value_objects import OrderStatus


class PanelcutError(Exception):
    """Base class for all panelcut domain errors."""


class PricingConfigurationError(PanelcutError):
    """Raised when the rate table cannot support a computation."""


class MissingRateError(PricingConfigurationError):
    """Raised when a rate key required by a computation is absent."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Rate '{key}' is not defined in the price list")


class InvalidRateError(PricingConfigurationError):
    """Raised when a rate value is negative, not a number or too precise."""

    def __init__(self, key: str, value: object) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Rate '{key}' has invalid value {value!r}")


class UnknownEdgeError(PanelcutError):
    """Raised when a part selects an edge that was not supplied for pricing."""

    def __init__(self, edge_id: str) -> None:
        self.edge_id = edge_id
        super().__init__(f"Edge banding '{edge_id}' is unknown")


class NotFoundError(PanelcutError):
    """Base class for missing catalog, rate or order records."""

    entity = "record"

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"{self.entity} not found: {identifier}")


class PanelNotFoundError(NotFoundError):
    entity = "Panel"


class EdgeNotFoundError(NotFoundError):
    entity = "Edge banding"


class RateNotFoundError(NotFoundError):
    entity = "Rate"


class OrderNotFoundError(NotFoundError):
    entity = "Order"


class DuplicateReferenceError(PanelcutError):
    """Raised when a unique reference is reused."""

    def __init__(self, reference: str, scope: str = "order") -> None:
        self.reference = reference
        self.scope = scope
        super().__init__(f"Reference '{reference}' is already used in this {scope}")


class PartValidationError(PanelcutError):
    """Raised when a part configuration is not complete enough to submit."""

    def __init__(self, reference: str, result: "ValidationResult") -> None:
        self.reference = reference
        self.result = result
        messages = "; ".join(f"{e.path}: {e.message}" for e in result.errors)
        super().__init__(f"Part '{reference}' is invalid: {messages}")


class PriceMismatchError(PanelcutError):
    """Raised when a client-submitted price disagrees with the server price."""

    def __init__(self, reference: str, submitted: Decimal, computed: Decimal) -> None:
        self.reference = reference
        self.submitted = submitted
        self.computed = computed
        super().__init__(
            f"Price mismatch for part '{reference}': "
            f"submitted {submitted}, computed {computed}"
        )


class InvalidStatusTransitionError(PanelcutError):
    """Raised when an order status change is not allowed by the lifecycle."""

    def __init__(self, current: "OrderStatus", target: "OrderStatus") -> None:
        self.current = current
        self.target = target
        super().__init__(
            f"Cannot move order from {current.value} to {target.value}"
        )


class EmptyOrderError(PanelcutError):
    """Raised when an order is submitted without any part."""

    def __init__(self) -> None:
        super().__init__("An order needs at least one part")


class OrderLockedError(PanelcutError):
    """Raised when an order can no longer be modified."""

    def __init__(self, order_number: str, status: "OrderStatus") -> None:
        self.order_number = order_number
        self.status = status
        super().__init__(
            f"Order {order_number} is {status.value} and can no longer be modified"
        )
