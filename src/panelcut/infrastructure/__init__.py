"""Infrastructure layer - persistence and output formatting."""

from panelcut.infrastructure.formatters import (
    OrderFormatter,
    QuoteFormatter,
    RateFormatter,
    ValidationFormatter,
)

__all__ = [
    "OrderFormatter",
    "QuoteFormatter",
    "RateFormatter",
    "ValidationFormatter",
]
