"""Application services orchestrating the domain and persistence."""

from panelcut.application.services.catalog_service import CatalogService, CompatibleEdge
from panelcut.application.services.order_service import (
    OrderService,
    OrderStats,
    PricedPart,
)
from panelcut.application.services.price_list_service import (
    PriceListService,
    RateChange,
    RateEntry,
    RateUpdate,
)
from panelcut.application.services.quote_service import QuoteService

__all__ = [
    "CatalogService",
    "CompatibleEdge",
    "OrderService",
    "OrderStats",
    "PriceListService",
    "PricedPart",
    "QuoteService",
    "RateChange",
    "RateEntry",
    "RateUpdate",
]
