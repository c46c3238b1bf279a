"""API routers for the REST API."""

from panelcut.web.routers.catalog import router as catalog_router
from panelcut.web.routers.orders import router as orders_router
from panelcut.web.routers.pricing import router as pricing_router
from panelcut.web.routers.quotes import router as quotes_router

__all__ = [
    "catalog_router",
    "orders_router",
    "pricing_router",
    "quotes_router",
]
