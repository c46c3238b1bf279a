"""Relational persistence with SQLAlchemy."""

from panelcut.infrastructure.db.base import Base
from panelcut.infrastructure.db.models import (
    EdgeRecord,
    OrderPartRecord,
    OrderRecord,
    PanelEdgeLink,
    PanelRecord,
    PricingConfigRecord,
    PricingHistoryRecord,
)
from panelcut.infrastructure.db.repositories import (
    OrderPage,
    SqlCatalogRepository,
    SqlOrderRepository,
    SqlRateRepository,
)
from panelcut.infrastructure.db.seed import SeedReport, seed_database
from panelcut.infrastructure.db.session import (
    create_db_engine,
    create_session_factory,
    init_db,
    session_scope,
)

__all__ = [
    "Base",
    "EdgeRecord",
    "OrderPage",
    "OrderPartRecord",
    "OrderRecord",
    "PanelEdgeLink",
    "PanelRecord",
    "PricingConfigRecord",
    "PricingHistoryRecord",
    "SeedReport",
    "SqlCatalogRepository",
    "SqlOrderRepository",
    "SqlRateRepository",
    "create_db_engine",
    "create_session_factory",
    "init_db",
    "seed_database",
    "session_scope",
]
