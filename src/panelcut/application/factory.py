"""Service factory for dependency injection."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from panelcut.application.config.schema import PanelcutSettings

if TYPE_CHECKING:
    from sqlalchemy import Engine
    from sqlalchemy.orm import Session, sessionmaker

    from panelcut.application.services import (
        CatalogService,
        OrderService,
        PriceListService,
        QuoteService,
    )
    from panelcut.domain.services import (
        OrderTotalsCalculator,
        PartValidator,
        PricingEngine,
    )


@dataclass
class ServiceFactory:
    """Factory for creating service instances.

    Stateless domain services and the database engine are created lazily
    and cached. Session-bound services are created per unit of work:

    Example:
        ```python
        factory = ServiceFactory(settings)
        with factory.session() as session:
            quote = factory.quote_service(session).quote(part)
        ```
    """

    settings: PanelcutSettings = field(default_factory=PanelcutSettings)

    _engine: "Engine | None" = field(default=None, init=False, repr=False)
    _session_factory: "sessionmaker[Session] | None" = field(
        default=None, init=False, repr=False
    )
    _pricing_engine: "PricingEngine | None" = field(default=None, init=False, repr=False)
    _part_validator: "PartValidator | None" = field(default=None, init=False, repr=False)
    _totals_calculator: "OrderTotalsCalculator | None" = field(
        default=None, init=False, repr=False
    )

    # Domain services

    def get_pricing_engine(self) -> "PricingEngine":
        """Get or create the pricing engine."""
        if self._pricing_engine is None:
            from panelcut.domain.services import PricingEngine

            self._pricing_engine = PricingEngine()
        return self._pricing_engine

    def get_part_validator(self) -> "PartValidator":
        if self._part_validator is None:
            from panelcut.domain.services import PartValidator

            self._part_validator = PartValidator()
        return self._part_validator

    def get_totals_calculator(self) -> "OrderTotalsCalculator":
        if self._totals_calculator is None:
            from panelcut.domain.services import OrderTotalsCalculator

            self._totals_calculator = OrderTotalsCalculator(
                self.settings.tax_rate_percent
            )
        return self._totals_calculator

    # Persistence

    def get_engine(self) -> "Engine":
        """Get or create the database engine, creating missing tables."""
        if self._engine is None:
            from panelcut.infrastructure.db import create_db_engine, init_db

            self._engine = create_db_engine(self.settings.database_url)
            init_db(self._engine)
        return self._engine

    def get_session_factory(self) -> "sessionmaker[Session]":
        if self._session_factory is None:
            from panelcut.infrastructure.db import create_session_factory

            self._session_factory = create_session_factory(self.get_engine())
        return self._session_factory

    @contextmanager
    def session(self) -> Iterator["Session"]:
        """Unit of work: commit on success, roll back on error."""
        from panelcut.infrastructure.db import session_scope

        with session_scope(self.get_session_factory()) as session:
            yield session

    # Session-bound services

    def quote_service(self, session: "Session") -> "QuoteService":
        from panelcut.application.services import QuoteService
        from panelcut.infrastructure.db import SqlCatalogRepository, SqlRateRepository

        return QuoteService(
            catalog=SqlCatalogRepository(session),
            rates=SqlRateRepository(session),
            engine=self.get_pricing_engine(),
            validator=self.get_part_validator(),
        )

    def price_list_service(self, session: "Session") -> "PriceListService":
        from panelcut.application.services import PriceListService
        from panelcut.infrastructure.db import SqlRateRepository

        return PriceListService(SqlRateRepository(session))

    def catalog_service(self, session: "Session") -> "CatalogService":
        from panelcut.application.services import CatalogService
        from panelcut.infrastructure.db import SqlCatalogRepository

        return CatalogService(SqlCatalogRepository(session))

    def order_service(self, session: "Session") -> "OrderService":
        from panelcut.application.services import OrderService
        from panelcut.infrastructure.db import SqlCatalogRepository, SqlOrderRepository

        return OrderService(
            repository=SqlOrderRepository(session),
            catalog=SqlCatalogRepository(session),
            quotes=self.quote_service(session),
            totals=self.get_totals_calculator(),
            price_tolerance=self.settings.price_tolerance,
            reject_price_mismatch=self.settings.reject_price_mismatch,
        )


_default_factory: ServiceFactory | None = None


def get_factory() -> ServiceFactory:
    """Get the default service factory, configured from the environment."""
    global _default_factory
    if _default_factory is None:
        from panelcut.application.config import load_settings

        _default_factory = ServiceFactory(load_settings())
    return _default_factory


def set_factory(factory: ServiceFactory | None) -> None:
    """Set a custom factory (for testing)."""
    global _default_factory
    _default_factory = factory


def reset_factory() -> None:
    """Reset the factory to default (for testing cleanup)."""
    global _default_factory
    _default_factory = None
