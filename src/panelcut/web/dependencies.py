"""FastAPI dependency injection for panelcut services.

Each request gets one session; services built for the request share it,
so everything an endpoint changes is committed (or rolled back) together.
"""

from collections.abc import Iterator
from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from panelcut.application.factory import ServiceFactory, get_factory
from panelcut.application.services import (
    CatalogService,
    OrderService,
    PriceListService,
    QuoteService,
)


@lru_cache(maxsize=1)
def get_service_factory() -> ServiceFactory:
    """Get cached ServiceFactory instance."""
    return get_factory()


def get_session(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
) -> Iterator[Session]:
    """Request-scoped unit of work."""
    with factory.session() as session:
        yield session


def get_quote_service(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
    session: Annotated[Session, Depends(get_session)],
) -> QuoteService:
    return factory.quote_service(session)


def get_price_list_service(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
    session: Annotated[Session, Depends(get_session)],
) -> PriceListService:
    return factory.price_list_service(session)


def get_catalog_service(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
    session: Annotated[Session, Depends(get_session)],
) -> CatalogService:
    return factory.catalog_service(session)


def get_order_service(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
    session: Annotated[Session, Depends(get_session)],
) -> OrderService:
    return factory.order_service(session)


# Type aliases for cleaner endpoint signatures
ServiceFactoryDep = Annotated[ServiceFactory, Depends(get_service_factory)]
QuoteServiceDep = Annotated[QuoteService, Depends(get_quote_service)]
PriceListServiceDep = Annotated[PriceListService, Depends(get_price_list_service)]
CatalogServiceDep = Annotated[CatalogService, Depends(get_catalog_service)]
OrderServiceDep = Annotated[OrderService, Depends(get_order_service)]
