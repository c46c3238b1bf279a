"""Pytest configuration and shared fixtures for panelcut tests."""

from __future__ import annotations

from collections.abc import Iterator
from decimal import Decimal

import pytest
from sqlalchemy.orm import Session

from panelcut.application.config import PanelcutSettings, load_default_rates
from panelcut.application.factory import ServiceFactory, reset_factory
from panelcut.domain import PartConfiguration
from panelcut.domain.rate_table import RateTable
from panelcut.domain.value_objects import EdgeInfo, PanelInfo
from panelcut.infrastructure.db import seed_database


# =============================================================================
# Domain fixtures
# =============================================================================


@pytest.fixture
def rates() -> RateTable:
    """The packaged default price list."""
    return load_default_rates()


@pytest.fixture
def panel_info() -> PanelInfo:
    """A 25 EUR/m2 panel without grain."""
    return PanelInfo(price_per_m2=Decimal("25"), thickness_mm=18)


@pytest.fixture
def edge_infos() -> dict[str, EdgeInfo]:
    return {
        "ABS-1": EdgeInfo(price_per_meter=Decimal("1.20")),
        "LASER-1": EdgeInfo(price_per_meter=Decimal("1.50"), is_laser=True),
    }


@pytest.fixture
def base_part() -> PartConfiguration:
    """An 800 x 400 mm part, one piece, no options."""
    return PartConfiguration(
        reference="Side", quantity=1, panel_id="P1", length_mm=800, width_mm=400
    )


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _reset_default_factory() -> Iterator[None]:
    """CLI commands install a process-wide factory; never leak it."""
    yield
    reset_factory()


@pytest.fixture
def settings() -> PanelcutSettings:
    return PanelcutSettings(database_url="sqlite://")


@pytest.fixture
def factory(settings: PanelcutSettings) -> ServiceFactory:
    """Factory over a fresh in-memory database (empty tables)."""
    return ServiceFactory(settings)


@pytest.fixture
def seeded_factory(factory: ServiceFactory) -> ServiceFactory:
    """Factory whose database holds the default price list and catalog."""
    with factory.session() as session:
        seed_database(session)
    return factory


@pytest.fixture
def session(seeded_factory: ServiceFactory) -> Iterator[Session]:
    """A session on the seeded database, rolled back after the test."""
    session = seeded_factory.get_session_factory()()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def order_part_payload() -> dict:
    """A complete part as the configurator submits it with an order."""
    return {
        "reference": "Side",
        "quantity": 2,
        "panelId": "MEL-BLANC-18",
        "length": 800,
        "width": 400,
        "edges": [{"position": "top", "edgeId": "ABS-BLANC-23"}],
    }
