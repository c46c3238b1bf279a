"""Idempotent seeding of the price list and the sample catalog.

Existing rates, panels and edges are left untouched, so running the seed
again after an administrator changed a price never resets it.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from panelcut.application.config import SeedData, load_seed_data
from panelcut.infrastructure.db.models import (
    EdgeRecord,
    PanelEdgeLink,
    PanelRecord,
    PricingConfigRecord,
    PricingHistoryRecord,
)
from panelcut.infrastructure.db.repositories import (
    SqlCatalogRepository,
    SqlRateRepository,
)

logger = logging.getLogger(__name__)

SEED_OPERATOR = "seed"


@dataclass
class SeedReport:
    rates_added: int = 0
    panels_added: int = 0
    edges_added: int = 0
    links_added: int = 0

    @property
    def total(self) -> int:
        return self.rates_added + self.panels_added + self.edges_added + self.links_added


def seed_database(session: Session, data: SeedData | None = None) -> SeedReport:
    """Insert whatever part of ``data`` is missing from the database.

    Args:
        session: Session to stage inserts on; the caller commits.
        data: Seed content. Defaults to the packaged default seed.

    Returns:
        Counts of inserted rows.
    """
    data = data or load_seed_data()
    report = SeedReport()
    rates = SqlRateRepository(session)
    catalog = SqlCatalogRepository(session)

    for rate in data.rates:
        if rates.find(rate.key) is not None:
            continue
        rates.add(
            PricingConfigRecord(
                key=rate.key,
                value=rate.value,
                unit=rate.unit,
                category=rate.category,
                description=rate.description,
            )
        )
        rates.add_history(
            PricingHistoryRecord(
                config_key=rate.key,
                old_value=None,
                new_value=rate.value,
                changed_by=SEED_OPERATOR,
                reason="Initial price list",
            )
        )
        report.rates_added += 1

    for edge in data.edges:
        if catalog.find_edge(edge.reference) is not None:
            continue
        catalog.add_edge(EdgeRecord(**edge.model_dump()))
        report.edges_added += 1

    for panel in data.panels:
        if catalog.find_panel(panel.reference) is not None:
            continue
        record = catalog.add_panel(
            PanelRecord(**panel.model_dump(exclude={"default_edge"}))
        )
        report.panels_added += 1
        if panel.default_edge:
            edge = catalog.find_edge(panel.default_edge)
            if edge is None:
                logger.warning(
                    f"Default edge {panel.default_edge} of panel {panel.reference} "
                    f"is not in the catalog"
                )
                continue
            catalog.add_link(PanelEdgeLink(panel_id=record.id, edge_id=edge.id, is_default=True))
            report.links_added += 1

    logger.info(
        f"Seeded {report.rates_added} rates, {report.panels_added} panels, "
        f"{report.edges_added} edges"
    )
    return report
