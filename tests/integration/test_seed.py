"""Integration tests for database seeding."""

from decimal import Decimal

from panelcut.application.config import SeedData, load_seed_data
from panelcut.infrastructure.db import (
    SqlCatalogRepository,
    SqlRateRepository,
    seed_database,
)


class TestSeedDatabase:
    def test_first_run_inserts_defaults(self, factory) -> None:
        with factory.session() as session:
            report = seed_database(session)

        defaults = load_seed_data()
        assert report.rates_added == len(defaults.rates)
        assert report.panels_added == len(defaults.panels)
        assert report.edges_added == len(defaults.edges)
        # MDF-19 and STRAT-BLANC-19 have no default edge
        assert report.links_added == 2
        assert report.links_added == sum(1 for p in defaults.panels if p.default_edge)

    def test_second_run_is_a_no_op(self, seeded_factory) -> None:
        with seeded_factory.session() as session:
            assert seed_database(session).total == 0

    def test_existing_rate_is_not_reset(self, seeded_factory) -> None:
        with seeded_factory.session() as session:
            seeded_factory.price_list_service(session).update_rate(
                "COUPE_MINIMUM", "7", changed_by="alice"
            )
        with seeded_factory.session() as session:
            seed_database(session)
            assert SqlRateRepository(session).find("COUPE_MINIMUM").value == Decimal("7")

    def test_initial_history(self, session) -> None:
        history = SqlRateRepository(session).history("COUPE_PANNEAU")
        assert len(history) == 1
        assert history[0].old_value is None
        assert history[0].changed_by == "seed"

    def test_default_edge_links(self, session) -> None:
        catalog = SqlCatalogRepository(session)
        panel = catalog.find_panel("MEL-BLANC-18")
        links = catalog.links_for_panel(panel.id)

        assert len(links) == 1
        assert links[0].is_default
        assert links[0].edge_id == catalog.find_edge("ABS-BLANC-23").id

    def test_missing_default_edge_is_skipped(self, factory) -> None:
        data = SeedData.model_validate(
            {
                "panels": [
                    {
                        "reference": "P-1",
                        "name": "Panel",
                        "material": "MDF",
                        "thickness_mm": 19,
                        "length_mm": 2800,
                        "width_mm": 2070,
                        "price_per_m2": "18",
                        "default_edge": "MISSING",
                    }
                ]
            }
        )
        with factory.session() as session:
            report = seed_database(session, data)

        assert report.panels_added == 1
        assert report.links_added == 0
