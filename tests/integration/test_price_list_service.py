"""Integration tests for the price list and its audit trail."""

from decimal import Decimal

import pytest

from panelcut.application.services import PriceListService, RateUpdate
from panelcut.domain.exceptions import (
    DuplicateReferenceError,
    InvalidRateError,
    RateNotFoundError,
)
from panelcut.domain.value_objects import RateCategory
from panelcut.infrastructure.db import SqlRateRepository


@pytest.fixture
def price_list(session) -> PriceListService:
    return PriceListService(SqlRateRepository(session))


class TestReads:
    def test_snapshot(self, price_list) -> None:
        snapshot = price_list.snapshot()
        assert len(snapshot) == 18
        assert snapshot.get("COUPE_PANNEAU") == Decimal("1.5")

    def test_grouped_by_category(self, price_list) -> None:
        grouped = price_list.get_all()
        assert set(grouped) == set(RateCategory)
        assert {e.key for e in grouped[RateCategory.DECOUPE]} == {
            "COUPE_PANNEAU",
            "COUPE_MINIMUM",
        }

    def test_by_category(self, price_list) -> None:
        keys = [e.key for e in price_list.by_category(RateCategory.LIVRAISON)]
        assert keys == ["LIVRAISON_BASE", "LIVRAISON_EXPRESS", "LIVRAISON_KM"]

    def test_categories(self, price_list) -> None:
        assert price_list.categories() == sorted(RateCategory, key=lambda c: c.value)

    def test_get_unknown(self, price_list) -> None:
        with pytest.raises(RateNotFoundError):
            price_list.get("NOPE")

    def test_seed_history(self, price_list) -> None:
        history = price_list.history("COUPE_PANNEAU")
        assert len(history) == 1
        assert history[0].old_value is None
        assert history[0].changed_by == "seed"


class TestUpdates:
    def test_update_appends_history(self, price_list) -> None:
        entry = price_list.update_rate("COUPE_PANNEAU", "1.75", changed_by="alice", reason="2027")

        assert entry.value == Decimal("1.75")
        latest = price_list.history("COUPE_PANNEAU")[0]
        assert latest.old_value == Decimal("1.5")
        assert latest.new_value == Decimal("1.75")
        assert latest.changed_by == "alice"
        assert latest.reason == "2027"
        assert price_list.snapshot().get("COUPE_PANNEAU") == Decimal("1.75")

    def test_unchanged_value_leaves_no_history(self, price_list) -> None:
        price_list.update_rate("COUPE_PANNEAU", "1.5", changed_by="alice")
        assert len(price_list.history("COUPE_PANNEAU")) == 1

    def test_negative_value(self, price_list) -> None:
        with pytest.raises(InvalidRateError):
            price_list.update_rate("COUPE_PANNEAU", "-2", changed_by="alice")

    def test_value_finer_than_stored_precision(self, price_list) -> None:
        with pytest.raises(InvalidRateError):
            price_list.update_rate("PERCAGE_UNITAIRE", "0.12345", changed_by="alice")
        assert price_list.get("PERCAGE_UNITAIRE").value == Decimal("0.15")

    def test_four_decimals_accepted(self, price_list) -> None:
        entry = price_list.update_rate("PERCAGE_UNITAIRE", "0.1235", changed_by="alice")
        assert entry.value == Decimal("0.1235")
        assert price_list.get("PERCAGE_UNITAIRE").value == Decimal("0.1235")

    def test_trailing_zeros_do_not_count(self, price_list) -> None:
        entry = price_list.update_rate("COUPE_PANNEAU", "1.750000", changed_by="alice")
        assert entry.value == Decimal("1.75")

    def test_unknown_key(self, price_list) -> None:
        with pytest.raises(RateNotFoundError):
            price_list.update_rate("NOPE", "1", changed_by="alice")

    def test_bulk_update(self, price_list) -> None:
        entries = price_list.bulk_update(
            [RateUpdate("RAINURE_ML", "3.2"), RateUpdate("FEUILLURE_ML", "4.4")],
            changed_by="bob",
        )
        assert [e.value for e in entries] == [Decimal("3.2"), Decimal("4.4")]
        assert len(price_list.history(limit=100)) == 18 + 2

    def test_bulk_update_is_all_or_nothing(self, price_list) -> None:
        with pytest.raises(RateNotFoundError):
            price_list.bulk_update(
                [RateUpdate("RAINURE_ML", "3.2"), RateUpdate("NOPE", "1")],
                changed_by="bob",
            )
        assert price_list.get("RAINURE_ML").value == Decimal("3")

    def test_bulk_update_rejects_invalid_value_first(self, price_list) -> None:
        with pytest.raises(InvalidRateError):
            price_list.bulk_update(
                [RateUpdate("RAINURE_ML", "3.2"), RateUpdate("FEUILLURE_ML", "-1")],
                changed_by="bob",
            )
        assert price_list.get("RAINURE_ML").value == Decimal("3")

    def test_create_rate(self, price_list) -> None:
        entry = price_list.create_rate(
            "LIVRAISON_ETAGE", "15", RateCategory.LIVRAISON, changed_by="alice", unit="€"
        )
        assert entry.value == Decimal("15")
        assert price_list.history("LIVRAISON_ETAGE")[0].reason == "Rate created"

    def test_create_duplicate(self, price_list) -> None:
        with pytest.raises(DuplicateReferenceError):
            price_list.create_rate("COUPE_PANNEAU", "2", RateCategory.DECOUPE, changed_by="alice")

    def test_create_rejects_excess_decimals(self, price_list) -> None:
        with pytest.raises(InvalidRateError):
            price_list.create_rate(
                "LIVRAISON_ETAGE", "15.00001", RateCategory.LIVRAISON, changed_by="alice"
            )


class TestAtomicity:
    """A rate change and its history entry commit or roll back together."""

    def test_failed_unit_of_work_leaves_no_trace(self, seeded_factory) -> None:
        with pytest.raises(RuntimeError):
            with seeded_factory.session() as session:
                seeded_factory.price_list_service(session).update_rate(
                    "COUPE_PANNEAU", "9", changed_by="mallory"
                )
                raise RuntimeError("boom")

        with seeded_factory.session() as session:
            price_list = seeded_factory.price_list_service(session)
            assert price_list.get("COUPE_PANNEAU").value == Decimal("1.5")
            assert len(price_list.history("COUPE_PANNEAU")) == 1

    def test_committed_change_is_visible_to_new_snapshots(self, seeded_factory) -> None:
        with seeded_factory.session() as session:
            before = seeded_factory.price_list_service(session).snapshot()

        with seeded_factory.session() as session:
            seeded_factory.price_list_service(session).update_rate(
                "COUPE_PANNEAU", "2", changed_by="alice"
            )

        with seeded_factory.session() as session:
            after = seeded_factory.price_list_service(session).snapshot()

        assert before.get("COUPE_PANNEAU") == Decimal("1.5")
        assert after.get("COUPE_PANNEAU") == Decimal("2")
