"""Tests for the immutable rate table snapshot."""

from decimal import Decimal

import pytest

from panelcut.domain.exceptions import InvalidRateError, MissingRateError, PricingConfigurationError
from panelcut.domain.rate_table import RateKey, RateTable
from panelcut.domain.value_objects import FinishType


class TestRateTable:
    def test_values_become_decimal(self) -> None:
        table = RateTable.from_mapping({"COUPE_PANNEAU": 1.5, "COUPE_MINIMUM": "5"})
        assert table.get("COUPE_PANNEAU") == Decimal("1.5")
        assert isinstance(table.get("COUPE_MINIMUM"), Decimal)

    def test_missing_key(self) -> None:
        with pytest.raises(MissingRateError) as exc_info:
            RateTable().get("RAINURE_ML")
        assert isinstance(exc_info.value, PricingConfigurationError)
        assert "RAINURE_ML" in str(exc_info.value)

    @pytest.mark.parametrize("value", ["-1", "abc", "NaN"])
    def test_invalid_values_rejected(self, value) -> None:
        with pytest.raises(InvalidRateError):
            RateTable.from_mapping({"COUPE_PANNEAU": value})

    def test_is_read_only(self) -> None:
        table = RateTable.from_mapping({"COUPE_PANNEAU": "1.5"})
        with pytest.raises(TypeError):
            table.rates["COUPE_PANNEAU"] = Decimal("0")

    def test_snapshot_does_not_follow_source(self) -> None:
        source = {"COUPE_PANNEAU": "1.5"}
        table = RateTable.from_mapping(source)
        source["COUPE_PANNEAU"] = "9"
        assert table.get("COUPE_PANNEAU") == Decimal("1.5")

    def test_multiplier_for_none_finish(self) -> None:
        assert RateTable().multiplier_for(FinishType.NONE) == Decimal("1")

    def test_multiplier_for_paid_finish(self, rates) -> None:
        assert rates.multiplier_for(FinishType.PAINT) == Decimal("1.8")

    def test_missing_keys_listing(self) -> None:
        table = RateTable.from_mapping({"COUPE_PANNEAU": "1.5"})
        assert table.missing(("COUPE_PANNEAU", "COUPE_MINIMUM")) == ["COUPE_MINIMUM"]
        assert "COUPE_PANNEAU" in table
        assert len(table) == 1


class TestDefaultRates:
    """The packaged price list covers every key the pricing code uses."""

    def test_all_keys_present(self, rates) -> None:
        keys = [
            value
            for name, value in vars(RateKey).items()
            if name.isupper() and isinstance(value, str)
        ]
        assert rates.missing(keys) == []
        assert len(rates) == 18

    def test_reference_values(self, rates) -> None:
        assert rates.get(RateKey.COUPE_PANNEAU) == Decimal("1.5")
        assert rates.get(RateKey.COUPE_MINIMUM) == Decimal("5")
        assert rates.get(RateKey.POSE_CHANT_ML) == Decimal("2.0")
        assert rates.get(RateKey.LIVRAISON_BASE) == Decimal("35")
