"""Immutable snapshot of the price list used for one computation."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Any, Mapping

from .exceptions import InvalidRateError, MissingRateError
from .value_objects import FinishType, to_decimal

__all__ = ["RateKey", "RateTable"]


class RateKey:
    """Rate keys referenced by the pricing code."""

    COUPE_PANNEAU = "COUPE_PANNEAU"
    COUPE_MINIMUM = "COUPE_MINIMUM"
    POSE_CHANT_ML = "POSE_CHANT_ML"
    POSE_CHANT_LASER_ML = "POSE_CHANT_LASER_ML"
    PERCAGE_UNITAIRE = "PERCAGE_UNITAIRE"
    PERCAGE_LIGNE_32 = "PERCAGE_LIGNE_32"
    RAINURE_ML = "RAINURE_ML"
    FEUILLURE_ML = "FEUILLURE_ML"
    ENCOCHE_UNITAIRE = "ENCOCHE_UNITAIRE"
    DECOUPE_UNITAIRE = "DECOUPE_UNITAIRE"
    HARDWARE_UNITAIRE = "HARDWARE_UNITAIRE"
    FINISH_VARNISH = "FINISH_VARNISH"
    FINISH_OIL = "FINISH_OIL"
    FINISH_WAX = "FINISH_WAX"
    FINISH_PAINT = "FINISH_PAINT"
    LIVRAISON_BASE = "LIVRAISON_BASE"
    LIVRAISON_EXPRESS = "LIVRAISON_EXPRESS"
    LIVRAISON_KM = "LIVRAISON_KM"

    FINISH_MULTIPLIERS: Mapping[FinishType, str] = MappingProxyType(
        {
            FinishType.VARNISH: FINISH_VARNISH,
            FinishType.OIL: FINISH_OIL,
            FinishType.WAX: FINISH_WAX,
            FinishType.PAINT: FINISH_PAINT,
        }
    )


@dataclass(frozen=True)
class RateTable:
    """Read-only mapping of rate key to non-negative Decimal value.

    Lookups of absent keys raise ``MissingRateError``; there is no default
    value, so a misconfigured price list can never silently price at zero.
    """

    rates: Mapping[str, Decimal] = field(default_factory=dict)

    def __post_init__(self) -> None:
        checked: dict[str, Decimal] = {}
        for key, value in self.rates.items():
            try:
                amount = to_decimal(value)
            except (InvalidOperation, TypeError, ValueError):
                raise InvalidRateError(key, value) from None
            if not amount.is_finite() or amount < 0:
                raise InvalidRateError(key, value)
            checked[key] = amount
        object.__setattr__(self, "rates", MappingProxyType(checked))

    @classmethod
    def from_mapping(cls, rates: Mapping[str, Any]) -> "RateTable":
        return cls(rates=dict(rates))

    def get(self, key: str) -> Decimal:
        """Get a rate value.

        Raises:
            MissingRateError: If the key is not in the table.
        """
        try:
            return self.rates[key]
        except KeyError:
            raise MissingRateError(key) from None

    def multiplier_for(self, finish_type: FinishType) -> Decimal:
        """Price multiplier for a finish (1 when there is no paid finish)."""
        if finish_type is FinishType.NONE:
            return Decimal("1")
        return self.get(RateKey.FINISH_MULTIPLIERS[finish_type])

    def missing(self, keys: list[str] | tuple[str, ...]) -> list[str]:
        """Keys from ``keys`` absent from this table."""
        return [key for key in keys if key not in self.rates]

    def __contains__(self, key: object) -> bool:
        return key in self.rates

    def __len__(self) -> int:
        return len(self.rates)
