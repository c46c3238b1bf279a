"""Administration of the price list.

Every change to a rate value appends a history entry in the same unit of
work. Services stage changes on the repository's session; the caller's
``session_scope`` commits them together or not at all.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable

from panelcut.domain.exceptions import (
    DuplicateReferenceError,
    InvalidRateError,
    RateNotFoundError,
)
from panelcut.domain.rate_table import RateTable
from panelcut.domain.value_objects import RateCategory, fits_places, to_decimal

if TYPE_CHECKING:
    from panelcut.infrastructure.db.models import (
        PricingConfigRecord,
        PricingHistoryRecord,
    )
    from panelcut.infrastructure.db.repositories import SqlRateRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateEntry:
    key: str
    value: Decimal
    unit: str
    category: RateCategory
    description: str
    updated_at: datetime | None = None

    @classmethod
    def from_record(cls, record: "PricingConfigRecord") -> "RateEntry":
        return cls(
            key=record.key,
            value=Decimal(record.value),
            unit=record.unit,
            category=record.category,
            description=record.description,
            updated_at=record.updated_at,
        )


@dataclass(frozen=True)
class RateChange:
    """One entry of the rate history (``old_value`` is None on creation)."""

    config_key: str
    old_value: Decimal | None
    new_value: Decimal
    changed_by: str
    changed_at: datetime
    reason: str | None = None

    @classmethod
    def from_record(cls, record: "PricingHistoryRecord") -> "RateChange":
        return cls(
            config_key=record.config_key,
            old_value=None if record.old_value is None else Decimal(record.old_value),
            new_value=Decimal(record.new_value),
            changed_by=record.changed_by,
            changed_at=record.changed_at,
            reason=record.reason,
        )


@dataclass(frozen=True)
class RateUpdate:
    key: str
    value: Decimal


RATE_DECIMAL_PLACES = 4


def _checked_value(key: str, value: Decimal | float | str) -> Decimal:
    try:
        amount = to_decimal(value)
    except (ArithmeticError, TypeError, ValueError):
        raise InvalidRateError(key, value) from None
    if not amount.is_finite() or amount < 0:
        raise InvalidRateError(key, value)
    if not fits_places(amount, RATE_DECIMAL_PLACES):
        raise InvalidRateError(key, value)
    return amount


class PriceListService:
    """Reads and updates rates, keeping the audit trail."""

    def __init__(self, repository: "SqlRateRepository") -> None:
        self.repository = repository

    def snapshot(self) -> RateTable:
        """Immutable rate table for one computation."""
        return self.repository.get_rates()

    def get(self, key: str) -> RateEntry:
        record = self.repository.find(key)
        if record is None:
            raise RateNotFoundError(key)
        return RateEntry.from_record(record)

    def get_all(self) -> dict[RateCategory, list[RateEntry]]:
        """All rates grouped by category."""
        grouped: dict[RateCategory, list[RateEntry]] = {}
        for record in self.repository.list_rates():
            grouped.setdefault(record.category, []).append(RateEntry.from_record(record))
        return grouped

    def by_category(self, category: RateCategory) -> list[RateEntry]:
        return [RateEntry.from_record(r) for r in self.repository.list_rates(category)]

    def categories(self) -> list[RateCategory]:
        return self.repository.categories()

    def create_rate(
        self,
        key: str,
        value: Decimal | float | str,
        category: RateCategory,
        changed_by: str,
        unit: str = "",
        description: str = "",
    ) -> RateEntry:
        """Add a new rate and record its creation in the history.

        Raises:
            DuplicateReferenceError: If the key already exists.
            InvalidRateError: If the value is negative, not a number or has
                more than four decimals.
        """
        from panelcut.infrastructure.db.models import (
            PricingConfigRecord,
            PricingHistoryRecord,
        )

        amount = _checked_value(key, value)
        if self.repository.find(key) is not None:
            raise DuplicateReferenceError(key, scope="price list")

        record = self.repository.add(
            PricingConfigRecord(
                key=key,
                value=amount,
                unit=unit,
                category=category,
                description=description,
            )
        )
        self.repository.add_history(
            PricingHistoryRecord(
                config_key=key,
                old_value=None,
                new_value=amount,
                changed_by=changed_by,
                reason="Rate created",
            )
        )
        logger.info(f"Rate {key} created at {amount} by {changed_by}")
        return RateEntry.from_record(record)

    def update_rate(
        self,
        key: str,
        value: Decimal | float | str,
        changed_by: str,
        reason: str | None = None,
    ) -> RateEntry:
        """Change a rate value and append the matching history entry.

        Raises:
            RateNotFoundError: If the key does not exist.
            InvalidRateError: If the value is negative or not a number.
        """
        amount = _checked_value(key, value)
        record = self.repository.find(key)
        if record is None:
            raise RateNotFoundError(key)
        self._apply(record, amount, changed_by, reason)
        return RateEntry.from_record(record)

    def bulk_update(
        self,
        updates: Iterable[RateUpdate],
        changed_by: str,
        reason: str | None = None,
    ) -> list[RateEntry]:
        """Apply several rate changes at once.

        Every key and value is checked before anything is changed, so a
        single unknown key or invalid value rejects the whole batch.

        Raises:
            RateNotFoundError: If any key does not exist.
            InvalidRateError: If any value is negative, not a number or has
                more than four decimals.
        """
        checked = [(u.key, _checked_value(u.key, u.value)) for u in updates]
        records = self.repository.find_many(key for key, _ in checked)
        for key, _ in checked:
            if key not in records:
                raise RateNotFoundError(key)

        entries: list[RateEntry] = []
        for key, amount in checked:
            record = records[key]
            self._apply(record, amount, changed_by, reason)
            entries.append(RateEntry.from_record(record))
        return entries

    def history(self, key: str | None = None, limit: int = 50) -> list[RateChange]:
        """Most recent changes first."""
        return [RateChange.from_record(r) for r in self.repository.history(key, limit)]

    def _apply(
        self,
        record: "PricingConfigRecord",
        amount: Decimal,
        changed_by: str,
        reason: str | None,
    ) -> None:
        from panelcut.infrastructure.db.models import PricingHistoryRecord

        old_value = Decimal(record.value)
        if old_value == amount:
            logger.debug(f"Rate {record.key} unchanged at {amount}")
            return
        record.value = amount
        self.repository.add_history(
            PricingHistoryRecord(
                config_key=record.key,
                old_value=old_value,
                new_value=amount,
                changed_by=changed_by,
                reason=reason,
            )
        )
        logger.info(f"Rate {record.key} changed {old_value} -> {amount} by {changed_by}")
