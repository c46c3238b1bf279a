"""Order-level totals from already priced parts.

Part prices are taken as stored: they are quantity-inclusive line totals
frozen when the order was placed. Nothing here re-prices a part.
"""

from __future__ import annotations

import random
from datetime import datetime
from decimal import Decimal
from typing import Iterable

from ..rate_table import RateKey, RateTable
from ..value_objects import (
    ZERO,
    DeliveryOption,
    OrderTotals,
    round_money,
    to_decimal,
)

__all__ = [
    "DEFAULT_TAX_RATE_PERCENT",
    "DELIVERY_RATE_KEYS",
    "OrderTotalsCalculator",
    "generate_order_number",
]

DEFAULT_TAX_RATE_PERCENT = Decimal("20")

# PICKUP is free and TRANSPORT is quoted separately, so neither has a rate.
DELIVERY_RATE_KEYS: dict[DeliveryOption, str | None] = {
    DeliveryOption.PICKUP: None,
    DeliveryOption.DELIVERY: RateKey.LIVRAISON_BASE,
    DeliveryOption.EXPRESS: RateKey.LIVRAISON_EXPRESS,
    DeliveryOption.TRANSPORT: None,
}


class OrderTotalsCalculator:
    """Sums stored part prices, adds delivery and tax."""

    def __init__(self, tax_rate_percent: Decimal | float = DEFAULT_TAX_RATE_PERCENT) -> None:
        tax_rate = to_decimal(tax_rate_percent)
        if tax_rate < 0:
            raise ValueError("Tax rate must be non-negative")
        self.tax_rate_percent = tax_rate

    def delivery_surcharge(self, option: DeliveryOption, rates: RateTable) -> Decimal:
        key = DELIVERY_RATE_KEYS[option]
        if key is None:
            return ZERO
        return rates.get(key)

    def compute(
        self,
        part_prices: Iterable[Decimal],
        delivery_option: DeliveryOption,
        rates: RateTable,
    ) -> OrderTotals:
        """Compute order totals.

        Args:
            part_prices: Stored ``calculated_price`` of each part line.
            delivery_option: Chosen delivery option.
            rates: Rate table providing the delivery fees.

        Returns:
            OrderTotals with every amount rounded to the cent.
        """
        parts_subtotal = round_money(sum((to_decimal(p) for p in part_prices), ZERO))
        delivery = round_money(self.delivery_surcharge(delivery_option, rates))
        subtotal = parts_subtotal + delivery
        tax = round_money(subtotal * self.tax_rate_percent / 100)
        return OrderTotals(
            parts_subtotal=parts_subtotal,
            delivery_surcharge=delivery,
            subtotal=subtotal,
            tax_rate_percent=self.tax_rate_percent,
            tax=tax,
            total=subtotal + tax,
        )


def generate_order_number(now: datetime | None = None, rng: random.Random | None = None) -> str:
    """Human-friendly order number, e.g. ``CMD-261019-0421``."""
    now = now or datetime.now()
    rng = rng or random.Random()
    return f"CMD-{now:%y%m%d}-{rng.randrange(10000):04d}"
