"""Order placement and lifecycle.

Prices submitted by the client are never trusted: every part is priced
again on the server against one rate snapshot, and the server breakdown
is what gets stored. Once stored, part prices are frozen; order totals
are sums of stored prices and only ``reprice`` ever recomputes them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING, Callable, Sequence

from panelcut.application.dtos import PartInput, SubmittedPartInput
from panelcut.application.services.quote_service import QuoteService
from panelcut.domain.exceptions import (
    DuplicateReferenceError,
    EmptyOrderError,
    InvalidStatusTransitionError,
    OrderLockedError,
    OrderNotFoundError,
    PanelNotFoundError,
    PartValidationError,
    PriceMismatchError,
)
from panelcut.domain.rate_table import RateTable
from panelcut.domain.services import OrderTotalsCalculator, generate_order_number
from panelcut.domain.value_objects import (
    DeliveryOption,
    OrderStatus,
    OrderTotals,
    PriceBreakdown,
    to_decimal,
)

if TYPE_CHECKING:
    from panelcut.infrastructure.db.models import OrderRecord
    from panelcut.infrastructure.db.repositories import (
        OrderPage,
        SqlCatalogRepository,
        SqlOrderRepository,
    )

logger = logging.getLogger(__name__)

MAX_ORDER_NUMBER_ATTEMPTS = 10
EDITABLE_STATUSES = frozenset({OrderStatus.DRAFT, OrderStatus.PENDING})
REVENUE_STATUSES = (
    OrderStatus.CONFIRMED,
    OrderStatus.IN_PRODUCTION,
    OrderStatus.READY,
    OrderStatus.COMPLETED,
)
STATUS_TIMESTAMPS = {
    OrderStatus.CONFIRMED: "confirmed_at",
    OrderStatus.READY: "produced_at",
    OrderStatus.COMPLETED: "completed_at",
}


@dataclass(frozen=True)
class PricedPart:
    """A submitted part with its server-side price."""

    part: PartInput
    breakdown: PriceBreakdown
    panel_id: str

    @property
    def calculated_price(self) -> Decimal:
        return self.breakdown.total


@dataclass(frozen=True)
class OrderStats:
    total_orders: int
    pending_orders: int
    in_production_orders: int
    completed_orders: int
    revenue: Decimal
    orders_this_month: int


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderService:
    """Creates orders from submitted parts and drives their lifecycle."""

    def __init__(
        self,
        repository: "SqlOrderRepository",
        catalog: "SqlCatalogRepository",
        quotes: QuoteService,
        totals: OrderTotalsCalculator | None = None,
        price_tolerance: Decimal | float = Decimal("0.01"),
        reject_price_mismatch: bool = True,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.repository = repository
        self.catalog = catalog
        self.quotes = quotes
        self.totals = totals or OrderTotalsCalculator()
        self.price_tolerance = to_decimal(price_tolerance)
        self.reject_price_mismatch = reject_price_mismatch
        self.clock = clock

    # Placement

    def price_parts(
        self, parts: Sequence[SubmittedPartInput], rates: RateTable
    ) -> list[PricedPart]:
        """Validate and price every submitted part against ``rates``.

        Raises:
            EmptyOrderError: If ``parts`` is empty.
            DuplicateReferenceError: If two parts share a reference.
            PartValidationError: If a part is not complete enough to order.
            PanelNotFoundError: If a part's panel is unknown or inactive.
            EdgeNotFoundError: If a part's edge is unknown or inactive.
            PriceMismatchError: If a submitted price is out of tolerance and
                mismatches are rejected.
        """
        if not parts:
            raise EmptyOrderError()

        seen: set[str] = set()
        priced: list[PricedPart] = []
        for submitted in parts:
            part = submitted.to_domain()
            result = self.quotes.validate(part)
            if not result.is_valid:
                raise PartValidationError(part.reference, result)
            reference = part.reference.strip()
            if reference in seen:
                raise DuplicateReferenceError(reference)
            seen.add(reference)

            breakdown = self.quotes.quote(part, rates)
            self._check_submitted_price(reference, submitted, breakdown)
            priced.append(
                PricedPart(part=submitted, breakdown=breakdown, panel_id=part.panel_id)
            )
        return priced

    def create_order(
        self,
        customer_id: str,
        parts: Sequence[SubmittedPartInput],
        delivery_option: DeliveryOption = DeliveryOption.PICKUP,
        project_name: str | None = None,
        delivery_address: str | None = None,
        delivery_date: datetime | None = None,
        notes: str | None = None,
    ) -> "OrderRecord":
        """Place an order with server-priced parts.

        The order starts in PENDING. All parts and the order totals are
        computed from a single rate snapshot.
        """
        from panelcut.infrastructure.db.models import OrderPartRecord, OrderRecord

        rates = self.quotes.rates.get_rates()
        priced = self.price_parts(parts, rates)
        totals = self.totals.compute(
            [p.calculated_price for p in priced], delivery_option, rates
        )

        order = OrderRecord(
            order_number=self._new_order_number(),
            customer_id=customer_id,
            project_name=project_name,
            status=OrderStatus.PENDING,
            delivery_option=delivery_option,
            delivery_address=delivery_address,
            delivery_date=delivery_date,
            notes=notes,
        )
        self._apply_totals(order, totals)
        for position, item in enumerate(priced):
            order.parts.append(
                OrderPartRecord(
                    position=position,
                    reference=item.part.reference.strip(),
                    quantity=item.part.quantity,
                    panel_id=self._panel_record_id(item.panel_id),
                    length_mm=item.part.length_mm,
                    width_mm=item.part.width_mm,
                    configuration=item.part.to_storage(),
                    price_breakdown=item.breakdown.to_dict(),
                    calculated_price=item.calculated_price,
                    notes=item.part.notes,
                )
            )
        self.repository.add(order)
        logger.info(
            f"Order {order.order_number} created for {customer_id}: "
            f"{len(priced)} parts, total {totals.total}"
        )
        return order

    # Queries

    def get(self, identifier: str, customer_id: str | None = None) -> "OrderRecord":
        """Load an order by id or number.

        When ``customer_id`` is given, orders of other customers are
        reported as not found.
        """
        order = self.repository.find(identifier)
        if order is None or (customer_id is not None and order.customer_id != customer_id):
            raise OrderNotFoundError(identifier)
        return order

    def list_orders(
        self,
        status: OrderStatus | None = None,
        customer_id: str | None = None,
        search: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> "OrderPage":
        return self.repository.list_orders(
            status=status,
            customer_id=customer_id,
            search=search,
            limit=limit,
            offset=offset,
        )

    def stats(self) -> OrderStats:
        now = self.clock()
        month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        return OrderStats(
            total_orders=self.repository.count(),
            pending_orders=self.repository.count(OrderStatus.PENDING),
            in_production_orders=self.repository.count(OrderStatus.IN_PRODUCTION),
            completed_orders=self.repository.count(OrderStatus.COMPLETED),
            revenue=self.repository.revenue(REVENUE_STATUSES),
            orders_this_month=self.repository.count(since=month_start),
        )

    def breakdown(self, identifier: str, reference: str) -> PriceBreakdown:
        """Stored breakdown of one part, exactly as frozen at placement."""
        order = self.get(identifier)
        for part in order.parts:
            if part.reference == reference:
                return PriceBreakdown.from_dict(part.price_breakdown)
        raise OrderNotFoundError(f"{identifier}/{reference}")

    # Lifecycle

    def update_status(self, identifier: str, status: OrderStatus) -> "OrderRecord":
        """Move an order along its lifecycle.

        Raises:
            InvalidStatusTransitionError: If the lifecycle forbids the move.
        """
        order = self.get(identifier)
        current = order.status
        if not current.can_transition_to(status):
            raise InvalidStatusTransitionError(current, status)

        order.status = status
        stamp = STATUS_TIMESTAMPS.get(status)
        if stamp is not None and getattr(order, stamp) is None:
            setattr(order, stamp, self.clock())
        self.repository.session.flush()
        logger.info(f"Order {order.order_number} moved from {current.value} to {status.value}")
        return order

    def cancel(self, identifier: str, customer_id: str | None = None) -> "OrderRecord":
        """Cancel an order that has not been confirmed yet."""
        order = self.get(identifier, customer_id)
        if not order.status.is_cancellable:
            raise InvalidStatusTransitionError(order.status, OrderStatus.CANCELLED)
        return self.update_status(order.id, OrderStatus.CANCELLED)

    def reprice(self, identifier: str) -> "OrderRecord":
        """Recompute every part and the totals with the current price list.

        Only orders that are still DRAFT or PENDING can be repriced; from
        CONFIRMED on, prices are contractual.

        Raises:
            OrderLockedError: If the order is past PENDING.
        """
        order = self.get(identifier)
        if order.status not in EDITABLE_STATUSES:
            raise OrderLockedError(order.order_number, order.status)

        rates = self.quotes.rates.get_rates()
        previous_total = Decimal(order.total_price)
        for part in order.parts:
            config = PartInput.model_validate(part.configuration).to_domain()
            breakdown = self.quotes.quote(config, rates)
            part.price_breakdown = breakdown.to_dict()
            part.calculated_price = breakdown.total

        totals = OrderTotalsCalculator(order.tax_rate_percent).compute(
            [Decimal(p.calculated_price) for p in order.parts],
            order.delivery_option,
            rates,
        )
        self._apply_totals(order, totals)
        self.repository.session.flush()
        logger.info(
            f"Order {order.order_number} repriced: {previous_total} -> {totals.total}"
        )
        return order

    def totals_of(self, order: "OrderRecord") -> OrderTotals:
        return OrderTotals(
            parts_subtotal=Decimal(order.parts_subtotal),
            delivery_surcharge=Decimal(order.delivery_surcharge),
            subtotal=Decimal(order.subtotal),
            tax_rate_percent=Decimal(order.tax_rate_percent),
            tax=Decimal(order.tax),
            total=Decimal(order.total_price),
        )

    # Helpers

    def _check_submitted_price(
        self, reference: str, submitted: SubmittedPartInput, breakdown: PriceBreakdown
    ) -> None:
        if submitted.calculated_price is None:
            return
        gap = abs(submitted.calculated_price - breakdown.total)
        if gap <= self.price_tolerance:
            return
        if self.reject_price_mismatch:
            raise PriceMismatchError(reference, submitted.calculated_price, breakdown.total)
        logger.warning(
            f"Part '{reference}': submitted price {submitted.calculated_price} "
            f"replaced by computed price {breakdown.total}"
        )

    def _apply_totals(self, order: "OrderRecord", totals: OrderTotals) -> None:
        order.parts_subtotal = totals.parts_subtotal
        order.delivery_surcharge = totals.delivery_surcharge
        order.subtotal = totals.subtotal
        order.tax_rate_percent = totals.tax_rate_percent
        order.tax = totals.tax
        order.total_price = totals.total

    def _panel_record_id(self, panel_id: str) -> str:
        """Catalog record id for a panel given by id or reference."""
        record = self.catalog.find_panel(panel_id)
        if record is None:
            raise PanelNotFoundError(panel_id)
        return record.id

    def _new_order_number(self) -> str:
        for _ in range(MAX_ORDER_NUMBER_ATTEMPTS):
            number = generate_order_number(self.clock())
            if not self.repository.number_exists(number):
                return number
        raise RuntimeError("Could not allocate a unique order number")
