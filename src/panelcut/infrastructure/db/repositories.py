"""SQLAlchemy repositories.

Repositories only read and stage changes on the session they are given;
committing is the caller's job (see ``session_scope``).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterable

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session, selectinload

from panelcut.domain.rate_table import RateTable
from panelcut.domain.value_objects import (
    EdgeInfo,
    OrderStatus,
    PanelInfo,
    RateCategory,
    round_money,
    to_decimal,
)
from panelcut.infrastructure.db.models import (
    EdgeRecord,
    OrderRecord,
    PanelEdgeLink,
    PanelRecord,
    PricingConfigRecord,
    PricingHistoryRecord,
)


def panel_info_from_record(record: PanelRecord) -> PanelInfo:
    return PanelInfo(
        price_per_m2=Decimal(record.price_per_m2),
        thickness_mm=record.thickness_mm,
        grain_direction=record.grain_direction,
        length_mm=record.length_mm,
        width_mm=record.width_mm,
    )


def edge_info_from_record(record: EdgeRecord) -> EdgeInfo:
    return EdgeInfo(
        price_per_meter=Decimal(record.price_per_meter), is_laser=record.is_laser
    )


class SqlCatalogRepository:
    """Panels, edge bandings and their compatibility links.

    Lookups accept either the record id or the catalog reference, so part
    files may name a panel ``MEL-BLANC-18`` instead of its UUID.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    # CatalogLookupProtocol

    def get_panel(self, panel_id: str) -> PanelInfo | None:
        record = self.find_panel(panel_id)
        if record is None or not record.is_active:
            return None
        return panel_info_from_record(record)

    def get_edges(self, edge_ids: list[str]) -> dict[str, EdgeInfo]:
        found: dict[str, EdgeInfo] = {}
        for edge_id in dict.fromkeys(edge_ids):
            record = self.find_edge(edge_id)
            if record is not None and record.is_active:
                found[edge_id] = edge_info_from_record(record)
        return found

    # Panels

    def find_panel(self, identifier: str) -> PanelRecord | None:
        record = self.session.get(PanelRecord, identifier)
        if record is not None:
            return record
        return self.session.scalar(
            select(PanelRecord).where(PanelRecord.reference == identifier)
        )

    def add_panel(self, record: PanelRecord) -> PanelRecord:
        self.session.add(record)
        self.session.flush()
        return record

    def list_panels(
        self,
        material: str | None = None,
        thickness_mm: float | None = None,
        search: str | None = None,
        include_inactive: bool = False,
    ) -> list[PanelRecord]:
        stmt = select(PanelRecord)
        if not include_inactive:
            stmt = stmt.where(PanelRecord.is_active.is_(True))
        if material:
            stmt = stmt.where(PanelRecord.material == material)
        if thickness_mm is not None:
            stmt = stmt.where(PanelRecord.thickness_mm == thickness_mm)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    PanelRecord.name.ilike(pattern),
                    PanelRecord.reference.ilike(pattern),
                )
            )
        stmt = stmt.order_by(PanelRecord.material, PanelRecord.thickness_mm, PanelRecord.name)
        return list(self.session.scalars(stmt))

    # Edges

    def find_edge(self, identifier: str) -> EdgeRecord | None:
        record = self.session.get(EdgeRecord, identifier)
        if record is not None:
            return record
        return self.session.scalar(
            select(EdgeRecord).where(EdgeRecord.reference == identifier)
        )

    def add_edge(self, record: EdgeRecord) -> EdgeRecord:
        self.session.add(record)
        self.session.flush()
        return record

    def list_edges(
        self,
        material: str | None = None,
        search: str | None = None,
        include_inactive: bool = False,
    ) -> list[EdgeRecord]:
        stmt = select(EdgeRecord)
        if not include_inactive:
            stmt = stmt.where(EdgeRecord.is_active.is_(True))
        if material:
            stmt = stmt.where(EdgeRecord.material == material)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(EdgeRecord.name.ilike(pattern), EdgeRecord.reference.ilike(pattern))
            )
        return list(self.session.scalars(stmt.order_by(EdgeRecord.material, EdgeRecord.name)))

    # Links

    def find_link(self, panel_id: str, edge_id: str) -> PanelEdgeLink | None:
        return self.session.scalar(
            select(PanelEdgeLink).where(
                PanelEdgeLink.panel_id == panel_id, PanelEdgeLink.edge_id == edge_id
            )
        )

    def links_for_panel(self, panel_id: str) -> list[PanelEdgeLink]:
        stmt = (
            select(PanelEdgeLink)
            .where(PanelEdgeLink.panel_id == panel_id)
            .options(selectinload(PanelEdgeLink.edge))
        )
        return list(self.session.scalars(stmt))

    def add_link(self, link: PanelEdgeLink) -> PanelEdgeLink:
        self.session.add(link)
        self.session.flush()
        return link


class SqlRateRepository:
    """Price list entries and their change history."""

    def __init__(self, session: Session) -> None:
        self.session = session

    # RateSourceProtocol

    def get_rates(self) -> RateTable:
        rows = self.session.execute(select(PricingConfigRecord.key, PricingConfigRecord.value))
        return RateTable.from_mapping({key: value for key, value in rows})

    def find(self, key: str) -> PricingConfigRecord | None:
        return self.session.scalar(
            select(PricingConfigRecord).where(PricingConfigRecord.key == key)
        )

    def find_many(self, keys: Iterable[str]) -> dict[str, PricingConfigRecord]:
        keys = list(keys)
        if not keys:
            return {}
        stmt = select(PricingConfigRecord).where(PricingConfigRecord.key.in_(keys))
        return {record.key: record for record in self.session.scalars(stmt)}

    def list_rates(self, category: RateCategory | None = None) -> list[PricingConfigRecord]:
        stmt = select(PricingConfigRecord)
        if category is not None:
            stmt = stmt.where(PricingConfigRecord.category == category)
        stmt = stmt.order_by(PricingConfigRecord.category, PricingConfigRecord.key)
        return list(self.session.scalars(stmt))

    def categories(self) -> list[RateCategory]:
        stmt = select(PricingConfigRecord.category).distinct()
        return sorted(self.session.scalars(stmt), key=lambda c: c.value)

    def add(self, record: PricingConfigRecord) -> PricingConfigRecord:
        self.session.add(record)
        self.session.flush()
        return record

    def add_history(self, entry: PricingHistoryRecord) -> PricingHistoryRecord:
        self.session.add(entry)
        self.session.flush()
        return entry

    def history(self, key: str | None = None, limit: int = 50) -> list[PricingHistoryRecord]:
        stmt = select(PricingHistoryRecord)
        if key is not None:
            stmt = stmt.where(PricingHistoryRecord.config_key == key)
        stmt = stmt.order_by(
            PricingHistoryRecord.changed_at.desc(), PricingHistoryRecord.id.desc()
        ).limit(limit)
        return list(self.session.scalars(stmt))


@dataclass(frozen=True)
class OrderPage:
    orders: list[OrderRecord]
    total: int


class SqlOrderRepository:
    """Orders and their part lines."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, order: OrderRecord) -> OrderRecord:
        self.session.add(order)
        self.session.flush()
        return order

    def find(self, identifier: str) -> OrderRecord | None:
        """Find by id or by order number."""
        stmt = (
            select(OrderRecord)
            .where(
                or_(OrderRecord.id == identifier, OrderRecord.order_number == identifier)
            )
            .options(selectinload(OrderRecord.parts))
        )
        return self.session.scalar(stmt)

    def number_exists(self, order_number: str) -> bool:
        stmt = select(func.count()).where(OrderRecord.order_number == order_number)
        return bool(self.session.scalar(stmt))

    def list_orders(
        self,
        status: OrderStatus | None = None,
        customer_id: str | None = None,
        search: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> OrderPage:
        conditions = []
        if status is not None:
            conditions.append(OrderRecord.status == status)
        if customer_id:
            conditions.append(OrderRecord.customer_id == customer_id)
        if search:
            pattern = f"%{search}%"
            conditions.append(
                or_(
                    OrderRecord.order_number.ilike(pattern),
                    OrderRecord.project_name.ilike(pattern),
                    OrderRecord.customer_id.ilike(pattern),
                )
            )

        total = self.session.scalar(select(func.count(OrderRecord.id)).where(*conditions)) or 0
        stmt = (
            select(OrderRecord)
            .where(*conditions)
            .options(selectinload(OrderRecord.parts))
            .order_by(OrderRecord.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return OrderPage(orders=list(self.session.scalars(stmt)), total=total)

    def count(self, status: OrderStatus | None = None, since: datetime | None = None) -> int:
        stmt = select(func.count(OrderRecord.id))
        if status is not None:
            stmt = stmt.where(OrderRecord.status == status)
        if since is not None:
            stmt = stmt.where(OrderRecord.created_at >= since)
        return self.session.scalar(stmt) or 0

    def revenue(self, statuses: Iterable[OrderStatus]) -> Decimal:
        stmt = select(func.coalesce(func.sum(OrderRecord.total_price), 0)).where(
            OrderRecord.status.in_(list(statuses))
        )
        return round_money(to_decimal(self.session.scalar(stmt) or 0))

