"""ORM models for the catalog, the price list and orders.

Money columns are ``Numeric`` so values round-trip as ``Decimal``. A part
keeps its configuration and its frozen price breakdown as JSON; amounts in
the breakdown are stored as strings so reloading is exact.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from panelcut.domain.value_objects import DeliveryOption, OrderStatus, RateCategory
from panelcut.infrastructure.db.base import Base, new_id

LASER_MATERIAL = "ABS_LASER"

MONEY = Numeric(12, 2)
RATE = Numeric(12, 4)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PanelRecord(Base):
    """A raw sheet offered in the catalog. Never hard-deleted."""

    __tablename__ = "panels"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    reference: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    supplier: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    material: Mapped[str] = mapped_column(String(50), nullable=False)
    thickness_mm: Mapped[float] = mapped_column(Float, nullable=False)
    length_mm: Mapped[float] = mapped_column(Float, nullable=False)
    width_mm: Mapped[float] = mapped_column(Float, nullable=False)
    price_per_m2: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    grain_direction: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    color_code: Mapped[str | None] = mapped_column(String(20), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    edge_links: Mapped[list["PanelEdgeLink"]] = relationship(
        back_populates="panel", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<PanelRecord {self.reference} active={self.is_active}>"


class EdgeRecord(Base):
    """An edge banding strip offered in the catalog."""

    __tablename__ = "edges"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    reference: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    material: Mapped[str] = mapped_column(String(50), nullable=False)
    thickness_mm: Mapped[float] = mapped_column(Float, nullable=False)
    width_mm: Mapped[float] = mapped_column(Float, nullable=False)
    price_per_meter: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    color_code: Mapped[str | None] = mapped_column(String(20), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    panel_links: Mapped[list["PanelEdgeLink"]] = relationship(
        back_populates="edge", cascade="all, delete-orphan"
    )

    @property
    def is_laser(self) -> bool:
        return self.material.upper() == LASER_MATERIAL

    def __repr__(self) -> str:
        return f"<EdgeRecord {self.reference} material={self.material}>"


class PanelEdgeLink(Base):
    """Edge banding compatible with a panel, optionally its default."""

    __tablename__ = "panel_edges"
    __table_args__ = (UniqueConstraint("panel_id", "edge_id", name="uq_panel_edge"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    panel_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("panels.id", ondelete="CASCADE"), nullable=False
    )
    edge_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("edges.id", ondelete="CASCADE"), nullable=False
    )
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    panel: Mapped[PanelRecord] = relationship(back_populates="edge_links")
    edge: Mapped[EdgeRecord] = relationship(back_populates="panel_links")


class PricingConfigRecord(Base):
    """Current value of one price list entry."""

    __tablename__ = "pricing_configs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    key: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    value: Mapped[Decimal] = mapped_column(RATE, nullable=False)
    unit: Mapped[str] = mapped_column(String(20), nullable=False, default="")
    category: Mapped[RateCategory] = mapped_column(
        Enum(RateCategory, name="rate_category"), nullable=False
    )
    description: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<PricingConfigRecord {self.key}={self.value}>"


class PricingHistoryRecord(Base):
    """Immutable audit entry appended on every price list change."""

    __tablename__ = "pricing_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    config_key: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    old_value: Mapped[Decimal | None] = mapped_column(RATE, nullable=True)
    new_value: Mapped[Decimal] = mapped_column(RATE, nullable=False)
    changed_by: Mapped[str] = mapped_column(String(100), nullable=False)
    changed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return (
            f"<PricingHistoryRecord {self.config_key} "
            f"{self.old_value} -> {self.new_value} by {self.changed_by}>"
        )


class OrderRecord(Base):
    """A placed order with its frozen totals."""

    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    order_number: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    customer_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    project_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    status: Mapped[OrderStatus] = mapped_column(
        Enum(OrderStatus, name="order_status"), nullable=False, default=OrderStatus.PENDING
    )
    delivery_option: Mapped[DeliveryOption] = mapped_column(
        Enum(DeliveryOption, name="delivery_option"),
        nullable=False,
        default=DeliveryOption.PICKUP,
    )
    delivery_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    delivery_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    parts_subtotal: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    delivery_surcharge: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    subtotal: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    tax_rate_percent: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    tax: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    total_price: Mapped[Decimal] = mapped_column(MONEY, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )
    confirmed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    produced_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    parts: Mapped[list["OrderPartRecord"]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderPartRecord.position",
    )

    def __repr__(self) -> str:
        return f"<OrderRecord {self.order_number} status={self.status.value}>"


class OrderPartRecord(Base):
    """One priced part line of an order."""

    __tablename__ = "order_parts"
    __table_args__ = (
        UniqueConstraint("order_id", "reference", name="uq_order_part_reference"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    order_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    reference: Mapped[str] = mapped_column(String(100), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    panel_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("panels.id"), nullable=False
    )
    length_mm: Mapped[float] = mapped_column(Float, nullable=False)
    width_mm: Mapped[float] = mapped_column(Float, nullable=False)
    configuration: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    price_breakdown: Mapped[dict[str, str]] = mapped_column(JSON, nullable=False)
    calculated_price: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    order: Mapped[OrderRecord] = relationship(back_populates="parts")
    panel: Mapped[PanelRecord] = relationship()

    def __repr__(self) -> str:
        return f"<OrderPartRecord {self.reference} x{self.quantity}>"
