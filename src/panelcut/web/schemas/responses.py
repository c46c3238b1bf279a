"""Pydantic response schemas for the REST API.

Amounts are ``Decimal`` and serialize as strings, so clients receive the
exact stored values.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from panelcut.application.dtos import PriceBreakdownOutput
from panelcut.domain.value_objects import (
    DeliveryOption,
    EdgeSide,
    OrderStatus,
    RateCategory,
)


class QuoteResponse(BaseModel):
    """Price of one part line."""

    breakdown: PriceBreakdownOutput
    is_priced: bool = Field(
        ..., description="False while the part lacks a panel or a dimension and prices to zero"
    )


class ValidationIssueSchema(BaseModel):
    path: str
    message: str
    suggestion: str | None = None


class ValidationResultSchema(BaseModel):
    """Response for part validation."""

    is_valid: bool = Field(..., description="Whether the part can proceed")
    errors: list[ValidationIssueSchema] = Field(default_factory=list)
    warnings: list[ValidationIssueSchema] = Field(default_factory=list)


class DrillingLineSchema(BaseModel):
    side: EdgeSide
    start_offset_mm: float
    spacing_mm: float
    count: int
    diameter_mm: float
    depth_mm: float


class RateSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    key: str
    value: Decimal
    unit: str
    category: RateCategory
    description: str
    updated_at: datetime | None = None


class RateChangeSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    config_key: str
    old_value: Decimal | None
    new_value: Decimal
    changed_by: str
    changed_at: datetime
    reason: str | None = None


class PanelSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    reference: str
    name: str
    supplier: str
    material: str
    thickness_mm: float
    length_mm: float
    width_mm: float
    price_per_m2: Decimal
    grain_direction: bool
    color_code: str | None
    is_active: bool


class EdgeSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    reference: str
    name: str
    material: str
    thickness_mm: float
    width_mm: float
    price_per_meter: Decimal
    color_code: str | None
    is_active: bool
    is_laser: bool


class CompatibleEdgeSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    edge: EdgeSchema
    is_default: bool


class OrderPartSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    reference: str
    quantity: int
    panel_id: str
    length_mm: float
    width_mm: float
    configuration: dict[str, Any]
    price_breakdown: dict[str, str]
    calculated_price: Decimal
    notes: str | None


class OrderSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    order_number: str
    customer_id: str
    project_name: str | None
    status: OrderStatus
    delivery_option: DeliveryOption
    delivery_address: str | None
    delivery_date: datetime | None
    notes: str | None
    parts_subtotal: Decimal
    delivery_surcharge: Decimal
    subtotal: Decimal
    tax_rate_percent: Decimal
    tax: Decimal
    total_price: Decimal
    created_at: datetime
    confirmed_at: datetime | None
    produced_at: datetime | None
    completed_at: datetime | None
    parts: list[OrderPartSchema]


class OrderListSchema(BaseModel):
    orders: list[OrderSchema]
    total: int


class OrderStatsSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_orders: int
    pending_orders: int
    in_production_orders: int
    completed_orders: int
    revenue: Decimal
    orders_this_month: int


class ErrorResponseSchema(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error category")
    details: Any = Field(default=None, description="Additional error details")
