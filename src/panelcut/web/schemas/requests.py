"""Pydantic request schemas for the REST API."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from panelcut.application.dtos import PartInput, SubmittedPartInput
from panelcut.domain.value_objects import DeliveryOption, OrderStatus, RateCategory


class ValidatePartRequest(BaseModel):
    """Request to validate a part, for one wizard step or for submission."""

    part: PartInput = Field(..., description="Part configuration")
    step: int | None = Field(
        default=None,
        ge=1,
        le=8,
        description="Wizard step to validate; omit to validate for submission",
    )


class RateCreateRequest(BaseModel):
    key: str = Field(..., min_length=1, pattern=r"^[A-Z0-9_]+$")
    value: Decimal = Field(..., ge=0, decimal_places=4)
    category: RateCategory
    unit: str = ""
    description: str = ""
    changed_by: str = Field(..., min_length=1, description="Operator id")


class RateUpdateRequest(BaseModel):
    value: Decimal = Field(..., ge=0, decimal_places=4)
    changed_by: str = Field(..., min_length=1, description="Operator id")
    reason: str | None = None


class RateValueSchema(BaseModel):
    key: str = Field(..., min_length=1)
    value: Decimal = Field(..., ge=0, decimal_places=4)


class BulkRateUpdateRequest(BaseModel):
    """Several rate changes applied all together or not at all."""

    updates: list[RateValueSchema] = Field(..., min_length=1)
    changed_by: str = Field(..., min_length=1)
    reason: str | None = None


class PanelUpdateRequest(BaseModel):
    """Partial panel update; only the fields sent are changed."""

    name: str | None = Field(default=None, min_length=1)
    supplier: str | None = None
    material: str | None = None
    thickness_mm: float | None = Field(default=None, gt=0, le=100)
    length_mm: float | None = Field(default=None, ge=100, le=5000)
    width_mm: float | None = Field(default=None, ge=100, le=3000)
    price_per_m2: Decimal | None = Field(default=None, ge=0, decimal_places=2)
    grain_direction: bool | None = None
    color_code: str | None = None
    is_active: bool | None = None

    @field_validator(
        "name", "supplier", "material", "thickness_mm", "length_mm", "width_mm",
        "price_per_m2", "grain_direction", "is_active",
        mode="before",
    )
    @classmethod
    def _reject_null(cls, value: object) -> object:
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class EdgeUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    material: str | None = None
    thickness_mm: float | None = Field(default=None, gt=0, le=10)
    width_mm: float | None = Field(default=None, ge=10, le=100)
    price_per_meter: Decimal | None = Field(default=None, ge=0, decimal_places=2)
    color_code: str | None = None
    is_active: bool | None = None

    @field_validator(
        "name", "material", "thickness_mm", "width_mm", "price_per_meter", "is_active",
        mode="before",
    )
    @classmethod
    def _reject_null(cls, value: object) -> object:
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class LinkEdgeRequest(BaseModel):
    edge_id: str = Field(..., min_length=1, description="Edge id or reference")
    is_default: bool = False


class OrderCreateRequest(BaseModel):
    """Order submission. Part prices are checked against the server price."""

    customer_id: str = Field(..., min_length=1)
    parts: list[SubmittedPartInput] = Field(..., min_length=1)
    delivery_option: DeliveryOption = DeliveryOption.PICKUP
    project_name: str | None = None
    delivery_address: str | None = None
    delivery_date: datetime | None = None
    notes: str | None = None


class StatusUpdateRequest(BaseModel):
    status: OrderStatus
