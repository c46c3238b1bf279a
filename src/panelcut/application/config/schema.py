"""Pydantic models for application settings and price list seed data."""

from __future__ import annotations

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from panelcut.domain.value_objects import RateCategory

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class PanelcutSettings(BaseModel):
    """Runtime settings.

    Attributes:
        database_url: SQLAlchemy URL of the shop database.
        tax_rate_percent: VAT applied to order subtotals, in percent.
        price_tolerance: Largest accepted gap between a client-submitted
            part price and the server price.
        reject_price_mismatch: Reject orders whose submitted prices are out
            of tolerance; when False the server price is stored instead.
        log_level: Root log level for the CLI and API.
    """

    model_config = ConfigDict(extra="forbid")

    database_url: str = Field(default="sqlite:///panelcut.db", min_length=1)
    tax_rate_percent: Decimal = Field(default=Decimal("20"), ge=0, le=100)
    price_tolerance: Decimal = Field(default=Decimal("0.01"), ge=0)
    reject_price_mismatch: bool = True
    log_level: LogLevel = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


class RateDefinition(BaseModel):
    """One price list entry as stored in the seed file."""

    model_config = ConfigDict(extra="forbid")

    key: str = Field(..., min_length=1, pattern=r"^[A-Z0-9_]+$")
    value: Decimal = Field(..., ge=0, decimal_places=4)
    unit: str = ""
    category: RateCategory
    description: str = ""


class PanelDefinition(BaseModel):
    """Sample catalog panel in the seed file."""

    model_config = ConfigDict(extra="forbid")

    reference: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    supplier: str = ""
    material: str
    thickness_mm: float = Field(..., gt=0, le=100)
    length_mm: float = Field(..., ge=100, le=5000)
    width_mm: float = Field(..., ge=100, le=3000)
    price_per_m2: Decimal = Field(..., ge=0, decimal_places=2)
    grain_direction: bool = False
    color_code: str | None = None
    default_edge: str | None = None


class EdgeDefinition(BaseModel):
    """Sample catalog edge banding in the seed file."""

    model_config = ConfigDict(extra="forbid")

    reference: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    material: str
    thickness_mm: float = Field(..., gt=0, le=10)
    width_mm: float = Field(..., ge=10, le=100)
    price_per_meter: Decimal = Field(..., ge=0, decimal_places=2)
    color_code: str | None = None


class SeedData(BaseModel):
    """Contents of the default seed file."""

    model_config = ConfigDict(extra="forbid")

    rates: list[RateDefinition] = Field(default_factory=list)
    panels: list[PanelDefinition] = Field(default_factory=list)
    edges: list[EdgeDefinition] = Field(default_factory=list)

    @field_validator("rates")
    @classmethod
    def _unique_rate_keys(cls, rates: list[RateDefinition]) -> list[RateDefinition]:
        keys = [rate.key for rate in rates]
        duplicates = sorted({key for key in keys if keys.count(key) > 1})
        if duplicates:
            raise ValueError(f"Duplicate rate keys: {', '.join(duplicates)}")
        return rates
