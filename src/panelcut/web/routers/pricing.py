"""Price list administration endpoints.

Authentication is handled upstream; the operator id is passed explicitly
and recorded in the rate history.
"""

from fastapi import APIRouter, Query, status

from panelcut.application.services import RateUpdate
from panelcut.domain.value_objects import RateCategory
from panelcut.web.dependencies import PriceListServiceDep
from panelcut.web.schemas.requests import (
    BulkRateUpdateRequest,
    RateCreateRequest,
    RateUpdateRequest,
)
from panelcut.web.schemas.responses import RateChangeSchema, RateSchema

router = APIRouter(prefix="/pricing", tags=["pricing"])


@router.get("/rates", response_model=dict[RateCategory, list[RateSchema]])
def list_rates(price_list: PriceListServiceDep) -> dict[RateCategory, list[RateSchema]]:
    """All rates grouped by category."""
    return {
        category: [RateSchema.model_validate(entry) for entry in entries]
        for category, entries in price_list.get_all().items()
    }


@router.get("/categories", response_model=list[RateCategory])
def list_categories(price_list: PriceListServiceDep) -> list[RateCategory]:
    return price_list.categories()


@router.get("/categories/{category}", response_model=list[RateSchema])
def rates_by_category(
    category: RateCategory, price_list: PriceListServiceDep
) -> list[RateSchema]:
    return [RateSchema.model_validate(e) for e in price_list.by_category(category)]


@router.get("/rates/{key}", response_model=RateSchema)
def get_rate(key: str, price_list: PriceListServiceDep) -> RateSchema:
    return RateSchema.model_validate(price_list.get(key))


@router.post("/rates", response_model=RateSchema, status_code=status.HTTP_201_CREATED)
def create_rate(request: RateCreateRequest, price_list: PriceListServiceDep) -> RateSchema:
    entry = price_list.create_rate(
        key=request.key,
        value=request.value,
        category=request.category,
        changed_by=request.changed_by,
        unit=request.unit,
        description=request.description,
    )
    return RateSchema.model_validate(entry)


@router.post("/rates/bulk", response_model=list[RateSchema])
def bulk_update_rates(
    request: BulkRateUpdateRequest, price_list: PriceListServiceDep
) -> list[RateSchema]:
    """Update several rates at once; any invalid entry rejects the batch."""
    entries = price_list.bulk_update(
        [RateUpdate(key=u.key, value=u.value) for u in request.updates],
        changed_by=request.changed_by,
        reason=request.reason,
    )
    return [RateSchema.model_validate(e) for e in entries]


@router.put("/rates/{key}", response_model=RateSchema)
def update_rate(
    key: str, request: RateUpdateRequest, price_list: PriceListServiceDep
) -> RateSchema:
    entry = price_list.update_rate(
        key, request.value, changed_by=request.changed_by, reason=request.reason
    )
    return RateSchema.model_validate(entry)


@router.get("/history", response_model=list[RateChangeSchema])
def rate_history(
    price_list: PriceListServiceDep,
    key: str | None = None,
    limit: int = Query(default=50, ge=1, le=500),
) -> list[RateChangeSchema]:
    """Most recent rate changes first."""
    return [RateChangeSchema.model_validate(c) for c in price_list.history(key, limit)]
