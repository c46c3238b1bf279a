"""Live quoting and validation endpoints used by the configurator."""

from fastapi import APIRouter, HTTPException, Query

from panelcut.application.dtos import PartInput, PriceBreakdownOutput
from panelcut.domain.services import ValidationResult, system32_line
from panelcut.domain.value_objects import EdgeSide
from panelcut.web.dependencies import QuoteServiceDep
from panelcut.web.schemas.requests import ValidatePartRequest
from panelcut.web.schemas.responses import (
    DrillingLineSchema,
    QuoteResponse,
    ValidationIssueSchema,
    ValidationResultSchema,
)

router = APIRouter(prefix="/quotes", tags=["quotes"])


def validation_result_schema(result: ValidationResult) -> ValidationResultSchema:
    return ValidationResultSchema(
        is_valid=result.is_valid,
        errors=[ValidationIssueSchema(path=e.path, message=e.message) for e in result.errors],
        warnings=[
            ValidationIssueSchema(path=w.path, message=w.message, suggestion=w.suggestion)
            for w in result.warnings
        ],
    )


@router.post("", response_model=QuoteResponse)
def quote_part(part: PartInput, quotes: QuoteServiceDep) -> QuoteResponse:
    """Price a part configuration with the current price list.

    An incomplete part, without a panel or a size, prices to zero rather
    than failing.
    """
    domain_part = part.to_domain()
    breakdown = quotes.quote(domain_part)
    return QuoteResponse(
        breakdown=PriceBreakdownOutput.from_domain(breakdown),
        is_priced=domain_part.is_priceable,
    )


@router.post("/validate", response_model=ValidationResultSchema)
def validate_part(
    request: ValidatePartRequest, quotes: QuoteServiceDep
) -> ValidationResultSchema:
    """Validate one wizard step, or the whole part when no step is given."""
    result = quotes.validate(request.part.to_domain(), request.step)
    return validation_result_schema(result)


@router.get("/system32-line", response_model=DrillingLineSchema)
async def standard_drilling_line(
    side: EdgeSide,
    length_mm: float = Query(..., gt=0),
    width_mm: float = Query(..., gt=0),
) -> DrillingLineSchema:
    """Standard 32 mm system drilling line for one side of a part."""
    try:
        line = system32_line(side, length_mm, width_mm)
    except ValueError as e:
        raise HTTPException(
            status_code=422,
            detail={"error": str(e), "error_type": "too_short"},
        ) from e
    return DrillingLineSchema(
        side=line.side,
        start_offset_mm=line.start_offset_mm,
        spacing_mm=line.spacing_mm,
        count=line.count,
        diameter_mm=line.diameter_mm,
        depth_mm=line.depth_mm,
    )
