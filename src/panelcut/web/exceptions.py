"""Error handlers mapping domain exceptions to JSON responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from panelcut.domain.exceptions import (
    DuplicateReferenceError,
    EmptyOrderError,
    InvalidRateError,
    InvalidStatusTransitionError,
    NotFoundError,
    OrderLockedError,
    PartValidationError,
    PriceMismatchError,
    PricingConfigurationError,
    UnknownEdgeError,
)

logger = logging.getLogger(__name__)


def _error(status_code: int, error: str, error_type: str, details=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "error_type": error_type, "details": details},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        return _error(404, str(exc), "not_found", {"id": exc.identifier})

    @app.exception_handler(InvalidStatusTransitionError)
    async def transition_handler(
        request: Request, exc: InvalidStatusTransitionError
    ) -> JSONResponse:
        return _error(
            409,
            str(exc),
            "invalid_transition",
            {"current": exc.current.value, "target": exc.target.value},
        )

    @app.exception_handler(OrderLockedError)
    async def order_locked_handler(request: Request, exc: OrderLockedError) -> JSONResponse:
        return _error(409, str(exc), "order_locked", {"status": exc.status.value})

    @app.exception_handler(DuplicateReferenceError)
    async def duplicate_handler(
        request: Request, exc: DuplicateReferenceError
    ) -> JSONResponse:
        return _error(
            409, str(exc), "duplicate_reference", {"reference": exc.reference, "scope": exc.scope}
        )

    @app.exception_handler(PartValidationError)
    async def part_validation_handler(
        request: Request, exc: PartValidationError
    ) -> JSONResponse:
        return _error(
            422,
            f"Part '{exc.reference}' is not complete",
            "validation",
            [{"path": e.path, "message": e.message} for e in exc.result.errors],
        )

    @app.exception_handler(PriceMismatchError)
    async def price_mismatch_handler(
        request: Request, exc: PriceMismatchError
    ) -> JSONResponse:
        return _error(
            422,
            str(exc),
            "price_mismatch",
            {
                "reference": exc.reference,
                "submitted": str(exc.submitted),
                "computed": str(exc.computed),
            },
        )

    @app.exception_handler(UnknownEdgeError)
    async def unknown_edge_handler(request: Request, exc: UnknownEdgeError) -> JSONResponse:
        return _error(422, str(exc), "unknown_edge", {"id": exc.edge_id})

    @app.exception_handler(EmptyOrderError)
    async def empty_order_handler(request: Request, exc: EmptyOrderError) -> JSONResponse:
        return _error(422, str(exc), "empty_order")

    @app.exception_handler(InvalidRateError)
    async def invalid_rate_handler(request: Request, exc: InvalidRateError) -> JSONResponse:
        return _error(422, str(exc), "invalid_rate", {"key": exc.key})

    @app.exception_handler(PricingConfigurationError)
    async def pricing_configuration_handler(
        request: Request, exc: PricingConfigurationError
    ) -> JSONResponse:
        logger.error(f"Pricing configuration error on {request.url.path}: {exc}")
        return _error(500, str(exc), "configuration")
