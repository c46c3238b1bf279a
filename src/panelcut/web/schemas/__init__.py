"""Pydantic schemas for the REST API."""

from panelcut.web.schemas.requests import (
    BulkRateUpdateRequest,
    EdgeUpdateRequest,
    LinkEdgeRequest,
    OrderCreateRequest,
    PanelUpdateRequest,
    RateCreateRequest,
    RateUpdateRequest,
    RateValueSchema,
    StatusUpdateRequest,
    ValidatePartRequest,
)
from panelcut.web.schemas.responses import (
    CompatibleEdgeSchema,
    DrillingLineSchema,
    EdgeSchema,
    ErrorResponseSchema,
    OrderListSchema,
    OrderPartSchema,
    OrderSchema,
    OrderStatsSchema,
    PanelSchema,
    QuoteResponse,
    RateChangeSchema,
    RateSchema,
    ValidationIssueSchema,
    ValidationResultSchema,
)

__all__ = [
    # Requests
    "BulkRateUpdateRequest",
    "EdgeUpdateRequest",
    "LinkEdgeRequest",
    "OrderCreateRequest",
    "PanelUpdateRequest",
    "RateCreateRequest",
    "RateUpdateRequest",
    "RateValueSchema",
    "StatusUpdateRequest",
    "ValidatePartRequest",
    # Responses
    "CompatibleEdgeSchema",
    "DrillingLineSchema",
    "EdgeSchema",
    "ErrorResponseSchema",
    "OrderListSchema",
    "OrderPartSchema",
    "OrderSchema",
    "OrderStatsSchema",
    "PanelSchema",
    "QuoteResponse",
    "RateChangeSchema",
    "RateSchema",
    "ValidationIssueSchema",
    "ValidationResultSchema",
]
