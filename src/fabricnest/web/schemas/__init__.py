"""Pydantic schemas for the REST API."""

from fabricnest.web.schemas.requests import (
    FabricSchema,
    NestRequest,
    PieceSchema,
    SpacingSchema,
)
from fabricnest.web.schemas.responses import (
    ErrorResponseSchema,
    FreeRectangleSchema,
    LayoutResponse,
    MetricsSchema,
    PlacementSchema,
)

__all__ = [
    # Requests
    "FabricSchema",
    "NestRequest",
    "PieceSchema",
    "SpacingSchema",
    # Responses
    "ErrorResponseSchema",
    "FreeRectangleSchema",
    "LayoutResponse",
    "MetricsSchema",
    "PlacementSchema",
]
