"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class PlacementSchema(BaseModel):
    """Position of one placed piece, top-left corner in roll coordinates."""

    piece_unit_id: str = Field(..., description="Unit id, '<type id>-<ordinal>'")
    source_type_id: str = Field(..., description="Id of the piece type")
    label: str = Field(..., description="Piece label")
    x: float = Field(..., description="Distance from the left roll edge in cm")
    y: float = Field(..., description="Distance from the start of the roll in cm")
    width: float = Field(..., description="Width in cm")
    height: float = Field(..., description="Height in cm")


class FreeRectangleSchema(BaseModel):
    """Unused printable region left after packing."""

    x: float
    y: float
    width: float
    height: float | None = Field(
        default=None, description="Height in cm, null when unbounded"
    )


class MetricsSchema(BaseModel):
    """Display metrics of a layout."""

    length_cm: float = Field(..., description="Consumed roll length in cm")
    length_m: float = Field(..., description="Consumed roll length in m")
    length_display: str = Field(..., description="Human readable length")
    band_count: int = Field(..., description="Distinct placement rows")
    piece_count: int = Field(..., description="Placed pieces")
    utilization_pct: float = Field(
        ..., description="Piece area over the used printable area"
    )
    waste_pct: float = Field(..., description="100 minus utilization")
    fabric_usage_pct: float = Field(
        ..., description="Piece area over the whole consumed roll area"
    )


class LayoutResponse(BaseModel):
    """Response for a successful nesting run."""

    fabric_width_cm: float = Field(..., description="Roll width in cm")
    printable_width: float = Field(..., description="Width between the margins in cm")
    total_length_cm: float = Field(..., description="Consumed roll length in cm")
    piece_area: float = Field(..., description="Sum of placed piece areas in cm2")
    utilization: float = Field(..., description="Utilization in percent")
    placements: list[PlacementSchema] = Field(
        default_factory=list, description="Placements in placement order"
    )
    metrics: MetricsSchema
    free_rectangles: list[FreeRectangleSchema] = Field(
        default_factory=list, description="Final free space, for diagnostics"
    )


class ErrorResponseSchema(BaseModel):
    """Body of error responses."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error category")
    details: list[dict[str, Any]] | None = Field(
        default=None, description="Additional error details"
    )
