"""Pydantic request schemas for the REST API."""

from pydantic import BaseModel, ConfigDict, Field

from fabricnest.application.config import MAX_PIECE_TYPES


class FabricSchema(BaseModel):
    """Fabric roll dimensions in centimeters."""

    model_config = ConfigDict(allow_inf_nan=False)

    width_cm: float = Field(default=150.0, gt=0, description="Roll width in cm")
    margin_x: float = Field(default=1.0, ge=0, description="Left and right margin in cm")
    margin_y: float = Field(
        default=1.0, ge=0, description="Margin at the start and end of the roll in cm"
    )


class SpacingSchema(BaseModel):
    """Gaps left after every piece."""

    model_config = ConfigDict(allow_inf_nan=False)

    gap_x: float = Field(default=0.5, ge=0, description="Horizontal gap in cm")
    gap_y: float = Field(default=0.5, ge=0, description="Vertical gap in cm")


class PieceSchema(BaseModel):
    """One piece type to cut."""

    model_config = ConfigDict(allow_inf_nan=False)

    id: str | None = Field(
        default=None, min_length=1, max_length=64, description="Piece type id"
    )
    label: str = Field(default="", max_length=100, description="Display name")
    width: float = Field(..., gt=0, description="Width across the roll in cm")
    height: float = Field(..., gt=0, description="Height along the roll in cm")
    quantity: int = Field(default=1, ge=0, le=10_000, description="Number of copies")


class NestRequest(BaseModel):
    """Request for computing a layout."""

    fabric: FabricSchema = Field(default_factory=FabricSchema, description="Fabric roll")
    spacing: SpacingSchema = Field(
        default_factory=SpacingSchema, description="Gaps between pieces"
    )
    pieces: list[PieceSchema] = Field(
        default_factory=list,
        max_length=MAX_PIECE_TYPES,
        description="Piece types in user order",
    )
