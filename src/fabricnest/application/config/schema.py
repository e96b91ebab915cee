"""Pydantic models for nesting configuration files.

A configuration describes one fabric roll, the spacing between pieces, up
to ``MAX_PIECE_TYPES`` piece types and the preferred output. Defaults
reproduce the sample layout the tool starts with.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Supported schema versions for configuration files
# Version 1.0: Initial schema with fabric, spacing, pieces and output
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})

# Maximum number of piece types configured at the same time
MAX_PIECE_TYPES: int = 10


class OutputFormat(str, Enum):
    """Output formats for the nest command."""

    SUMMARY = "summary"
    PLACEMENTS = "placements"
    ASCII = "ascii"
    JSON = "json"
    SVG = "svg"


class FabricConfig(BaseModel):
    """Fabric roll dimensions in centimeters.

    Attributes:
        width_cm: Roll width.
        margin_x: Left and right margin.
        margin_y: Margin at the start and end of the layout.
    """

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    width_cm: float = Field(default=150.0, gt=0, description="Roll width in cm")
    margin_x: float = Field(default=1.0, ge=0, description="Side margin in cm")
    margin_y: float = Field(default=1.0, ge=0, description="Top/bottom margin in cm")


class SpacingConfig(BaseModel):
    """Spacing left after every piece, in centimeters."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    gap_x: float = Field(default=0.5, ge=0, description="Horizontal gap in cm")
    gap_y: float = Field(default=0.5, ge=0, description="Vertical gap in cm")


class PieceTypeConfig(BaseModel):
    """One piece shape and how many copies to cut.

    Attributes:
        id: Optional identifier; defaults to ``piece-<n>`` by position.
        label: Display name.
        width: Width across the roll in cm.
        height: Height along the roll in cm.
        quantity: Number of copies (zero is allowed and skipped).
    """

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    id: str | None = Field(default=None, min_length=1, max_length=64)
    label: str = Field(default="", max_length=100)
    width: float = Field(..., gt=0, description="Piece width in cm")
    height: float = Field(..., gt=0, description="Piece height in cm")
    quantity: int = Field(default=1, ge=0, le=10_000)


def default_pieces() -> list[PieceTypeConfig]:
    """Sample pieces the tool starts with."""
    return [
        PieceTypeConfig(id="piece-1", label="Cut A", width=25, height=35, quantity=4),
        PieceTypeConfig(id="piece-2", label="Cut B", width=18, height=28, quantity=6),
    ]


class OutputConfig(BaseModel):
    """Output preferences.

    Attributes:
        format: Default output format of the nest command.
        svg_file: Optional path for the SVG diagram.
        scale: Pixels per centimeter in SVG diagrams.
    """

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    format: OutputFormat = Field(default=OutputFormat.SUMMARY)
    svg_file: str | None = Field(default=None)
    scale: float = Field(default=4.0, gt=0, le=100)


class NestingConfiguration(BaseModel):
    """Root model of a nesting configuration file.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.0")
        fabric: Roll dimensions
        spacing: Gaps between pieces
        pieces: Piece types, at most MAX_PIECE_TYPES
        output: Output preferences

    Example:
        >>> config = NestingConfiguration(
        ...     schema_version="1.0",
        ...     pieces=[PieceTypeConfig(label="Panel", width=40, height=60, quantity=2)],
        ... )
    """

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    schema_version: str = Field(default="1.0", pattern=r"^\d+\.\d+$")
    fabric: FabricConfig = Field(default_factory=FabricConfig)
    spacing: SpacingConfig = Field(default_factory=SpacingConfig)
    pieces: list[PieceTypeConfig] = Field(
        default_factory=default_pieces, max_length=MAX_PIECE_TYPES
    )
    output: OutputConfig = Field(default_factory=OutputConfig)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Accept supported versions and newer minors of a supported major."""
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )

    @model_validator(mode="after")
    def assign_piece_ids(self) -> NestingConfiguration:
        """Fill in missing piece ids and reject duplicates."""
        seen: set[str] = set()
        for index, piece in enumerate(self.pieces):
            if piece.id is None:
                piece.id = f"piece-{index + 1}"
            if piece.id in seen:
                raise ValueError(f"Duplicate piece id '{piece.id}'")
            seen.add(piece.id)
        return self
