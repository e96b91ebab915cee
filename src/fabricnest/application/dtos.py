"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field

from fabricnest.application.config.schema import MAX_PIECE_TYPES
from fabricnest.application.metrics import LayoutMetrics
from fabricnest.domain import FabricSpec, LayoutResult, NestingErrorKind, PieceType


@dataclass
class FabricInput:
    """Input DTO for the roll and spacing."""

    width_cm: float
    margin_x: float = 1.0
    margin_y: float = 1.0
    gap_x: float = 0.5
    gap_y: float = 0.5

    def to_fabric_spec(self) -> FabricSpec:
        """Convert to FabricSpec value object."""
        return FabricSpec(
            width_cm=self.width_cm,
            margin_x=self.margin_x,
            margin_y=self.margin_y,
            gap_x=self.gap_x,
            gap_y=self.gap_y,
        )


@dataclass
class PieceInput:
    """Input DTO for one piece type."""

    label: str
    width: float
    height: float
    quantity: int = 1
    id: str | None = None

    def to_piece_type(self, position: int) -> PieceType:
        """Convert to PieceType, deriving an id from the position if unset."""
        return PieceType(
            id=self.id or f"piece-{position + 1}",
            label=self.label,
            width=self.width,
            height=self.height,
            quantity=self.quantity,
        )


def validate_piece_inputs(pieces: list[PieceInput]) -> list[str]:
    """Check the piece list against input collection policy.

    Dimension and quantity problems are left to the engine, which reports
    them as nesting errors.
    """
    errors: list[str] = []
    if len(pieces) > MAX_PIECE_TYPES:
        errors.append(f"Maximum {MAX_PIECE_TYPES} piece types supported")
    ids = [p.id for p in pieces if p.id]
    if len(ids) != len(set(ids)):
        errors.append("Piece ids must be unique")
    return errors


@dataclass
class LayoutOutput:
    """Output DTO containing a nesting run and its display metrics.

    Attributes:
        layout: The computed layout, when the run succeeded.
        metrics: Display metrics of the layout.
        errors: Error messages if the run failed.
        error_kind: Nesting error category, when the engine rejected the run.
        piece_id: Unit id named by an infeasibility error.
    """

    layout: LayoutResult | None = None
    metrics: LayoutMetrics | None = None
    errors: list[str] = field(default_factory=list)
    error_kind: NestingErrorKind | None = None
    piece_id: str | None = None

    @property
    def is_valid(self) -> bool:
        """Check if the layout was generated successfully."""
        return len(self.errors) == 0 and self.layout is not None
