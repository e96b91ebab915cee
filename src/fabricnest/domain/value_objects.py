"""Immutable value objects for fabric nesting.

All dimensions are in centimeters. Coordinates grow right (x) and down the
roll (y), with the origin at the top-left corner of the fabric.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

# Single tolerance for every floating point comparison in the engine
FLOAT_EPS: float = 1e-6


def nearly_equal(a: float, b: float) -> bool:
    """Check whether two floats are equal within FLOAT_EPS.

    Identical values (including two infinities) always compare equal.
    """
    return a == b or abs(a - b) <= FLOAT_EPS


def is_finite_positive(value: float) -> bool:
    """Check that a value is a finite number greater than zero."""
    return isinstance(value, (int, float)) and math.isfinite(value) and value > 0


@dataclass(frozen=True)
class FabricSpec:
    """Fabric roll specification for one nesting run.

    The roll has a fixed width and unbounded length. Values are not
    validated here: the engine reports invalid input as an error result.

    Attributes:
        width_cm: Total roll width.
        margin_x: Unusable border on the left and right edges.
        margin_y: Unusable border at the start and end of the layout.
        gap_x: Horizontal spacing left after each piece.
        gap_y: Vertical spacing left after each piece.
    """

    width_cm: float
    margin_x: float = 0.0
    margin_y: float = 0.0
    gap_x: float = 0.0
    gap_y: float = 0.0

    @property
    def printable_width(self) -> float:
        """Width available for pieces after both horizontal margins."""
        return self.width_cm - 2 * self.margin_x


@dataclass(frozen=True)
class PieceType:
    """A user-defined piece shape with the number of copies to cut.

    Attributes:
        id: Stable identifier, used to derive unit ids.
        label: Display name; may be empty.
        width: Piece width across the roll.
        height: Piece height along the roll.
        quantity: Number of copies requested.
    """

    id: str
    label: str
    width: float
    height: float
    quantity: int = 1


@dataclass(frozen=True)
class PieceUnit:
    """One physical piece expanded from a PieceType.

    Attributes:
        id: Unit identity in the form ``{type_id}-{ordinal}``.
        type_id: Id of the owning PieceType.
        label: Display label inherited from the type.
        width: Piece width.
        height: Piece height.
    """

    id: str
    type_id: str
    label: str
    width: float
    height: float

    @property
    def area(self) -> float:
        """Piece area in square centimeters."""
        return self.width * self.height


@dataclass(frozen=True)
class FreeRectangle:
    """An unused axis-aligned region of the printable area.

    ``height`` may be ``math.inf`` for the open end of the roll.
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    def fits(self, width: float, height: float) -> bool:
        """Check whether a padded piece of the given size fits inside."""
        return (
            self.width >= width - FLOAT_EPS and self.height >= height - FLOAT_EPS
        )

    def intersects(self, other: FreeRectangle) -> bool:
        """Check for an overlap of positive area (touching edges do not count)."""
        return (
            self.x < other.right - FLOAT_EPS
            and other.x < self.right - FLOAT_EPS
            and self.y < other.bottom - FLOAT_EPS
            and other.y < self.bottom - FLOAT_EPS
        )


@dataclass(frozen=True)
class Placement:
    """A piece unit placed at a fixed origin on the roll.

    Attributes:
        piece_unit_id: Identity of the placed unit.
        source_type_id: Id of the PieceType the unit came from.
        label: Display label.
        width: Piece width.
        height: Piece height.
        x: Left edge, in roll coordinates.
        y: Top edge, in roll coordinates.
    """

    piece_unit_id: str
    source_type_id: str
    label: str
    width: float
    height: float
    x: float
    y: float

    @property
    def right(self) -> float:
        """X coordinate of the piece right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Y coordinate of the piece bottom edge."""
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    def padded(self, gap_x: float, gap_y: float) -> FreeRectangle:
        """Rectangle expanded by the gaps on the trailing edges."""
        return FreeRectangle(self.x, self.y, self.width + gap_x, self.height + gap_y)
