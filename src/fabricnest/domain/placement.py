"""Selection of the free rectangle that receives the next piece."""

from __future__ import annotations

from dataclasses import dataclass

from .free_space import FreeSpaceTracker
from .value_objects import FLOAT_EPS, FreeRectangle, PieceUnit, nearly_equal


@dataclass(frozen=True)
class PlacementCandidate:
    """A free rectangle able to hold a piece, with its ranking scores.

    Attributes:
        index: Position of the rectangle in the tracker.
        rect: The free rectangle.
        new_max_y: Overall consumed height if the piece goes here.
        leftover_area: Free area left in the rectangle (clamped at zero).
    """

    index: int
    rect: FreeRectangle
    new_max_y: float
    leftover_area: float

    @property
    def x(self) -> float:
        return self.rect.x

    @property
    def y(self) -> float:
        return self.rect.y


def _less(a: float, b: float) -> bool:
    return not nearly_equal(a, b) and a < b - FLOAT_EPS


def _better(candidate: PlacementCandidate, best: PlacementCandidate) -> bool:
    """Sequential tie-break: max y, leftover area, then y, then x."""
    keys = (
        (candidate.new_max_y, best.new_max_y),
        (candidate.leftover_area, best.leftover_area),
        (candidate.y, best.y),
        (candidate.x, best.x),
    )
    for mine, theirs in keys:
        if _less(mine, theirs):
            return True
        if not nearly_equal(mine, theirs):
            return False
    return False


class PlacementSelector:
    """Chooses where a piece goes among the current free rectangles.

    Attributes:
        gap_x: Horizontal spacing added after each piece.
        gap_y: Vertical spacing added after each piece.
    """

    def __init__(self, gap_x: float = 0.0, gap_y: float = 0.0) -> None:
        self.gap_x = gap_x
        self.gap_y = gap_y

    def candidates(
        self, tracker: FreeSpaceTracker, piece: PieceUnit, running_max_y: float
    ) -> list[PlacementCandidate]:
        """All free rectangles that can hold the padded piece."""
        padded_w = piece.width + self.gap_x
        padded_h = piece.height + self.gap_y
        found: list[PlacementCandidate] = []
        for index, rect in enumerate(tracker.rectangles):
            if not rect.fits(padded_w, padded_h):
                continue
            found.append(
                PlacementCandidate(
                    index=index,
                    rect=rect,
                    new_max_y=max(running_max_y, rect.y + piece.height),
                    leftover_area=max(0.0, rect.area - padded_w * padded_h),
                )
            )
        return found

    def select(
        self, tracker: FreeSpaceTracker, piece: PieceUnit, running_max_y: float
    ) -> PlacementCandidate | None:
        """Pick the best rectangle for the piece.

        Candidates are ranked by the resulting overall height, then the
        leftover area, then the top edge, then the left edge. Exact ties
        keep the earliest rectangle.

        Returns:
            The winning candidate (piece origin is the rectangle's top-left
            corner), or None when no rectangle can hold the piece.
        """
        best: PlacementCandidate | None = None
        for candidate in self.candidates(tracker, piece, running_max_y):
            if best is None or _better(candidate, best):
                best = candidate
        return best
