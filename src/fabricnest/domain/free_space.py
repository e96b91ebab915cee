"""Free space bookkeeping for the nesting engine.

The free space of the printable area is kept as a list of disjoint
rectangles that together tile every unused region. Placing a piece removes
one rectangle, adds at most two remainders (guillotine split) and then
merges neighbours until nothing more can be merged.
"""

from __future__ import annotations

import logging
import math

from .value_objects import FLOAT_EPS, FreeRectangle, nearly_equal

logger = logging.getLogger(__name__)


class FreeSpaceTracker:
    """Index-addressable set of free rectangles for one nesting run.

    Attributes:
        rectangles: Current free rectangles, in insertion order.
    """

    def __init__(self, rectangles: list[FreeRectangle] | None = None) -> None:
        self.rectangles: list[FreeRectangle] = list(rectangles or [])

    @classmethod
    def for_roll(
        cls, margin_x: float, margin_y: float, printable_width: float
    ) -> FreeSpaceTracker:
        """Create the initial state: one open-ended printable rectangle."""
        return cls([FreeRectangle(margin_x, margin_y, printable_width, math.inf)])

    def __len__(self) -> int:
        return len(self.rectangles)

    def __getitem__(self, index: int) -> FreeRectangle:
        return self.rectangles[index]

    def remove(self, index: int) -> FreeRectangle:
        """Remove and return the rectangle at ``index``."""
        return self.rectangles.pop(index)

    def add(self, rect: FreeRectangle) -> None:
        """Append a free rectangle."""
        self.rectangles.append(rect)

    def snapshot(self) -> tuple[FreeRectangle, ...]:
        """Immutable copy of the current rectangles."""
        return tuple(self.rectangles)


def split_rectangle(
    rect: FreeRectangle, used_width: float, used_height: float
) -> list[FreeRectangle]:
    """Split a free rectangle around a padded piece at its top-left corner.

    Returns the right remainder (as tall as the piece) and the bottom
    remainder (full rectangle width), skipping slivers thinner than
    FLOAT_EPS.
    """
    remainders: list[FreeRectangle] = []
    right_width = rect.width - used_width
    if right_width > FLOAT_EPS:
        remainders.append(
            FreeRectangle(rect.x + used_width, rect.y, right_width, used_height)
        )
    bottom_height = rect.height - used_height
    if bottom_height > FLOAT_EPS:
        remainders.append(
            FreeRectangle(rect.x, rect.y + used_height, rect.width, bottom_height)
        )
    return remainders


def try_merge(a: FreeRectangle, b: FreeRectangle) -> FreeRectangle | None:
    """Merge two adjacent rectangles into one, if they line up exactly.

    Rectangles merge horizontally when they share ``y`` and ``height`` and
    touch along a vertical edge, or vertically when they share ``x`` and
    ``width`` and touch along a horizontal edge.

    Returns:
        The merged rectangle, or None if the pair cannot be merged.
    """
    if nearly_equal(a.y, b.y) and nearly_equal(a.height, b.height):
        if nearly_equal(a.right, b.x) or nearly_equal(b.right, a.x):
            left = min(a.x, b.x)
            right = max(a.right, b.right)
            return FreeRectangle(left, a.y, right - left, a.height)
    if nearly_equal(a.x, b.x) and nearly_equal(a.width, b.width):
        if nearly_equal(a.bottom, b.y) or nearly_equal(b.bottom, a.y):
            top = min(a.y, b.y)
            bottom = max(a.bottom, b.bottom)
            return FreeRectangle(a.x, top, a.width, bottom - top)
    return None


def merge_free_rectangles(tracker: FreeSpaceTracker) -> int:
    """Merge adjacent free rectangles until a full pass finds no pair.

    The merged rectangle replaces the first of the pair in place.

    Returns:
        Number of merges performed.
    """
    merges = 0
    merged = True
    while merged:
        merged = False
        rects = tracker.rectangles
        for i in range(len(rects)):
            for j in range(i + 1, len(rects)):
                combined = try_merge(rects[i], rects[j])
                if combined is not None:
                    rects[i] = combined
                    tracker.remove(j)
                    merges += 1
                    merged = True
                    break
            if merged:
                break
    return merges


def carve(
    tracker: FreeSpaceTracker, index: int, used_width: float, used_height: float
) -> None:
    """Consume the rectangle at ``index`` with a padded piece.

    Removes the chosen rectangle, adds its remainders and runs the fixpoint
    merge so the tracker stays a compact tiling of the free space.

    Args:
        tracker: Free space of the current run.
        index: Index of the chosen rectangle.
        used_width: Piece width plus horizontal gap.
        used_height: Piece height plus vertical gap.
    """
    rect = tracker.remove(index)
    for remainder in split_rectangle(rect, used_width, used_height):
        tracker.add(remainder)
    merges = merge_free_rectangles(tracker)
    logger.debug(
        "Carved %.3fx%.3f at (%.3f, %.3f): %d free rectangles after %d merges",
        used_width,
        used_height,
        rect.x,
        rect.y,
        len(tracker),
        merges,
    )
