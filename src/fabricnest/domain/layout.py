"""Final layout of a nesting run and the assembler that builds it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .value_objects import FLOAT_EPS, FabricSpec, FreeRectangle, Placement


@dataclass(frozen=True)
class LayoutResult:
    """Complete, successful layout of pieces on the roll.

    Attributes:
        fabric: Fabric specification the layout was computed for.
        placements: Placements in placement order (not spatial order).
        printable_width: Roll width minus both horizontal margins.
        max_bottom: Lowest piece edge, or ``margin_y`` without placements.
        total_length_cm: Roll length consumed, including both vertical margins.
        piece_area: Sum of the placed piece areas.
        utilization: Piece area over the printable area actually used, in %.
        free_rectangles: Final free space, for diagnostics only.
    """

    fabric: FabricSpec
    placements: tuple[Placement, ...]
    printable_width: float
    max_bottom: float
    total_length_cm: float
    piece_area: float
    utilization: float
    free_rectangles: tuple[FreeRectangle, ...] = ()

    @property
    def piece_count(self) -> int:
        """Number of placed pieces."""
        return len(self.placements)

    @property
    def used_height(self) -> float:
        """Length of roll between the top margin and the lowest piece."""
        return self.max_bottom - self.fabric.margin_y


class LayoutAssembler:
    """Aggregates placements into a LayoutResult with derived metrics."""

    def assemble(
        self,
        fabric: FabricSpec,
        placements: Sequence[Placement],
        free_rectangles: Sequence[FreeRectangle] = (),
    ) -> LayoutResult:
        printable_width = fabric.printable_width
        max_bottom = max((p.bottom for p in placements), default=fabric.margin_y)
        max_bottom = max(max_bottom, fabric.margin_y)
        total_length = max(fabric.margin_y * 2, max_bottom + fabric.margin_y)
        piece_area = sum(p.area for p in placements)
        used_height = max_bottom - fabric.margin_y

        return LayoutResult(
            fabric=fabric,
            placements=tuple(placements),
            printable_width=printable_width,
            max_bottom=max_bottom,
            total_length_cm=total_length,
            piece_area=piece_area,
            utilization=compute_utilization(piece_area, printable_width, used_height),
            free_rectangles=tuple(free_rectangles),
        )


def compute_utilization(
    piece_area: float, printable_width: float, used_height: float
) -> float:
    """Piece area as a percentage of the used printable area.

    Returns 0 when the used area is not larger than FLOAT_EPS; the value is
    clamped to [0, 100].
    """
    denominator = printable_width * used_height
    if denominator <= FLOAT_EPS:
        return 0.0
    return min(100.0, max(0.0, piece_area / denominator * 100))
