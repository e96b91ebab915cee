"""Nesting engine: lays pieces out on a fixed-width, open-ended roll.

The engine is a deterministic greedy heuristic in the guillotine/MaxRects
family. Pieces are placed one at a time, tallest first, into the free
rectangle that keeps the consumed length lowest. There is no rotation and
no backtracking: a run either places every piece or fails as a whole.

Example:
    >>> from fabricnest.domain import FabricSpec, PieceType, nest
    >>> result = nest(
    ...     FabricSpec(width_cm=150, margin_x=1, margin_y=1, gap_x=0.5, gap_y=0.5),
    ...     [PieceType(id="a", label="Cut A", width=25, height=35, quantity=4)],
    ... )
    >>> result.is_ok
    True
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from .free_space import FreeSpaceTracker, carve
from .layout import LayoutAssembler, LayoutResult
from .pieces import expand_pieces, sort_pieces
from .placement import PlacementSelector
from .results import NestingError, NestingErrorKind, NestingFailure, NestingResult
from .value_objects import FLOAT_EPS, FabricSpec, PieceType, PieceUnit, Placement

logger = logging.getLogger(__name__)


def _finite(value: float) -> bool:
    return isinstance(value, (int, float)) and math.isfinite(value)


def _sanitize_gap(value: float) -> float:
    """NaN and negative gaps count as no gap; an infinite gap stays infinite."""
    if not isinstance(value, (int, float)) or math.isnan(value):
        return 0.0
    return max(0.0, float(value))


def _fail(
    kind: NestingErrorKind, message: str, piece_id: str | None = None
) -> NestingFailure:
    return NestingFailure(NestingError(kind=kind, message=message, piece_id=piece_id))


class NestingEngine:
    """Runs complete nesting computations.

    The engine keeps no state between runs; every call to ``run`` starts
    from scratch, so one instance may be shared freely.
    """

    def __init__(self, assembler: LayoutAssembler | None = None) -> None:
        self.assembler = assembler or LayoutAssembler()

    def run(
        self, fabric: FabricSpec, piece_types: Sequence[PieceType]
    ) -> NestingResult:
        """Lay out all pieces on the roll.

        Args:
            fabric: Roll width, margins and gaps.
            piece_types: Piece types in user order.

        Returns:
            A successful NestingResult with the full layout, or a failed one
            naming the first problem found. Never raises for bad input.
        """
        try:
            layout = self._run(fabric, piece_types)
        except NestingFailure as failure:
            if failure.error.kind.is_input_error:
                logger.warning("Rejected nesting input: %s", failure.error.message)
            else:
                logger.info("Layout infeasible: %s", failure.error.message)
            return NestingResult.fail(failure.error)
        return NestingResult.ok(layout)

    def _run(
        self, fabric: FabricSpec, piece_types: Sequence[PieceType]
    ) -> LayoutResult:
        units = self._validate(fabric, piece_types)
        ordered = sort_pieces(units)

        gap_x = _sanitize_gap(fabric.gap_x)
        gap_y = _sanitize_gap(fabric.gap_y)
        printable_width = fabric.printable_width
        tracker = FreeSpaceTracker.for_roll(
            fabric.margin_x, fabric.margin_y, printable_width
        )
        selector = PlacementSelector(gap_x=gap_x, gap_y=gap_y)

        logger.debug(
            "Nesting %d pieces on %.3f cm printable width",
            len(ordered),
            printable_width,
        )

        placements: list[Placement] = []
        running_max_y = fabric.margin_y
        for piece in ordered:
            placement = self._place(
                piece, tracker, selector, printable_width, running_max_y
            )
            placements.append(placement)
            running_max_y = max(running_max_y, placement.bottom)

        layout = self.assembler.assemble(fabric, placements, tracker.snapshot())
        logger.info(
            "Placed %d pieces: %.2f cm of roll, %.1f%% utilization",
            layout.piece_count,
            layout.total_length_cm,
            layout.utilization,
        )
        return layout

    def _validate(
        self, fabric: FabricSpec, piece_types: Sequence[PieceType]
    ) -> list[PieceUnit]:
        """Reject invalid input before any placement is attempted."""
        if not _finite(fabric.width_cm) or fabric.width_cm <= 0:
            raise _fail(
                NestingErrorKind.INVALID_FABRIC_WIDTH,
                "Invalid fabric width: it must be a finite number greater than zero.",
            )
        if (
            not _finite(fabric.margin_x)
            or not _finite(fabric.margin_y)
            or fabric.margin_x < 0
            or fabric.margin_y < 0
        ):
            raise _fail(
                NestingErrorKind.INVALID_MARGINS,
                "Invalid margins: margins must be finite, non-negative numbers.",
            )
        units = expand_pieces(piece_types)
        if not units:
            raise _fail(
                NestingErrorKind.NO_PIECES,
                "No pieces to place: add at least one piece with quantity "
                "greater than zero.",
            )
        if fabric.printable_width <= 0:
            raise _fail(
                NestingErrorKind.MARGINS_EXCEED_WIDTH,
                "Margins exceed available width.",
            )
        return units

    def _place(
        self,
        piece: PieceUnit,
        tracker: FreeSpaceTracker,
        selector: PlacementSelector,
        printable_width: float,
        running_max_y: float,
    ) -> Placement:
        """Place one piece and carve the free space it consumes."""
        if piece.width > printable_width + FLOAT_EPS:
            raise _fail(
                NestingErrorKind.PIECE_TOO_WIDE,
                f'Piece "{piece.label}" is wider than the usable width '
                f"({piece.width:g} cm > {printable_width:g} cm).",
                piece_id=piece.id,
            )

        choice = selector.select(tracker, piece, running_max_y)
        if choice is None:
            raise _fail(
                NestingErrorKind.PIECE_UNPLACEABLE,
                f'Piece "{piece.label}" could not be placed.',
                piece_id=piece.id,
            )

        carve(
            tracker,
            choice.index,
            piece.width + selector.gap_x,
            piece.height + selector.gap_y,
        )
        return Placement(
            piece_unit_id=piece.id,
            source_type_id=piece.type_id,
            label=piece.label,
            width=piece.width,
            height=piece.height,
            x=choice.x,
            y=choice.y,
        )


def nest(fabric: FabricSpec, piece_types: Sequence[PieceType]) -> NestingResult:
    """Run the nesting engine once with default collaborators."""
    return NestingEngine().run(fabric, piece_types)
