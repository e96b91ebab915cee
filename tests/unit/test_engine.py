"""Tests for the nesting engine.

Tests cover:
- Input validation and its ordering
- Exact placements on small rolls
- Infeasibility errors (too wide, unplaceable)
- Layout invariants: bounds, non-overlap, length, utilization
- Free space tiling and determinism
"""

from __future__ import annotations

import itertools
import logging
import math

import pytest

from fabricnest.domain import (
    FLOAT_EPS,
    FabricSpec,
    FreeRectangle,
    LayoutAssembler,
    LayoutResult,
    NestingEngine,
    NestingErrorKind,
    NestingFailure,
    NestingResult,
    PieceType,
    nest,
)


def _run(fabric: FabricSpec, pieces: list[PieceType]) -> LayoutResult:
    result = NestingEngine().run(fabric, pieces)
    assert result.is_ok, result.error
    return result.unwrap()


# =============================================================================
# Validation
# =============================================================================


class TestValidation:
    """Invalid input is rejected before any placement."""

    @pytest.fixture
    def pieces(self) -> list[PieceType]:
        return [PieceType("a", "A", 10, 10, quantity=1)]

    @pytest.mark.parametrize("width", [0, -10, math.inf, math.nan])
    def test_invalid_fabric_width(self, width: float, pieces: list[PieceType]) -> None:
        result = nest(FabricSpec(width_cm=width), pieces)
        assert not result.is_ok
        assert result.error.kind == NestingErrorKind.INVALID_FABRIC_WIDTH
        assert result.error.message == (
            "Invalid fabric width: it must be a finite number greater than zero."
        )

    @pytest.mark.parametrize(
        "margin_x,margin_y", [(-1, 0), (0, -1), (math.nan, 0), (0, math.inf)]
    )
    def test_invalid_margins(
        self, margin_x: float, margin_y: float, pieces: list[PieceType]
    ) -> None:
        result = nest(FabricSpec(width_cm=100, margin_x=margin_x, margin_y=margin_y), pieces)
        assert result.error.kind == NestingErrorKind.INVALID_MARGINS
        assert result.error.message == (
            "Invalid margins: margins must be finite, non-negative numbers."
        )

    def test_all_quantities_zero(self) -> None:
        result = nest(
            FabricSpec(width_cm=150, margin_x=1, margin_y=1),
            [PieceType("a", "A", 25, 35, quantity=0), PieceType("b", "B", 18, 28, quantity=0)],
        )
        assert result.error.kind == NestingErrorKind.NO_PIECES
        assert result.error.message == (
            "No pieces to place: add at least one piece with quantity greater than zero."
        )

    def test_empty_piece_list(self) -> None:
        result = nest(FabricSpec(width_cm=150), [])
        assert result.error.kind == NestingErrorKind.NO_PIECES

    def test_pieces_with_bad_dimensions_count_as_none(self) -> None:
        result = nest(FabricSpec(width_cm=150), [PieceType("a", "A", 0, 10, quantity=3)])
        assert result.error.kind == NestingErrorKind.NO_PIECES

    def test_margins_exceed_width(self, pieces: list[PieceType]) -> None:
        result = nest(FabricSpec(width_cm=150, margin_x=80), pieces)
        assert result.error.kind == NestingErrorKind.MARGINS_EXCEED_WIDTH
        assert result.error.message == "Margins exceed available width."
        assert result.error.kind.is_input_error

    def test_margins_equal_to_half_width(self, pieces: list[PieceType]) -> None:
        result = nest(FabricSpec(width_cm=150, margin_x=75), pieces)
        assert result.error.kind == NestingErrorKind.MARGINS_EXCEED_WIDTH

    def test_width_is_checked_before_margins(self, pieces: list[PieceType]) -> None:
        result = nest(FabricSpec(width_cm=0, margin_x=-1), pieces)
        assert result.error.kind == NestingErrorKind.INVALID_FABRIC_WIDTH

    def test_margins_are_checked_before_pieces(self) -> None:
        result = nest(FabricSpec(width_cm=100, margin_x=-1), [])
        assert result.error.kind == NestingErrorKind.INVALID_MARGINS

    def test_pieces_are_checked_before_margin_width(self) -> None:
        result = nest(FabricSpec(width_cm=100, margin_x=60), [])
        assert result.error.kind == NestingErrorKind.NO_PIECES


# =============================================================================
# Infeasibility
# =============================================================================


class TestInfeasibility:
    def test_piece_wider_than_roll(self) -> None:
        result = nest(
            FabricSpec(width_cm=150, margin_x=0),
            [PieceType("w", "Wide", 200, 10, quantity=1)],
        )
        assert result.error.kind == NestingErrorKind.PIECE_TOO_WIDE
        assert result.error.piece_id == "w-1"
        assert result.error.message == (
            'Piece "Wide" is wider than the usable width (200 cm > 150 cm).'
        )
        assert not result.error.kind.is_input_error

    def test_piece_wider_than_printable_width(self) -> None:
        result = nest(
            FabricSpec(width_cm=150, margin_x=10),
            [PieceType("w", "Wide", 140, 10, quantity=1)],
        )
        assert result.error.kind == NestingErrorKind.PIECE_TOO_WIDE
        assert "(140 cm > 130 cm)" in result.error.message

    def test_gap_makes_full_width_piece_unplaceable(self) -> None:
        """The piece fits the width but its trailing gap does not."""
        result = nest(
            FabricSpec(width_cm=10, gap_x=1),
            [PieceType("f", "Full", 10, 2, quantity=1)],
        )
        assert result.error.kind == NestingErrorKind.PIECE_UNPLACEABLE
        assert result.error.piece_id == "f-1"
        assert result.error.message == 'Piece "Full" could not be placed.'

    def test_failure_discards_partial_layout(self) -> None:
        result = nest(
            FabricSpec(width_cm=50),
            [PieceType("ok", "Fits", 10, 10, quantity=3), PieceType("w", "Wide", 60, 5)],
        )
        assert not result.is_ok
        assert result.layout is None

    def test_unwrap_raises_on_failure(self) -> None:
        result = nest(FabricSpec(width_cm=10), [PieceType("w", "Wide", 60, 5)])
        with pytest.raises(NestingFailure) as exc_info:
            result.unwrap()
        assert exc_info.value.error.kind == NestingErrorKind.PIECE_TOO_WIDE

    def test_infinite_horizontal_gap_is_unplaceable(self) -> None:
        result = nest(
            FabricSpec(width_cm=150, margin_x=1, margin_y=1, gap_x=math.inf, gap_y=0.5),
            [PieceType("a", "A", 25, 35, quantity=4)],
        )
        assert result.error.kind == NestingErrorKind.PIECE_UNPLACEABLE
        assert result.error.piece_id == "a-1"

    def test_infinite_vertical_gap_allows_a_single_row(self) -> None:
        """Five padded pieces fit across the roll; the sixth has nowhere to go."""
        result = nest(
            FabricSpec(width_cm=150, margin_x=1, margin_y=1, gap_x=0.5, gap_y=math.inf),
            [PieceType("a", "A", 25, 35, quantity=6)],
        )
        assert result.error.kind == NestingErrorKind.PIECE_UNPLACEABLE
        assert result.error.piece_id == "a-6"

    def test_infeasible_layout_logged_at_info(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger="fabricnest.domain.engine"):
            nest(FabricSpec(width_cm=10), [PieceType("w", "Wide", 60, 5)])
        record = caplog.records[-1]
        assert record.levelno == logging.INFO
        assert "Layout infeasible" in record.getMessage()

    def test_rejected_input_logged_at_warning(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger="fabricnest.domain.engine"):
            nest(FabricSpec(width_cm=0), [PieceType("a", "A", 5, 5)])
        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert "Rejected nesting input" in record.getMessage()


# =============================================================================
# Exact layouts
# =============================================================================


class TestExactLayouts:
    def test_two_pieces_side_by_side(self) -> None:
        layout = _run(FabricSpec(width_cm=10), [PieceType("a", "A", 4, 5, quantity=2)])
        assert [(p.piece_unit_id, p.x, p.y) for p in layout.placements] == [
            ("a-1", 0, 0),
            ("a-2", 4, 0),
        ]
        assert layout.total_length_cm == 5
        assert layout.utilization == pytest.approx(80)
        assert layout.free_rectangles == (
            FreeRectangle(0, 5, 10, math.inf),
            FreeRectangle(8, 0, 2, 5),
        )

    def test_margins_and_gaps(self) -> None:
        layout = _run(
            FabricSpec(width_cm=20, margin_x=1, margin_y=2, gap_x=1, gap_y=1),
            [PieceType("p", "Panel", 5, 4, quantity=3)],
        )
        assert [(p.x, p.y) for p in layout.placements] == [(1, 2), (7, 2), (13, 2)]
        assert layout.max_bottom == 6
        assert layout.total_length_cm == 8
        assert layout.utilization == pytest.approx(60 / 72 * 100)
        assert layout.free_rectangles == (FreeRectangle(1, 7, 18, math.inf),)

    def test_second_row_when_width_runs_out(self) -> None:
        layout = _run(FabricSpec(width_cm=10), [PieceType("p", "P", 6, 5, quantity=2)])
        assert [(p.x, p.y) for p in layout.placements] == [(0, 0), (0, 5)]
        assert layout.total_length_cm == 10
        assert layout.free_rectangles == (
            FreeRectangle(6, 0, 4, 10),
            FreeRectangle(0, 10, 10, math.inf),
        )

    def test_tallest_piece_placed_first(self) -> None:
        layout = _run(
            FabricSpec(width_cm=100),
            [PieceType("s", "Short", 10, 5), PieceType("t", "Tall", 10, 20)],
        )
        assert [p.piece_unit_id for p in layout.placements] == ["t-1", "s-1"]

    def test_short_piece_fills_gap_beside_tall_one(self) -> None:
        layout = _run(
            FabricSpec(width_cm=20),
            [PieceType("t", "Tall", 12, 20), PieceType("s", "Short", 8, 5, quantity=4)],
        )
        assert all(p.x >= 12 for p in layout.placements[1:])
        assert layout.total_length_cm == 20
        assert layout.utilization == pytest.approx(100)

    def test_negative_gaps_count_as_zero(self) -> None:
        layout = _run(
            FabricSpec(width_cm=10, gap_x=-1, gap_y=math.nan),
            [PieceType("a", "A", 5, 5, quantity=2)],
        )
        assert [(p.x, p.y) for p in layout.placements] == [(0, 0), (5, 0)]

    def test_label_falls_back_to_type_id(self) -> None:
        layout = _run(FabricSpec(width_cm=10), [PieceType("piece-1", "", 5, 5)])
        assert layout.placements[0].label == "piece-1"
        assert layout.placements[0].source_type_id == "piece-1"


# =============================================================================
# Layout invariants
# =============================================================================

LAYOUT_CASES = [
    pytest.param(
        FabricSpec(width_cm=150, margin_x=1, margin_y=1, gap_x=0.5, gap_y=0.5),
        [
            PieceType("a", "Cut A", 25, 35, quantity=4),
            PieceType("b", "Cut B", 18, 28, quantity=6),
        ],
        id="sample-roll",
    ),
    pytest.param(
        FabricSpec(width_cm=100),
        [
            PieceType("a", "A", 30, 20, quantity=5),
            PieceType("b", "B", 40, 15, quantity=3),
        ],
        id="no-margins-no-gaps",
    ),
    pytest.param(
        FabricSpec(width_cm=61.5, margin_x=0.75, margin_y=1.25, gap_x=0.3, gap_y=0.45),
        [
            PieceType("a", "Yoke", 12.5, 17.25, quantity=7),
            PieceType("b", "Cuff", 9.75, 8.4, quantity=9),
            PieceType("c", "Band", 20.1, 5.05, quantity=4),
            PieceType("d", "Unused", 3, 3, quantity=0),
        ],
        id="fractional-multi-row",
    ),
    pytest.param(
        FabricSpec(width_cm=50, margin_x=2, margin_y=3, gap_x=1, gap_y=1),
        [
            PieceType("t", "Tall", 11, 23, quantity=2),
            PieceType("m", "Medium", 7, 9, quantity=6),
            PieceType("s", "Small", 4, 3, quantity=10),
            PieceType("w", "Wide", 30, 2.5, quantity=2),
        ],
        id="fragmented-free-space",
    ),
    pytest.param(
        FabricSpec(width_cm=40, margin_x=5, margin_y=2),
        [PieceType("f", "Full", 30, 10, quantity=3)],
        id="full-width-stack",
    ),
    pytest.param(
        FabricSpec(width_cm=163.7, margin_x=3, margin_y=0, gap_x=1.3, gap_y=0),
        [
            PieceType("p1", "Front", 48.2, 71.5, quantity=2),
            PieceType("p2", "Back", 52.6, 70.1, quantity=1),
            PieceType("p3", "Sleeve", 33.4, 58.9, quantity=2),
            PieceType("p4", "Facing", 12.7, 41.3, quantity=4),
            PieceType("p5", "Pocket", 16.9, 18.2, quantity=3),
        ],
        id="wide-roll-zero-vertical-margin",
    ),
]


@pytest.mark.parametrize(("fabric", "pieces"), LAYOUT_CASES)
class TestLayoutInvariants:
    """Properties every successful layout must satisfy."""

    def test_every_unit_placed_once(
        self, fabric: FabricSpec, pieces: list[PieceType]
    ) -> None:
        layout = _run(fabric, pieces)
        expected = sorted(
            f"{piece.id}-{n}" for piece in pieces for n in range(1, piece.quantity + 1)
        )
        assert sorted(p.piece_unit_id for p in layout.placements) == expected

    def test_pieces_inside_printable_area(
        self, fabric: FabricSpec, pieces: list[PieceType]
    ) -> None:
        layout = _run(fabric, pieces)
        for p in layout.placements:
            assert p.x >= fabric.margin_x - FLOAT_EPS
            assert p.right <= fabric.width_cm - fabric.margin_x + FLOAT_EPS
            assert p.y >= fabric.margin_y - FLOAT_EPS

    def test_padded_pieces_do_not_overlap(
        self, fabric: FabricSpec, pieces: list[PieceType]
    ) -> None:
        layout = _run(fabric, pieces)
        padded = [p.padded(fabric.gap_x, fabric.gap_y) for p in layout.placements]
        for a, b in itertools.combinations(padded, 2):
            assert not a.intersects(b)

    def test_exact_length(self, fabric: FabricSpec, pieces: list[PieceType]) -> None:
        layout = _run(fabric, pieces)
        max_bottom = max(p.bottom for p in layout.placements)
        assert layout.total_length_cm == max(
            fabric.margin_y * 2, max_bottom + fabric.margin_y
        )

    def test_utilization_formula(
        self, fabric: FabricSpec, pieces: list[PieceType]
    ) -> None:
        layout = _run(fabric, pieces)
        used = layout.printable_width * (layout.max_bottom - fabric.margin_y)
        piece_area = sum(p.width * p.height for p in layout.placements)
        assert layout.utilization == pytest.approx(piece_area / used * 100)
        assert 0 < layout.utilization <= 100

    def test_free_space_tiles_unused_area(
        self, fabric: FabricSpec, pieces: list[PieceType]
    ) -> None:
        """Every sampled point is covered by exactly one padded piece or free rectangle."""
        layout = _run(fabric, pieces)
        padded = [p.padded(fabric.gap_x, fabric.gap_y) for p in layout.placements]
        regions = padded + list(layout.free_rectangles)
        step = 0.713
        x_count = int(layout.printable_width / step)
        y_count = int(layout.used_height / step)
        for i in range(x_count):
            px = fabric.margin_x + (i + 0.5) * step
            for j in range(y_count):
                py = fabric.margin_y + (j + 0.5) * step
                covering = [
                    r for r in regions if r.x < px < r.right and r.y < py < r.bottom
                ]
                assert len(covering) == 1, (px, py)

    def test_free_rectangles_are_disjoint(
        self, fabric: FabricSpec, pieces: list[PieceType]
    ) -> None:
        layout = _run(fabric, pieces)
        for a, b in itertools.combinations(layout.free_rectangles, 2):
            assert not a.intersects(b)

    def test_deterministic(self, fabric: FabricSpec, pieces: list[PieceType]) -> None:
        assert nest(fabric, pieces) == nest(fabric, pieces)


class TestLayoutLength:
    def test_length_is_both_margins_without_placements(self) -> None:
        fabric = FabricSpec(width_cm=100, margin_y=2.5)
        layout = LayoutAssembler().assemble(fabric, [])
        assert layout.total_length_cm == fabric.margin_y * 2
        assert layout.utilization == 0

    def test_length_with_zero_vertical_margin(self) -> None:
        layout = _run(FabricSpec(width_cm=10), [PieceType("a", "A", 4, 6, quantity=2)])
        assert layout.total_length_cm == 6


class TestNestingResult:
    def test_requires_exactly_one_outcome(self) -> None:
        with pytest.raises(ValueError):
            NestingResult()

    def test_error_string_is_message(self) -> None:
        result = nest(FabricSpec(width_cm=0), [])
        assert str(result.error) == result.error.message
