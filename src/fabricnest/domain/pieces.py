"""Expansion of piece types into units and their placement order."""

from __future__ import annotations

import math
from typing import Iterable, Sequence

from .value_objects import PieceType, PieceUnit, is_finite_positive


def unit_quantity(piece_type: PieceType) -> int:
    """Number of units a piece type contributes, floored and clamped at zero."""
    quantity = piece_type.quantity
    if not isinstance(quantity, (int, float)) or not math.isfinite(quantity):
        return 0
    return max(0, math.floor(quantity))


def expand_pieces(piece_types: Iterable[PieceType]) -> list[PieceUnit]:
    """Expand piece types into one PieceUnit per unit of quantity.

    Types whose width or height is not a finite positive number are skipped.
    Order follows the input types, then the unit ordinal within each type.

    Args:
        piece_types: Piece types in user order.

    Returns:
        Units with ids of the form ``{type_id}-{ordinal}`` (ordinal from 1).
    """
    units: list[PieceUnit] = []
    for piece_type in piece_types:
        if not (
            is_finite_positive(piece_type.width)
            and is_finite_positive(piece_type.height)
        ):
            continue
        label = piece_type.label or piece_type.id
        for ordinal in range(1, unit_quantity(piece_type) + 1):
            units.append(
                PieceUnit(
                    id=f"{piece_type.id}-{ordinal}",
                    type_id=piece_type.id,
                    label=label,
                    width=float(piece_type.width),
                    height=float(piece_type.height),
                )
            )
    return units


def sort_pieces(units: Sequence[PieceUnit]) -> list[PieceUnit]:
    """Order units tallest first, then widest, then by id.

    Placing tall pieces first keeps the free space less fragmented. The id
    key removes every remaining tie, so the order is fully deterministic.
    """
    return sorted(units, key=lambda unit: (-unit.height, -unit.width, unit.id))
