"""Display metrics derived from a finished layout.

These values are for presentation only and never feed back into the
engine.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from fabricnest.domain import LayoutResult, Placement

# Rows are grouped by y rounded to this many decimals
ROW_PRECISION: int = 3


def row_key(placement: Placement) -> float:
    """Key identifying the row (band) a placement belongs to."""
    return round(placement.y, ROW_PRECISION)


def count_bands(placements: tuple[Placement, ...] | list[Placement]) -> int:
    """Number of distinct rows among the placements."""
    return len({row_key(p) for p in placements})


def format_length(value: float) -> str:
    """Format a roll length for display.

    Examples:
        >>> format_length(45)
        '45.0 cm'
        >>> format_length(123)
        '1.23 m (123.0 cm)'
        >>> format_length(0)
        '--'
    """
    if not math.isfinite(value) or value <= 0:
        return "--"
    if value >= 100:
        return f"{value / 100:.2f} m ({value:.1f} cm)"
    return f"{value:.1f} cm"


@dataclass(frozen=True)
class LayoutMetrics:
    """Summary numbers shown next to a layout.

    Attributes:
        length_cm: Consumed roll length.
        band_count: Distinct placement rows.
        piece_count: Placed pieces.
        utilization_pct: Piece area over the used printable area.
        fabric_usage_pct: Piece area over the whole consumed roll area,
            margins included.
    """

    length_cm: float
    band_count: int
    piece_count: int
    utilization_pct: float
    fabric_usage_pct: float

    @property
    def length_m(self) -> float:
        return self.length_cm / 100

    @property
    def waste_pct(self) -> float:
        """Share of the used printable area not covered by pieces."""
        return 100.0 - self.utilization_pct

    @property
    def length_display(self) -> str:
        return format_length(self.length_cm)

    @classmethod
    def from_layout(cls, layout: LayoutResult) -> LayoutMetrics:
        """Compute the display metrics of a layout."""
        fabric_area = layout.fabric.width_cm * max(layout.total_length_cm, 0.0)
        if fabric_area > 0:
            fabric_usage = min(100.0, layout.piece_area / fabric_area * 100)
        else:
            fabric_usage = 0.0
        return cls(
            length_cm=layout.total_length_cm,
            band_count=count_bands(layout.placements),
            piece_count=layout.piece_count,
            utilization_pct=layout.utilization,
            fabric_usage_pct=fabric_usage,
        )
