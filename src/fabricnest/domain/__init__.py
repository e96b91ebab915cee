"""Domain layer - the nesting engine and its value objects."""

from .engine import NestingEngine, nest
from .free_space import (
    FreeSpaceTracker,
    carve,
    merge_free_rectangles,
    split_rectangle,
    try_merge,
)
from .layout import LayoutAssembler, LayoutResult, compute_utilization
from .pieces import expand_pieces, sort_pieces, unit_quantity
from .placement import PlacementCandidate, PlacementSelector
from .results import NestingError, NestingErrorKind, NestingFailure, NestingResult
from .value_objects import (
    FLOAT_EPS,
    FabricSpec,
    FreeRectangle,
    PieceType,
    PieceUnit,
    Placement,
    nearly_equal,
)

__all__ = [
    # Engine
    "NestingEngine",
    "nest",
    # Free space
    "FreeSpaceTracker",
    "carve",
    "merge_free_rectangles",
    "split_rectangle",
    "try_merge",
    # Layout
    "LayoutAssembler",
    "LayoutResult",
    "compute_utilization",
    # Pieces
    "expand_pieces",
    "sort_pieces",
    "unit_quantity",
    # Placement
    "PlacementCandidate",
    "PlacementSelector",
    # Results
    "NestingError",
    "NestingErrorKind",
    "NestingFailure",
    "NestingResult",
    # Value objects
    "FLOAT_EPS",
    "FabricSpec",
    "FreeRectangle",
    "PieceType",
    "PieceUnit",
    "Placement",
    "nearly_equal",
]
