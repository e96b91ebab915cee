"""Application layer - commands, DTOs and display metrics."""

from .commands import NestLayoutCommand
from .dtos import FabricInput, LayoutOutput, PieceInput, validate_piece_inputs
from .metrics import LayoutMetrics, count_bands, format_length

__all__ = [
    "NestLayoutCommand",
    "FabricInput",
    "LayoutOutput",
    "PieceInput",
    "validate_piece_inputs",
    "LayoutMetrics",
    "count_bands",
    "format_length",
]
