"""Conversion from configuration models to domain objects."""

from fabricnest.application.config.schema import NestingConfiguration
from fabricnest.domain import FabricSpec, PieceType


def config_to_fabric_spec(config: NestingConfiguration) -> FabricSpec:
    """Build the FabricSpec for a configuration."""
    return FabricSpec(
        width_cm=config.fabric.width_cm,
        margin_x=config.fabric.margin_x,
        margin_y=config.fabric.margin_y,
        gap_x=config.spacing.gap_x,
        gap_y=config.spacing.gap_y,
    )


def config_to_piece_types(config: NestingConfiguration) -> list[PieceType]:
    """Build PieceTypes in configuration order.

    Ids are always set after validation; the positional fallback only
    covers models built without running the root validator.
    """
    return [
        PieceType(
            id=piece.id or f"piece-{index + 1}",
            label=piece.label,
            width=piece.width,
            height=piece.height,
            quantity=piece.quantity,
        )
        for index, piece in enumerate(config.pieces)
    ]
