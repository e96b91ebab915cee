"""Application commands for running nesting layouts."""

from __future__ import annotations

import logging

from fabricnest.application.config import (
    NestingConfiguration,
    config_to_fabric_spec,
    config_to_piece_types,
)
from fabricnest.application.dtos import (
    FabricInput,
    LayoutOutput,
    PieceInput,
    validate_piece_inputs,
)
from fabricnest.application.metrics import LayoutMetrics
from fabricnest.domain import FabricSpec, NestingEngine, PieceType

logger = logging.getLogger(__name__)


class NestLayoutCommand:
    """Runs the nesting engine and attaches display metrics.

    Every execution recomputes the layout from scratch; the command holds
    no state besides its engine.
    """

    def __init__(self, engine: NestingEngine | None = None) -> None:
        self.engine = engine or NestingEngine()

    def execute(
        self, fabric_input: FabricInput, pieces: list[PieceInput]
    ) -> LayoutOutput:
        """Lay out pieces described by input DTOs.

        Args:
            fabric_input: Roll and spacing.
            pieces: Piece types in user order.

        Returns:
            LayoutOutput with the layout and metrics, or with errors.
        """
        errors = validate_piece_inputs(pieces)
        if errors:
            return LayoutOutput(errors=errors)

        piece_types = [piece.to_piece_type(i) for i, piece in enumerate(pieces)]
        return self.run(fabric_input.to_fabric_spec(), piece_types)

    def execute_config(self, config: NestingConfiguration) -> LayoutOutput:
        """Lay out the pieces of a validated configuration."""
        return self.run(config_to_fabric_spec(config), config_to_piece_types(config))

    def run(self, fabric: FabricSpec, piece_types: list[PieceType]) -> LayoutOutput:
        """Run the engine on domain objects."""
        result = self.engine.run(fabric, piece_types)
        if not result.is_ok:
            assert result.error is not None
            return LayoutOutput(
                errors=[result.error.message],
                error_kind=result.error.kind,
                piece_id=result.error.piece_id,
            )

        layout = result.unwrap()
        metrics = LayoutMetrics.from_layout(layout)
        logger.debug(
            "Layout metrics: %d bands, %.1f%% waste",
            metrics.band_count,
            metrics.waste_pct,
        )
        return LayoutOutput(layout=layout, metrics=metrics)
