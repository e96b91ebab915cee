"""Configuration merging utilities for CLI override support.

Precedence is: CLI args > config values > defaults. Only non-None CLI
arguments override configuration values.
"""

from pathlib import Path
from typing import Any

from fabricnest.application.config.schema import (
    FabricConfig,
    NestingConfiguration,
    OutputConfig,
    PieceTypeConfig,
    SpacingConfig,
)


def merge_config_with_cli(
    config: NestingConfiguration,
    *,
    width_cm: float | None = None,
    margin_x: float | None = None,
    margin_y: float | None = None,
    gap_x: float | None = None,
    gap_y: float | None = None,
    pieces: list[PieceTypeConfig] | None = None,
    output_format: str | None = None,
    svg_file: str | Path | None = None,
) -> NestingConfiguration:
    """Merge CLI arguments with configuration values.

    Pieces given on the command line replace the configured piece list as a
    whole rather than being appended to it.

    Returns:
        A new, re-validated NestingConfiguration.

    Example:
        >>> merged = merge_config_with_cli(NestingConfiguration(), width_cm=140.0)
        >>> merged.fabric.width_cm
        140.0
    """
    fabric_data = config.fabric.model_dump()
    _apply(fabric_data, width_cm=width_cm, margin_x=margin_x, margin_y=margin_y)

    spacing_data = config.spacing.model_dump()
    _apply(spacing_data, gap_x=gap_x, gap_y=gap_y)

    output_data = config.output.model_dump()
    _apply(
        output_data,
        format=output_format,
        svg_file=str(svg_file) if svg_file is not None else None,
    )

    piece_models = pieces if pieces is not None else config.pieces
    return NestingConfiguration.model_validate(
        {
            "schema_version": config.schema_version,
            "fabric": FabricConfig.model_validate(fabric_data).model_dump(),
            "spacing": SpacingConfig.model_validate(spacing_data).model_dump(),
            "pieces": [p.model_dump() for p in piece_models],
            "output": OutputConfig.model_validate(output_data).model_dump(),
        }
    )


def _apply(data: dict[str, Any], **overrides: Any) -> None:
    for key, value in overrides.items():
        if value is not None:
            data[key] = value
