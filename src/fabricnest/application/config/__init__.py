"""Configuration schema and loading system for nesting runs.

Public API:
    - NestingConfiguration: Root configuration model
    - FabricConfig / SpacingConfig / PieceTypeConfig / OutputConfig
    - OutputFormat: Output formats of the nest command
    - MAX_PIECE_TYPES: Maximum number of piece types per configuration
    - load_config: Load configuration from a JSON file
    - load_config_from_dict: Load configuration from a dictionary
    - ConfigError: Exception for configuration errors
    - validation_details: Piece-aware details for Pydantic errors
    - merge_config_with_cli: Apply command line overrides
    - config_to_fabric_spec / config_to_piece_types: Convert to domain objects

Example:
    >>> from pathlib import Path
    >>> from fabricnest.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("layout.json"))
    ...     print(f"Roll width: {config.fabric.width_cm} cm")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from fabricnest.application.config.adapter import (
    config_to_fabric_spec,
    config_to_piece_types,
)
from fabricnest.application.config.loader import (
    ConfigError,
    describe_location,
    load_config,
    load_config_from_dict,
    validation_details,
)
from fabricnest.application.config.merger import merge_config_with_cli
from fabricnest.application.config.schema import (
    MAX_PIECE_TYPES,
    SUPPORTED_VERSIONS,
    FabricConfig,
    NestingConfiguration,
    OutputConfig,
    OutputFormat,
    PieceTypeConfig,
    SpacingConfig,
    default_pieces,
)

__all__ = [
    "MAX_PIECE_TYPES",
    "SUPPORTED_VERSIONS",
    "ConfigError",
    "FabricConfig",
    "NestingConfiguration",
    "OutputConfig",
    "OutputFormat",
    "PieceTypeConfig",
    "SpacingConfig",
    "config_to_fabric_spec",
    "config_to_piece_types",
    "default_pieces",
    "describe_location",
    "load_config",
    "load_config_from_dict",
    "merge_config_with_cli",
    "validation_details",
]
