"""CLI command implementations for the fabricnest application.

This package contains helpers and subcommands for the CLI, including:
- validate: Validate a configuration file
- output handlers: Rendering and multi-format export of layouts
"""

from fabricnest.cli.commands.output_handlers import (
    handle_multi_format_export,
    render_output,
)
from fabricnest.cli.commands.validate import display_load_error, validate_command

__all__ = [
    "display_load_error",
    "handle_multi_format_export",
    "render_output",
    "validate_command",
]
