"""Validate command for checking configuration files."""

from pathlib import Path
from typing import Annotated

import typer

from fabricnest.application.config import ConfigError, load_config


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON configuration file to validate"),
    ],
) -> None:
    """Validate a nesting configuration file.

    Checks JSON syntax and the configuration schema (required fields, value
    ranges, piece type limit).

    Exit codes:
        0 - Configuration is valid
        1 - Configuration has errors

    Example:
        fabricnest validate layout.json
    """
    typer.echo(f"Validating {config_file}...")
    typer.echo()

    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    piece_count = sum(p.quantity for p in config.pieces)
    typer.echo(
        f"Fabric: {config.fabric.width_cm:g} cm wide, "
        f"{len(config.pieces)} piece type(s), {piece_count} piece(s)"
    )
    typer.echo("Validation passed. Configuration is valid.")


def display_load_error(error: ConfigError) -> None:
    """Display a configuration loading error on stderr."""
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            line = detail.get("line", "?")
            column = detail.get("column", "?")
            message = detail.get("message", "Unknown error")
            typer.echo(f"    Line {line}, Column {column}: {message}", err=True)
    elif error.error_type == "validation":
        for detail in error.details:
            location = detail.get("location") or "(root)"
            typer.echo(f"  {location}: {detail.get('message', 'Unknown error')}", err=True)
            value = detail.get("value")
            if value is not None and not isinstance(value, (dict, list)):
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)

    typer.echo(err=True)
    typer.echo("Validation failed.", err=True)
