"""Typer CLI for fabric roll nesting."""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
import uvicorn
from pydantic import ValidationError

from fabricnest.application import NestLayoutCommand
from fabricnest.application.config import (
    ConfigError,
    NestingConfiguration,
    OutputFormat,
    PieceTypeConfig,
    load_config,
    merge_config_with_cli,
    validation_details,
)
from fabricnest.cli.commands import (
    handle_multi_format_export,
    render_output,
    validate_command,
)
from fabricnest.infrastructure import LayoutDiagramRenderer

logger = logging.getLogger(__name__)


app = typer.Typer(
    name="fabricnest",
    help="Lay out rectangular pieces on a fabric roll of fixed width.",
)

# Register validate command
app.command(name="validate")(validate_command)


def parse_piece_option(value: str, position: int) -> PieceTypeConfig:
    """Parse a ``LABEL:WxH[:QTY]`` piece option.

    The label may itself contain colons; the size is the first field after
    the last label colon that looks like ``WxH``.

    Args:
        value: Raw option value, e.g. ``"Sleeve:25x35:4"``.
        position: Zero-based position of the option on the command line.

    Raises:
        ValueError: If the value does not match the expected format.
    """
    parts = value.rsplit(":", 2)
    if len(parts) == 3 and "x" not in parts[2].lower():
        label, size, quantity_text = parts
    else:
        label, _, size = value.rpartition(":")
        quantity_text = "1"

    width_text, sep, height_text = size.lower().partition("x")
    if not sep:
        raise ValueError(
            f"Invalid piece '{value}': expected LABEL:WIDTHxHEIGHT[:QUANTITY]"
        )
    try:
        width = float(width_text)
        height = float(height_text)
        quantity = int(quantity_text)
    except ValueError:
        raise ValueError(
            f"Invalid piece '{value}': width, height and quantity must be numbers"
        ) from None

    return PieceTypeConfig(
        id=f"piece-{position + 1}",
        label=label or f"Piece {position + 1}",
        width=width,
        height=height,
        quantity=quantity,
    )


def _format_validation_error(error: ValidationError) -> list[str]:
    return [
        f"{detail['location']}: {detail['message']}"
        for detail in validation_details(error.errors())
    ]


@app.command()
def nest(
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to JSON configuration file"),
    ] = None,
    width: Annotated[
        float | None,
        typer.Option("--width", "-w", help="Roll width in cm"),
    ] = None,
    margin_x: Annotated[
        float | None,
        typer.Option("--margin-x", help="Left and right margin in cm"),
    ] = None,
    margin_y: Annotated[
        float | None,
        typer.Option("--margin-y", help="Margin at the start and end of the roll in cm"),
    ] = None,
    gap_x: Annotated[
        float | None,
        typer.Option("--gap-x", help="Horizontal gap after each piece in cm"),
    ] = None,
    gap_y: Annotated[
        float | None,
        typer.Option("--gap-y", help="Vertical gap after each piece in cm"),
    ] = None,
    pieces: Annotated[
        list[str] | None,
        typer.Option(
            "--piece",
            "-p",
            help="Piece as LABEL:WIDTHxHEIGHT[:QUANTITY]; repeat for more pieces",
        ),
    ] = None,
    output_format: Annotated[
        str | None,
        typer.Option(
            "--format", "-f", help="Output format: summary, placements, ascii, json, svg"
        ),
    ] = None,
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the output to a file"),
    ] = None,
    svg_file: Annotated[
        Path | None,
        typer.Option("--svg-file", help="Also write the layout diagram as SVG"),
    ] = None,
    output_formats: Annotated[
        str | None,
        typer.Option(
            "--output-formats",
            help="Comma-separated export formats: svg,json,txt (or 'all')",
        ),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option("--output-dir", help="Output directory for multi-format export"),
    ] = None,
    project_name: Annotated[
        str,
        typer.Option("--project-name", help="Project name for output file naming"),
    ] = "layout",
) -> None:
    """Nest pieces on a fabric roll and report the layout.

    Dimensions come from CLI options, a JSON configuration file, or both.
    When using --config, CLI options override config file values, and
    pieces given with --piece replace the configured pieces.

    Examples:
        fabricnest nest
        fabricnest nest --width 140 --piece "Front:40x60:2" --piece "Sleeve:25x45:2"
        fabricnest nest --config layout.json --format svg --output layout.svg
        fabricnest nest --format ascii --svg-file layout.svg
        fabricnest nest --config layout.json --output-formats all --output-dir ./out
    """
    if config_file is not None:
        try:
            config = load_config(config_file)
        except ConfigError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(code=1)
    else:
        config = NestingConfiguration()

    try:
        cli_pieces = (
            [parse_piece_option(value, i) for i, value in enumerate(pieces)]
            if pieces
            else None
        )
        config = merge_config_with_cli(
            config,
            width_cm=width,
            margin_x=margin_x,
            margin_y=margin_y,
            gap_x=gap_x,
            gap_y=gap_y,
            pieces=cli_pieces,
            output_format=output_format.lower() if output_format else None,
            svg_file=svg_file,
        )
    except ValidationError as e:
        for line in _format_validation_error(e):
            typer.echo(f"Error: {line}", err=True)
        raise typer.Exit(code=1)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    result = NestLayoutCommand().execute_config(config)

    if not result.is_valid:
        for error in result.errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1)

    if output_formats:
        handle_multi_format_export(output_formats, output_dir, project_name, result)
        return

    text = render_output(result, OutputFormat(config.output.format), config.output.scale)
    if output_file is not None:
        output_file.write_text(text, encoding="utf-8")
        typer.echo(f"Output written to: {output_file}")
    else:
        typer.echo(text)

    if config.output.svg_file:
        assert result.layout is not None
        svg_path = Path(config.output.svg_file)
        renderer = LayoutDiagramRenderer(scale=config.output.scale)
        svg_path.write_text(renderer.render_svg(result.layout), encoding="utf-8")
        logger.info("Wrote layout diagram to %s", svg_path)
        typer.echo(f"Diagram written to: {svg_path}")


@app.command()
def defaults() -> None:
    """Print the default nesting configuration as JSON."""
    config = NestingConfiguration()
    typer.echo(json.dumps(config.model_dump(mode="json"), indent=2))


@app.command()
def serve(
    host: Annotated[str, typer.Option("--host", help="Interface to bind")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", help="Port to listen on")] = 8000,
    reload: Annotated[
        bool, typer.Option("--reload", help="Restart when source files change")
    ] = False,
) -> None:
    """Serve the REST API with uvicorn."""
    typer.echo(f"Serving the nesting API on http://{host}:{port}")
    uvicorn.run("fabricnest.web:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
