"""Output format handling functions for the nest command."""

from __future__ import annotations

from pathlib import Path

import typer

from fabricnest.application.config import OutputFormat
from fabricnest.application.dtos import LayoutOutput
from fabricnest.infrastructure import (
    ExporterRegistry,
    ExportManager,
    JsonFormatter,
    LayoutDiagramRenderer,
    LayoutSummaryFormatter,
    PlacementListFormatter,
)

__all__ = [
    "handle_multi_format_export",
    "render_output",
]


def render_output(output: LayoutOutput, output_format: OutputFormat, scale: float) -> str:
    """Render a successful layout output in one of the CLI formats."""
    layout = output.layout
    metrics = output.metrics
    assert layout is not None and metrics is not None

    if output_format == OutputFormat.JSON:
        return JsonFormatter().format(output)
    if output_format == OutputFormat.SVG:
        return LayoutDiagramRenderer(scale=scale).render_svg(layout)
    if output_format == OutputFormat.ASCII:
        return LayoutDiagramRenderer().render_ascii(layout)
    if output_format == OutputFormat.PLACEMENTS:
        return PlacementListFormatter().format(layout)
    return LayoutSummaryFormatter().format(layout, metrics)


def handle_multi_format_export(
    output_formats_str: str,
    output_dir: Path | None,
    project_name: str,
    result: LayoutOutput,
) -> None:
    """Export the layout to every format of a comma-separated list.

    Args:
        output_formats_str: Comma-separated format list or "all".
        output_dir: Output directory for exported files.
        project_name: Project name for file naming.
        result: The layout output to export.
    """
    if output_formats_str.lower() == "all":
        formats = ExporterRegistry.available_formats()
    else:
        formats = [f.strip().lower() for f in output_formats_str.split(",") if f.strip()]

    available = ExporterRegistry.available_formats()
    invalid = [f for f in formats if f not in available]
    if invalid:
        typer.echo(f"Unknown formats: {', '.join(invalid)}", err=True)
        typer.echo(f"Available formats: {', '.join(available)}", err=True)
        raise typer.Exit(code=1)

    if not formats:
        typer.echo("No valid formats to export.", err=True)
        raise typer.Exit(code=1)

    manager = ExportManager(output_dir or Path("."))
    try:
        files = manager.export_all(formats, result, project_name)
    except (OSError, ValueError) as e:
        typer.echo(f"Export error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo("\nExported files:")
    for fmt, path in files.items():
        typer.echo(f"  {fmt.upper()}: {path}")
