"""Exporter framework for nesting layouts.

Registered exporters:
- json: Placements, metrics and free space as JSON
- svg: Roll layout diagram as an SVG image
- txt: Summary and placement table as plain text

Usage:
    from fabricnest.infrastructure.exporters import ExportManager, ExporterRegistry

    formats = ExporterRegistry.available_formats()
    files = ExportManager(Path("out")).export_all(["svg", "json"], output, "sample")
"""

from fabricnest.infrastructure.exporters.base import (
    Exporter,
    ExporterRegistry,
    ExportManager,
    LayoutExporter,
)
from fabricnest.infrastructure.exporters.svg import SvgExporter
from fabricnest.infrastructure.exporters.text import JsonExporter, TextReportExporter

__all__ = [
    "Exporter",
    "ExporterRegistry",
    "ExportManager",
    "JsonExporter",
    "LayoutExporter",
    "SvgExporter",
    "TextReportExporter",
]
