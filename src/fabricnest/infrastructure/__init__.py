"""Infrastructure layer - renderers, formatters and exporters."""

from .exporters import (
    Exporter,
    ExporterRegistry,
    ExportManager,
    JsonExporter,
    LayoutExporter,
    SvgExporter,
    TextReportExporter,
)
from .formatters import (
    JsonFormatter,
    LayoutSummaryFormatter,
    PlacementListFormatter,
    layout_output_to_dict,
)
from .layout_renderer import LayoutDiagramRenderer

__all__ = [
    # Rendering
    "LayoutDiagramRenderer",
    # Formatters
    "JsonFormatter",
    "LayoutSummaryFormatter",
    "PlacementListFormatter",
    "layout_output_to_dict",
    # Exporter framework
    "Exporter",
    "ExporterRegistry",
    "ExportManager",
    "JsonExporter",
    "LayoutExporter",
    "SvgExporter",
    "TextReportExporter",
]
