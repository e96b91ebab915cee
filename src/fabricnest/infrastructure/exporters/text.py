"""JSON and plain text exporters."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from fabricnest.infrastructure.exporters.base import ExporterRegistry, LayoutExporter
from fabricnest.infrastructure.formatters import (
    JsonFormatter,
    LayoutSummaryFormatter,
    PlacementListFormatter,
)

if TYPE_CHECKING:
    from fabricnest.application.dtos import LayoutOutput


@ExporterRegistry.register("json")
class JsonExporter(LayoutExporter):
    """Placements, metrics and free space as JSON."""

    format_name: ClassVar[str] = "json"
    file_extension: ClassVar[str] = "json"

    def render(self, output: LayoutOutput) -> str:
        return JsonFormatter().format(output)


@ExporterRegistry.register("txt")
class TextReportExporter(LayoutExporter):
    """Summary and placement table as plain text."""

    format_name: ClassVar[str] = "txt"
    file_extension: ClassVar[str] = "txt"

    def render(self, output: LayoutOutput) -> str:
        return "\n\n".join(
            [
                LayoutSummaryFormatter().format(output.layout, output.metrics),
                PlacementListFormatter().format(output.layout),
            ]
        )
