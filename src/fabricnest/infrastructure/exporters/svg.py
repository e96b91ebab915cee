"""SVG exporter for layout diagrams."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from fabricnest.infrastructure.exporters.base import ExporterRegistry, LayoutExporter
from fabricnest.infrastructure.layout_renderer import LayoutDiagramRenderer

if TYPE_CHECKING:
    from fabricnest.application.dtos import LayoutOutput


@ExporterRegistry.register("svg")
class SvgExporter(LayoutExporter):
    """Roll layout diagram as an SVG image."""

    format_name: ClassVar[str] = "svg"
    file_extension: ClassVar[str] = "svg"

    def __init__(
        self,
        scale: float = 4.0,
        show_labels: bool = True,
        show_dimensions: bool = True,
    ) -> None:
        self.renderer = LayoutDiagramRenderer(
            scale=scale,
            show_labels=show_labels,
            show_dimensions=show_dimensions,
        )

    def render(self, output: LayoutOutput) -> str:
        return self.renderer.render_svg(output.layout)
