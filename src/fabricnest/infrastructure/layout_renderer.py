"""Layout diagram rendering for nesting results.

This module provides SVG and ASCII rendering of a roll layout showing the
fabric outline, the printable area, piece placements and their dimensions.
"""

from __future__ import annotations

from xml.sax.saxutils import escape

from fabricnest.application.metrics import format_length, row_key
from fabricnest.domain import LayoutResult, Placement

# Alternating fills for consecutive rows of pieces
ROW_COLORS: tuple[str, str] = ("#008080", "#F2841A")


class LayoutDiagramRenderer:
    """Renders roll layouts in SVG or ASCII.

    Attributes:
        scale: Pixels per centimeter for SVG rendering.
        padding: Blank border around the roll, in pixels.
        fabric_fill: Fill color of the roll.
        fabric_stroke: Stroke color of the roll and piece outlines.
        printable_stroke: Stroke color of the dashed printable area.
        text_color: Color for labels and dimensions.
        show_labels: Whether to show piece labels.
        show_dimensions: Whether to show piece dimensions.
    """

    def __init__(
        self,
        scale: float = 4.0,
        padding: float = 40.0,
        fabric_fill: str = "#E6F2F2",
        fabric_stroke: str = "#1F2933",
        printable_stroke: str = "#6B7280",
        text_color: str = "#111827",
        show_labels: bool = True,
        show_dimensions: bool = True,
    ) -> None:
        self.scale = scale
        self.padding = padding
        self.fabric_fill = fabric_fill
        self.fabric_stroke = fabric_stroke
        self.printable_stroke = printable_stroke
        self.text_color = text_color
        self.show_labels = show_labels
        self.show_dimensions = show_dimensions

    def render_svg(self, layout: LayoutResult) -> str:
        """Generate an SVG diagram of the whole roll layout.

        Args:
            layout: Layout to draw.

        Returns:
            SVG document as a string.
        """
        fabric = layout.fabric
        fabric_w = fabric.width_cm * self.scale
        fabric_h = max(layout.total_length_cm, 0.1) * self.scale
        svg_width = fabric_w + 2 * self.padding
        svg_height = fabric_h + 2 * self.padding
        ox = self.padding
        oy = self.padding

        parts: list[str] = [
            f'<svg width="{svg_width:.1f}" height="{svg_height:.1f}" '
            f'xmlns="http://www.w3.org/2000/svg">',
            "",
            "  <!-- Background -->",
            f'  <rect x="0" y="0" width="{svg_width:.1f}" height="{svg_height:.1f}" '
            f'fill="white"/>',
            "",
            "  <!-- Fabric roll -->",
            f'  <rect x="{ox}" y="{oy}" width="{fabric_w:.2f}" height="{fabric_h:.2f}" '
            f'fill="{self.fabric_fill}" stroke="{self.fabric_stroke}" stroke-width="2"/>',
        ]

        printable_h = layout.total_length_cm - 2 * fabric.margin_y
        if fabric.margin_x > 0 or fabric.margin_y > 0:
            parts.append("  <!-- Printable area (inside margins) -->")
            parts.append(
                f'  <rect x="{ox + fabric.margin_x * self.scale:.2f}" '
                f'y="{oy + fabric.margin_y * self.scale:.2f}" '
                f'width="{layout.printable_width * self.scale:.2f}" '
                f'height="{max(printable_h, 0.0) * self.scale:.2f}" '
                f'fill="none" stroke="{self.printable_stroke}" stroke-dasharray="6,4"/>'
            )

        parts.append("")
        parts.append("  <!-- Placed pieces -->")
        colors = self._row_colors(layout)
        for placement in layout.placements:
            parts.append(
                self._render_piece(placement, colors[row_key(placement)], ox, oy)
            )

        parts.append("")
        parts.append("  <!-- Header and footer -->")
        parts.append(
            f'  <text x="{ox}" y="{oy - 12}" font-family="Arial, sans-serif" '
            f'font-size="14" fill="{self.text_color}">'
            f"Width: {fabric.width_cm:.1f} cm</text>"
        )
        parts.append(
            f'  <text x="{ox}" y="{oy + fabric_h + 24:.2f}" '
            f'font-family="Arial, sans-serif" font-size="14" '
            f'fill="{self.text_color}">'
            f"Length: {escape(format_length(layout.total_length_cm))}</text>"
        )

        parts.append("")
        parts.append("</svg>")
        return "\n".join(parts)

    def _row_colors(self, layout: LayoutResult) -> dict[float, str]:
        """Alternate fills between rows, ordered top to bottom."""
        rows = sorted({row_key(p) for p in layout.placements})
        return {row: ROW_COLORS[i % len(ROW_COLORS)] for i, row in enumerate(rows)}

    def _render_piece(
        self, placement: Placement, fill: str, ox: float, oy: float
    ) -> str:
        """Render a single placement as an SVG group."""
        x = ox + placement.x * self.scale
        y = oy + placement.y * self.scale
        w = placement.width * self.scale
        h = placement.height * self.scale

        rect = (
            f'<rect x="{x:.2f}" y="{y:.2f}" width="{w:.2f}" height="{h:.2f}" '
            f'fill="{fill}" fill-opacity="0.75" stroke="{self.fabric_stroke}" '
            f'stroke-width="1.2"/>'
        )

        font_size = min(12.0, min(w, h) / 6)
        if font_size < 6 or not (self.show_labels or self.show_dimensions):
            return f"  {rect}"

        text_x = x + w / 2
        text_y = y + h / 2
        svg_parts = ["  <g>", f"    {rect}"]
        if self.show_labels:
            svg_parts.append(
                f'    <text x="{text_x:.2f}" y="{text_y - font_size / 2:.2f}" '
                f'text-anchor="middle" font-family="Arial, sans-serif" '
                f'font-size="{font_size:.1f}" fill="{self.text_color}">'
                f"{escape(placement.label)}</text>"
            )
        if self.show_dimensions:
            dims_y = text_y + font_size / 2 + 2 if self.show_labels else text_y
            svg_parts.append(
                f'    <text x="{text_x:.2f}" y="{dims_y:.2f}" '
                f'text-anchor="middle" font-family="Arial, sans-serif" '
                f'font-size="{font_size * 0.8:.1f}" fill="{self.text_color}">'
                f"{placement.width:g} x {placement.height:g} cm</text>"
            )
        svg_parts.append("  </g>")
        return "\n".join(svg_parts)

    def render_ascii(self, layout: LayoutResult, width: int = 80) -> str:
        """Generate an ASCII diagram of the layout for terminal display.

        Args:
            layout: Layout to draw.
            width: Terminal width in characters (default 80).

        Returns:
            ASCII string representation of the layout.
        """
        fabric = layout.fabric
        usable_width = max(width - 2, 10)
        scale_x = usable_width / fabric.width_cm

        # 0.5 compensates for characters being about twice as tall as wide
        grid_height = int(layout.total_length_cm * scale_x * 0.5)
        grid_height = max(grid_height, 3)
        scale_y = grid_height / max(layout.total_length_cm, 0.1)

        grid = [[" " for _ in range(usable_width)] for _ in range(grid_height)]
        for placement in layout.placements:
            self._draw_piece_ascii(grid, placement, scale_x, scale_y)

        lines: list[str] = [
            f"Roll {fabric.width_cm:g} cm wide - "
            f"{format_length(layout.total_length_cm)} - "
            f"{layout.utilization:.1f}% utilization"
        ]
        lines.append("+" + "-" * usable_width + "+")
        for row in grid:
            lines.append("|" + "".join(row) + "|")
        lines.append("+" + "-" * usable_width + "+")
        return "\n".join(lines)

    def _draw_piece_ascii(
        self,
        grid: list[list[str]],
        placement: Placement,
        scale_x: float,
        scale_y: float,
    ) -> None:
        """Draw a single piece outline and label onto the ASCII grid."""
        grid_height = len(grid)
        grid_width = len(grid[0]) if grid else 0
        x1 = max(0, min(int(placement.x * scale_x), grid_width - 1))
        x2 = max(0, min(int(placement.right * scale_x), grid_width - 1))
        y1 = max(0, min(int(placement.y * scale_y), grid_height - 1))
        y2 = max(0, min(int(placement.bottom * scale_y), grid_height - 1))

        for x in range(x1, x2 + 1):
            grid[y1][x] = "-"
            grid[y2][x] = "-"
        for y in range(y1, y2 + 1):
            grid[y][x1] = "|"
            grid[y][x2] = "|"
        for y, x in ((y1, x1), (y1, x2), (y2, x1), (y2, x2)):
            grid[y][x] = "+"

        label_row = y1 + 1
        if label_row < y2:
            label = placement.label[: max(x2 - x1 - 1, 0)]
            for i, char in enumerate(label):
                grid[label_row][x1 + 1 + i] = char
