"""Text and JSON formatters for nesting output."""

from __future__ import annotations

import json
from typing import Any

from fabricnest.application.dtos import LayoutOutput
from fabricnest.application.metrics import LayoutMetrics, format_length
from fabricnest.domain import LayoutResult


class LayoutSummaryFormatter:
    """Formats the headline metrics of a layout."""

    def format(self, layout: LayoutResult, metrics: LayoutMetrics) -> str:
        fabric = layout.fabric
        lines = [
            "FABRIC LAYOUT SUMMARY",
            "=" * 50,
            f"{'Roll width:':<22} {fabric.width_cm:.1f} cm",
            f"{'Printable width:':<22} {layout.printable_width:.1f} cm",
            f"{'Margins (x / y):':<22} {fabric.margin_x:g} / {fabric.margin_y:g} cm",
            f"{'Gaps (x / y):':<22} {fabric.gap_x:g} / {fabric.gap_y:g} cm",
            "-" * 50,
            f"{'Length:':<22} {format_length(metrics.length_cm)}",
            f"{'Rows:':<22} {metrics.band_count}",
            f"{'Pieces:':<22} {metrics.piece_count}",
            f"{'Utilization:':<22} {metrics.utilization_pct:.1f}%",
            f"{'Waste:':<22} {metrics.waste_pct:.1f}%",
            f"{'Fabric usage:':<22} {metrics.fabric_usage_pct:.1f}%",
        ]
        return "\n".join(lines)


class PlacementListFormatter:
    """Formats placements as a table, in placement order."""

    def format(self, layout: LayoutResult) -> str:
        if not layout.placements:
            return "No pieces placed."

        lines = [
            "PLACEMENTS",
            "=" * 70,
            f"{'Piece':<16} {'Label':<18} {'Width':<8} {'Height':<8} {'X':<9} {'Y':<9}",
            "-" * 70,
        ]
        for p in layout.placements:
            lines.append(
                f"{p.piece_unit_id:<16} {p.label[:18]:<18} {p.width:<8.2f} "
                f"{p.height:<8.2f} {p.x:<9.2f} {p.y:<9.2f}"
            )
        lines.append("-" * 70)
        lines.append(f"{'TOTAL AREA':<16} {layout.piece_area:.1f} cm2")
        return "\n".join(lines)


def layout_output_to_dict(output: LayoutOutput) -> dict[str, Any]:
    """Plain dictionary form of a layout output, for JSON serialization."""
    if not output.is_valid:
        return {
            "errors": output.errors,
            "error_type": output.error_kind.value if output.error_kind else None,
            "piece_id": output.piece_id,
        }

    layout = output.layout
    metrics = output.metrics
    assert layout is not None and metrics is not None
    fabric = layout.fabric
    return {
        "fabric": {
            "width_cm": fabric.width_cm,
            "margin_x": fabric.margin_x,
            "margin_y": fabric.margin_y,
            "gap_x": fabric.gap_x,
            "gap_y": fabric.gap_y,
        },
        "placements": [
            {
                "piece_unit_id": p.piece_unit_id,
                "source_type_id": p.source_type_id,
                "label": p.label,
                "width": p.width,
                "height": p.height,
                "x": p.x,
                "y": p.y,
            }
            for p in layout.placements
        ],
        "printable_width": layout.printable_width,
        "total_length_cm": layout.total_length_cm,
        "piece_area": layout.piece_area,
        "metrics": {
            "length_cm": metrics.length_cm,
            "band_count": metrics.band_count,
            "piece_count": metrics.piece_count,
            "utilization_pct": metrics.utilization_pct,
            "waste_pct": metrics.waste_pct,
            "fabric_usage_pct": metrics.fabric_usage_pct,
        },
        # JSON has no infinity; the open end of the roll is written as null
        "free_rectangles": [
            {
                "x": r.x,
                "y": r.y,
                "width": r.width,
                "height": r.height if r.height != float("inf") else None,
            }
            for r in layout.free_rectangles
        ],
    }


class JsonFormatter:
    """Exports layout output as JSON."""

    def format(self, output: LayoutOutput) -> str:
        return json.dumps(layout_output_to_dict(output), indent=2)
