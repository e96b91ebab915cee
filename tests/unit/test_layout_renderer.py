"""Unit tests for SVG and ASCII layout rendering."""

from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from fabricnest.domain import FabricSpec, LayoutResult, PieceType, nest
from fabricnest.infrastructure import LayoutDiagramRenderer
from fabricnest.infrastructure.layout_renderer import ROW_COLORS

SVG_NS = "{http://www.w3.org/2000/svg}"


@pytest.fixture
def layout() -> LayoutResult:
    """Two rows of pieces on a 12 cm roll with 1 cm margins."""
    return nest(
        FabricSpec(width_cm=12, margin_x=1, margin_y=1),
        [PieceType("p", "Panel <A&B>", 6, 5, quantity=2)],
    ).unwrap()


class TestRenderSvg:
    def test_output_is_well_formed_svg(self, layout: LayoutResult) -> None:
        root = ET.fromstring(LayoutDiagramRenderer().render_svg(layout))
        assert root.tag == f"{SVG_NS}svg"

    def test_canvas_size_follows_scale(self, layout: LayoutResult) -> None:
        root = ET.fromstring(LayoutDiagramRenderer(scale=10, padding=20).render_svg(layout))
        assert float(root.get("width")) == pytest.approx(12 * 10 + 40)
        assert float(root.get("height")) == pytest.approx(12 * 10 + 40)

    def test_pieces_alternate_row_colors(self, layout: LayoutResult) -> None:
        root = ET.fromstring(LayoutDiagramRenderer().render_svg(layout))
        fills = [
            rect.get("fill")
            for rect in root.iter(f"{SVG_NS}rect")
            if rect.get("fill") in ROW_COLORS
        ]
        assert fills == [ROW_COLORS[0], ROW_COLORS[1]]

    def test_printable_area_is_dashed(self, layout: LayoutResult) -> None:
        root = ET.fromstring(LayoutDiagramRenderer().render_svg(layout))
        dashed = [r for r in root.iter(f"{SVG_NS}rect") if r.get("stroke-dasharray")]
        assert len(dashed) == 1

    def test_no_printable_outline_without_margins(self) -> None:
        layout = nest(FabricSpec(width_cm=10), [PieceType("p", "P", 5, 5)]).unwrap()
        svg = LayoutDiagramRenderer().render_svg(layout)
        assert "stroke-dasharray" not in svg

    def test_labels_are_escaped(self, layout: LayoutResult) -> None:
        svg = LayoutDiagramRenderer(scale=10).render_svg(layout)
        assert "Panel &lt;A&amp;B&gt;" in svg
        texts = [t.text for t in ET.fromstring(svg).iter(f"{SVG_NS}text")]
        assert "Panel <A&B>" in texts

    def test_dimensions_and_header(self, layout: LayoutResult) -> None:
        root = ET.fromstring(LayoutDiagramRenderer(scale=10).render_svg(layout))
        texts = [t.text for t in root.iter(f"{SVG_NS}text")]
        assert "6 x 5 cm" in texts
        assert "Width: 12.0 cm" in texts
        assert "Length: 12.0 cm" in texts

    def test_labels_can_be_hidden(self, layout: LayoutResult) -> None:
        renderer = LayoutDiagramRenderer(show_labels=False, show_dimensions=False)
        root = ET.fromstring(renderer.render_svg(layout))
        texts = [t.text for t in root.iter(f"{SVG_NS}text")]
        assert texts == ["Width: 12.0 cm", "Length: 12.0 cm"]


class TestRenderAscii:
    def test_header_and_border(self, layout: LayoutResult) -> None:
        ascii_art = LayoutDiagramRenderer().render_ascii(layout, width=40)
        lines = ascii_art.splitlines()
        assert lines[0] == "Roll 12 cm wide - 12.0 cm - 60.0% utilization"
        assert lines[1] == "+" + "-" * 38 + "+"
        assert lines[-1] == lines[1]
        assert all(len(line) == 40 for line in lines[1:])

    def test_pieces_are_drawn(self, layout: LayoutResult) -> None:
        ascii_art = LayoutDiagramRenderer().render_ascii(layout, width=40)
        assert "+" in "".join(ascii_art.splitlines()[2:-1])
