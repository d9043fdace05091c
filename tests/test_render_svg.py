# tests/test_render_svg.py
"""
SVG export: one centered, rotated <text> per record; reserved characters escaped;
solid or image background.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

from textshape.core.geometry import BoundingRect
from textshape.core.render_svg import export_svg, svg_string
from textshape.core.types import PlacementRecord, StyleSettings

NS = {"svg": "http://www.w3.org/2000/svg"}


def _record(text: str, cx: float, cy: float, size: float = 12.0, rot: float = 0.0) -> PlacementRecord:
    return PlacementRecord(
        text=text,
        center_x=cx,
        center_y=cy,
        font_size=size,
        rotation_degrees=rot,
        rect=BoundingRect.around_center(cx, cy, len(text) * size * 0.6, size * 0.8),
    )


def test_one_text_element_per_record() -> None:
    records = [_record("Ann", 10, 20), _record("Bob", 30.5, 40.25, rot=-90)]
    root = ET.fromstring(svg_string(records, 100, 80))
    assert root.get("viewBox") == "0 0 100 80"
    texts = root.findall(".//svg:text", NS)
    assert [t.text for t in texts] == ["Ann", "Bob"]
    assert texts[0].get("transform") == "rotate(0, 10, 20)"
    assert texts[1].get("transform") == "rotate(-90, 30.5, 40.25)"
    for t in texts:
        assert t.get("text-anchor") == "middle"
        assert t.get("dominant-baseline") == "middle"


def test_reserved_characters_are_escaped() -> None:
    s = svg_string([_record("Tom & <Jerry>", 50, 50)], 100, 100)
    assert "Tom &amp; &lt;Jerry&gt;" in s
    root = ET.fromstring(s)
    assert root.find(".//svg:text", NS).text == "Tom & <Jerry>"


def test_style_is_applied() -> None:
    style = StyleSettings(font_family="Courier", text_color="#ff0000", background_color="#000000")
    root = ET.fromstring(svg_string([_record("x", 5, 5, size=9)], 10, 10, style))
    bg = root.find("svg:rect", NS)
    assert bg is not None and bg.get("fill") == "#000000"
    t = root.find(".//svg:text", NS)
    assert t.get("font-family") == "Courier, sans-serif"
    assert t.get("fill") == "#ff0000"
    assert t.get("font-size") == "9"


def test_image_background() -> None:
    style = StyleSettings(background_mode="image", background_image="data:image/png;base64,AAAA")
    root = ET.fromstring(svg_string([], 64, 32, style))
    img = root.find("svg:image", NS)
    assert img is not None
    assert img.get("preserveAspectRatio") == "xMidYMid slice"
    assert img.get("width") == "64" and img.get("height") == "32"
    assert root.find("svg:rect", NS) is None


def test_export_svg_writes_file(tmp_path: Path) -> None:
    out = export_svg([_record("A", 1, 1)], 10, 10, tmp_path / "m.svg")
    content = out.read_text(encoding="utf-8")
    assert content.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert "<text" in content
