# textshape/core/render_svg.py
"""
Export a placement list as a self-contained SVG: background, one <text> per record.
Text is anchored at its center (text-anchor/dominant-baseline middle) and rotated about it.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

from textshape.core.types import PlacementRecord, StyleSettings

SVG_NS = "http://www.w3.org/2000/svg"


def _num(v: float) -> str:
    """Compact number: integers without a trailing .0, others to 2 decimals."""
    if float(v).is_integer():
        return str(int(v))
    return f"{v:.2f}".rstrip("0").rstrip(".")


def build_svg(
    records: list[PlacementRecord],
    width: int,
    height: int,
    style: StyleSettings | None = None,
) -> ET.Element:
    """SVG element tree for the mosaic. Text content is escaped by ElementTree on serialization."""
    style = style or StyleSettings()
    root = ET.Element(
        "svg",
        {
            "xmlns": SVG_NS,
            "width": str(width),
            "height": str(height),
            "viewBox": f"0 0 {width} {height}",
        },
    )

    if style.background_mode == "image" and style.background_image:
        ET.SubElement(
            root,
            "image",
            {
                "href": style.background_image,
                "x": "0",
                "y": "0",
                "width": str(width),
                "height": str(height),
                "preserveAspectRatio": "xMidYMid slice",
            },
        )
    else:
        ET.SubElement(
            root,
            "rect",
            {"width": "100%", "height": "100%", "fill": style.background_color},
        )

    g_text = ET.SubElement(root, "g", {"id": "mosaic"})
    family = f"{style.font_family}, sans-serif"
    for rec in records:
        x = _num(rec.center_x)
        y = _num(rec.center_y)
        text = ET.SubElement(
            g_text,
            "text",
            {
                "x": x,
                "y": y,
                "font-family": family,
                "font-size": _num(rec.font_size),
                "fill": style.text_color,
                "text-anchor": "middle",
                "dominant-baseline": "middle",
                "transform": f"rotate({_num(rec.rotation_degrees)}, {x}, {y})",
            },
        )
        text.text = rec.text
    return root


def svg_string(
    records: list[PlacementRecord],
    width: int,
    height: int,
    style: StyleSettings | None = None,
) -> str:
    root = build_svg(records, width, height, style)
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + ET.tostring(root, encoding="unicode", method="xml")


def export_svg(
    records: list[PlacementRecord],
    width: int,
    height: int,
    out_path: str | Path,
    style: StyleSettings | None = None,
) -> Path:
    """Write the mosaic SVG to out_path and return the path."""
    out = Path(out_path)
    out.write_text(svg_string(records, width, height, style), encoding="utf-8")
    return out
