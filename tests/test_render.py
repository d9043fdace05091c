# tests/test_render.py
"""
Raster rendering: PNG size follows canvas and scale; cover-fit background extent; debug overlay.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from textshape.core.geometry import BoundingRect
from textshape.core.render import cover_extent, px_to_pt, render_debug, render_mosaic
from textshape.core.types import OccupancyMask, PlacementRecord, StyleSettings


def _records() -> list[PlacementRecord]:
    return [
        PlacementRecord("Ann", 50, 40, 12, 0, BoundingRect.around_center(50, 40, 21.6, 9.6)),
        PlacementRecord("Bob", 120, 50, 10, -90, BoundingRect.around_center(120, 50, 8, 18)),
    ]


def test_render_mosaic_png_size(tmp_path: Path) -> None:
    out = render_mosaic(_records(), 200, 100, tmp_path / "m.png", StyleSettings(font_family="DejaVu Sans"))
    with Image.open(out) as img:
        assert img.size == (200, 100)


def test_render_mosaic_scale(tmp_path: Path) -> None:
    out = render_mosaic(_records(), 200, 100, tmp_path / "m2.png", StyleSettings(font_family="DejaVu Sans"), scale=2)
    with Image.open(out) as img:
        assert img.size == (400, 200)


def test_render_with_background_image(tmp_path: Path) -> None:
    bg = tmp_path / "bg.png"
    Image.new("RGB", (40, 20), (0, 128, 0)).save(bg)
    style = StyleSettings(font_family="DejaVu Sans", background_mode="image", background_image=str(bg))
    out = render_mosaic(_records(), 100, 100, tmp_path / "bg_out.png", style)
    with Image.open(out) as img:
        r, g, b = img.convert("RGB").getpixel((2, 98))
        assert g > r and g > b


def test_missing_background_image_falls_back(tmp_path: Path) -> None:
    style = StyleSettings(font_family="DejaVu Sans", background_mode="image", background_image=str(tmp_path / "nope.png"))
    out = render_mosaic([], 50, 50, tmp_path / "fallback.png", style)
    assert out.exists()


def test_cover_extent() -> None:
    assert cover_extent(200, 100, 100, 100) == pytest.approx((-50, 150, 100, 0))
    assert cover_extent(100, 200, 100, 100) == pytest.approx((0, 100, 150, -50))


def test_px_to_pt() -> None:
    assert px_to_pt(100, dpi=72) == pytest.approx(100)
    assert px_to_pt(100, dpi=100) == pytest.approx(72)


def test_render_debug(tmp_path: Path) -> None:
    out = render_debug(OccupancyMask.full(160, 120), _records(), tmp_path / "debug.png")
    with Image.open(out) as img:
        assert img.size == (160, 120)
