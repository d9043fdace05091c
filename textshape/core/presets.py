# textshape/core/presets.py
"""
Built-in silhouette library. Shapes are built as shapely polygons in a unit frame,
fitted to the requested image size, and drawn black on white with Pillow.
"""

from __future__ import annotations

import math
from collections.abc import Callable

from PIL import Image, ImageDraw
from shapely import affinity
from shapely.geometry import MultiPolygon, Point, Polygon
from shapely.geometry.base import BaseGeometry

PRESET_MARGIN_FRAC: float = 0.05


def _circle() -> BaseGeometry:
    return Point(0.0, 0.0).buffer(1.0, quad_segs=64)


def _ring() -> BaseGeometry:
    return Point(0.0, 0.0).buffer(1.0, quad_segs=64).difference(Point(0.0, 0.0).buffer(0.45, quad_segs=64))


def _square() -> BaseGeometry:
    return Polygon([(-1, -1), (1, -1), (1, 1), (-1, 1)])


def _diamond() -> BaseGeometry:
    return Polygon([(0, -1), (1, 0), (0, 1), (-1, 0)])


def _heart(n: int = 200) -> BaseGeometry:
    """Classic parametric heart; y grows downward in image space, so flip."""
    pts = []
    for i in range(n):
        t = 2.0 * math.pi * i / n
        x = 16.0 * math.sin(t) ** 3
        y = 13.0 * math.cos(t) - 5.0 * math.cos(2 * t) - 2.0 * math.cos(3 * t) - math.cos(4 * t)
        pts.append((x, -y))
    return Polygon(pts).buffer(0)


def _star(points: int = 5, inner_ratio: float = 0.45) -> BaseGeometry:
    pts = []
    for i in range(points * 2):
        r = 1.0 if i % 2 == 0 else inner_ratio
        a = math.pi * i / points - math.pi / 2.0
        pts.append((r * math.cos(a), r * math.sin(a)))
    return Polygon(pts)


PRESET_SHAPES: dict[str, Callable[[], BaseGeometry]] = {
    "circle": _circle,
    "heart": _heart,
    "star": _star,
    "square": _square,
    "diamond": _diamond,
    "ring": _ring,
}


def fit_to_frame(geom: BaseGeometry, width: int, height: int, margin_frac: float = PRESET_MARGIN_FRAC) -> BaseGeometry:
    """Scale uniformly and translate geom so its bounds fill width x height minus margin, centered."""
    minx, miny, maxx, maxy = geom.bounds
    gw = max(maxx - minx, 1e-9)
    gh = max(maxy - miny, 1e-9)
    avail_w = width * (1.0 - 2.0 * margin_frac)
    avail_h = height * (1.0 - 2.0 * margin_frac)
    s = min(avail_w / gw, avail_h / gh)
    scaled = affinity.scale(geom, xfact=s, yfact=s, origin=(minx, miny))
    sminx, sminy, smaxx, smaxy = scaled.bounds
    dx = (width - (smaxx - sminx)) / 2.0 - sminx
    dy = (height - (smaxy - sminy)) / 2.0 - sminy
    return affinity.translate(scaled, xoff=dx, yoff=dy)


def draw_silhouette(geom: BaseGeometry, width: int, height: int) -> Image.Image:
    """Render polygon(s) black on a white RGB image; holes stay white."""
    img = Image.new("RGB", (width, height), (255, 255, 255))
    draw = ImageDraw.Draw(img)
    polys = list(geom.geoms) if isinstance(geom, MultiPolygon) else [geom]
    for poly in polys:
        if poly.is_empty:
            continue
        draw.polygon([(float(x), float(y)) for x, y in poly.exterior.coords], fill=(0, 0, 0))
        for hole in poly.interiors:
            draw.polygon([(float(x), float(y)) for x, y in hole.coords], fill=(255, 255, 255))
    return img


def preset_names() -> list[str]:
    return sorted(PRESET_SHAPES)


def preset_geometry(name: str, width: int, height: int) -> BaseGeometry:
    """Preset polygon fitted to a width x height frame. Raises KeyError for unknown names."""
    try:
        factory = PRESET_SHAPES[name]
    except KeyError:
        raise KeyError(f"Unknown preset {name!r}; available: {', '.join(preset_names())}") from None
    return fit_to_frame(factory(), width, height)


def preset_image(name: str, size: int = 512) -> Image.Image:
    """Square black-on-white image of a preset silhouette."""
    return draw_silhouette(preset_geometry(name, size, size), size, size)
