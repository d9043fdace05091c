# textshape/core/render.py
"""
Matplotlib PNG rendering of a placement list: mosaic.png and debug.png.
Axes span the canvas in px with y pointing down, so record coordinates map 1:1.
"""

from __future__ import annotations

import io
import logging
import warnings
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Rectangle
from PIL import Image

from textshape.core.config import RENDER_DPI
from textshape.core.mask import load_source_bytes
from textshape.core.text_metrics import resolve_font_family
from textshape.core.types import OccupancyMask, PlacementRecord, StyleSettings

logger = logging.getLogger(__name__)


def px_to_pt(size_px: float, dpi: int = RENDER_DPI) -> float:
    """Matplotlib font sizes are in pt; the engine works in px."""
    return size_px * 72.0 / dpi


def _new_fig(width_px: int, height_px: int, dpi: int = RENDER_DPI) -> tuple[plt.Figure, plt.Axes]:
    fig = plt.figure(
        figsize=(width_px / dpi, height_px / dpi),
        dpi=dpi,
        constrained_layout=False,
    )
    ax = fig.add_axes([0, 0, 1, 1])  # full-canvas axes
    ax.set_xlim(0, width_px)
    ax.set_ylim(height_px, 0)
    ax.axis("off")
    return fig, ax


def cover_extent(img_w: int, img_h: int, width: int, height: int) -> tuple[float, float, float, float]:
    """
    imshow extent (left, right, bottom, top) that scales the image to cover the canvas,
    centered, cropping the overflow (CSS object-fit: cover).
    """
    img_ratio = img_w / img_h
    canvas_ratio = width / height
    if img_ratio > canvas_ratio:
        render_h = float(height)
        render_w = img_w * (height / img_h)
        off_x, off_y = (width - render_w) / 2.0, 0.0
    else:
        render_w = float(width)
        render_h = img_h * (width / img_w)
        off_x, off_y = 0.0, (height - render_h) / 2.0
    return (off_x, off_x + render_w, off_y + render_h, off_y)


def _draw_background(ax: plt.Axes, fig: plt.Figure, style: StyleSettings, width: int, height: int) -> str:
    """Paint the background; returns the face color to save with."""
    if style.background_mode == "image" and style.background_image:
        try:
            data = load_source_bytes(style.background_image)
            img = Image.open(io.BytesIO(data)).convert("RGB")
        except (OSError, ValueError) as e:
            logger.warning("Background image unavailable, using white: %s", e)
            ax.set_facecolor("#ffffff")
            return "#ffffff"
        ax.imshow(
            np.asarray(img),
            extent=cover_extent(img.width, img.height, width, height),
            interpolation="bilinear",
            zorder=0,
        )
        ax.set_xlim(0, width)
        ax.set_ylim(height, 0)
        return "#ffffff"
    ax.set_facecolor(style.background_color)
    fig.patch.set_facecolor(style.background_color)
    return style.background_color


def _draw_records(
    ax: plt.Axes,
    records: list[PlacementRecord],
    style: StyleSettings,
    dpi: int,
) -> None:
    family = resolve_font_family(style.font_family)
    for rec in records:
        # Canvas rotation is clockwise for positive degrees; matplotlib is counter-clockwise on screen.
        ax.text(
            rec.center_x, rec.center_y, rec.text,
            fontsize=px_to_pt(rec.font_size, dpi),
            fontfamily=family,
            ha="center", va="center",
            rotation=-rec.rotation_degrees,
            rotation_mode="anchor",
            color=style.text_color,
            zorder=5,
        )


def render_mosaic(
    records: list[PlacementRecord],
    width: int,
    height: int,
    output_path: str | Path,
    style: StyleSettings | None = None,
    scale: int = 1,
    dpi: int = RENDER_DPI,
) -> Path:
    """
    Render records centered and rotated about their centers onto a PNG.
    scale multiplies output resolution (1x, 2x, 4x) without changing the layout.
    """
    style = style or StyleSettings()
    fig, ax = _new_fig(width, height, dpi=dpi)
    face = _draw_background(ax, fig, style, width, height)
    _draw_records(ax, records, style, dpi)
    out = Path(output_path)
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", message=".*constrained_layout.*", category=UserWarning)
        fig.savefig(out, dpi=dpi * scale, facecolor=face)
    plt.close(fig)
    return out


def render_debug(
    mask: OccupancyMask,
    records: list[PlacementRecord],
    output_path: str | Path,
    dpi: int = RENDER_DPI,
) -> Path:
    """Mask in light gray with every inflated placement rect outlined and centers dotted."""
    fig, ax = _new_fig(mask.width, mask.height, dpi=dpi)
    ax.imshow(
        np.where(mask.cells, 0.8, 1.0),
        cmap="gray",
        vmin=0.0,
        vmax=1.0,
        extent=(0, mask.width, mask.height, 0),
        interpolation="nearest",
        zorder=0,
    )
    for rec in records:
        r = rec.rect
        ax.add_patch(
            Rectangle((r.x, r.y), r.width, r.height, fill=False, edgecolor="tab:red", linewidth=0.5, zorder=2)
        )
    if records:
        ax.scatter([r.center_x for r in records], [r.center_y for r in records], s=1, c="navy", zorder=3)
    ax.set_xlim(0, mask.width)
    ax.set_ylim(mask.height, 0)
    out = Path(output_path)
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", message=".*constrained_layout.*", category=UserWarning)
        fig.savefig(out, dpi=dpi, facecolor="white")
    plt.close(fig)
    return out
