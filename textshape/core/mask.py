# textshape/core/mask.py
"""
Rasterize a silhouette image into an OccupancyMask at the target canvas size.
Image is scaled to fit (aspect preserved), centered on white, then thresholded:
dark pixels are inside the shape. Unreadable input yields None, never an exception.
"""

from __future__ import annotations

import base64
import io
import logging
from pathlib import Path
from typing import Protocol, Union

import numpy as np
from PIL import Image

from textshape.core.config import LUMINANCE_THRESHOLD
from textshape.core.types import OccupancyMask

logger = logging.getLogger(__name__)

ImageSource = Union[bytes, str, Path, Image.Image]


class ImageDecoder(Protocol):
    """Capability that turns encoded bytes into a pixel image."""

    def decode(self, data: bytes) -> Image.Image: ...


class PillowDecoder:
    """Default decoder backed by Pillow."""

    def decode(self, data: bytes) -> Image.Image:
        img = Image.open(io.BytesIO(data))
        img.load()
        return img


def _decode_data_url(url: str) -> bytes:
    """Payload of a data: URL. Supports base64 and plain payloads."""
    header, sep, payload = url.partition(",")
    if not sep:
        raise ValueError("Malformed data URL: missing ','")
    if header.endswith(";base64"):
        return base64.b64decode(payload, validate=True)
    return payload.encode("utf-8")


def load_source_bytes(source: str | Path, repo_root: Path | None = None) -> bytes:
    """
    Read encoded image bytes from a data: URL or a file path.
    Relative paths resolve against repo_root when given.
    Raises FileNotFoundError / ValueError; rasterize() absorbs both.
    """
    if isinstance(source, str) and source.startswith("data:"):
        return _decode_data_url(source)
    p = Path(source)
    if not p.is_absolute() and repo_root is not None:
        p = repo_root / p
    p = p.resolve()
    if not p.exists():
        raise FileNotFoundError(f"Shape image not found: {p}")
    return p.read_bytes()


def _to_rgba(img: Image.Image) -> Image.Image:
    if img.mode == "RGBA":
        return img
    # Palette images may carry transparency; let Pillow resolve it through RGBA.
    return img.convert("RGBA")


def compose_on_canvas(img: Image.Image, width: int, height: int) -> Image.Image:
    """
    Scale img by min(width/w, height/h), center it on a white width x height RGB canvas.
    Transparent pixels composite to white.
    """
    scale = min(width / img.width, height / img.height)
    draw_w = max(1, int(round(img.width * scale)))
    draw_h = max(1, int(round(img.height * scale)))
    x = int(round((width - img.width * scale) / 2.0))
    y = int(round((height - img.height * scale) / 2.0))
    canvas = Image.new("RGB", (width, height), (255, 255, 255))
    scaled = _to_rgba(img).resize((draw_w, draw_h), Image.Resampling.BILINEAR)
    canvas.paste(scaled, (x, y), scaled)
    return canvas


def mask_from_rgb(rgb: np.ndarray, threshold: float = LUMINANCE_THRESHOLD) -> OccupancyMask:
    """Threshold an (H, W, 3) array: inside where channel mean < threshold."""
    arr = np.asarray(rgb, dtype=np.float32)
    luminance = arr[..., :3].mean(axis=2)
    return OccupancyMask(luminance < threshold)


def rasterize(
    source: ImageSource,
    width: int,
    height: int,
    decoder: ImageDecoder | None = None,
    repo_root: Path | None = None,
) -> OccupancyMask | None:
    """
    Build the occupancy mask for a width x height canvas.
    source: encoded bytes, data: URL, file path, or decoded PIL image.
    Returns None if the source cannot be loaded or decoded.
    """
    if width <= 0 or height <= 0:
        logger.warning("Cannot rasterize onto a %dx%d canvas.", width, height)
        return None
    dec = decoder or PillowDecoder()
    try:
        if isinstance(source, Image.Image):
            img = source
        else:
            data = source if isinstance(source, bytes) else load_source_bytes(source, repo_root)
            img = dec.decode(data)
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        logger.warning("Shape image unavailable: %s: %s", type(e).__name__, e)
        return None
    if img.width <= 0 or img.height <= 0:
        logger.warning("Shape image has zero size.")
        return None
    canvas = compose_on_canvas(img, width, height)
    mask = mask_from_rgb(np.asarray(canvas))
    logger.debug("Rasterized %dx%d mask, %d inside cells.", width, height, mask.inside_count)
    return mask
