# textshape/core/text_metrics.py
"""
Text box estimation for packing and font resolution for rendering.
Packing never measures glyphs: width and height come from fixed em ratios.
"""

from __future__ import annotations

import warnings

from textshape.core.config import CHAR_WIDTH_EM, TEXT_HEIGHT_EM

_font_warning_emitted: set[str] = set()


def estimate_text_size(text: str, font_size: float) -> tuple[float, float]:
    """
    Return (width, height) of the unrotated text box in px.
    width = len(text) * font_size * CHAR_WIDTH_EM; height = font_size * TEXT_HEIGHT_EM.
    """
    return (len(text) * font_size * CHAR_WIDTH_EM, font_size * TEXT_HEIGHT_EM)


def resolve_font_family(font_family: str) -> str:
    """
    Return font_family if matplotlib can find it, else its default family.
    Warns once per missing family.
    """
    from matplotlib import font_manager, rcParams

    try:
        font_manager.findfont(
            font_manager.FontProperties(family=font_family),
            fallback_to_default=False,
        )
        return font_family
    except ValueError:
        pass
    if font_family not in _font_warning_emitted:
        _font_warning_emitted.add(font_family)
        warnings.warn(f"Font not found: {font_family!r}; using default.", UserWarning)
    default = rcParams["font.family"]
    return default[0] if isinstance(default, list) and default else str(default)
