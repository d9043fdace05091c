# textshape/core/config.py
"""
Central configuration for text mosaic packing.
All tunable values live here; no magic numbers in other modules.
"""

from __future__ import annotations
import os

# ----- Paths (repo-relative) -----
REPORTS_DIR: str = "reports"

# ----- Mask rasterization -----
LUMINANCE_THRESHOLD: float = 128.0
"""A pixel is inside the silhouette when mean(R, G, B) is below this value."""

DEFAULT_CANVAS_PX: int = 1000
"""Default square canvas side (px) for CLI and smoke runs."""

# ----- Glyph metric approximation -----
CHAR_WIDTH_EM: float = 0.6
"""Average character advance as a fraction of font size."""

TEXT_HEIGHT_EM: float = 0.8
"""Text box height as a fraction of font size (cap height is below 1 em)."""

# ----- Placement loop -----
TRIALS_PER_WORD: int = 30
"""Random center trials per word before counting one failure."""

MAX_FAILURES_BEFORE_SHRINK: int = 60
"""Consecutive failed words tolerated at one font size; one more shrinks the size."""

FONT_SIZE_STEP: float = 1.0
"""Font size decrement applied on shrink."""

PROGRESS_EVERY: int = 50
"""Report progress and suspend once every N accepted placements."""

ROTATION_MODES: tuple[str, ...] = ("random", "horizontal", "vertical", "mixed")

# ----- Default packing settings (mirror the interactive app defaults) -----
DEFAULT_FONT_SIZE_MIN: float = 6.0
DEFAULT_FONT_SIZE_MAX: float = 40.0
DEFAULT_SPACING: float = -1.0
DEFAULT_ROTATION_MODE: str = "mixed"
DEFAULT_MAX_ITEMS: int = 3000

# ----- Default style -----
DEFAULT_FONT_FAMILY: str = "Roboto Mono"
DEFAULT_TEXT_COLOR: str = "#000000"
DEFAULT_BACKGROUND_COLOR: str = "#ffffff"

DEFAULT_NAMES: tuple[str, ...] = (
    "Alice", "Bruno", "Chiara", "Davide", "Elena", "Francesco", "Giulia",
    "Luca", "Marta", "Nicola", "Paola", "Roberto", "Sara", "Tommaso",
)
"""Name pool used by the smoke run and as CLI fallback."""

# ----- Rendering -----
RENDER_DPI: int = 100
"""Matplotlib figure dpi; font sizes in px are converted to pt with this."""

# ----- Determinism -----
SEED: int | None = 42
"""Random seed for trial sampling; None for non-deterministic."""

# ----- Logging -----
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()
"""Root log level for CLI entrypoints. Set env LOG_LEVEL=DEBUG to trace size shrinks."""
