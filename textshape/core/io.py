# textshape/core/io.py
"""
Load name pools and resolve shape sources (file path, data: URL or built-in preset).
"""

from __future__ import annotations

import json
from pathlib import Path

from PIL import Image

from textshape.core.presets import preset_image

PRESET_PREFIX = "preset:"


def _resolve_path(path: str | Path, repo_root: Path | None) -> Path:
    """Resolve path; if relative, against repo_root (or cwd if repo_root is None)."""
    p = Path(path)
    if not p.is_absolute() and repo_root is not None:
        p = repo_root / p
    return p.resolve()


def parse_names(text: str) -> list[str]:
    """
    Parse a name pool from free text.
    JSON list ('["A", "B"]'), one name per line, or a single comma-separated line.
    Blank entries are dropped; order is kept.
    """
    text = (text or "").strip()
    if not text:
        return []
    if text.startswith("["):
        try:
            arr = json.loads(text)
        except json.JSONDecodeError:
            arr = None
        if isinstance(arr, list):
            return [str(t).strip() for t in arr if str(t).strip()]
    if "\n" in text:
        parts = text.splitlines()
    else:
        parts = text.split(",")
    return [p.strip() for p in parts if p.strip()]


def load_names(path: str | Path, repo_root: Path | None = None) -> list[str]:
    """Read a name pool file (see parse_names for accepted formats)."""
    resolved = _resolve_path(path, repo_root)
    if not resolved.exists():
        raise FileNotFoundError(f"Names file not found: {resolved}")
    return parse_names(resolved.read_text(encoding="utf-8"))


def resolve_shape_source(
    source: str,
    size: int = 512,
    repo_root: Path | None = None,
) -> str | Image.Image:
    """
    'preset:<name>' becomes a rendered preset image; data: URLs pass through;
    anything else is treated as a path (relative to repo_root when given).
    Raises KeyError for unknown presets.
    """
    if source.startswith(PRESET_PREFIX):
        return preset_image(source[len(PRESET_PREFIX):], size)
    if source.startswith("data:"):
        return source
    return str(_resolve_path(source, repo_root))
