# textshape/core/types.py
"""
Dataclasses for packing settings, style, occupancy mask and placement records.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

import numpy as np

from textshape.core.config import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE_MAX,
    DEFAULT_FONT_SIZE_MIN,
    DEFAULT_MAX_ITEMS,
    DEFAULT_ROTATION_MODE,
    DEFAULT_SPACING,
    DEFAULT_TEXT_COLOR,
)
from textshape.core.geometry import BoundingRect


RotationMode = Literal["random", "horizontal", "vertical", "mixed"]
BackgroundMode = Literal["solid", "image"]


@dataclass(frozen=True)
class PackingSettings:
    """Engine configuration. names is reused cyclically in order."""
    names: tuple[str, ...]
    font_size_min: float = DEFAULT_FONT_SIZE_MIN
    font_size_max: float = DEFAULT_FONT_SIZE_MAX
    spacing: float = DEFAULT_SPACING
    rotation_mode: RotationMode = DEFAULT_ROTATION_MODE  # type: ignore[assignment]
    max_items: int = DEFAULT_MAX_ITEMS

    def __post_init__(self) -> None:
        # Accept any sequence; store a tuple so settings stay hashable.
        object.__setattr__(self, "names", tuple(self.names))


@dataclass(frozen=True)
class StyleSettings:
    """Presentation options used only by the renderers."""
    font_family: str = DEFAULT_FONT_FAMILY
    text_color: str = DEFAULT_TEXT_COLOR
    background_color: str = DEFAULT_BACKGROUND_COLOR
    background_mode: BackgroundMode = "solid"
    background_image: str | None = None


@dataclass(frozen=True)
class PlacementRecord:
    """One placed string. (center_x, center_y) is the text center in canvas px, y down."""
    text: str
    center_x: float
    center_y: float
    font_size: float
    rotation_degrees: float
    rect: BoundingRect


@dataclass(frozen=True)
class ProgressEvent:
    """Emitted at each cooperative suspension point of a run."""
    percent: float
    placed: int


@dataclass
class PackingStats:
    trials: int = 0
    accepted: int = 0
    shrinks: int = 0
    final_font_size: float = 0.0


@dataclass(frozen=True, eq=False)
class OccupancyMask:
    """
    Boolean inside-shape grid with shape (height, width). Read-only after construction.
    """
    cells: np.ndarray

    def __post_init__(self) -> None:
        cells = np.asarray(self.cells, dtype=bool)
        if cells.ndim != 2:
            raise ValueError(f"Mask must be 2-D, got shape {cells.shape}")
        if cells.flags.writeable:
            cells = cells.copy()
            cells.setflags(write=False)
        object.__setattr__(self, "cells", cells)

    @classmethod
    def empty(cls, width: int, height: int) -> OccupancyMask:
        return cls(np.zeros((height, width), dtype=bool))

    @classmethod
    def full(cls, width: int, height: int) -> OccupancyMask:
        return cls(np.ones((height, width), dtype=bool))

    @property
    def width(self) -> int:
        return int(self.cells.shape[1])

    @property
    def height(self) -> int:
        return int(self.cells.shape[0])

    @property
    def inside_count(self) -> int:
        return int(np.count_nonzero(self.cells))

    @property
    def is_empty(self) -> bool:
        return self.inside_count == 0


@dataclass
class MosaicRun:
    """
    Result of one generation request. error is an error_codes key or None;
    records is empty both for an unusable shape and for a shape that admits nothing.
    """
    records: list[PlacementRecord]
    width: int
    height: int
    settings: PackingSettings
    seed: int | None = None
    error: str | None = None
    cancelled: bool = False
    duration_ms: int = 0
    stats: PackingStats | None = None
    mask: OccupancyMask | None = None
    warnings: list[str] = field(default_factory=list)
