# textshape/core/placement.py
"""
Decreasing-size stochastic placement: start at font_size_max, sample random centers,
accept text boxes that are inside the mask and collide with nothing, and shrink the
font once a size level stops yielding placements.

The loop is a generator (PlacementEngine.steps) with a suspension point every
PROGRESS_EVERY accepted placements; run() and run_async() drive it.
"""

from __future__ import annotations

import asyncio
import logging
import math
import random
import threading
from collections.abc import Callable, Iterator

from textshape.core.collision import CollisionIndex
from textshape.core.config import (
    FONT_SIZE_STEP,
    MAX_FAILURES_BEFORE_SHRINK,
    PROGRESS_EVERY,
    ROTATION_MODES,
    TRIALS_PER_WORD,
)
from textshape.core.containment import ContainmentTester
from textshape.core.geometry import BoundingRect, effective_size
from textshape.core.text_metrics import estimate_text_size
from textshape.core.types import (
    OccupancyMask,
    PackingSettings,
    PackingStats,
    PlacementRecord,
    ProgressEvent,
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]


class PackingCancelled(Exception):
    """Raised at a suspension point after cancel(); records holds what was placed."""

    def __init__(self, records: list[PlacementRecord]):
        self.records = records
        super().__init__(f"Packing cancelled after {len(records)} placements")


class CancelToken:
    """Cancellation flag checked by the engine at each suspension point. Safe to set from another thread."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


def validate_settings(settings: PackingSettings) -> None:
    """Raise ValueError for settings that would loop forever or divide by zero."""
    if not settings.names:
        raise ValueError("Name pool is empty")
    if any(not isinstance(n, str) or n == "" for n in settings.names):
        raise ValueError("Name pool contains empty or non-string entries")
    for label, value in (("font_size_min", settings.font_size_min), ("font_size_max", settings.font_size_max)):
        if not math.isfinite(value) or value <= 0:
            raise ValueError(f"{label} must be a positive number, got {value!r}")
    if settings.font_size_min > settings.font_size_max:
        raise ValueError(
            f"font_size_min ({settings.font_size_min}) > font_size_max ({settings.font_size_max})"
        )
    if not math.isfinite(settings.spacing):
        raise ValueError(f"spacing must be finite, got {settings.spacing!r}")
    if settings.max_items < 0:
        raise ValueError(f"max_items must be >= 0, got {settings.max_items}")
    if settings.rotation_mode not in ROTATION_MODES:
        raise ValueError(
            f"Unknown rotation_mode {settings.rotation_mode!r}; expected one of {ROTATION_MODES}"
        )


def choose_rotation(mode: str, rng: random.Random) -> float:
    """
    horizontal: 0. vertical: -90. random: 0 or -90 (50/50).
    mixed: 0 (50%), -90 (25%), +90 (25%).
    """
    if mode == "vertical":
        return -90.0
    if mode == "random":
        return 0.0 if rng.random() > 0.5 else -90.0
    if mode == "mixed":
        if rng.random() < 0.5:
            return 0.0
        return -90.0 if rng.random() < 0.5 else 90.0
    return 0.0


def progress_percent(current_size: float, size_min: float, size_max: float) -> float:
    """Share of the size range already consumed, in [0, 100]. 0 when the range is a single size."""
    span = size_max - size_min
    if span <= 0:
        return 0.0
    pct = (1.0 - (current_size - size_min) / span) * 100.0
    return min(100.0, max(0.0, pct))


class PlacementEngine:
    """
    One engine per run. Holds the RNG, the cancel token and, during a run,
    the exclusive collision index and fail counter.
    """

    def __init__(
        self,
        settings: PackingSettings,
        rng: random.Random | None = None,
        seed: int | None = None,
        cancel_token: CancelToken | None = None,
    ) -> None:
        validate_settings(settings)
        self.settings = settings
        self.rng = rng if rng is not None else random.Random(seed)
        self.cancel_token = cancel_token
        self.records: list[PlacementRecord] = []
        self.stats = PackingStats()

    def _check_cancelled(self) -> None:
        if self.cancel_token is not None and self.cancel_token.cancelled:
            logger.info("Packing cancelled with %d placements.", len(self.records))
            raise PackingCancelled(list(self.records))

    def _try_place(
        self,
        tester: ContainmentTester,
        index: CollisionIndex,
        text: str,
        font_size: float,
    ) -> PlacementRecord | None:
        """Up to TRIALS_PER_WORD random centers; first valid one wins."""
        s = self.settings
        rng = self.rng
        text_w, text_h = estimate_text_size(text, font_size)
        for _ in range(TRIALS_PER_WORD):
            self.stats.trials += 1
            cx = rng.random() * tester.width
            cy = rng.random() * tester.height
            if not tester.point_inside(cx, cy):
                continue
            rotation = choose_rotation(s.rotation_mode, rng)
            eff_w, eff_h = effective_size(text_w, text_h, rotation)
            rect = BoundingRect.around_center(cx, cy, eff_w, eff_h, s.spacing)
            if not tester.rect_inside(rect):
                continue
            if index.collides(rect):
                continue
            return PlacementRecord(
                text=text,
                center_x=cx,
                center_y=cy,
                font_size=font_size,
                rotation_degrees=rotation,
                rect=rect,
            )
        return None

    def steps(self, mask: OccupancyMask) -> Iterator[ProgressEvent]:
        """
        Run the placement loop lazily. Yields a ProgressEvent every PROGRESS_EVERY
        accepted placements and a final 100% event; self.records holds the result.
        Raises PackingCancelled at a suspension point or size change once cancelled.
        """
        s = self.settings
        self.records = []
        self.stats = PackingStats(final_font_size=s.font_size_max)
        records = self.records
        tester = ContainmentTester(mask)
        index = CollisionIndex()

        current = s.font_size_max
        fail_count = 0
        name_index = 0

        has_room = not mask.is_empty
        if not has_room:
            logger.debug("Mask has no inside cells; nothing to place.")

        while has_room and current >= s.font_size_min and len(records) < s.max_items:
            text = s.names[name_index % len(s.names)]
            record = self._try_place(tester, index, text, current)

            if record is not None:
                records.append(record)
                index.insert(record.rect)
                name_index += 1
                fail_count = 0
            else:
                fail_count += 1

            if fail_count > MAX_FAILURES_BEFORE_SHRINK:
                current -= FONT_SIZE_STEP
                fail_count = 0
                self.stats.shrinks += 1
                logger.debug("Shrinking font to %.1f after %d placements.", current, len(records))
                self._check_cancelled()

            if record is not None and len(records) % PROGRESS_EVERY == 0:
                yield ProgressEvent(
                    percent=progress_percent(current, s.font_size_min, s.font_size_max),
                    placed=len(records),
                )
                self._check_cancelled()

        self.stats.accepted = len(records)
        self.stats.final_font_size = max(current, s.font_size_min)
        logger.info(
            "Placed %d items in %d trials (%d size shrinks).",
            self.stats.accepted, self.stats.trials, self.stats.shrinks,
        )
        yield ProgressEvent(percent=100.0, placed=len(records))

    def run(
        self,
        mask: OccupancyMask,
        progress_callback: ProgressCallback | None = None,
    ) -> list[PlacementRecord]:
        """Drive steps() to completion; forward each percent to progress_callback."""
        for event in self.steps(mask):
            if progress_callback is not None:
                progress_callback(event.percent)
        return list(self.records)

    async def run_async(
        self,
        mask: OccupancyMask,
        progress_callback: ProgressCallback | None = None,
    ) -> list[PlacementRecord]:
        """Like run(), but yields to the event loop at every suspension point."""
        for event in self.steps(mask):
            if progress_callback is not None:
                progress_callback(event.percent)
            await asyncio.sleep(0)
        return list(self.records)


def pack_mask(
    mask: OccupancyMask,
    settings: PackingSettings,
    progress_callback: ProgressCallback | None = None,
    seed: int | None = None,
) -> list[PlacementRecord]:
    """Convenience wrapper: fresh engine, seeded RNG, synchronous run."""
    return PlacementEngine(settings, seed=seed).run(mask, progress_callback)
