# textshape/core/pipeline.py
"""
One generation request: rasterize the shape, run the placement engine, collect a MosaicRun.
Mask failures are absorbed into MosaicRun.error; invalid settings still raise ValueError.
"""

from __future__ import annotations

import logging
import threading
import time
from pathlib import Path

from textshape.core.config import SEED
from textshape.core.error_codes import CANCELLED, MASK_UNAVAILABLE, NO_PLACEMENTS
from textshape.core.mask import ImageDecoder, ImageSource, rasterize
from textshape.core.placement import (
    CancelToken,
    PackingCancelled,
    PlacementEngine,
    ProgressCallback,
    validate_settings,
)
from textshape.core.types import MosaicRun, PackingSettings

logger = logging.getLogger(__name__)


def generate_mosaic(
    source: ImageSource,
    settings: PackingSettings,
    width: int,
    height: int,
    seed: int | None = SEED,
    progress_callback: ProgressCallback | None = None,
    cancel_token: CancelToken | None = None,
    timeout_s: float | None = None,
    decoder: ImageDecoder | None = None,
    repo_root: Path | None = None,
) -> MosaicRun:
    """
    Rasterize source to width x height and pack settings.names into it.
    timeout_s cancels the run at the next suspension point after the deadline;
    a cancelled run keeps its partial records and sets error=CANCELLED.
    """
    validate_settings(settings)
    t0 = time.perf_counter()
    mask = rasterize(source, width, height, decoder=decoder, repo_root=repo_root)
    if mask is None:
        return MosaicRun(
            records=[],
            width=width,
            height=height,
            settings=settings,
            seed=seed,
            error=MASK_UNAVAILABLE,
            duration_ms=int((time.perf_counter() - t0) * 1000),
        )

    token = cancel_token or CancelToken()
    timer: threading.Timer | None = None
    if timeout_s is not None:
        timer = threading.Timer(timeout_s, token.cancel)
        timer.daemon = True
        timer.start()

    engine = PlacementEngine(settings, seed=seed, cancel_token=token)
    cancelled = False
    try:
        records = engine.run(mask, progress_callback)
    except PackingCancelled as e:
        records = e.records
        cancelled = True
    finally:
        if timer is not None:
            timer.cancel()

    run = MosaicRun(
        records=records,
        width=width,
        height=height,
        settings=settings,
        seed=seed,
        error=CANCELLED if cancelled else None,
        cancelled=cancelled,
        duration_ms=int((time.perf_counter() - t0) * 1000),
        stats=engine.stats,
        mask=mask,
    )
    if mask.is_empty:
        run.warnings.append("Shape mask has no dark pixels.")
    if not records and not cancelled:
        run.warnings.append(NO_PLACEMENTS)
    logger.info("Mosaic %dx%d: %d records in %d ms.", width, height, len(records), run.duration_ms)
    return run
