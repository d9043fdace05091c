# textshape/core/smoke.py
"""
Single entrypoint to verify the pipeline end-to-end: preset heart, default names,
placements.json + mosaic.png + mosaic.svg under reports/smoke/. Does not run on import.
"""

from __future__ import annotations

import logging
from pathlib import Path

from textshape.core.config import DEFAULT_NAMES, LOG_LEVEL, SEED
from textshape.core.pipeline import generate_mosaic
from textshape.core.presets import preset_image
from textshape.core.render import render_mosaic
from textshape.core.render_svg import export_svg
from textshape.core.reporting import ensure_report_dir, write_placements_json, write_run_metadata_json
from textshape.core.types import PackingSettings

SMOKE_SIZE_PX: int = 400


def main() -> None:
    """Run a small mosaic with run_name='smoke'."""
    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
    repo_root = Path.cwd().resolve()
    settings = PackingSettings(names=DEFAULT_NAMES, font_size_min=8, font_size_max=28, max_items=400)
    run = generate_mosaic(preset_image("heart", SMOKE_SIZE_PX), settings, SMOKE_SIZE_PX, SMOKE_SIZE_PX, seed=SEED)
    if not run.records:
        raise RuntimeError(f"Smoke run placed nothing: {run.error or run.warnings}")

    report_dir = ensure_report_dir(repo_root, "smoke")
    write_placements_json(report_dir, run, "preset:heart")
    write_run_metadata_json(report_dir, "smoke", "preset:heart", run)
    export_svg(run.records, run.width, run.height, report_dir / "mosaic.svg")
    render_mosaic(run.records, run.width, run.height, report_dir / "mosaic.png")


if __name__ == "__main__":
    main()
