# textshape/core/batch.py
"""
Batch mode: generate a mosaic for every shape image in a directory.
Output: reports/batch_<run_name>/index.csv and cases/<case_id>/ with placements.json, mosaic.png, mosaic.svg.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from textshape.core.config import DEFAULT_CANVAS_PX, REPORTS_DIR, SEED
from textshape.core.pipeline import generate_mosaic
from textshape.core.render import render_mosaic
from textshape.core.render_svg import export_svg
from textshape.core.reporting import ensure_report_dir, summarize, write_placements_json
from textshape.core.types import PackingSettings, StyleSettings

logger = logging.getLogger(__name__)

IMAGE_SUFFIXES: tuple[str, ...] = (".png", ".jpg", ".jpeg", ".webp", ".gif", ".bmp")

INDEX_FIELDS: list[str] = [
    "case_id", "shape_source", "status", "count", "coverage_ratio",
    "font_size_smallest", "duration_ms", "warnings_count",
]


def list_shape_images(shape_dir: Path, limit: int | None = None) -> list[Path]:
    """Image files in shape_dir, sorted by name, at most limit."""
    files = sorted(p for p in shape_dir.iterdir() if p.is_file() and p.suffix.lower() in IMAGE_SUFFIXES)
    return files[:limit] if limit is not None else files


def run_batch(
    run_name: str,
    shape_dir: Path,
    settings: PackingSettings,
    size: int = DEFAULT_CANVAS_PX,
    limit: int | None = None,
    repo_root: Path | None = None,
    seed: int | None = SEED,
    style: StyleSettings | None = None,
    render_png: bool = True,
) -> Path:
    """
    Run every image in shape_dir through the pipeline on a size x size canvas.
    Unreadable images become rows with status mask_unavailable. Returns the batch report dir.
    """
    root = repo_root or Path.cwd().resolve()
    if not shape_dir.is_dir():
        raise ValueError(f"Shape directory not found: {shape_dir}")
    batch_dir = ensure_report_dir(root, f"batch_{run_name}", output_dir=REPORTS_DIR)
    cases_dir = batch_dir / "cases"
    cases_dir.mkdir(parents=True, exist_ok=True)

    rows: list[dict] = []
    for i, shape_path in enumerate(list_shape_images(shape_dir, limit)):
        case_id = f"case_{i:04d}_{shape_path.stem}"
        case_dir = cases_dir / case_id
        case_dir.mkdir(parents=True, exist_ok=True)
        shape_source = str(shape_path.relative_to(root)) if root in shape_path.parents else str(shape_path)

        run = generate_mosaic(shape_path, settings, size, size, seed=seed)
        write_placements_json(case_dir, run, shape_source)
        if run.error is None:
            export_svg(run.records, size, size, case_dir / "mosaic.svg", style)
            if render_png:
                render_mosaic(run.records, size, size, case_dir / "mosaic.png", style)
        summary = summarize(run)
        rows.append({
            "case_id": case_id,
            "shape_source": shape_source,
            "status": run.error or "ok",
            "count": summary["count"],
            "coverage_ratio": summary["coverage_ratio"],
            "font_size_smallest": summary["font_size_smallest"] if summary["font_size_smallest"] is not None else "",
            "duration_ms": run.duration_ms,
            "warnings_count": len(run.warnings),
        })
        logger.info("%s: %s, %d placements", case_id, rows[-1]["status"], summary["count"])

    index_path = batch_dir / "index.csv"
    with open(index_path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=INDEX_FIELDS)
        w.writeheader()
        w.writerows(rows)
    return batch_dir
