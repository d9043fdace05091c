# textshape/core/reporting.py
"""
Create reports/<run_name>/ and write placements.json, run_metadata.json.
Summary metrics: item count, coverage of the shape, font size range, rotation histogram.
"""

from __future__ import annotations

import json
from collections import Counter
from datetime import datetime, timezone
from pathlib import Path

from shapely.ops import unary_union

from textshape.core.config import (
    CHAR_WIDTH_EM,
    FONT_SIZE_STEP,
    LUMINANCE_THRESHOLD,
    MAX_FAILURES_BEFORE_SHRINK,
    PROGRESS_EVERY,
    REPORTS_DIR,
    TEXT_HEIGHT_EM,
    TRIALS_PER_WORD,
)
from textshape.core.types import MosaicRun, OccupancyMask, PackingSettings, PlacementRecord

SCHEMA_VERSION = "1.0"


def record_to_dict(rec: PlacementRecord) -> dict:
    return {
        "text": rec.text,
        "center_x": rec.center_x,
        "center_y": rec.center_y,
        "font_size": rec.font_size,
        "rotation_degrees": rec.rotation_degrees,
        "rect": {"x": rec.rect.x, "y": rec.rect.y, "width": rec.rect.width, "height": rec.rect.height},
    }


def settings_to_dict(settings: PackingSettings) -> dict:
    return {
        "font_size_min": settings.font_size_min,
        "font_size_max": settings.font_size_max,
        "spacing": settings.spacing,
        "rotation_mode": settings.rotation_mode,
        "max_items": settings.max_items,
        "names": list(settings.names),
    }


def coverage_ratio(records: list[PlacementRecord], mask: OccupancyMask | None) -> float:
    """Area of the union of placement rects over the count of inside cells. 0 for empty masks."""
    if mask is None or mask.is_empty or not records:
        return 0.0
    covered = unary_union([r.rect.to_polygon() for r in records])
    return float(covered.area) / float(mask.inside_count)


def summarize(run: MosaicRun) -> dict:
    """Metrics for placements.json and batch index rows."""
    sizes = [r.font_size for r in run.records]
    rotations = Counter(str(int(r.rotation_degrees)) for r in run.records)
    return {
        "count": len(run.records),
        "max_items": run.settings.max_items,
        "coverage_ratio": round(coverage_ratio(run.records, run.mask), 4),
        "font_size_largest": max(sizes) if sizes else None,
        "font_size_smallest": min(sizes) if sizes else None,
        "rotation_histogram": dict(sorted(rotations.items())),
        "trials": run.stats.trials if run.stats else 0,
        "shrinks": run.stats.shrinks if run.stats else 0,
        "duration_ms": run.duration_ms,
        "error": run.error,
        "cancelled": run.cancelled,
    }


def mosaic_to_dict(run: MosaicRun, shape_source: str) -> dict:
    """Exact structure for placements.json."""
    return {
        "schema_version": SCHEMA_VERSION,
        "input": {
            "shape_source": shape_source,
            "width": run.width,
            "height": run.height,
            "seed": run.seed,
            "settings": settings_to_dict(run.settings),
        },
        "placements": [record_to_dict(r) for r in run.records],
        "summary": summarize(run),
        "warnings": list(run.warnings),
    }


def run_metadata_dict(run_name: str, shape_source: str, run: MosaicRun) -> dict:
    """Timestamp and config snapshot for run_metadata.json."""
    return {
        "run_name": run_name,
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        "shape_source": shape_source,
        "width": run.width,
        "height": run.height,
        "seed": run.seed,
        "settings": settings_to_dict(run.settings),
        "config": {
            "TRIALS_PER_WORD": TRIALS_PER_WORD,
            "MAX_FAILURES_BEFORE_SHRINK": MAX_FAILURES_BEFORE_SHRINK,
            "FONT_SIZE_STEP": FONT_SIZE_STEP,
            "PROGRESS_EVERY": PROGRESS_EVERY,
            "CHAR_WIDTH_EM": CHAR_WIDTH_EM,
            "TEXT_HEIGHT_EM": TEXT_HEIGHT_EM,
            "LUMINANCE_THRESHOLD": LUMINANCE_THRESHOLD,
        },
    }


def ensure_report_dir(
    repo_root: Path,
    run_name: str,
    output_dir: str | None = None,
) -> Path:
    """Create output_dir/<run_name>/ under repo_root; return path. Default output_dir from config."""
    base = output_dir if output_dir is not None else REPORTS_DIR
    out = (repo_root / base).resolve() / run_name
    out.mkdir(parents=True, exist_ok=True)
    return out


def write_placements_json(report_dir: Path, run: MosaicRun, shape_source: str) -> Path:
    """Write placements.json to report_dir. Returns path to file."""
    path = report_dir / "placements.json"
    path.write_text(json.dumps(mosaic_to_dict(run, shape_source), indent=2), encoding="utf-8")
    return path


def write_run_metadata_json(report_dir: Path, run_name: str, shape_source: str, run: MosaicRun) -> Path:
    """Write run_metadata.json to report_dir."""
    path = report_dir / "run_metadata.json"
    path.write_text(json.dumps(run_metadata_dict(run_name, shape_source, run), indent=2), encoding="utf-8")
    return path
