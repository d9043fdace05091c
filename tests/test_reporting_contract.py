# tests/test_reporting_contract.py
"""
placements.json contract: required keys exist, summary metrics are sane, JSON round-trips.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from textshape.core.geometry import BoundingRect
from textshape.core.reporting import (
    coverage_ratio,
    ensure_report_dir,
    mosaic_to_dict,
    write_placements_json,
    write_run_metadata_json,
)
from textshape.core.types import MosaicRun, OccupancyMask, PackingSettings, PackingStats, PlacementRecord


def _minimal_run() -> MosaicRun:
    records = [
        PlacementRecord("A", 5, 5, 10, 0, BoundingRect(0, 0, 10, 10)),
        PlacementRecord("B", 25, 5, 8, -90, BoundingRect(20, 0, 10, 10)),
    ]
    return MosaicRun(
        records=records,
        width=100,
        height=100,
        settings=PackingSettings(names=("A", "B"), font_size_min=8, font_size_max=10, max_items=5),
        seed=42,
        stats=PackingStats(trials=12, accepted=2, shrinks=1, final_font_size=8),
        mask=OccupancyMask.full(100, 100),
    )


REQUIRED_KEYS = [
    "schema_version",
    ("input", "shape_source"),
    ("input", "width"),
    ("input", "height"),
    ("input", "settings", "rotation_mode"),
    ("summary", "count"),
    ("summary", "coverage_ratio"),
    ("summary", "rotation_histogram"),
    "placements",
    "warnings",
]


def test_required_keys_exist() -> None:
    data = mosaic_to_dict(_minimal_run(), "preset:heart")
    for key in REQUIRED_KEYS:
        obj = data
        for k in (key if isinstance(key, tuple) else (key,)):
            assert k in obj, f"Missing key: {key}"
            obj = obj[k]


def test_summary_values() -> None:
    data = mosaic_to_dict(_minimal_run(), "preset:heart")
    s = data["summary"]
    assert s["count"] == 2
    assert s["coverage_ratio"] == pytest.approx(0.02)
    assert s["font_size_largest"] == 10
    assert s["font_size_smallest"] == 8
    assert s["rotation_histogram"] == {"-90": 1, "0": 1}
    assert s["shrinks"] == 1
    assert data["placements"][1]["rotation_degrees"] == -90


def test_coverage_counts_overlap_once() -> None:
    recs = [
        PlacementRecord("A", 5, 5, 10, 0, BoundingRect(0, 0, 10, 10)),
        PlacementRecord("A", 10, 5, 10, 0, BoundingRect(5, 0, 10, 10)),
    ]
    assert coverage_ratio(recs, OccupancyMask.full(10, 20)) == pytest.approx(150 / 200)
    assert coverage_ratio(recs, OccupancyMask.empty(10, 10)) == 0.0
    assert coverage_ratio([], None) == 0.0


def test_json_files_roundtrip(tmp_path: Path) -> None:
    run = _minimal_run()
    report_dir = ensure_report_dir(tmp_path, "r1")
    p = write_placements_json(report_dir, run, "shape.png")
    loaded = json.loads(p.read_text(encoding="utf-8"))
    assert loaded["input"]["settings"]["names"] == ["A", "B"]
    assert loaded["placements"][0]["text"] == "A"
    meta = json.loads(write_run_metadata_json(report_dir, "r1", "shape.png", run).read_text(encoding="utf-8"))
    assert meta["run_name"] == "r1"
    assert meta["config"]["TRIALS_PER_WORD"] == 30
    assert meta["config"]["MAX_FAILURES_BEFORE_SHRINK"] == 60
