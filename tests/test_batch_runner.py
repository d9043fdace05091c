# tests/test_batch_runner.py
"""
Batch mode over a directory of shape images and the CLI entrypoint, in temp directories.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path

from textshape.core.batch import list_shape_images, run_batch
from textshape.core.presets import preset_image
from textshape.core.runner import main
from textshape.core.types import PackingSettings


def test_batch_from_dir_produces_index_csv(tmp_path: Path) -> None:
    shape_dir = tmp_path / "shapes"
    shape_dir.mkdir()
    preset_image("circle", 64).save(shape_dir / "a_circle.png")
    (shape_dir / "b_broken.png").write_bytes(b"not a png")
    (shape_dir / "notes.txt").write_text("ignored", encoding="utf-8")

    settings = PackingSettings(names=("Ann", "Bob"), font_size_min=6, font_size_max=12, max_items=30)
    report_dir = run_batch("t", shape_dir, settings, size=120, repo_root=tmp_path, seed=1, render_png=False)

    with open(report_dir / "index.csv", newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert [r["status"] for r in rows] == ["ok", "mask_unavailable"]
    assert int(rows[0]["count"]) > 0
    assert int(rows[1]["count"]) == 0
    ok_case = report_dir / "cases" / rows[0]["case_id"]
    assert (ok_case / "placements.json").exists()
    assert (ok_case / "mosaic.svg").exists()
    assert not (report_dir / "cases" / rows[1]["case_id"] / "mosaic.svg").exists()


def test_cli_single_run(tmp_path: Path, capsys) -> None:
    code = main([
        "--shape", "preset:circle",
        "--names", "Ann,Bob,Cy",
        "--size", "150",
        "--font-min", "8",
        "--font-max", "16",
        "--max-items", "25",
        "--no-png",
        "--run-name", "cli",
        "--output-dir", "out",
        "--repo-root", str(tmp_path),
    ])
    assert code == 0
    report_dir = tmp_path / "out" / "cli"
    data = json.loads((report_dir / "placements.json").read_text(encoding="utf-8"))
    assert data["input"]["settings"]["names"] == ["Ann", "Bob", "Cy"]
    assert 0 < data["summary"]["count"] <= 25
    assert (report_dir / "mosaic.svg").exists()
    assert (report_dir / "run_metadata.json").exists()
    assert "Placed:" in capsys.readouterr().out


def test_cli_unreadable_shape_exits_nonzero(tmp_path: Path) -> None:
    (tmp_path / "bad.png").write_bytes(b"nope")
    code = main([
        "--shape", "bad.png",
        "--no-png",
        "--run-name", "bad",
        "--output-dir", "out",
        "--repo-root", str(tmp_path),
    ])
    assert code == 1
    data = json.loads((tmp_path / "out" / "bad" / "placements.json").read_text(encoding="utf-8"))
    assert data["placements"] == []
    assert data["summary"]["error"] == "mask_unavailable"


def test_cli_invalid_font_range_exits_nonzero(tmp_path: Path, caplog) -> None:
    code = main([
        "--shape", "preset:circle",
        "--font-min", "50",
        "--font-max", "10",
        "--no-png",
        "--run-name", "bad_sizes",
        "--output-dir", "out",
        "--repo-root", str(tmp_path),
    ])
    assert code == 1
    assert "Settings are invalid" in caplog.text
    assert not (tmp_path / "out" / "bad_sizes").exists()


def test_cli_unknown_preset_exits_nonzero(tmp_path: Path, caplog) -> None:
    code = main([
        "--shape", "preset:nope",
        "--no-png",
        "--run-name", "bad_preset",
        "--output-dir", "out",
        "--repo-root", str(tmp_path),
    ])
    assert code == 1
    assert "could not be loaded" in caplog.text
    assert "nope" in caplog.text


def test_batch_limit_zero_runs_no_cases(tmp_path: Path) -> None:
    shape_dir = tmp_path / "shapes"
    shape_dir.mkdir()
    preset_image("circle", 32).save(shape_dir / "a.png")
    assert list_shape_images(shape_dir, limit=0) == []
    assert list_shape_images(shape_dir) == [shape_dir / "a.png"]
