# textshape/core/runner.py
"""
CLI entrypoint: rasterize a shape, pack names into it, render PNG/SVG, write report.
Shape may be an image path or 'preset:<name>'. Batch mode takes a directory of images.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from textshape.core.config import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_CANVAS_PX,
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE_MAX,
    DEFAULT_FONT_SIZE_MIN,
    DEFAULT_MAX_ITEMS,
    DEFAULT_NAMES,
    DEFAULT_ROTATION_MODE,
    DEFAULT_SPACING,
    DEFAULT_TEXT_COLOR,
    LOG_LEVEL,
    ROTATION_MODES,
    SEED,
)
from textshape.core.error_codes import CANCELLED, INVALID_SETTINGS, MASK_UNAVAILABLE, user_message
from textshape.core.io import load_names, parse_names, resolve_shape_source
from textshape.core.pipeline import generate_mosaic
from textshape.core.placement import validate_settings
from textshape.core.render import render_debug, render_mosaic
from textshape.core.render_svg import export_svg
from textshape.core.reporting import ensure_report_dir, write_placements_json, write_run_metadata_json
from textshape.core.types import PackingSettings, StyleSettings

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Fill a silhouette with text.")
    p.add_argument("--shape", type=str, default="preset:heart", help="Shape image path or 'preset:<name>'")
    p.add_argument("--names", type=str, default="", help="Names: 'A,B,C' or JSON list")
    p.add_argument("--names-file", type=str, default=None, dest="names_file", help="File with one name per line")
    p.add_argument("--size", type=int, default=DEFAULT_CANVAS_PX, help="Square canvas side (px)")
    p.add_argument("--font-min", type=float, default=DEFAULT_FONT_SIZE_MIN, dest="font_min", help="Smallest font size (px)")
    p.add_argument("--font-max", type=float, default=DEFAULT_FONT_SIZE_MAX, dest="font_max", help="Largest font size (px)")
    p.add_argument("--spacing", type=float, default=DEFAULT_SPACING, help="Gap around each word (px); may be negative")
    p.add_argument("--rotation", type=str, default=DEFAULT_ROTATION_MODE, choices=ROTATION_MODES, help="Rotation mode")
    p.add_argument("--max-items", type=int, default=DEFAULT_MAX_ITEMS, dest="max_items", help="Hard cap on placements")
    p.add_argument("--seed", type=int, default=SEED, help="Random seed")
    p.add_argument("--font-family", type=str, default=DEFAULT_FONT_FAMILY, dest="font_family", help="Render font family")
    p.add_argument("--text-color", type=str, default=DEFAULT_TEXT_COLOR, dest="text_color")
    p.add_argument("--background-color", type=str, default=DEFAULT_BACKGROUND_COLOR, dest="background_color")
    p.add_argument("--background-image", type=str, default=None, dest="background_image", help="Background image path")
    p.add_argument("--timeout", type=float, default=None, help="Wall-clock limit (s); partial result on expiry")
    p.add_argument("--scale", type=int, default=1, help="PNG resolution multiplier")
    p.add_argument("--no-png", action="store_true", dest="no_png", help="Skip PNG rendering")
    p.add_argument("--debug", action="store_true", help="Also write debug.png with mask and rects")
    p.add_argument("--run-name", type=str, default="run", dest="run_name", help="Reports subdir name")
    p.add_argument("--output-dir", type=str, default="reports", dest="output_dir", help="Output directory (repo-relative)")
    p.add_argument("--repo-root", type=str, default=None, dest="repo_root", help="Repo root (default: cwd)")
    p.add_argument("--batch-dir", type=str, default=None, dest="batch_dir", help="Batch mode: directory of shape images")
    p.add_argument("--batch-limit", type=int, default=None, dest="batch_limit", help="Max shapes in batch")
    return p.parse_args(argv)


def _names_from_args(args: argparse.Namespace, repo_root: Path) -> list[str]:
    if args.names_file:
        names = load_names(args.names_file, repo_root=repo_root)
    else:
        names = parse_names(args.names)
    return names or list(DEFAULT_NAMES)


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
    args = _parse_args(argv)
    repo_root = Path(args.repo_root).resolve() if args.repo_root else Path.cwd().resolve()

    try:
        names = _names_from_args(args, repo_root)
    except OSError as e:
        logger.error("%s (%s)", user_message(INVALID_SETTINGS), e)
        return 1
    settings = PackingSettings(
        names=tuple(names),
        font_size_min=args.font_min,
        font_size_max=args.font_max,
        spacing=args.spacing,
        rotation_mode=args.rotation,
        max_items=args.max_items,
    )
    style = StyleSettings(
        font_family=args.font_family,
        text_color=args.text_color,
        background_color=args.background_color,
        background_mode="image" if args.background_image else "solid",
        background_image=args.background_image,
    )
    try:
        validate_settings(settings)
    except ValueError as e:
        logger.error("%s (%s)", user_message(INVALID_SETTINGS), e)
        return 1

    if args.batch_dir:
        from textshape.core.batch import run_batch
        batch_dir = Path(args.batch_dir)
        if not batch_dir.is_absolute():
            batch_dir = repo_root / batch_dir
        out = run_batch(
            run_name=args.run_name,
            shape_dir=batch_dir,
            settings=settings,
            size=args.size,
            limit=args.batch_limit,
            repo_root=repo_root,
            seed=args.seed,
            style=style,
            render_png=not args.no_png,
        )
        print(out / "index.csv")
        return 0

    try:
        source = resolve_shape_source(args.shape, size=args.size, repo_root=repo_root)
    except KeyError as e:
        logger.error("%s (%s)", user_message(MASK_UNAVAILABLE), e.args[0])
        return 1

    def on_progress(pct: float) -> None:
        logger.info("Progress: %.0f%%", pct)

    run = generate_mosaic(
        source,
        settings,
        args.size,
        args.size,
        seed=args.seed,
        progress_callback=on_progress,
        timeout_s=args.timeout,
    )
    if run.error is not None:
        logger.warning(user_message(run.error))

    report_dir = ensure_report_dir(repo_root, args.run_name, output_dir=args.output_dir)
    outputs = [
        write_placements_json(report_dir, run, args.shape),
        write_run_metadata_json(report_dir, args.run_name, args.shape, run),
        export_svg(run.records, run.width, run.height, report_dir / "mosaic.svg", style),
    ]
    if not args.no_png:
        outputs.append(render_mosaic(run.records, run.width, run.height, report_dir / "mosaic.png", style, scale=args.scale))
    if args.debug and run.mask is not None:
        outputs.append(render_debug(run.mask, run.records, report_dir / "debug.png"))

    for p in outputs:
        print(p)
    print("Placed:", len(run.records))
    return 1 if run.error is not None and run.error != CANCELLED else 0


if __name__ == "__main__":
    raise SystemExit(main())
