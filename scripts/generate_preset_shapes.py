#!/usr/bin/env python3
"""
Write every built-in preset silhouette as a PNG, plus a few derived stress shapes,
for use with batch mode (--batch-dir docs/assets/shapes).

Stress shapes:
- thin_diagonal: a rotated bar, exercises the mid-edge containment probes
- two_blobs:     disconnected components
- frame:         square with a large hole
"""

from __future__ import annotations

import argparse
from pathlib import Path

from shapely import affinity
from shapely.geometry import Point, Polygon
from shapely.ops import unary_union

from textshape.core.presets import draw_silhouette, fit_to_frame, preset_image, preset_names

OUTPUT_DIR = Path(__file__).parent.parent / "docs" / "assets" / "shapes"


def save_png(img, name: str, out_dir: Path) -> None:
    path = out_dir / f"{name}.png"
    img.save(path)
    print(f"Created: {path.name}")


def stress_shapes() -> dict[str, Polygon]:
    bar = Polygon([(-1, -0.08), (1, -0.08), (1, 0.08), (-1, 0.08)])
    return {
        "thin_diagonal": affinity.rotate(bar, 40, origin=(0, 0)),
        "two_blobs": unary_union([Point(-1.2, 0).buffer(0.8), Point(1.2, 0.4).buffer(0.6)]),
        "frame": Polygon(
            [(-1, -1), (1, -1), (1, 1), (-1, 1)],
            holes=[[(-0.7, -0.7), (0.7, -0.7), (0.7, 0.7), (-0.7, 0.7)]],
        ),
    }


def main() -> None:
    p = argparse.ArgumentParser(description="Export preset shapes as PNG.")
    p.add_argument("--size", type=int, default=512)
    p.add_argument("--output-dir", type=str, default=str(OUTPUT_DIR), dest="output_dir")
    args = p.parse_args()

    out_dir = Path(args.output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    for name in preset_names():
        save_png(preset_image(name, args.size), name, out_dir)
    for name, geom in stress_shapes().items():
        fitted = fit_to_frame(geom, args.size, args.size)
        save_png(draw_silhouette(fitted, args.size, args.size), name, out_dir)


if __name__ == "__main__":
    main()
