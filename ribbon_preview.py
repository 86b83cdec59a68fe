"""Preview pressure-sensitive stroke outlines.

Usage examples:
    python ribbon_preview.py                         # demo spiral
    python ribbon_preview.py samples.json            # [[x, y, pressure], ...]
    python ribbon_preview.py --erase 0 100 400 100   # erase along a line
    python ribbon_preview.py --no-show --svg out.txt # stats + SVG path only

Pipeline: samples → streamline → radii → rails → contour → (eraser) → plot
"""

from __future__ import annotations

import argparse
import json
import math
import os
from typing import List

import numpy as np

from ink_ribbon.drawing import DEFAULT_ERASER_RADIUS, Drawing
from ink_ribbon.stroke_pipeline.point_processor import RawPoint


def demo_spiral(turns: float = 3.0, samples: int = 240, spacing: float = 12.0) -> List[RawPoint]:
    """Archimedean spiral with pressure rising then falling along it."""
    pts = []
    for i in range(samples):
        t = i / (samples - 1)
        angle = t * turns * 2 * math.pi
        r = spacing * angle / (2 * math.pi) + 10
        pts.append(RawPoint(200 + r * math.cos(angle), 200 + r * math.sin(angle), math.sin(math.pi * t)))
    return pts


def load_samples(path: str) -> List[RawPoint]:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Sample file not found: {path}")
    with open(path) as f:
        data = json.load(f)
    samples = []
    for row in data:
        pressure = row[2] if len(row) > 2 else None
        samples.append(RawPoint(float(row[0]), float(row[1]), pressure))
    return samples


def run(args, samples: List[RawPoint]):
    drawing = Drawing(min_radius=args.min_radius, max_radius=args.max_radius, eraser_radius=args.eraser_radius)

    print("Building stroke...")
    first = samples[0]
    drawing.begin_stroke(first.x, first.y, first.pressure)
    dropped = 0
    for pt in samples[1:]:
        if not drawing.add_point(pt.x, pt.y, pt.pressure):
            dropped += 1
    live = drawing.active_path()
    drawing.end_stroke()
    print(f"  {len(samples)} samples, {dropped} decimated, live contour: {len(live)} commands")

    if args.erase:
        x0, y0, x1, y1 = args.erase
        print(f"Erasing from ({x0:.1f}, {y0:.1f}) to ({x1:.1f}, {y1:.1f}), r={args.eraser_radius:.1f}...")
        drawing.begin_erase(x0, y0)
        steps = max(1, int(math.hypot(x1 - x0, y1 - y0) // 5))
        for k in range(1, steps + 1):
            drawing.erase_to(x0 + (x1 - x0) * k / steps, y0 + (y1 - y0) * k / steps)
        drawing.end_erase()
        print(f"  {len(drawing.strokes)} stroke(s) after erasing")

    rendered = list(drawing.render())
    print("Contours:")
    for stroke, contour in rendered:
        poly = contour.to_polygon()
        minx, miny, maxx, maxy = contour.bounds() or (0.0, 0.0, 0.0, 0.0)
        print(f"  {stroke.id}: {len(stroke)} pts, {len(contour)} cmds, "
              f"area={poly.area:.1f}, bounds=({minx:.1f}, {miny:.1f}, {maxx:.1f}, {maxy:.1f})")

    if args.svg:
        with open(args.svg, "w") as f:
            for _, contour in rendered:
                f.write(contour.to_svg_path() + "\n")
        print(f"Saved SVG paths to {args.svg}")

    if not args.no_show:
        from ink_ribbon.visualize import plot_contours

        plot_contours(
            [contour for _, contour in rendered],
            colors=[stroke.color for stroke, _ in rendered],
            centerlines=[s.points for s, _ in rendered] if args.centerline else None,
            title=f"Ribbon preview ({len(rendered)} strokes)",
        )
    return drawing


def parse_args():
    parser = argparse.ArgumentParser(description="Stroke outline preview")
    parser.add_argument("samples", nargs="?", help="JSON file of [x, y, pressure] samples")
    parser.add_argument("--min-radius", type=float, default=0.5, help="Radius at zero pressure (default: 0.5)")
    parser.add_argument("--max-radius", type=float, default=14.0, help="Radius at full pressure (default: 14)")
    parser.add_argument(
        "--erase",
        type=float,
        nargs=4,
        metavar=("X0", "Y0", "X1", "Y1"),
        help="Erase along a straight line",
    )
    parser.add_argument("--eraser-radius", type=float, default=DEFAULT_ERASER_RADIUS, help="Eraser radius (default: 24)")
    parser.add_argument("--centerline", action="store_true", help="Overlay the sample centerline")
    parser.add_argument("--svg", help="Write SVG path data to this file")
    parser.add_argument("--no-show", action="store_true", help="Skip the plot window")
    return parser.parse_args()


def main():
    args = parse_args()

    if args.samples:
        samples = load_samples(args.samples)
    else:
        print("No sample file given, using demo spiral.")
        samples = demo_spiral()
    if not samples:
        print("No samples.")
        return

    xy = np.array([(p.x, p.y) for p in samples])
    print("=" * 60)
    print("RIBBON PREVIEW")
    print("=" * 60)
    print(f"Radius range: {args.min_radius:.2f} - {args.max_radius:.2f}")
    print(f"Extent: {np.ptp(xy[:, 0]):.1f} x {np.ptp(xy[:, 1]):.1f}")
    print("-" * 60)
    run(args, samples)


if __name__ == "__main__":
    main()
