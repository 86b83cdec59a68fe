"""Matplotlib preview of stroke contours."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection
from matplotlib.patches import Polygon as PolygonPatch

from .stroke_pipeline.contour import Contour


def plot_contours(
    contours: Iterable[Contour],
    colors: Optional[Sequence[str]] = None,
    centerlines: Optional[Sequence[Sequence]] = None,
    title: str = "Strokes",
    ax=None,
    show: bool = True,
):
    """Draw filled contours and, optionally, the sample centerlines.

    Args:
        contours: Contours to fill
        colors: Fill color per contour (default: near-black)
        centerlines: Sample sequences drawn as thin red polylines
        title: Axes title
        ax: Existing axes to draw into; a new figure is created otherwise
        show: Call ``plt.show()`` when done

    Returns:
        The matplotlib axes
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(8, 8))
    ax.set_aspect("equal")
    ax.set_title(title)
    ax.grid(True, linestyle=":", alpha=0.3)

    for i, contour in enumerate(contours):
        verts = contour.flatten()
        if len(verts) < 3:
            continue
        color = colors[i] if colors is not None and i < len(colors) else "#111"
        ax.add_patch(PolygonPatch(verts, closed=True, facecolor=color, edgecolor=color, linewidth=0.5, alpha=0.9))

    if centerlines:
        segments: List = []
        for line in centerlines:
            for a, b in zip(line, line[1:]):
                segments.append([(a.x, a.y), (b.x, b.y)])
        if segments:
            ax.add_collection(LineCollection(segments, colors="red", linewidths=0.8))

    ax.autoscale()
    # Screen coordinates: y grows downward.
    ax.invert_yaxis()

    if show:
        plt.show()
    return ax


__all__ = ["plot_contours"]
