"""
snapshot.py - PNG rendering of a layout frame with matplotlib (Agg)
"""

import io
import math
from typing import Optional

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend
import matplotlib.pyplot as plt

from insightgraph.core.layout.graph import LayoutGraph

BACKGROUND = "#07070b"
LINK_COLOR = (1.0, 1.0, 1.0, 0.12)
NODE_FILL = (1.0, 1.0, 1.0, 0.24)
NODE_EDGE = (1.0, 1.0, 1.0, 0.22)
SELECTED = (99 / 255, 102 / 255, 241 / 255, 0.95)
LABEL_COLOR = (1.0, 1.0, 1.0, 0.75)


def render_png(graph: LayoutGraph, frame, transform, selected: Optional[str],
               width: float, height: float, dpi: int = 100, scale: int = 2) -> bytes:
    """Draw links, nodes and labels in screen space and return PNG bytes.

    The image is *scale* times the viewport size, like a high-DPI canvas
    export. Screen y grows downward, so the y axis is inverted.
    """
    fig = plt.figure(figsize=(width * scale / dpi, height * scale / dpi), dpi=dpi)
    ax = fig.add_axes([0, 0, 1, 1])
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    ax.set_facecolor(BACKGROUND)
    fig.patch.set_facecolor(BACKGROUND)
    ax.axis("off")

    points = transform.apply(frame.positions)
    # points per screen unit, used for marker and line sizes
    unit = 72.0 * scale / dpi

    for link in graph.links:
        (x1, y1), (x2, y2) = points[link.source], points[link.target]
        ax.plot([x1, x2], [y1, y2], color=LINK_COLOR,
                linewidth=max(1, min(3, link.weight)) * unit * transform.k, zorder=1)

    for i, node in enumerate(graph.nodes):
        x, y = points[i]
        if not (math.isfinite(x) and math.isfinite(y)):
            continue
        is_sel = node.id == selected
        ax.scatter([x], [y], s=(2 * node.radius * transform.k * unit) ** 2,
                   color=SELECTED if is_sel else NODE_FILL,
                   edgecolors=SELECTED[:3] if is_sel else NODE_EDGE,
                   linewidths=unit, zorder=2)
        ax.text(x + 12 * transform.k, y + 4 * transform.k, node.id,
                color=LABEL_COLOR, fontsize=12 * unit * transform.k,
                zorder=3)

    buf = io.BytesIO()
    fig.savefig(buf, format="png", facecolor=BACKGROUND, edgecolor="none")
    plt.close(fig)
    return buf.getvalue()
