"""
view.py - Interactive graph view: pan/zoom transform, selection, export

The view owns one ForceSimulation at a time. Pan/zoom and the selected node
only change how frames are drawn; they never feed back into the physics.
"""

import pathlib
from dataclasses import dataclass
from typing import Optional, Sequence, Union

import numpy as np

from insightgraph.core.analysis.models import CooccurrenceEdge
from insightgraph.core.layout.graph import LayoutGraph, select_subgraph
from insightgraph.core.layout.simulation import ForceSimulation, Frame
from insightgraph.utils.logging_helper import get_logger

log = get_logger()

MIN_SCALE = 0.1
MAX_SCALE = 10.0


@dataclass(frozen=True)
class ViewTransform:
    """Screen = simulation * k + (x, y)."""
    k: float = 1.0
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def identity(cls) -> "ViewTransform":
        return cls()

    @property
    def is_identity(self) -> bool:
        return self.k == 1.0 and self.x == 0.0 and self.y == 0.0

    def apply(self, points: np.ndarray) -> np.ndarray:
        return np.asarray(points, dtype=float) * self.k + np.array([self.x, self.y])

    def invert(self, points: np.ndarray) -> np.ndarray:
        return (np.asarray(points, dtype=float) - np.array([self.x, self.y])) / self.k

    def translate(self, dx: float, dy: float) -> "ViewTransform":
        return ViewTransform(self.k, self.x + dx, self.y + dy)

    def scale_at(self, factor: float, cx: float, cy: float) -> "ViewTransform":
        """Zoom by *factor* keeping screen point (cx, cy) fixed."""
        k = min(MAX_SCALE, max(MIN_SCALE, self.k * factor))
        ratio = k / self.k
        return ViewTransform(k, cx - (cx - self.x) * ratio, cy - (cy - self.y) * ratio)

    def to_matrix(self) -> np.ndarray:
        return np.array([[self.k, 0.0, self.x],
                         [0.0, self.k, self.y],
                         [0.0, 0.0, 1.0]])


class GraphView:
    """Concept graph panel state for one AnalysisResult edge set."""

    def __init__(self, edges: Sequence[CooccurrenceEdge] = (), width: float = 700.0,
                 height: float = 520.0, seed: int = 0):
        self.width = width
        self.height = height
        self.seed = seed
        self.transform = ViewTransform.identity()
        self.selected: Optional[str] = None
        self.graph: LayoutGraph = select_subgraph(())
        self.simulation: Optional[ForceSimulation] = None
        self.frame: Optional[Frame] = None
        self.set_edges(edges)

    # ── data ────────────────────────────────────────────────────────────
    def set_edges(self, edges: Sequence[CooccurrenceEdge]) -> None:
        """Replace the graph; any running simulation is stopped first."""
        if self.simulation is not None:
            self.simulation.stop()
        self.graph = select_subgraph(edges)
        self.simulation = ForceSimulation(self.graph, self.width, self.height, seed=self.seed)
        self.frame = self.simulation.frame()
        if self.selected is not None and self.selected not in self.frame.node_ids:
            self.selected = None
        self.transform = ViewTransform.identity()
        log.info(f"Graph view: {len(self.graph.nodes)} nodes, {len(self.graph.links)} links")

    @property
    def is_empty(self) -> bool:
        return self.graph.is_empty

    def step(self) -> Frame:
        self.frame = self.simulation.tick()
        return self.frame

    def settle(self, max_ticks: Optional[int] = None) -> Frame:
        self.frame = self.simulation.run(max_ticks)
        return self.frame

    def resize(self, width: float, height: float) -> None:
        """Move the centring force to the new viewport and reheat."""
        self.width, self.height = width, height
        self.simulation.resize(width, height)
        self.simulation.reheat()

    def close(self) -> None:
        """Tear down: stop the tick loop."""
        if self.simulation is not None:
            self.simulation.stop()

    # ── selection ───────────────────────────────────────────────────────
    def select(self, node_id: Optional[str]) -> None:
        if node_id is not None and node_id not in self.frame.node_ids:
            raise KeyError(node_id)
        self.selected = node_id

    def clear_selection(self) -> None:
        self.selected = None

    def node_at(self, sx: float, sy: float) -> Optional[str]:
        """Node whose circle contains screen point (sx, sy), if any."""
        if self.is_empty:
            return None
        px, py = self.transform.invert([sx, sy])
        d = np.hypot(self.frame.positions[:, 0] - px, self.frame.positions[:, 1] - py)
        radii = np.array([node.radius for node in self.graph.nodes])
        inside = np.nonzero(d <= radii)[0]
        if not len(inside):
            return None
        return self.graph.nodes[inside[np.argmin(d[inside])]].id

    # ── pan / zoom ──────────────────────────────────────────────────────
    def pan(self, dx: float, dy: float) -> ViewTransform:
        self.transform = self.transform.translate(dx, dy)
        return self.transform

    def zoom(self, factor: float, cx: Optional[float] = None,
             cy: Optional[float] = None) -> ViewTransform:
        cx = self.width / 2 if cx is None else cx
        cy = self.height / 2 if cy is None else cy
        self.transform = self.transform.scale_at(factor, cx, cy)
        return self.transform

    def reset_view(self) -> ViewTransform:
        self.transform = ViewTransform.identity()
        return self.transform

    def screen_positions(self) -> np.ndarray:
        return self.transform.apply(self.frame.positions)

    # ── export ──────────────────────────────────────────────────────────
    def export_png(self, path: Optional[Union[str, pathlib.Path]] = None,
                   dpi: int = 100) -> bytes:
        """Rasterise the current frame as drawn (transform and selection)."""
        from insightgraph.core.layout.snapshot import render_png

        data = render_png(self.graph, self.frame, self.transform, self.selected,
                          self.width, self.height, dpi=dpi)
        if path is not None:
            from insightgraph.utils.io_helpers import write_bytes
            write_bytes(pathlib.Path(path), data)
            log.info(f"Graph snapshot written to {path}")
        return data
