"""
graph.py - Rendering subgraph selection for the force layout

Nodes and links are kept in flat tuples; a link refers to its endpoints by
index into the node tuple. Endpoints are resolved once, here, before any
simulation runs.
"""

import math
from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

from insightgraph.core.analysis.models import CooccurrenceEdge

MAX_NODES = 40
MAX_LINKS = 80


@dataclass(frozen=True)
class GraphNode:
    id: str
    degree: int

    @property
    def radius(self) -> float:
        return 10 + math.sqrt(self.degree) * 0.9


@dataclass(frozen=True)
class GraphLink:
    source: int
    target: int
    weight: int

    @property
    def distance(self) -> float:
        """Spring rest length; heavier edges pull their ends closer."""
        return 80 - min(40, self.weight * 6)


@dataclass(frozen=True)
class LayoutGraph:
    nodes: Tuple[GraphNode, ...]
    links: Tuple[GraphLink, ...]

    def index_of(self, node_id: str) -> int:
        for i, node in enumerate(self.nodes):
            if node.id == node_id:
                return i
        raise KeyError(node_id)

    @property
    def is_empty(self) -> bool:
        return not self.nodes


def node_degrees(edges: Sequence[CooccurrenceEdge]) -> Dict[str, int]:
    """Summed incident edge weight per endpoint, in first-seen order."""
    degrees: Dict[str, int] = {}
    for e in edges:
        degrees[e.source] = degrees.get(e.source, 0) + e.weight
        degrees[e.target] = degrees.get(e.target, 0) + e.weight
    return degrees


def select_subgraph(edges: Sequence[CooccurrenceEdge], max_nodes: int = MAX_NODES,
                    max_links: int = MAX_LINKS) -> LayoutGraph:
    """Keep the heaviest nodes and the edges between them.

    Args:
        edges: Ranked co-occurrence edges of an analysis result
        max_nodes: Node budget, by descending degree
        max_links: Link budget, in edge order, among surviving nodes

    Returns:
        LayoutGraph with link endpoints resolved to node indices
    """
    ranked = sorted(node_degrees(edges).items(), key=lambda kv: kv[1], reverse=True)
    nodes = tuple(GraphNode(id=node_id, degree=deg) for node_id, deg in ranked[:max_nodes])
    index = {node.id: i for i, node in enumerate(nodes)}

    links = []
    for e in edges:
        if e.source in index and e.target in index:
            links.append(GraphLink(index[e.source], index[e.target], e.weight))
            if len(links) == max_links:
                break

    return LayoutGraph(nodes=nodes, links=tuple(links))
