"""
Layout module - Force-directed layout of the concept graph

This module provides:
- select_subgraph: top nodes by degree and the links between them
- ForceSimulation: tick-based physics over an index arena
- GraphView / ViewTransform: pan, zoom, selection and PNG export
"""

from insightgraph.core.layout.graph import GraphLink, GraphNode, LayoutGraph, select_subgraph
from insightgraph.core.layout.simulation import ForceSimulation, Frame
from insightgraph.core.layout.view import GraphView, ViewTransform

__all__ = [
    'GraphLink', 'GraphNode', 'LayoutGraph', 'select_subgraph',
    'ForceSimulation', 'Frame',
    'GraphView', 'ViewTransform',
]
