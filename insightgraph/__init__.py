"""
InsightGraph - local text analysis and concept graph layout

    from insightgraph import analyze_sync
    result = analyze_sync("Because the graph is sparse, the layout converges.")
"""

__version__ = "0.3.0"

from insightgraph.core.analysis import analyze, analyze_sync, AnalysisController, AnalysisResult
from insightgraph.core.layout import GraphView, ForceSimulation, select_subgraph

__all__ = [
    "analyze",
    "analyze_sync",
    "AnalysisController",
    "AnalysisResult",
    "GraphView",
    "ForceSimulation",
    "select_subgraph",
]
