"""
Analysis module - Deterministic text analysis pipeline

This module provides:
- score_keywords: ranked unigrams and recurring bigrams
- build_edges: sentence-level co-occurrence graph over top terms
- score_quality / build_insights: heuristic scores and observations
- analyze / AnalysisController: the staged pipeline and its run guard
"""

from insightgraph.core.analysis.models import (
    AnalysisResult, CooccurrenceEdge, Insight, Keyword, QualityScores, Summary,
)
from insightgraph.core.analysis.languages import normalize_lang, get_profile
from insightgraph.core.analysis.keywords import score_keywords
from insightgraph.core.analysis.cooccurrence import build_edges, top_terms
from insightgraph.core.analysis.quality import score_quality, count_discourse_signals
from insightgraph.core.analysis.insights import build_insights
from insightgraph.core.analysis.orchestrator import (
    analyze, analyze_sync, AnalysisController, AnalysisState,
)

__all__ = [
    'AnalysisResult', 'CooccurrenceEdge', 'Insight', 'Keyword', 'QualityScores', 'Summary',
    'normalize_lang', 'get_profile',
    'score_keywords',
    'build_edges', 'top_terms',
    'score_quality', 'count_discourse_signals',
    'build_insights',
    'analyze', 'analyze_sync', 'AnalysisController', 'AnalysisState',
]
