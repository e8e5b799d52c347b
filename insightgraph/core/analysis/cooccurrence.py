"""
cooccurrence.py - Sentence-window co-occurrence graph over top terms
"""

from typing import Dict, Iterable, List, Sequence, Set, Tuple

from insightgraph.core.analysis.models import CooccurrenceEdge, Keyword
from insightgraph.utils.text_processing import filter_terms, tokenize

TOP_TERM_COUNT = 14
MAX_EDGES = 60


def top_terms(keywords: Sequence[Keyword], count: int = TOP_TERM_COUNT) -> Set[str]:
    """Leading word of each of the top keywords.

    A bigram contributes only its first word, so ``"graph layout"`` and
    ``"graph"`` collapse onto the same node.
    """
    return {k.term.split(" ")[0] for k in keywords[:count]}


def build_edges(sentences: Iterable[str], terms: Set[str], stopwords: frozenset,
                limit: int = MAX_EDGES) -> List[CooccurrenceEdge]:
    """Count how often pairs of top terms share a sentence.

    Args:
        sentences: Sentence fragments from ``split_sentences``
        terms: Node vocabulary, normally ``top_terms(keywords)``
        stopwords: Stopword set of the active language profile
        limit: Maximum number of edges to return

    Returns:
        Edges sorted by descending weight, each with ``source < target``
    """
    weights: Dict[Tuple[str, str], int] = {}

    for sentence in sentences:
        present = list(dict.fromkeys(
            t for t in filter_terms(tokenize(sentence), stopwords) if t in terms
        ))
        for i in range(len(present)):
            for j in range(i + 1, len(present)):
                a, b = present[i], present[j]
                key = (a, b) if a < b else (b, a)
                weights[key] = weights.get(key, 0) + 1

    edges = [
        CooccurrenceEdge(source=a, target=b, weight=w)
        for (a, b), w in weights.items()
    ]
    edges.sort(key=lambda e: e.weight, reverse=True)
    return edges[:limit]
