"""
keywords.py - Keyword and bigram scoring

Unigrams are scored by frequency damped with a log density term; recurring
bigrams of long words get a flat per-occurrence weight. Both land in one
ranked list.
"""

import math
from collections import Counter
from typing import Dict, List, Sequence

from insightgraph.core.analysis.models import Keyword
from insightgraph.utils.text_processing import filter_terms

MAX_KEYWORDS = 24
BIGRAM_MIN_TOKEN_LEN = 5
BIGRAM_MIN_COUNT = 2
BIGRAM_WEIGHT = 2.2


def unigram_score(count: int, total: int) -> float:
    density = count / max(1, total)
    return count * (1 + math.log10(1 + density * 100))


def count_bigrams(terms: Sequence[str]) -> Dict[str, int]:
    """Count adjacent pairs where both words are at least five letters."""
    counts: Dict[str, int] = {}
    for a, b in zip(terms, terms[1:]):
        if len(a) < BIGRAM_MIN_TOKEN_LEN or len(b) < BIGRAM_MIN_TOKEN_LEN:
            continue
        term = f"{a} {b}"
        counts[term] = counts.get(term, 0) + 1
    return counts


def score_keywords(tokens: Sequence[str], stopwords: frozenset,
                   limit: int = MAX_KEYWORDS) -> List[Keyword]:
    """Rank unigram and bigram candidates for a token stream.

    Args:
        tokens: Unfiltered tokens from ``tokenize``
        stopwords: Stopword set of the active language profile
        limit: Maximum number of keywords to return

    Returns:
        Keywords sorted by descending score; equal scores keep first-seen
        order with unigrams ahead of bigrams
    """
    terms = filter_terms(list(tokens), stopwords)
    if not terms:
        return []

    total = len(terms)
    candidates = [
        Keyword(term=term, count=count, score=unigram_score(count, total))
        for term, count in Counter(terms).items()
    ]
    candidates.extend(
        Keyword(term=term, count=count, score=count * BIGRAM_WEIGHT)
        for term, count in count_bigrams(terms).items()
        if count >= BIGRAM_MIN_COUNT
    )

    # sorted() is stable, which gives the first-seen tie-break
    ranked = sorted(candidates, key=lambda k: k.score, reverse=True)
    return ranked[:limit]
