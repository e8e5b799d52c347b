"""
quality.py - Heuristic quality scores (clarity, readability, structure, argument)

The formulas are fixed heuristics rather than validated readability indices.
Their coefficients define what the four scores mean, so they must not drift.
"""

import math
from typing import List, Sequence

from insightgraph.core.analysis.languages import get_profile
from insightgraph.core.analysis.models import Keyword, QualityScores
from insightgraph.utils.text_processing import filter_terms, tokenize

REPETITION_TOP_N = 6


def clamp(n: float, lo: float = 0.0, hi: float = 100.0) -> float:
    return max(lo, min(hi, n))


def sentence_lengths(sentences: Sequence[str], stopwords: frozenset) -> List[int]:
    """Filtered-token count of every sentence."""
    return [len(filter_terms(tokenize(s), stopwords)) for s in sentences]


def count_discourse_signals(text: str, lang: str) -> int:
    """Number of distinct discourse markers present anywhere in *text*.

    Presence only: a marker repeated ten times still counts once. Matching is
    a plain substring test, so "but" also fires inside "butter".
    """
    lower = text.lower()
    return sum(1 for marker in get_profile(lang).discourse_markers if marker in lower)


def score_quality(text: str, lang: str, sentences: Sequence[str],
                  keywords: Sequence[Keyword], tokens: Sequence[str]) -> QualityScores:
    """Compute the four 0-100 quality scores.

    Args:
        text: Raw input text (for discourse marker search)
        lang: Normalised language code
        sentences: Output of ``split_sentences(text)``
        keywords: Ranked keywords for the text
        tokens: Filtered tokens (length and stopword filter applied)

    Returns:
        QualityScores with every field clamped to [0, 100]
    """
    stopwords = get_profile(lang).stopwords
    lengths = sentence_lengths(sentences, stopwords)
    n = max(1, len(lengths))
    avg = sum(lengths) / n
    variance = sum((x - avg) ** 2 for x in lengths) / n

    top = sum(k.count for k in keywords[:REPETITION_TOP_N])
    repetition = top / max(1, len(tokens))

    signals = count_discourse_signals(text, lang)

    return QualityScores(
        clarity=clamp(92 - avg * 1.6 - repetition * 35),
        readability=clamp(90 - math.sqrt(variance) * 1.3),
        structure=clamp(60 + min(40, len(sentences) * 2.5)),
        argument=clamp(45 + signals * 8),
    )
