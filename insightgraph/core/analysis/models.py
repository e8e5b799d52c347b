"""
models.py - Result types produced by an analysis run

Everything here is frozen: a new analysis produces a new result rather than
mutating an old one.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Literal, Tuple

InsightLevel = Literal["info", "good", "warn"]


@dataclass(frozen=True)
class Keyword:
    term: str
    count: int
    score: float


@dataclass(frozen=True)
class CooccurrenceEdge:
    """Undirected edge; ``source < target`` always holds."""
    source: str
    target: str
    weight: int


@dataclass(frozen=True)
class Summary:
    top_concepts: Tuple[str, ...]
    density: float


@dataclass(frozen=True)
class QualityScores:
    clarity: float
    readability: float
    structure: float
    argument: float


@dataclass(frozen=True)
class Insight:
    label: str
    detail: str
    level: InsightLevel


@dataclass(frozen=True)
class AnalysisResult:
    lang: str
    word_count: int
    unique_count: int
    keywords: Tuple[Keyword, ...]
    edges: Tuple[CooccurrenceEdge, ...]
    summary: Summary
    quality: QualityScores
    insights: Tuple[Insight, ...]

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict with lists in place of tuples, ready for JSON."""
        data = asdict(self)
        data["keywords"] = list(data["keywords"])
        data["edges"] = list(data["edges"])
        data["summary"]["top_concepts"] = list(data["summary"]["top_concepts"])
        data["insights"] = list(data["insights"])
        return data
