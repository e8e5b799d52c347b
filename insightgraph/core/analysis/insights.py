"""
insights.py - Rule-based insights derived from the quality block

Always six insights, always in this order: Clarity, Argument signals,
Concept density, Readability, Structure, Argument score.
"""

from typing import List

from insightgraph.core.analysis.models import Insight, QualityScores


def _tier(value: float, good: float, info: float) -> str:
    if value >= good:
        return "good"
    if value >= info:
        return "info"
    return "warn"


def build_insights(quality: QualityScores, density: float, signals: int) -> List[Insight]:
    """Map scores, keyword density and discourse signal count to insights."""
    out: List[Insight] = []

    level = _tier(quality.clarity, 75, 55)
    out.append(Insight("Clarity", {
        "good": "Clear and easy to follow.",
        "info": "Mostly clear, but can be tightened.",
        "warn": "Consider simplifying sentences and reducing repetition.",
    }[level], level))

    level = _tier(signals, 3, 1)
    out.append(Insight("Argument signals", {
        "good": "Strong connective flow (because/therefore/however…).",
        "info": "Some reasoning connectors detected.",
        "warn": "Few reasoning connectors; consider adding "
                "“because/therefore/however” style structure.",
    }[level], level))

    level = _tier(density, 6, 3)
    out.append(Insight("Concept density", {
        "good": "High focus — key concepts appear consistently.",
        "info": "Balanced density.",
        "warn": "Low density — topic may be too broad or scattered.",
    }[level], level))

    if quality.readability >= 70:
        out.append(Insight("Readability", "Smooth reading flow.", "good"))
    else:
        out.append(Insight("Readability",
                           "Consider shorter sentences and clearer paragraphing.", "info"))

    if quality.structure >= 70:
        out.append(Insight("Structure", "Good length and segmentation.", "good"))
    else:
        out.append(Insight("Structure",
                           "Add headings or break into paragraphs for structure.", "info"))

    level = _tier(quality.argument, 70, 55)
    out.append(Insight("Argument score", {
        "good": "Argumentation looks strong.",
        "info": "Argumentation is present but can be clearer.",
        "warn": "Argumentation signals are weak; add premises and conclusions.",
    }[level], level))

    return out
