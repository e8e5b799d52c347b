"""
orchestrator.py - Staged analysis pipeline

``analyze`` runs the stages in a fixed order, reports progress at fixed
checkpoints and yields to the event loop between stages so a host can
redraw. It has no reentrancy guard of its own; ``AnalysisController`` is the
caller-side guard that keeps a single run in flight.
"""

import asyncio
import math
from dataclasses import dataclass, replace
from typing import Callable, Optional

from insightgraph.core.analysis.cooccurrence import build_edges, top_terms
from insightgraph.core.analysis.insights import build_insights
from insightgraph.core.analysis.keywords import score_keywords
from insightgraph.core.analysis.languages import get_profile
from insightgraph.core.analysis.models import AnalysisResult, Summary
from insightgraph.core.analysis.quality import count_discourse_signals, score_quality
from insightgraph.core.errors import AnalysisInProgressError
from insightgraph.utils.logging_helper import get_logger
from insightgraph.utils.text_processing import filter_terms, split_sentences, tokenize

log = get_logger()

ProgressFn = Callable[[int, str], None]

TOP_CONCEPTS = 5


def keyword_density(top_count: int, total: int) -> float:
    """Top keyword share of filtered tokens, in percent, one decimal (half-up)."""
    return math.floor(top_count / max(1, total) * 1000 + 0.5) / 10


async def _checkpoint(pause: float) -> None:
    await asyncio.sleep(pause)


async def analyze(text: str, lang: Optional[str] = None,
                  on_progress: Optional[ProgressFn] = None,
                  pause: float = 0.0) -> AnalysisResult:
    """Analyse *text* and return a new, immutable result.

    Args:
        text: Raw text, any length; empty text gives a baseline result
        lang: Language tag; anything not starting with ``tr`` means English
        on_progress: Called with ``(percent, stage)`` at each checkpoint
        pause: Seconds to sleep at each checkpoint

    Returns:
        AnalysisResult for this text

    Exceptions from any stage propagate unchanged.
    """
    profile = get_profile(lang)
    stop = profile.stopwords
    text = text or ""

    def report(percent: int, stage: str) -> None:
        log.debug(f"analysis {percent}% – {stage}")
        if on_progress:
            on_progress(percent, stage)

    report(5, "preprocess")
    await _checkpoint(pause)

    tokens_all = tokenize(text)
    terms = filter_terms(tokens_all, stop)

    report(30, "concepts")
    await _checkpoint(pause)

    keywords = score_keywords(tokens_all, stop)

    report(55, "relationships")
    await _checkpoint(pause)

    sentences = split_sentences(text)
    edges = build_edges(sentences, top_terms(keywords), stop)

    report(80, "scoring")
    await _checkpoint(pause)

    quality = score_quality(text, profile.code, sentences, keywords, terms)
    signals = count_discourse_signals(text, profile.code)
    density = keyword_density(keywords[0].count if keywords else 0, len(terms))
    insights = build_insights(quality, density, signals)

    report(100, "done")
    log.info(f"Analysed {len(tokens_all)} words ({profile.code}): "
             f"{len(keywords)} keywords, {len(edges)} edges")

    return AnalysisResult(
        lang=profile.code,
        word_count=len(tokens_all),
        unique_count=len(set(terms)),
        keywords=tuple(keywords),
        edges=tuple(edges),
        summary=Summary(
            top_concepts=tuple(k.term for k in keywords[:TOP_CONCEPTS]),
            density=density,
        ),
        quality=quality,
        insights=tuple(insights),
    )


def analyze_sync(text: str, lang: Optional[str] = None,
                 on_progress: Optional[ProgressFn] = None) -> AnalysisResult:
    """Run ``analyze`` to completion on a fresh event loop."""
    return asyncio.run(analyze(text, lang, on_progress))


@dataclass(frozen=True)
class AnalysisState:
    """Snapshot of what a host UI needs to render."""
    progress: int = 0
    stage: str = ""
    in_flight: bool = False
    result: Optional[AnalysisResult] = None
    request_id: int = 0


class AnalysisController:
    """Owns the analysis state and allows one run at a time.

    Every run gets a request id. ``discard()`` invalidates the current id so
    the in-flight run still completes but its progress and result are
    dropped.
    """

    def __init__(self, lang: str = "en", pause: float = 0.0, strict: bool = False,
                 on_change: Optional[Callable[[AnalysisState], None]] = None):
        self.lang = lang
        self.pause = pause
        self.strict = strict
        self.on_change = on_change
        self.last_text = ""
        self._state = AnalysisState()

    @property
    def state(self) -> AnalysisState:
        return self._state

    def _set(self, **changes) -> None:
        self._state = replace(self._state, **changes)
        if self.on_change:
            self.on_change(self._state)

    def _progress_for(self, request_id: int) -> ProgressFn:
        def on_progress(percent: int, stage: str) -> None:
            if request_id == self._state.request_id:
                self._set(progress=percent, stage=stage)
        return on_progress

    async def analyze(self, text: str) -> Optional[AnalysisResult]:
        """Start a run unless one is already in flight.

        Returns:
            The result, or None if the request was ignored or discarded

        Raises:
            AnalysisInProgressError: In strict mode, when a run is in flight
        """
        if self._state.in_flight:
            if self.strict:
                raise AnalysisInProgressError("An analysis is already running")
            log.warning("Ignoring analyze request: a run is already in flight")
            return None

        request_id = self._state.request_id + 1
        self.last_text = text
        self._set(in_flight=True, progress=5, stage="start", request_id=request_id)

        try:
            result = await analyze(text, self.lang, self._progress_for(request_id), self.pause)
        finally:
            if request_id == self._state.request_id:
                self._set(in_flight=False)

        if request_id != self._state.request_id:
            log.info(f"Discarding result of superseded request {request_id}")
            return None

        self._set(result=result)
        return result

    def discard(self) -> None:
        """Drop the in-flight run, if any; its result will be ignored."""
        if self._state.in_flight:
            log.info(f"Discarding in-flight request {self._state.request_id}")
            self._set(in_flight=False, request_id=self._state.request_id + 1)
