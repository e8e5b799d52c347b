import pytest

from insightgraph.core.analysis.keywords import count_bigrams, score_keywords, unigram_score
from insightgraph.core.analysis.languages import get_profile
from insightgraph.utils.text_processing import tokenize

EN = get_profile("en").stopwords


def test_empty_stream():
    assert score_keywords([], EN) == []
    assert score_keywords(tokenize("the a an"), EN) == []


def test_ranking_and_scores():
    kws = score_keywords(tokenize("graph graph graph layout layout node"), EN)
    assert [k.term for k in kws] == ["graph", "layout", "graph graph", "node"]
    assert kws[0].count == 3
    assert kws[0].score == pytest.approx(8.1227, abs=1e-3)
    assert kws[1].score == pytest.approx(5.0714, abs=1e-3)
    assert kws[2].score == pytest.approx(4.4)
    assert kws[3].score == pytest.approx(2.2472, abs=1e-3)


def test_stopwords_and_short_tokens_removed():
    kws = score_keywords(tokenize("the cat and the dog is on it"), EN)
    assert {k.term for k in kws} == {"cat", "dog"}


def test_bigrams_need_recurrence():
    kws = score_keywords(tokenize("quantum physics quantum physics"), EN)
    terms = [k.term for k in kws]
    assert "quantum physics" in terms
    assert "physics quantum" not in terms


def test_bigrams_need_long_words():
    kws = score_keywords(tokenize("data physics data physics"), EN)
    assert all(" " not in k.term for k in kws)
    assert {k.term for k in kws} == {"data", "physics"}


def test_count_bigrams_skips_short_words():
    assert count_bigrams(["long", "words", "words", "here"]) == {"words words": 1}


def test_ties_keep_first_seen_order():
    kws = score_keywords(tokenize("zeta alpha"), EN)
    assert [k.term for k in kws] == ["zeta", "alpha"]


def test_capped_at_24():
    words = " ".join(f"item{i}" for i in range(30))
    assert len(score_keywords(tokenize(words), EN)) == 24


def test_unigram_score_guards_zero_total():
    assert unigram_score(0, 0) == 0
