import json

import pytest

from insightgraph.core.analysis.models import (
    AnalysisResult, CooccurrenceEdge, Insight, Keyword, QualityScores, Summary,
)
from insightgraph.core.analysis.orchestrator import analyze_sync
from insightgraph.core.export import format_score, to_csv, to_html_report, to_json, write_exports


@pytest.fixture()
def result():
    return analyze_sync("graph graph graph layout layout node")


def test_csv_quotes_every_cell(result):
    lines = to_csv(result).split("\n")
    assert lines == [
        '"term","count","score"',
        '"graph","3","8.12"',
        '"layout","2","5.07"',
        '"graph graph","2","4.4"',
        '"node","1","2.25"',
    ]


def test_csv_of_empty_result():
    assert to_csv(analyze_sync("")) == '"term","count","score"'


@pytest.mark.parametrize("score, text", [
    (4.4, "4.4"), (3.0, "3"), (2.346, "2.35"), (8.1227, "8.12"), (0.0, "0"),
])
def test_format_score(score, text):
    assert format_score(score) == text


def test_json_carries_whole_result(result):
    data = json.loads(to_json(result))
    assert data["lang"] == "en"
    assert data["word_count"] == 6
    assert data["keywords"][0] == {"term": "graph", "count": 3, "score": pytest.approx(8.1227, abs=1e-3)}
    assert set(data["quality"]) == {"clarity", "readability", "structure", "argument"}
    assert len(data["insights"]) == 6
    assert to_json(result) == to_json(analyze_sync("graph graph graph layout layout node"))


def test_html_report_escapes_text():
    result = AnalysisResult(
        lang="en", word_count=2, unique_count=2,
        keywords=(Keyword("a<b", 1, 1.5),),
        edges=(CooccurrenceEdge("a<b", "c&d", 1),),
        summary=Summary(top_concepts=("a<b",), density=50.0),
        quality=QualityScores(80, 80, 70, 45),
        insights=(Insight("Clarity", "Fine & clear", "good"),),
    )
    page = to_html_report(result)
    assert "a&lt;b" in page
    assert "Fine &amp; clear" in page
    assert "<td>1.50</td>" in page
    assert "<b>Density:</b> 50.0%" in page
    assert "a<b" not in page


def test_write_exports(tmp_path, result):
    paths = write_exports(result, tmp_path / "out", "draft")
    assert paths["json"].name == "draft.json"
    assert paths["csv"].name == "draft-keywords.csv"
    assert paths["html"].name == "draft.html"
    for p in paths.values():
        assert p.exists()
    assert paths["csv"].read_text(encoding="utf-8").startswith('"term","count","score"\n')
