"""
export.py - JSON, CSV and HTML report output for analysis results

This module handles:
- Serialising an AnalysisResult to JSON
- Keyword tables as CSV (term,count,score)
- A printable HTML report
"""

import csv
import html
import io
import json
import math
import pathlib
from typing import Dict

from insightgraph.core.analysis.models import AnalysisResult
from insightgraph.utils.io_helpers import write_utf8
from insightgraph.utils.logging_helper import get_logger

log = get_logger()


def to_json(result: AnalysisResult) -> str:
    """Pretty-printed JSON of the whole result."""
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)


def format_score(score: float) -> str:
    """Round half-up to 2 decimals without trailing zeros (4.4, 3, 2.35)."""
    rounded = math.floor(score * 100 + 0.5) / 100
    return f"{rounded:.2f}".rstrip("0").rstrip(".")


def to_csv(result: AnalysisResult) -> str:
    """Keyword table with every cell quoted; scores rounded to 2 decimals."""
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(["term", "count", "score"])
    for k in result.keywords:
        writer.writerow([k.term, k.count, format_score(k.score)])
    return buf.getvalue().rstrip("\n")


def to_html_report(result: AnalysisResult) -> str:
    """Convert an analysis result to a self-contained printable HTML page."""
    esc = html.escape
    q = result.quality

    html_doc = """<!doctype html>
<html>
<head>
    <meta charset="utf-8"/>
    <title>InsightGraph Report</title>
    <style>
        body { font-family: system-ui, "Segoe UI", Arial; margin: 32px; }
        h1 { margin: 0 0 8px; }
        h2 { margin: 24px 0 8px; }
        table { border-collapse: collapse; width: 100%; }
        td, th { border: 1px solid #ddd; padding: 8px; font-size: 12px; }
        th { text-align: left; background: #f5f5f7; }
        .muted { color: #666; font-size: 12px; }
    </style>
</head>
<body>
    <h1>InsightGraph Report</h1>
    <div class="muted">Generated locally &bull; No external AI</div>
"""

    html_doc += '    <h2>Summary</h2>\n    <ul>\n'
    html_doc += f'        <li><b>Words:</b> {result.word_count}</li>\n'
    html_doc += f'        <li><b>Unique concepts:</b> {result.unique_count}</li>\n'
    html_doc += f'        <li><b>Top concepts:</b> {esc(", ".join(result.summary.top_concepts))}</li>\n'
    html_doc += f'        <li><b>Density:</b> {result.summary.density:.1f}%</li>\n'
    html_doc += '    </ul>\n'

    html_doc += '    <h2>Scores</h2>\n    <ul>\n'
    for label, value in (("Clarity", q.clarity), ("Readability", q.readability),
                         ("Structure", q.structure), ("Argument", q.argument)):
        html_doc += f'        <li><b>{label}:</b> {value:.0f}</li>\n'
    html_doc += '    </ul>\n'

    html_doc += '    <h2>Keywords</h2>\n'
    html_doc += '    <table><thead><tr><th>Term</th><th>Count</th><th>Score</th></tr></thead><tbody>\n'
    for k in result.keywords:
        html_doc += f'        <tr><td>{esc(k.term)}</td><td>{k.count}</td><td>{k.score:.2f}</td></tr>\n'
    html_doc += '    </tbody></table>\n'

    html_doc += '    <h2>Insights</h2>\n    <ul>\n'
    for i in result.insights:
        html_doc += f'        <li class="{i.level}"><b>{esc(i.label)}:</b> {esc(i.detail)}</li>\n'
    html_doc += '    </ul>\n'

    html_doc += '    <script>window.onload = () => window.print();</script>\n'
    html_doc += '</body>\n</html>\n'
    return html_doc


def write_exports(result: AnalysisResult, out_dir: pathlib.Path,
                  stem: str = "insightgraph") -> Dict[str, pathlib.Path]:
    """Write JSON, keyword CSV and HTML report next to each other.

    Returns:
        Mapping of format name to written path
    """
    out_dir = pathlib.Path(out_dir)
    paths = {
        "json": out_dir / f"{stem}.json",
        "csv": out_dir / f"{stem}-keywords.csv",
        "html": out_dir / f"{stem}.html",
    }
    write_utf8(paths["json"], to_json(result))
    write_utf8(paths["csv"], to_csv(result) + "\n")
    write_utf8(paths["html"], to_html_report(result))
    for fmt, path in paths.items():
        log.info(f"Wrote {fmt.upper()} export to {path}")
    return paths
