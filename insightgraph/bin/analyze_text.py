#!/usr/bin/env python
"""
analyze_text.py - Analyse a text file and print keywords, scores and insights.

Examples
────────
# 1) Analyse a file with the default (English) profile
insightgraph notes/essay.txt

# 2) Turkish text, export JSON/CSV/HTML and a graph snapshot
insightgraph deneme.txt --lang tr --out outputs --graph-png outputs/graph.png

# 3) Inline text
insightgraph --text "Because X holds, therefore Y follows."
"""

from __future__ import annotations

import argparse
import asyncio
import pathlib
import sys

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn
from rich.table import Table

from insightgraph.core.analysis import AnalysisController, AnalysisResult
from insightgraph.core.errors import InsightGraphError
from insightgraph.core.export import format_score, write_exports
from insightgraph.core.file_loaders import load_text
from insightgraph.core.layout import GraphView
from insightgraph.utils.config import load_settings
from insightgraph.utils.io_helpers import ensure_utf8_windows
from insightgraph.utils.logging_helper import get_logger
from insightgraph.utils.paths import OUTPUT_DIR, export_stem

log = get_logger()
console = Console()

LEVEL_STYLE = {"good": "green", "info": "cyan", "warn": "yellow"}


def die(msg: str) -> None:
    """Log error and exit with failure status."""
    log.error(msg)
    console.print(f"[bold red]✖ {msg}[/]")
    sys.exit(1)


def run_with_progress(controller: AnalysisController, text: str) -> AnalysisResult:
    """Drive one analysis run with a progress bar fed by its checkpoints."""
    progress_columns = [
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
    ]
    with Progress(*progress_columns, console=console, transient=True) as progress:
        task = progress.add_task("[magenta]start", total=100)

        def on_change(state) -> None:
            progress.update(task, completed=state.progress,
                            description=f"[magenta]{state.stage}")

        controller.on_change = on_change
        return asyncio.run(controller.analyze(text))


def print_result(result: AnalysisResult) -> None:
    console.print(Panel.fit(
        f"[bold cyan]Words:[/] {result.word_count}   "
        f"[bold cyan]Unique:[/] {result.unique_count}   "
        f"[bold cyan]Density:[/] {result.summary.density:.1f}%\n"
        f"[yellow]Top concepts:[/] {', '.join(result.summary.top_concepts) or '—'}",
        title=f"InsightGraph ({result.lang})",
        border_style="green",
    ))

    scores = Table(title="Quality scores", box=box.ROUNDED)
    for name in ("Clarity", "Readability", "Structure", "Argument"):
        scores.add_column(name, justify="right")
    q = result.quality
    scores.add_row(*(f"{v:.0f}" for v in (q.clarity, q.readability, q.structure, q.argument)))
    console.print(scores)

    if result.keywords:
        kw = Table(title="Keywords", box=box.ROUNDED)
        kw.add_column("Term", style="cyan")
        kw.add_column("Count", justify="right")
        kw.add_column("Score", justify="right", style="green")
        for k in result.keywords:
            kw.add_row(k.term, str(k.count), format_score(k.score))
        console.print(kw)

    insights = Table(title="Insights", box=box.ROUNDED)
    insights.add_column("Insight", style="bold")
    insights.add_column("Level")
    insights.add_column("Detail")
    for i in result.insights:
        style = LEVEL_STYLE[i.level]
        insights.add_row(i.label, f"[{style}]{i.level}[/]", i.detail)
    console.print(insights)


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Local text analysis with a concept graph.")
    ap.add_argument("source", type=pathlib.Path, nargs="?",
                    help="Text file (.txt / .md / crawler .json).")
    ap.add_argument("--text", help="Analyse this text instead of a file.")
    ap.add_argument("--lang", help="Language tag (en, tr, ...). Default from config.")
    ap.add_argument("--config", type=pathlib.Path,
                    help="YAML settings file (default: config/insightgraph.yaml).")
    ap.add_argument("--out", type=pathlib.Path, nargs="?", const=OUTPUT_DIR,
                    help="Directory for JSON / CSV / HTML exports (bare flag: outputs/).")
    ap.add_argument("--graph-png", type=pathlib.Path,
                    help="Lay out the concept graph and save a PNG snapshot.")
    ap.add_argument("--ticks", type=int,
                    help="Maximum layout ticks (default from config).")
    args = ap.parse_args(argv)

    ensure_utf8_windows()

    if args.text is None and args.source is None:
        ap.error("give a source file or --text")

    try:
        settings = load_settings(args.config)
        text = args.text if args.text is not None else load_text(args.source)
    except (InsightGraphError, OSError) as exc:
        die(str(exc))

    lang = args.lang or settings.analysis.lang
    controller = AnalysisController(lang=lang, pause=settings.analysis.stage_pause)
    result = run_with_progress(controller, text)
    print_result(result)

    stem = export_stem(None if args.text is not None else args.source)
    if args.out:
        paths = write_exports(result, args.out, stem)
        console.print(f"[dim]📄 Exports: {', '.join(str(p) for p in paths.values())}[/]")

    if args.graph_png:
        if not result.edges:
            console.print("[yellow]No graph data yet – skipping snapshot.[/]")
        else:
            layout = settings.layout
            view = GraphView(result.edges, width=layout.width, height=layout.height)
            view.settle(layout.max_ticks if args.ticks is None else args.ticks)
            view.export_png(args.graph_png, dpi=layout.dpi)
            view.close()
            console.print(f"[dim]🖼  Graph snapshot: {args.graph_png}[/]")

    console.print("[green]✔ All done[/]")


if __name__ == "__main__":
    main()
