"""Console text output renderers.

Text blocks are returned as strings; the CLI prints them line by line through
the logger.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from HiScore.analysis.text import TextAnalysis
from HiScore.hql.query import QuerySet
from HiScore.renderers.report import score_triple
from HiScore.services.scoring import DocumentResult, query_matches


def render_query_overview(query_set: QuerySet) -> str:
    """Render a compiled query set: size, score bounds and expressions."""
    lines = [
        "histogram query:",
        f"  num. expressions: {len(query_set)}",
        f"  num. query words: {len(query_set.words)}",
        f"  min. score: {query_set.min_score:f}",
        f"  max. score: {query_set.max_score:f}",
        "histogram query expressions:",
    ]
    for query in query_set:
        lines.append(f"  {query.source} -- [weight={query.weight:.2f}]")
    return "\n".join(lines)


def render_scores(results: Iterable[DocumentResult]) -> str:
    """Render one line per scored document."""
    lines: list[str] = []
    for idx, result in enumerate(results, start=1):
        total, normalized, cut = score_triple(result.record)
        lines.append(
            f"{idx}. {result.path.name}: score={total:g} normalized={_fmt(normalized)} cut={_fmt(cut)}"
        )
    return "\n".join(lines)


def render_search_results(hits: Iterable[tuple[Path, TextAnalysis]], words: frozenset[str]) -> str:
    """Render documents matching an ad hoc search with their term counts."""
    lines: list[str] = []
    for idx, (path, analysis) in enumerate(hits, start=1):
        lines.append(f"{idx}. {path.name}")
        lines.append(f"   Path: {path.resolve()}")
        pages = analysis.info.get("num-pages")
        if pages is not None:
            lines.append(f"   Pages: {pages}")
        counts = ", ".join(f"{word}: {count}" for word, count in query_matches(words, analysis).items())
        lines.append(f"   Matches: {counts or '-'}")
    return "\n".join(lines)


def _fmt(value: float | None) -> str:
    return "-" if value is None else f"{value:.4f}"
