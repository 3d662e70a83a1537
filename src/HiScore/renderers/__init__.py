"""Output renderers for scoring results.

Console text for the terminal, YAML files for per-document reports and run
summaries.
"""

from __future__ import annotations

from HiScore.renderers.console import render_query_overview, render_scores, render_search_results
from HiScore.renderers.report import build_report, build_summary, output_path, score_triple, write_yaml
from HiScore.renderers.stats import describe

__all__ = [
    "build_report",
    "build_summary",
    "describe",
    "output_path",
    "render_query_overview",
    "render_scores",
    "render_search_results",
    "score_triple",
    "write_yaml",
]
