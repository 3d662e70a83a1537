"""Command implementations for the HiScore CLI.

Encapsulates the business logic of each command, separated from CLI
parameter handling and resource setup.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Sequence

from HiScore.config import AppConfig
from HiScore.hql.nodes import Node, iter_terms
from HiScore.hql.query import QuerySet
from HiScore.renderers import (
    build_report,
    build_summary,
    output_path,
    render_query_overview,
    render_scores,
    render_search_results,
    write_yaml,
)
from HiScore.services import ScoringService, SearchService
from HiScore.utils.log import log


def _log_block(text: str) -> None:
    for line in text.splitlines():
        log.info(line)


@dataclass(slots=True)
class ScoreCommand:
    """Scores documents with a query file and writes reports and summary."""

    config: AppConfig
    query_set: QuerySet
    query_file: Path
    documents: Sequence[Path]
    service: ScoringService
    query_date: datetime = field(default_factory=datetime.now)

    def execute(self) -> None:
        """Score all documents and write the configured outputs."""
        _log_block(render_query_overview(self.query_set))
        if self.query_set.min_score == self.query_set.max_score:
            log.warning("Query has no weighted expressions; normalized scores are undefined")
        elif self.query_set.max_score == 0:
            log.warning("Query has no positive weights; cut-normalized scores are undefined")

        results = self.service.score(self.documents)
        if not results:
            log.warning("No documents to score")

        report_cfg = self.config.report
        if report_cfg.reports:
            for result in results:
                out = output_path(result.path, report_cfg.extension)
                log.info("Writing report to %s", out)
                write_yaml(build_report(result, self.query_set, report_cfg, query_date=self.query_date), out)

        _log_block(render_scores(results))
        failures = sum(1 for result in results if result.extraction_failed)
        if failures:
            log.warning("Text extraction failed for %d of %d documents", failures, len(results))

        if report_cfg.summary:
            out = output_path(self.query_file, report_cfg.extension)
            log.info("Writing summary to %s", out)
            write_yaml(build_summary(results, self.query_set, query_date=self.query_date), out)


@dataclass(slots=True)
class SearchCommand:
    """Lists documents matching a single expression."""

    expression_text: str
    expression: Node
    documents: Sequence[Path]
    service: SearchService

    def execute(self) -> int:
        """Run the search and log matching documents.

        Returns:
            Number of matching documents.
        """
        log.info("search-query: %s", self.expression_text)
        log.info("num-documents: %d", len(self.documents))
        hits = self.service.search(self.documents)
        if hits:
            log.info("search-results:")
            _log_block(render_search_results(hits, frozenset(iter_terms(self.expression))))
        log.info("document-matches: %d", len(hits))
        return len(hits)


@dataclass(slots=True)
class CheckCommand:
    """Compiles a query file and prints its overview."""

    query_set: QuerySet

    def execute(self) -> None:
        """Log the query overview."""
        _log_block(render_query_overview(self.query_set))
