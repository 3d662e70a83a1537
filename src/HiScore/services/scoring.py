"""Document scoring service."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence

from HiScore.analysis.documents import analyze_document
from HiScore.analysis.text import TextAnalysis
from HiScore.core.histogram import is_compound_term
from HiScore.hql.nodes import Node
from HiScore.hql.query import QuerySet, matches
from HiScore.hql.scoring import ScoreRecord
from HiScore.utils.log import log


@dataclass(frozen=True, slots=True)
class DocumentResult:
    """Analysis and score of one document."""

    path: Path
    analysis: TextAnalysis
    record: ScoreRecord

    @property
    def extraction_failed(self) -> bool:
        """True if no words could be extracted from the document."""
        return self.analysis.word_count == 0


@dataclass(slots=True)
class ScoringService:
    """Scores documents against a compiled query set.

    The query set is shared read-only by all workers; each document is
    analysed and evaluated independently.
    """

    query_set: QuerySet
    max_workers: int = 4
    analyzer: Callable[[Path], TextAnalysis] = analyze_document

    def score(self, paths: Sequence[Path]) -> list[DocumentResult]:
        """Analyse and score documents.

        Args:
            paths: Document paths.

        Returns:
            One result per document, in input order.
        """
        if not paths:
            return []
        log.info("Scoring %d documents: expressions=%d workers=%d", len(paths), len(self.query_set), self.max_workers)
        total = len(paths)

        def _score(indexed: tuple[int, Path]) -> DocumentResult:
            idx, path = indexed
            log.info("Processing file (%d/%d): %s", idx, total, path)
            return self.score_one(path)

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            return list(executor.map(_score, enumerate(paths, start=1)))

    def score_one(self, path: Path) -> DocumentResult:
        """Analyse and score one document."""
        analysis = self.analyzer(path)
        record = self.query_set.evaluate(analysis.models)
        log.debug("Scored %s: total=%s", path, record.total_score)
        return DocumentResult(path=path, analysis=analysis, record=record)


@dataclass(slots=True)
class SearchService:
    """Finds documents satisfying a single expression."""

    expression: Node
    max_workers: int = 4
    analyzer: Callable[[Path], TextAnalysis] = analyze_document

    def search(self, paths: Sequence[Path]) -> list[tuple[Path, TextAnalysis]]:
        """Return matching documents with their analyses, in input order."""
        if not paths:
            return []

        def _check(path: Path) -> tuple[Path, TextAnalysis, bool]:
            analysis = self.analyzer(path)
            return path, analysis, matches(self.expression, analysis.models)

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            results = list(executor.map(_check, paths))
        return [(path, analysis) for path, analysis, hit in results if hit]


def query_matches(words: frozenset[str], analysis: TextAnalysis) -> dict[str, int]:
    """Return referenced terms present in a document with their counts.

    Args:
        words: Terms referenced by a query.
        analysis: The document's analysis.

    Returns:
        Term -> count, highest count first (ties by term).
    """
    hits: dict[str, int] = {}
    for word in words:
        histogram = analysis.compound_histogram if is_compound_term(word) else analysis.histogram
        count = histogram.counts.get(word, 0)
        if count > 0:
            hits[word] = count
    return dict(sorted(hits.items(), key=lambda item: (-item[1], item[0])))
