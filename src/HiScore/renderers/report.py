"""YAML reports for scored documents.

Two kinds of output are written:

- a report per document (`<document stem>.<extension>` next to the document)
- a summary per query run (`<query stem>.<extension>` next to the query file)
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Sequence

import yaml

from HiScore.config.report import ReportConfig
from HiScore.hql.errors import DegenerateScoreError
from HiScore.hql.query import QuerySet
from HiScore.hql.scoring import ScoreRecord
from HiScore.renderers.stats import describe
from HiScore.services.scoring import DocumentResult, query_matches
from HiScore.utils.log import log

_SCORE_KEYS = ("score", "score-normalized", "score-cut-normalized")


def output_path(source: Path, extension: str) -> Path:
    """Return the output file for `source`: same directory, extension replaced."""
    return source.with_name(f"{source.stem}.{extension}")


def score_triple(record: ScoreRecord) -> list[float | None]:
    """Return total, normalized and cut-normalized score.

    Normalized scores of a degenerate query set are reported as None.
    """
    return [
        record.total_score,
        _safe(lambda: record.total_score_normalized),
        _safe(lambda: record.total_score_cut_normalized),
    ]


def _safe(func: Callable[[], float]) -> float | None:
    try:
        return func()
    except DegenerateScoreError as e:
        log.debug("Score not normalized: %s", e)
        return None


def build_report(
    result: DocumentResult,
    query_set: QuerySet,
    config: ReportConfig,
    *,
    query_date: datetime,
) -> dict[str, Any]:
    """Build the report of one document.

    Args:
        result: The scored document.
        query_set: Query set the document was scored with.
        config: Report settings.
        query_date: Timestamp of the scoring run.

    Returns:
        Report mapping, ready for YAML output.
    """
    total, normalized, cut_normalized = score_triple(result.record)
    stat = result.path.stat()
    data: dict[str, Any] = {
        "query-date": query_date,
        "file-info": {
            "name": result.path.name,
            "path": str(result.path.resolve()),
            "size": stat.st_size,
            "last-modified": datetime.fromtimestamp(stat.st_mtime),
        },
        "document-info": dict(result.analysis.info),
        "total-score": total,
        "total-score-normalized": normalized,
        "total-score-cut-normalized": cut_normalized,
        "query-matches": query_matches(query_set.words, result.analysis),
    }
    if config.explain:
        data["expression-scores"] = {
            expression: score for expression, score in zip(query_set.expressions, result.record.scores)
        }
    data["single-word-count"] = result.analysis.word_count
    if config.histograms:
        data["single-word-histogram"] = dict(result.analysis.histogram.sorted_items(config.histogram_min_count))
        data["compound-word-histogram"] = dict(
            result.analysis.compound_histogram.sorted_items(config.histogram_min_count)
        )
    return data


def build_summary(
    results: Sequence[DocumentResult],
    query_set: QuerySet,
    *,
    query_date: datetime,
) -> dict[str, Any]:
    """Build the summary of a scoring run.

    Args:
        results: All scored documents.
        query_set: Query set the documents were scored with.
        query_date: Timestamp of the scoring run.

    Returns:
        Summary mapping, ready for YAML output.
    """
    job_size = len(results)
    expression_hits = [0] * len(query_set)
    word_hits = {word: 0 for word in sorted(query_set.words)}
    for result in results:
        for idx, satisfied in enumerate(result.record.satisfied):
            if satisfied:
                expression_hits[idx] += 1
        for word in query_matches(query_set.words, result.analysis):
            word_hits[word] += 1

    triples = [score_triple(result.record) for result in results]

    data: dict[str, Any] = {
        "query-date": query_date,
        "query-job-size": job_size,
        "query-num-expressions": len(query_set),
        "query": {
            expression: _frequency(hits, job_size)
            for expression, hits in zip(query_set.expressions, expression_hits)
        },
        "query-matches": {word: _frequency(hits, job_size) for word, hits in word_hits.items()},
        "text-extraction-failures": [str(result.path) for result in results if result.extraction_failed],
        "query-min-score": query_set.min_score,
        "query-max-score": query_set.max_score,
    }
    for column, key in enumerate(_SCORE_KEYS):
        data[key] = describe([triple[column] for triple in triples if triple[column] is not None])
    data["scores"] = {result.path.name: triple for result, triple in zip(results, triples)}
    return data


def _frequency(hits: int, job_size: int) -> dict[str, Any]:
    return {
        "abs-frequency": hits,
        "rel-frequency": hits / job_size if job_size else 0.0,
    }


def write_yaml(data: dict[str, Any], path: Path) -> None:
    """Write a mapping as YAML, keeping key order."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True, default_flow_style=False)
