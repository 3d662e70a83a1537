"""Service layer for HiScore.

Runs compiled queries over batches of documents, and provides factory
functions for component creation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from HiScore.hql.nodes import Node
from HiScore.hql.query import QuerySet
from HiScore.services.scoring import DocumentResult, ScoringService, SearchService, query_matches

if TYPE_CHECKING:
    from HiScore.config import AppConfig


def create_scoring_service(config: AppConfig, query_set: QuerySet) -> ScoringService:
    """Create a scoring service with configured parallelism."""
    return ScoringService(query_set=query_set, max_workers=config.documents.workers)


def create_search_service(config: AppConfig, expression: Node) -> SearchService:
    """Create a search service with configured parallelism."""
    return SearchService(expression=expression, max_workers=config.documents.workers)


__all__ = [
    "DocumentResult",
    "ScoringService",
    "SearchService",
    "create_scoring_service",
    "create_search_service",
    "query_matches",
]
