"""Document analysis: text extraction and word histograms."""

from __future__ import annotations

from HiScore.analysis.documents import analyze_document, find_documents
from HiScore.analysis.text import TextAnalysis, analyze_text

__all__ = [
    "TextAnalysis",
    "analyze_document",
    "analyze_text",
    "find_documents",
]
