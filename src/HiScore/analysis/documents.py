"""Document discovery and text extraction."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

import fitz  # PyMuPDF

from HiScore.analysis.text import TextAnalysis, analyze_text
from HiScore.utils.log import log

# PyMuPDF is not thread-safe; extraction from worker threads is serialized.
_PDF_LOCK = threading.Lock()

_PDF_INFO_KEYS = (
    ("subject", "subject"),
    ("title", "title"),
    ("author", "author"),
    ("creator", "creator"),
    ("producer", "producer"),
    ("keywords", "keywords"),
    ("creation-date", "creationDate"),
    ("modification-date", "modDate"),
)


def find_documents(root: Path, pattern: str = "*.pdf") -> list[Path]:
    """Collect documents to process.

    Args:
        root: A directory searched recursively, or a single file.
        pattern: Glob pattern matched against file names in directories.

    Returns:
        Sorted document paths; empty if `root` does not exist.
    """
    if root.is_file():
        return [root]
    if not root.is_dir():
        log.warning("No such file or directory: %s", root)
        return []
    return sorted(path for path in root.rglob(pattern) if path.is_file())


def analyze_document(path: Path) -> TextAnalysis:
    """Extract and analyse the text of one document.

    PDF files are read with PyMuPDF; any other file is read as UTF-8 text.
    Extraction failures are logged and yield an empty analysis.

    Args:
        path: Document path.

    Returns:
        The document's text analysis.
    """
    analysis = TextAnalysis()
    try:
        if path.suffix.lower() == ".pdf":
            text, info = _extract_pdf(path)
        else:
            text, info = path.read_text(encoding="utf-8", errors="replace"), {}
    except Exception as e:  # noqa: BLE001 - one broken document must not stop the batch
        log.error("Failed to extract text from %s: %s", path, e)
        return analysis

    analysis.info = info
    analyze_text(text, analysis)
    log.debug("Analysed %s: words=%d distinct=%d", path, analysis.word_count, len(analysis.histogram))
    return analysis


def _extract_pdf(path: Path) -> tuple[str, dict[str, Any]]:
    """Return the text and document information of a PDF file."""
    with _PDF_LOCK:
        doc = fitz.open(path)
        try:
            metadata = doc.metadata or {}
            info: dict[str, Any] = {key: metadata.get(field) or None for key, field in _PDF_INFO_KEYS}
            info["num-pages"] = doc.page_count
            pages = [doc.load_page(i).get_text("text", sort=True) for i in range(doc.page_count)]
        finally:
            doc.close()
    return "\n".join(pages), info
