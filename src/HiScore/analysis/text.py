"""Word and compound word histograms from raw document text."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from HiScore.core.histogram import FrequencyModels, WordHistogram

# Characters removed from every token before counting.
_TRASH_RE = re.compile(r"[.|,=:;!?()\r]")
# Tokens must contain a letter; `.` does not cross line breaks.
_WORD_RE = re.compile(r".*[a-zA-Z].*")


@dataclass(slots=True)
class TextAnalysis:
    """Histograms and metadata of one analysed document.

    Attributes:
        histogram: Single word histogram.
        compound_histogram: Histogram of consecutive word pairs.
        word_count: Number of counted single words.
        info: Document metadata (title, author, page count, ...).
    """

    histogram: WordHistogram = field(default_factory=WordHistogram)
    compound_histogram: WordHistogram = field(default_factory=WordHistogram)
    word_count: int = 0
    info: dict[str, Any] = field(default_factory=dict)

    @property
    def models(self) -> FrequencyModels:
        """Frequency models for query evaluation."""
        return FrequencyModels(single=self.histogram.counts, compound=self.compound_histogram.counts)


def analyze_text(text: str, analysis: TextAnalysis | None = None) -> TextAnalysis:
    """Count words and consecutive word pairs in `text`.

    The text is split on spaces only. A token holding a line break (two words
    joined by a newline) is dropped, and pairs are formed from consecutive
    kept words.

    Args:
        text: Raw document text.
        analysis: Analysis to add to. A new one is created if None.

    Returns:
        The updated analysis.
    """
    if analysis is None:
        analysis = TextAnalysis()

    last = ""
    for token in text.split(" "):
        word = _TRASH_RE.sub("", token.lower()).strip()
        if not word or not _WORD_RE.fullmatch(word):
            continue
        analysis.histogram.insert(word)
        analysis.word_count += 1
        if last:
            analysis.compound_histogram.insert(f"{last} {word}")
        last = word
    return analysis
