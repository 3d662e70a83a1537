from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional


class WordHistogram:
    """Word -> occurrence count histogram for one document.

    Built by repeated `insert` calls during text analysis. Readers only ever
    see `counts`, a read-only view, so a built histogram is never mutated by
    query evaluation.
    """

    __slots__ = ("_counter",)

    def __init__(self) -> None:
        self._counter: Counter[str] = Counter()

    def insert(self, word: str) -> None:
        """Count one more occurrence of `word`."""
        self._counter[word] += 1

    @property
    def counts(self) -> Mapping[str, int]:
        """Read-only view of the histogram."""
        return MappingProxyType(self._counter)

    def sorted_items(self, min_count: int = 1) -> list[tuple[str, int]]:
        """Return entries by descending count, dropping those below `min_count`.

        Entries with equal counts keep their insertion order.
        """
        return [(word, count) for word, count in self._counter.most_common() if count >= min_count]

    def __len__(self) -> int:
        return len(self._counter)

    def __contains__(self, word: object) -> bool:
        return word in self._counter


@dataclass(frozen=True, slots=True)
class FrequencyModels:
    """The frequency models of one document.

    Attributes:
        single: Single word histogram.
        compound: Compound (two consecutive words) histogram. When None,
            compound terms are looked up in `single`.
    """

    single: Mapping[str, int]
    compound: Optional[Mapping[str, int]] = None


def is_compound_term(term: str) -> bool:
    """Return True if `term` is a compound (two word) term."""
    return " " in term
