"""Score aggregation and normalization."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from HiScore.hql.errors import DegenerateScoreError


@dataclass(frozen=True, slots=True)
class ScoreRecord:
    """Outcome of evaluating a query set against one document.

    Attributes:
        scores: Realized score per expression: its weight if the expression
            was satisfied, otherwise 0.0.
        min_score: Lowest achievable total of the query set.
        max_score: Highest achievable total of the query set.
    """

    scores: tuple[float, ...]
    min_score: float
    max_score: float

    @property
    def total_score(self) -> float:
        """Sum of all realized expression scores."""
        return math.fsum(self.scores)

    @property
    def total_score_normalized(self) -> float:
        """Total score mapped from [min_score, max_score] onto [0, 1].

        Raises:
            DegenerateScoreError: If max_score equals min_score.
        """
        score_range = self.max_score - self.min_score
        if score_range == 0:
            raise DegenerateScoreError(
                f"cannot normalize score: max score equals min score ({self.max_score})"
            )
        return (self.min_score + self.total_score) / score_range

    @property
    def total_score_cut_normalized(self) -> float:
        """Total score divided by max_score, negative totals cut to 0.

        Raises:
            DegenerateScoreError: If max_score is 0 and the total is not negative.
        """
        total = self.total_score
        if total < 0:
            return 0.0
        if self.max_score == 0:
            raise DegenerateScoreError("cannot normalize score: max score is 0")
        return total / self.max_score

    @property
    def satisfied(self) -> tuple[bool, ...]:
        """Whether each expression contributed a non-zero score."""
        return tuple(score != 0 for score in self.scores)


def realize_scores(weights: Sequence[float], outcomes: Sequence[bool]) -> tuple[float, ...]:
    """Pair expression weights with outcomes into realized scores."""
    if len(weights) != len(outcomes):
        raise ValueError(f"got {len(outcomes)} outcomes for {len(weights)} expressions")
    return tuple(float(weight) if outcome else 0.0 for weight, outcome in zip(weights, outcomes))


def score_bounds(weights: Sequence[float]) -> tuple[float, float]:
    """Return (min_score, max_score) for a list of expression weights.

    The bounds assume each expression can be satisfied independently of the
    others.
    """
    min_score = math.fsum(weight for weight in weights if weight < 0)
    max_score = math.fsum(weight for weight in weights if weight > 0)
    return min_score, max_score
