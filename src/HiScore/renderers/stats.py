"""Descriptive statistics of document scores."""

from __future__ import annotations

import math
from typing import Any, Sequence

import numpy as np
from scipy import stats

# Below this variance skewness and kurtosis are reported as 0.
_MIN_VARIANCE = 1e-19


def describe(values: Sequence[float]) -> dict[str, Any]:
    """Summarize a sample of scores.

    Variance and standard deviation are population statistics; skewness and
    kurtosis are the bias-corrected sample estimates (excess kurtosis) and
    need at least 3 and 4 values respectively.

    Args:
        values: Score values; may be empty.

    Returns:
        Mapping with N, min, max, median, mean, standard-deviation, variance,
        skewness and kurtosis. Undefined statistics are NaN.
    """
    data = np.asarray(values, dtype=float)
    n = int(data.size)
    if n == 0:
        nan = math.nan
        return {
            "N": 0,
            "min": nan,
            "max": nan,
            "median": nan,
            "mean": nan,
            "standard-deviation": nan,
            "variance": nan,
            "skewness": nan,
            "kurtosis": nan,
        }

    variance = float(np.var(data))
    return {
        "N": n,
        "min": float(np.min(data)),
        "max": float(np.max(data)),
        "median": float(np.median(data)),
        "mean": float(np.mean(data)),
        "standard-deviation": math.sqrt(variance),
        "variance": variance,
        "skewness": _moment_stat(data, variance, 3, stats.skew),
        "kurtosis": _moment_stat(data, variance, 4, stats.kurtosis),
    }


def _moment_stat(data: np.ndarray, variance: float, min_n: int, func) -> float:
    if data.size < min_n:
        return math.nan
    if variance < _MIN_VARIANCE:
        return 0.0
    return float(func(data, bias=False))
