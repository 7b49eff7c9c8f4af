"""Pearson correlation between numeric columns.

Only rows where both columns hold a valid number take part, and the means used
for the deviations are the means of that paired subset.
"""

from __future__ import annotations

import math
from typing import Any, List, Mapping, Sequence, Tuple

import numpy as np

from tabular_insights.core.values import is_number, round_half_up
from .config import MAX_SCATTER_POINTS, MIN_CORRELATION_SAMPLES
from .models import CorrelationResult, ScatterPoint

Record = Mapping[str, Any]


def paired_values(
    rows: Sequence[Record], x_column: str, y_column: str
) -> List[Tuple[float, float]]:
    """Return (x, y) pairs, in row order, for rows where both values are numbers."""
    pairs: List[Tuple[float, float]] = []
    for row in rows:
        x, y = row.get(x_column), row.get(y_column)
        if is_number(x) and is_number(y):
            pairs.append((float(x), float(y)))
    return pairs


def pearson_correlation(xs: Sequence[float], ys: Sequence[float]) -> float:
    """Pearson correlation coefficient, rounded to 3 decimals.

    Returns 0 when fewer than 3 pairs are given or when either side has zero
    variance, or when the deviations overflow the float range.

    Raises:
        ValueError: If ``xs`` and ``ys`` differ in length.

    Examples:
        >>> pearson_correlation([1, 2, 3, 4], [2, 4, 6, 8])
        1.0
        >>> pearson_correlation([1, 2], [2, 4])
        0.0
    """
    x = np.asarray(xs, dtype=float)
    y = np.asarray(ys, dtype=float)
    if x.shape != y.shape:
        raise ValueError(f"Length mismatch: {x.size} x values vs {y.size} y values")
    if x.size < MIN_CORRELATION_SAMPLES:
        return 0.0
    if np.all(x == x[0]) or np.all(y == y[0]):
        return 0.0

    with np.errstate(over="ignore", invalid="ignore"):
        dx = x - x.mean()
        dy = y - y.mean()
        numerator = float(np.sum(dx * dy))
        denominator = math.sqrt(float(np.sum(dx * dx)) * float(np.sum(dy * dy)))
    if denominator == 0:
        return 0.0
    r = numerator / denominator
    # Overflowing deviations leave no usable signal
    if not math.isfinite(r):
        return 0.0
    return min(1.0, max(-1.0, round_half_up(r, 3)))


def correlate(
    rows: Sequence[Record],
    x_column: str,
    y_column: str,
    max_scatter_points: int = MAX_SCATTER_POINTS,
) -> CorrelationResult:
    """Correlate two numeric columns and keep the leading pairs as scatter data."""
    pairs = paired_values(rows, x_column, y_column)
    correlation = pearson_correlation([p[0] for p in pairs], [p[1] for p in pairs])
    return CorrelationResult(
        x_column=x_column,
        y_column=y_column,
        correlation=correlation,
        scatter_data=tuple(ScatterPoint(x=x, y=y) for x, y in pairs[:max_scatter_points]),
    )


__all__ = ["paired_values", "pearson_correlation", "correlate"]
