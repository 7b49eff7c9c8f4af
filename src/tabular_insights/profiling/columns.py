"""Per-column descriptive statistics.

Statistics are shaped by the column type:
- NUMBER: min, max, mean, median, sum, population standard deviation
- STRING: ranked top values
- DATE: earliest/latest by string comparison

Known limitation: date ranges compare values as strings. This is chronological
for ISO-8601 values ("2024-01-31") but not for formats such as "31/01/2024".
"""

from __future__ import annotations

from collections import Counter
from typing import Any, List, Mapping, Optional, Sequence

import numpy as np

from tabular_insights.core.enums import ColumnType
from tabular_insights.core.values import is_missing, is_null, is_number, round_half_up, value_text
from .config import TOP_VALUES_LIMIT
from .models import ColumnStats, DateRange, TopValue

Record = Mapping[str, Any]

# Token used for null/empty values in categorical counts
NULL_TOKEN = "null"


def _unique_key(value: Any) -> Any:
    if is_missing(value):
        return None
    try:
        hash(value)
    except TypeError:
        # Nested JSON values (lists, objects) are compared by their text
        return (type(value).__name__, value_text(value))
    return value


def count_unique(values: Sequence[Any]) -> int:
    """Count distinct raw values; None and NaN collapse into one null value.

    Unhashable values such as lists or dicts are compared by their string form.
    """
    return len({_unique_key(v) for v in values})


def numeric_stats(values: Sequence[Any]) -> dict:
    """Compute numeric statistics over the valid numbers in ``values``.

    Returns:
        Dict with min, max, mean, median, sum and std_dev, or an empty dict when
        there is no valid number. Mean, median, sum and std_dev are rounded to 2
        decimals; min and max are reported as-is.

    Examples:
        >>> numeric_stats([1, 2, 3, 4, 5])["std_dev"]
        1.41
    """
    numbers = np.asarray([float(v) for v in values if is_number(v)], dtype=float)
    if numbers.size == 0:
        return {}
    ordered = np.sort(numbers)
    # Values near the float limit may sum to inf
    with np.errstate(over="ignore", invalid="ignore"):
        total = float(numbers.sum())
        mean = total / numbers.size
        median = float(np.median(ordered))
        std_dev = float(np.std(numbers))
    return {
        "min": float(ordered[0]),
        "max": float(ordered[-1]),
        "mean": round_half_up(mean, 2),
        "median": round_half_up(median, 2),
        "sum": round_half_up(total, 2),
        "std_dev": round_half_up(std_dev, 2),
    }


def top_values(values: Sequence[Any], limit: int = TOP_VALUES_LIMIT) -> List[TopValue]:
    """Rank values by frequency, ties in first-seen order."""
    counts = Counter(NULL_TOKEN if is_null(v) else value_text(v) for v in values)
    # most_common sorts stably, so ties keep insertion order
    return [TopValue(value=value, count=count) for value, count in counts.most_common(limit)]


def date_range(values: Sequence[Any]) -> Optional[DateRange]:
    """Earliest/latest of the non-null values, compared as strings."""
    ordered = sorted(value_text(v) for v in values if not is_null(v))
    if not ordered:
        return None
    return DateRange(earliest=ordered[0], latest=ordered[-1])


def profile_column(
    rows: Sequence[Record],
    column: str,
    column_type: ColumnType,
    top_values_limit: int = TOP_VALUES_LIMIT,
) -> ColumnStats:
    """Build the ColumnStats of one column.

    Args:
        rows: Dataset records (numeric cells already coerced to numbers).
        column: Column to profile.
        column_type: Type of the column.
        top_values_limit: Maximum number of ranked values for STRING columns.

    Returns:
        ColumnStats with the type-specific fields filled in.
    """
    values = [row.get(column) for row in rows]
    unique_count = count_unique(values)
    null_count = sum(1 for v in values if is_null(v))

    if column_type is ColumnType.NUMBER:
        return ColumnStats(
            column=column,
            type=column_type,
            unique_count=unique_count,
            null_count=null_count,
            **numeric_stats(values),
        )
    if column_type is ColumnType.DATE:
        return ColumnStats(
            column=column,
            type=column_type,
            unique_count=unique_count,
            null_count=null_count,
            date_range=date_range(values),
        )
    return ColumnStats(
        column=column,
        type=column_type,
        unique_count=unique_count,
        null_count=null_count,
        top_values=tuple(top_values(values, top_values_limit)),
    )


__all__ = [
    "NULL_TOKEN",
    "count_unique",
    "numeric_stats",
    "top_values",
    "date_range",
    "profile_column",
]
