"""Profiling data models.

This module defines the immutable value types produced by the profiler:
- ColumnStats: Per-column descriptive statistics, shaped by column type
- AggregationResult: One group-by reduction of a numeric column
- CorrelationResult: Pearson correlation of two numeric columns
- DataSummary: The aggregate root holding all of the above
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from tabular_insights.core.enums import ColumnType, Operation


@dataclass(frozen=True)
class TopValue:
    """A categorical value and how many rows hold it."""

    value: str
    count: int


@dataclass(frozen=True)
class DateRange:
    """Earliest and latest values of a date column (string comparison)."""

    earliest: str
    latest: str


@dataclass(frozen=True)
class ColumnStats:
    """Descriptive statistics for a single column.

    Attributes:
        column: Column name.
        type: Inferred column type.
        unique_count: Distinct raw values, null counting as one value.
        null_count: Values that are null or the empty string.
        min, max, mean, median, sum, std_dev: Number columns only. All None when
            the column holds no valid numeric value; zero is a real statistic.
        top_values: String columns only. Most frequent values, ranked.
        date_range: Date columns only. None when the column has no values.

    Examples:
        >>> ColumnStats(column="revenue", type=ColumnType.NUMBER, unique_count=3,
        ...             null_count=0, min=1.0, max=5.0, mean=3.0, median=3.0,
        ...             sum=15.0, std_dev=1.41)
    """

    column: str
    type: ColumnType
    unique_count: int
    null_count: int
    min: Optional[float] = None
    max: Optional[float] = None
    mean: Optional[float] = None
    median: Optional[float] = None
    sum: Optional[float] = None
    std_dev: Optional[float] = None
    top_values: Tuple[TopValue, ...] = ()
    date_range: Optional[DateRange] = None

    def __post_init__(self) -> None:
        """Validate field constraints."""
        if not isinstance(self.type, ColumnType):
            raise ValueError(f"Invalid column type: {self.type!r}")
        if self.unique_count < 0 or self.null_count < 0:
            raise ValueError("unique_count and null_count must be non-negative")
        if self.std_dev is not None and self.std_dev < 0:
            raise ValueError(f"std_dev must be non-negative, got {self.std_dev}")

    @property
    def has_numeric_stats(self) -> bool:
        return self.type is ColumnType.NUMBER and self.mean is not None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with wire keys, omitting statistics that do not apply."""
        out: Dict[str, Any] = {
            "column": self.column,
            "type": self.type.value,
            "uniqueCount": self.unique_count,
            "nullCount": self.null_count,
        }
        if self.has_numeric_stats:
            out.update(
                {
                    "min": self.min,
                    "max": self.max,
                    "mean": self.mean,
                    "median": self.median,
                    "sum": self.sum,
                    "stdDev": self.std_dev,
                }
            )
        if self.type is ColumnType.STRING:
            out["topValues"] = [{"value": t.value, "count": t.count} for t in self.top_values]
        if self.date_range is not None:
            out["dateRange"] = {
                "earliest": self.date_range.earliest,
                "latest": self.date_range.latest,
            }
        return out


@dataclass(frozen=True)
class AggregationResult:
    """A group-by reduction of one numeric column by one categorical/date column.

    Attributes:
        description: Human-readable label, e.g. "Total revenue by region".
        group_by: Name of the grouping column.
        metric: Name of the reduced numeric column.
        operation: Reduction applied per group.
        data: One row per group, ``{group_by: key, metric: value}``. Rows must
            be treated as read-only.
    """

    description: str
    group_by: str
    metric: str
    operation: Operation
    data: Tuple[Dict[str, Any], ...] = ()

    def __post_init__(self) -> None:
        """Validate field constraints."""
        if not isinstance(self.operation, Operation):
            raise ValueError(f"Invalid operation: {self.operation!r}")

    @property
    def group_count(self) -> int:
        return len(self.data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "description": self.description,
            "groupBy": self.group_by,
            "metric": self.metric,
            "operation": self.operation.value,
            "data": [dict(row) for row in self.data],
        }


@dataclass(frozen=True)
class ScatterPoint:
    x: float
    y: float


@dataclass(frozen=True)
class CorrelationResult:
    """Pearson correlation between two numeric columns.

    Attributes:
        x_column: First column of the pair.
        y_column: Second column of the pair.
        correlation: Coefficient in [-1, 1]; 0 when there is no signal.
        scatter_data: Leading paired samples, in row order.
    """

    x_column: str
    y_column: str
    correlation: float
    scatter_data: Tuple[ScatterPoint, ...] = ()

    def __post_init__(self) -> None:
        """Validate field constraints."""
        if not -1.0 <= self.correlation <= 1.0:
            raise ValueError(f"correlation must be in [-1, 1], got {self.correlation}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "xColumn": self.x_column,
            "yColumn": self.y_column,
            "correlation": self.correlation,
            "scatterData": [{"x": p.x, "y": p.y} for p in self.scatter_data],
        }


@dataclass(frozen=True)
class DataSummary:
    """Structured profile of a dataset.

    Built once per dataset version by `build_summary` and never mutated; it is
    safe to share between concurrent readers.

    Attributes:
        row_count: Number of records profiled.
        column_count: Number of profiled columns.
        columns: Column names in authoritative order.
        column_types: Column name to inferred (or supplied) type.
        column_stats: One ColumnStats per column, in column order.
        categorical_columns: String-typed columns, in column order.
        numeric_columns: Number-typed columns, in column order.
        date_columns: Date-typed columns, in column order.
        aggregations: Pre-computed aggregations, in generation order.
        correlations: Correlation results, in generation order.
    """

    row_count: int
    column_count: int
    columns: Tuple[str, ...] = ()
    column_types: Mapping[str, ColumnType] = field(default_factory=dict)
    column_stats: Tuple[ColumnStats, ...] = ()
    categorical_columns: Tuple[str, ...] = ()
    numeric_columns: Tuple[str, ...] = ()
    date_columns: Tuple[str, ...] = ()
    aggregations: Tuple[AggregationResult, ...] = ()
    correlations: Tuple[CorrelationResult, ...] = ()

    def get_column_stats(self, column: str) -> Optional[ColumnStats]:
        """Return the stats of ``column``, or None if it was not profiled."""
        for stats in self.column_stats:
            if stats.column == column:
                return stats
        return None

    def get_aggregations(
        self, group_by: Optional[str] = None, metric: Optional[str] = None
    ) -> List[AggregationResult]:
        """Get aggregations, optionally filtered by grouping and/or metric column.

        Examples:
            >>> by_region = summary.get_aggregations(group_by="region")
            >>> revenue = summary.get_aggregations(metric="revenue")
        """
        return [
            a
            for a in self.aggregations
            if (group_by is None or a.group_by == group_by)
            and (metric is None or a.metric == metric)
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rowCount": self.row_count,
            "columnCount": self.column_count,
            "columns": list(self.columns),
            "columnTypes": {c: t.value for c, t in self.column_types.items()},
            "columnStats": [s.to_dict() for s in self.column_stats],
            "categoricalColumns": list(self.categorical_columns),
            "numericColumns": list(self.numeric_columns),
            "dateColumns": list(self.date_columns),
            "precomputedAggregations": [a.to_dict() for a in self.aggregations],
            "correlations": [c.to_dict() for c in self.correlations],
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize the summary as JSON.

        Returns:
            Formatted JSON string using the wire keys of `to_dict`.
        """
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False, default=str)


__all__ = [
    "TopValue",
    "DateRange",
    "ColumnStats",
    "AggregationResult",
    "ScatterPoint",
    "CorrelationResult",
    "DataSummary",
]
