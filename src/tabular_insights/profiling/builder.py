"""Profile builder.

This module orchestrates the profiler into one `DataSummary`:
- build_summary(): type inference, coercion, column stats, aggregations, correlations
- build_aggregations(): the pre-computed aggregation bank
- build_correlations(): pairwise correlations among the leading numeric columns

Work is bounded by the caps in `ProfileLimits` (see config.py), applied in
column order so the output is deterministic.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from tabular_insights.core.enums import ColumnType, Operation
from .aggregation import aggregate
from .columns import profile_column
from .config import ProfileLimits
from .correlation import correlate
from .inference import coerce_rows, infer_column_types
from .models import AggregationResult, ColumnStats, CorrelationResult, DataSummary

logger = logging.getLogger(__name__)

Record = Mapping[str, Any]


def _resolve_column_types(
    columns: Sequence[str], column_types: Mapping[str, Union[ColumnType, str]]
) -> Dict[str, ColumnType]:
    """Normalize caller-supplied types; unlisted columns default to STRING."""
    resolved: Dict[str, ColumnType] = {}
    for col in columns:
        raw = column_types.get(col, ColumnType.STRING)
        try:
            resolved[col] = ColumnType(raw)
        except ValueError as e:
            valid = ", ".join(t.value for t in ColumnType)
            raise ValueError(
                f"Unknown column type {raw!r} for column '{col}'. Valid types: {valid}"
            ) from e
    return resolved


def build_aggregations(
    rows: Sequence[Record],
    categorical_columns: Sequence[str],
    numeric_columns: Sequence[str],
    date_columns: Sequence[str],
    column_stats: Sequence[ColumnStats],
    limits: ProfileLimits,
) -> List[AggregationResult]:
    """Generate the aggregation bank.

    Order: for each leading categorical column, for each leading numeric
    column, a Sum then a Mean; then for each leading date column, for each
    leading numeric column, a Sum re-sorted by date key ascending.
    """
    unique_counts = {s.column: s.unique_count for s in column_stats}
    results: List[AggregationResult] = []

    for cat_col in categorical_columns[: limits.max_categorical_group_columns]:
        cardinality = unique_counts.get(cat_col, 0)
        if cardinality > limits.max_category_cardinality:
            logger.debug(
                "Skipping aggregations for '%s': %d distinct values (max %d)",
                cat_col,
                cardinality,
                limits.max_category_cardinality,
            )
            continue
        for num_col in numeric_columns[: limits.max_numeric_metric_columns]:
            results.append(
                AggregationResult(
                    description=f"Total {num_col} by {cat_col}",
                    group_by=cat_col,
                    metric=num_col,
                    operation=Operation.SUM,
                    data=tuple(aggregate(rows, cat_col, num_col, Operation.SUM)),
                )
            )
            results.append(
                AggregationResult(
                    description=f"Average {num_col} by {cat_col}",
                    group_by=cat_col,
                    metric=num_col,
                    operation=Operation.MEAN,
                    data=tuple(aggregate(rows, cat_col, num_col, Operation.MEAN)),
                )
            )

    for date_col in date_columns[: limits.max_date_group_columns]:
        for num_col in numeric_columns[: limits.max_time_series_metric_columns]:
            by_value = aggregate(rows, date_col, num_col, Operation.SUM)
            # Time series read left to right: order by date key, not magnitude
            by_date = sorted(by_value, key=lambda r: str(r[date_col]))
            results.append(
                AggregationResult(
                    description=f"{num_col} over time (by {date_col})",
                    group_by=date_col,
                    metric=num_col,
                    operation=Operation.SUM,
                    data=tuple(by_date),
                )
            )

    return results


def build_correlations(
    rows: Sequence[Record], numeric_columns: Sequence[str], limits: ProfileLimits
) -> List[CorrelationResult]:
    """Correlate every unordered pair (i < j) among the leading numeric columns."""
    leading = list(numeric_columns[: limits.max_correlation_columns])
    results: List[CorrelationResult] = []
    for i, x_col in enumerate(leading):
        for y_col in leading[i + 1 :]:
            results.append(correlate(rows, x_col, y_col, limits.max_scatter_points))
    return results


def build_summary(
    rows: Sequence[Record],
    columns: Optional[Sequence[str]] = None,
    column_types: Optional[Mapping[str, Union[ColumnType, str]]] = None,
    limits: Optional[ProfileLimits] = None,
) -> DataSummary:
    """Profile a dataset into a DataSummary.

    Args:
        rows: Dataset records (column name to scalar value).
        columns: Authoritative column order. Defaults to the first row's keys.
        column_types: Known column types (ColumnType or its string value).
            Inferred from the leading rows when omitted.
        limits: Combinatorial caps. Defaults to `ProfileLimits()`.

    Returns:
        The DataSummary. An empty dataset yields a summary with zero columns,
        aggregations and correlations.

    Raises:
        ValueError: If ``column_types`` holds an unknown type.

    Examples:
        >>> rows = [{"region": "East", "revenue": "100"}, {"region": "West", "revenue": "50"}]
        >>> summary = build_summary(rows)
        >>> summary.numeric_columns
        ('revenue',)
    """
    limits = limits or ProfileLimits()
    rows = list(rows)
    if not rows:
        logger.debug("Empty dataset; returning an empty summary")
        return DataSummary(row_count=0, column_count=0)

    if columns is None:
        columns = list(rows[0].keys())
    columns = list(columns)

    if column_types is None:
        types = infer_column_types(rows, columns, limits.type_sample_size)
    else:
        types = _resolve_column_types(columns, column_types)

    data = coerce_rows(rows, types)

    numeric_columns = [c for c in columns if types[c] is ColumnType.NUMBER]
    categorical_columns = [c for c in columns if types[c] is ColumnType.STRING]
    date_columns = [c for c in columns if types[c] is ColumnType.DATE]
    logger.info(
        "Profiling %d rows x %d columns (%d numeric, %d categorical, %d date)",
        len(data),
        len(columns),
        len(numeric_columns),
        len(categorical_columns),
        len(date_columns),
    )

    column_stats = [
        profile_column(data, col, types[col], limits.top_values_limit) for col in columns
    ]
    aggregations = build_aggregations(
        data, categorical_columns, numeric_columns, date_columns, column_stats, limits
    )
    correlations = build_correlations(data, numeric_columns, limits)
    logger.info(
        "Built %d aggregations and %d correlations", len(aggregations), len(correlations)
    )

    return DataSummary(
        row_count=len(data),
        column_count=len(columns),
        columns=tuple(columns),
        column_types=dict(types),
        column_stats=tuple(column_stats),
        categorical_columns=tuple(categorical_columns),
        numeric_columns=tuple(numeric_columns),
        date_columns=tuple(date_columns),
        aggregations=tuple(aggregations),
        correlations=tuple(correlations),
    )


__all__ = ["build_summary", "build_aggregations", "build_correlations"]
