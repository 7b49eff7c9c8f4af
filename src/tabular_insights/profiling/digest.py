"""Plain-text digest of a DataSummary.

The digest is the hand-off artifact for downstream natural-language consumers.
Section headers and their order are fixed:

    ## Dataset Overview
    ## Column Statistics
    ## Notable Correlations                  (only when correlations exist)
    ## Available Pre-Computed Aggregations   (only when aggregations exist)
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Sequence

from tabular_insights.core.enums import ColumnType
from tabular_insights.core.values import format_number, is_number
from .config import (
    DIGEST_AGGREGATIONS,
    DIGEST_CORRELATIONS,
    DIGEST_TOP_VALUES,
    MODERATE_CORRELATION,
    STRONG_CORRELATION,
)
from .models import ColumnStats, CorrelationResult, DataSummary


def correlation_strength(correlation: float) -> str:
    """Label |r| as "strong" (> 0.7), "moderate" (> 0.4) or "weak"."""
    magnitude = abs(correlation)
    if magnitude > STRONG_CORRELATION:
        return "strong"
    if magnitude > MODERATE_CORRELATION:
        return "moderate"
    return "weak"


def correlation_direction(correlation: float) -> str:
    return "positive" if correlation > 0 else "negative"


def _join_or_none(names: Sequence[str]) -> str:
    return ", ".join(names) or "none"


def _compact_row(row: Dict[str, Any]) -> str:
    """Serialize an aggregation row as compact JSON with integral numbers unpadded."""
    normalized = {
        key: (int(value) if is_number(value) and float(value).is_integer() else value)
        for key, value in row.items()
    }
    return json.dumps(normalized, separators=(",", ":"), ensure_ascii=False)


def column_line(stats: ColumnStats) -> str:
    """Render one line of the column statistics section ("" to skip the column)."""
    if stats.type is ColumnType.NUMBER:
        if not stats.has_numeric_stats:
            return f"- **{stats.column}** (numeric): no valid numeric values"
        return (
            f"- **{stats.column}** (numeric): min={format_number(stats.min)}, "
            f"max={format_number(stats.max)}, mean={format_number(stats.mean)}, "
            f"median={format_number(stats.median)}, sum={format_number(stats.sum)}, "
            f"stdDev={format_number(stats.std_dev)}"
        )
    if stats.type is ColumnType.STRING:
        top = ", ".join(f"{t.value}({t.count})" for t in stats.top_values[:DIGEST_TOP_VALUES])
        return (
            f"- **{stats.column}** (categorical, {stats.unique_count} unique): "
            f"top values = {top}"
        )
    if stats.date_range is not None:
        return (
            f"- **{stats.column}** (date): range {stats.date_range.earliest} "
            f"to {stats.date_range.latest}"
        )
    return ""


def correlation_line(result: CorrelationResult) -> str:
    return (
        f"- {result.x_column} vs {result.y_column}: r={format_number(result.correlation)} "
        f"({correlation_strength(result.correlation)} "
        f"{correlation_direction(result.correlation)})"
    )


def build_summary_text(summary: DataSummary) -> str:
    """Build the multi-section text digest of a summary.

    Returns:
        Newline-joined digest text.

    Examples:
        >>> print(build_summary_text(summary))
        ## Dataset Overview
        - 3 rows × 2 columns
        - Numeric columns: revenue
        - Categorical columns: region
        - Date columns: none
        ...
    """
    lines: List[str] = [
        "## Dataset Overview",
        f"- {summary.row_count} rows × {summary.column_count} columns",
        f"- Numeric columns: {_join_or_none(summary.numeric_columns)}",
        f"- Categorical columns: {_join_or_none(summary.categorical_columns)}",
        f"- Date columns: {_join_or_none(summary.date_columns)}",
        "",
        "## Column Statistics",
    ]
    for stats in summary.column_stats:
        line = column_line(stats)
        if line:
            lines.append(line)
    lines.append("")

    if summary.correlations:
        lines.append("## Notable Correlations")
        ranked = sorted(summary.correlations, key=lambda c: abs(c.correlation), reverse=True)
        for result in ranked[:DIGEST_CORRELATIONS]:
            lines.append(correlation_line(result))
        lines.append("")

    if summary.aggregations:
        lines.append("## Available Pre-Computed Aggregations")
        for agg in summary.aggregations[:DIGEST_AGGREGATIONS]:
            example = _compact_row(agg.data[0]) if agg.data else "none"
            lines.append(f'- "{agg.description}": {agg.group_count} groups (e.g., {example})')

    return "\n".join(lines)


__all__ = [
    "correlation_strength",
    "correlation_direction",
    "column_line",
    "correlation_line",
    "build_summary_text",
]
