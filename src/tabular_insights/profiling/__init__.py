"""Profiling engine for tabular datasets.

This package turns records into a structured profile and answers queries
against it:

- **Inference**: infer_column_types(), coerce_rows() - per-column type from a leading sample
- **Columns**: profile_column() - descriptive statistics shaped by column type
- **Aggregation**: aggregate() - group-by sum/mean/count with ranked output
- **Correlation**: pearson_correlation(), correlate() - paired Pearson r with scatter samples
- **Builder**: build_summary() - orchestrates the above into a DataSummary
- **Matcher**: find_relevant_aggregation() - lexical query to aggregation scoring
- **Digest**: build_summary_text() - multi-section text digest
- **Config**: caps and thresholds (import from .config)

Usage:
    >>> from tabular_insights.profiling import build_summary, find_relevant_aggregation
    >>> summary = build_summary(rows)
    >>> match = find_relevant_aggregation(summary, "total revenue by region")
    >>> match.description if match else None
    'Total revenue by region'
"""

from __future__ import annotations

from tabular_insights.core.enums import ColumnType, Operation

from .aggregation import aggregate
from .builder import build_summary
from .catalog import Dataset, DatasetCatalog, load_dataset
from .columns import profile_column
from .config import ProfileLimits, load_limits
from .correlation import correlate, pearson_correlation
from .digest import build_summary_text
from .inference import coerce_rows, infer_column_type, infer_column_types
from .matcher import find_relevant_aggregation, score_aggregation
from .models import (
    AggregationResult,
    ColumnStats,
    CorrelationResult,
    DataSummary,
    DateRange,
    ScatterPoint,
    TopValue,
)

__all__ = [
    # Data models
    "AggregationResult",
    "ColumnStats",
    "CorrelationResult",
    "DataSummary",
    "DateRange",
    "ScatterPoint",
    "TopValue",
    # Enums
    "ColumnType",
    "Operation",
    # Engine
    "infer_column_type",
    "infer_column_types",
    "coerce_rows",
    "profile_column",
    "aggregate",
    "pearson_correlation",
    "correlate",
    "build_summary",
    "build_summary_text",
    "find_relevant_aggregation",
    "score_aggregation",
    # Config
    "ProfileLimits",
    "load_limits",
    # Catalog
    "Dataset",
    "DatasetCatalog",
    "load_dataset",
]
