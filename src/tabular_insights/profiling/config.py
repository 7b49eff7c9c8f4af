"""Profiling configuration constants.

This module centralizes the combinatorial caps and thresholds of the profiler.
Adjust these constants to tune cost on wide or high-cardinality datasets
without touching the algorithms.

Caps apply in column order:
    - Categorical aggregations: first N categorical columns x first M numeric columns
    - Time series: first N date columns x first M numeric columns
    - Correlations: every unordered pair among the first N numeric columns
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

# ============================================================================
# TYPE INFERENCE
# ============================================================================

# Leading rows sampled per column when inferring its type
TYPE_SAMPLE_SIZE = 10


# ============================================================================
# AGGREGATION CAPS
# ============================================================================

MAX_CATEGORICAL_GROUP_COLUMNS = 4
MAX_NUMERIC_METRIC_COLUMNS = 6
# Columns with more distinct values are near-unique keys, not categories
MAX_CATEGORY_CARDINALITY = 20

MAX_DATE_GROUP_COLUMNS = 2
MAX_TIME_SERIES_METRIC_COLUMNS = 4


# ============================================================================
# CORRELATION & COLUMN STATS
# ============================================================================

MAX_CORRELATION_COLUMNS = 5
MAX_SCATTER_POINTS = 100
MIN_CORRELATION_SAMPLES = 3

TOP_VALUES_LIMIT = 10


# ============================================================================
# RELEVANCE MATCHING
# ============================================================================

MIN_RELEVANCE_SCORE = 3
MIN_QUERY_WORD_LENGTH = 3


# ============================================================================
# TEXT DIGEST
# ============================================================================

DIGEST_TOP_VALUES = 5
DIGEST_CORRELATIONS = 5
DIGEST_AGGREGATIONS = 20

# |r| strictly above these thresholds
MODERATE_CORRELATION = 0.4
STRONG_CORRELATION = 0.7


@dataclass(frozen=True)
class ProfileLimits:
    """Caps used by the profile builder.

    Defaults equal the module constants. Override individual caps with
    `dataclasses.replace` or load them from YAML via `load_limits`.

    Examples:
        >>> ProfileLimits().max_correlation_columns
        5
        >>> ProfileLimits(max_category_cardinality=50).max_category_cardinality
        50
    """

    type_sample_size: int = TYPE_SAMPLE_SIZE
    max_categorical_group_columns: int = MAX_CATEGORICAL_GROUP_COLUMNS
    max_numeric_metric_columns: int = MAX_NUMERIC_METRIC_COLUMNS
    max_category_cardinality: int = MAX_CATEGORY_CARDINALITY
    max_date_group_columns: int = MAX_DATE_GROUP_COLUMNS
    max_time_series_metric_columns: int = MAX_TIME_SERIES_METRIC_COLUMNS
    max_correlation_columns: int = MAX_CORRELATION_COLUMNS
    max_scatter_points: int = MAX_SCATTER_POINTS
    top_values_limit: int = TOP_VALUES_LIMIT

    def __post_init__(self) -> None:
        """Validate that every cap is a positive integer."""
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Limit '{f.name}' must be an integer, got {value!r}")
            if value < 1:
                raise ValueError(f"Limit '{f.name}' must be positive, got {value}")


def load_limits(path: Path, base: Optional[ProfileLimits] = None) -> ProfileLimits:
    """Load profile limits from a YAML file.

    The file holds a top-level ``limits`` mapping; keys are `ProfileLimits`
    field names and missing keys keep the value from ``base`` (defaults when
    omitted).

    Args:
        path: Path to the YAML file.
        base: Limits to start from. Defaults to `ProfileLimits()`.

    Returns:
        The merged ProfileLimits.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file has unknown keys or invalid values.
        yaml.YAMLError: If the file is not valid YAML.

    Examples:
        >>> limits = load_limits(Path("config/profile_limits.yaml"))
        >>> limits.max_category_cardinality
        20
    """
    if not path.exists():
        raise FileNotFoundError(f"Limits file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Limits file {path} must contain a mapping")
    overrides = data.get("limits", {}) or {}
    if not isinstance(overrides, dict):
        raise ValueError(f"'limits' in {path} must be a mapping")

    base = base or ProfileLimits()
    known = {f.name for f in fields(ProfileLimits)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ValueError(
            f"Unknown limit(s) in {path}: {', '.join(unknown)}. "
            f"Valid limits: {', '.join(sorted(known))}"
        )
    merged: Dict[str, Any] = {f.name: getattr(base, f.name) for f in fields(ProfileLimits)}
    merged.update(overrides)
    return ProfileLimits(**merged)


__all__ = [
    "ProfileLimits",
    "load_limits",
    "TYPE_SAMPLE_SIZE",
    "MAX_CATEGORICAL_GROUP_COLUMNS",
    "MAX_NUMERIC_METRIC_COLUMNS",
    "MAX_CATEGORY_CARDINALITY",
    "MAX_DATE_GROUP_COLUMNS",
    "MAX_TIME_SERIES_METRIC_COLUMNS",
    "MAX_CORRELATION_COLUMNS",
    "MAX_SCATTER_POINTS",
    "MIN_CORRELATION_SAMPLES",
    "TOP_VALUES_LIMIT",
    "MIN_RELEVANCE_SCORE",
    "MIN_QUERY_WORD_LENGTH",
    "DIGEST_TOP_VALUES",
    "DIGEST_CORRELATIONS",
    "DIGEST_AGGREGATIONS",
    "MODERATE_CORRELATION",
    "STRONG_CORRELATION",
]
