"""Column type inference and value coercion.

Each column is classified once, from the leading rows only, and the
classification holds for the lifetime of the profile. Rules are checked in a
fixed order and the first match wins:

1. No non-null sample       -> STRING
2. All samples numeric      -> NUMBER
3. All samples date-like    -> DATE
4. Otherwise                -> STRING
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from tabular_insights.core.enums import ColumnType
from tabular_insights.core.values import (
    is_missing,
    is_null,
    parse_number,
    parse_numeric_literal,
    parses_as_date,
)
from .config import TYPE_SAMPLE_SIZE

logger = logging.getLogger(__name__)

Record = Mapping[str, Any]


def sample_values(
    rows: Sequence[Record], column: str, sample_size: int = TYPE_SAMPLE_SIZE
) -> List[Any]:
    """Return the non-null values of ``column`` among the first ``sample_size`` rows."""
    return [
        value
        for value in (row.get(column) for row in rows[:sample_size])
        if not is_null(value)
    ]


def infer_column_type(
    rows: Sequence[Record], column: str, sample_size: int = TYPE_SAMPLE_SIZE
) -> ColumnType:
    """Classify a column as NUMBER, DATE or STRING from a leading sample.

    Args:
        rows: Dataset records.
        column: Column to classify.
        sample_size: Number of leading rows to sample (nulls are discarded
            after slicing, so fewer samples may remain).

    Returns:
        The inferred ColumnType.

    Examples:
        >>> infer_column_type([{"n": "1"}, {"n": "2.5"}], "n")
        <ColumnType.NUMBER: 'number'>
        >>> infer_column_type([{"n": "SKU-007"}], "n")
        <ColumnType.STRING: 'string'>
    """
    samples = sample_values(rows, column, sample_size)
    if not samples:
        return ColumnType.STRING
    if all(parse_numeric_literal(v) is not None for v in samples):
        return ColumnType.NUMBER
    if all(parses_as_date(v) for v in samples):
        return ColumnType.DATE
    return ColumnType.STRING


def infer_column_types(
    rows: Sequence[Record],
    columns: Optional[Sequence[str]] = None,
    sample_size: int = TYPE_SAMPLE_SIZE,
) -> Dict[str, ColumnType]:
    """Infer the type of every column.

    Args:
        rows: Dataset records.
        columns: Columns to classify. Defaults to the keys of the first row.
        sample_size: Number of leading rows to sample per column.

    Returns:
        Mapping of column name to ColumnType, in column order.
    """
    if columns is None:
        columns = list(rows[0].keys()) if rows else []
    types = {col: infer_column_type(rows, col, sample_size) for col in columns}
    logger.debug("Inferred column types: %s", {c: t.value for c, t in types.items()})
    return types


def coerce_rows(
    rows: Sequence[Record], column_types: Mapping[str, ColumnType]
) -> List[Dict[str, Any]]:
    """Resolve raw cells against the column types.

    Strings in NUMBER columns that parse to a finite number become floats
    (including text such as "007" or "10.50" that type inference would not
    accept) and NaN cells become None. Every other value is kept as-is;
    values that still are not numbers are ignored later by the numeric
    reductions.

    Returns:
        New list of new dicts; the input rows are not modified.

    Examples:
        >>> coerce_rows([{"n": "4", "s": "x"}], {"n": ColumnType.NUMBER, "s": ColumnType.STRING})
        [{'n': 4.0, 's': 'x'}]
    """
    numeric = {c for c, t in column_types.items() if t is ColumnType.NUMBER}
    out: List[Dict[str, Any]] = []
    for row in rows:
        new_row: Dict[str, Any] = {}
        for key, value in row.items():
            if is_missing(value):
                new_row[key] = None
            elif key in numeric and isinstance(value, str):
                parsed = parse_number(value)
                new_row[key] = parsed if parsed is not None else value
            else:
                new_row[key] = value
        out.append(new_row)
    return out


__all__ = [
    "sample_values",
    "infer_column_type",
    "infer_column_types",
    "coerce_rows",
]
