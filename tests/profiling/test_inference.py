"""Tests for column type inference and value coercion.

Type inference samples the first rows only, discards null/empty values and
checks Number before Date before String.
"""

import math

import pytest

from tabular_insights.core.enums import ColumnType
from tabular_insights.profiling import build_summary
from tabular_insights.profiling.inference import (
    coerce_rows,
    infer_column_type,
    infer_column_types,
    sample_values,
)


def _column(values):
    return [{"col": v} for v in values]


@pytest.mark.parametrize(
    "values, expected",
    [
        (["1", "2", "3.5"], ColumnType.NUMBER),
        ([1, 2.5, -3], ColumnType.NUMBER),
        ([20240101, 20240102], ColumnType.NUMBER),
        (["SKU-007", "SKU-008"], ColumnType.STRING),
        (["2024-01-01", "2024-02-15"], ColumnType.DATE),
        (["2024-01-01T08:00:00", "2024-01-02T09:30:00"], ColumnType.DATE),
        (["East", "West"], ColumnType.STRING),
        (["May", "June"], ColumnType.STRING),
        (["1", "East"], ColumnType.STRING),
    ],
    ids=[
        "numeric_text",
        "numbers",
        "date_like_integers",
        "codes_with_digits",
        "iso_dates",
        "iso_datetimes",
        "words",
        "month_names",
        "mixed",
    ],
)
def test_infer_column_type(values, expected):
    assert infer_column_type(_column(values), "col") is expected


def test_all_null_column_defaults_to_string():
    rows = _column([None, "", None])
    assert infer_column_type(rows, "col") is ColumnType.STRING


def test_missing_column_defaults_to_string():
    assert infer_column_type([{"other": 1}], "col") is ColumnType.STRING


def test_nulls_are_discarded_before_classification():
    rows = _column([None, "", "5", "6"])
    assert infer_column_type(rows, "col") is ColumnType.NUMBER


def test_only_leading_rows_are_sampled():
    """A non-numeric value after the first 10 rows does not change the type."""
    rows = _column([str(i) for i in range(10)] + ["not a number"])
    assert infer_column_type(rows, "col") is ColumnType.NUMBER
    assert infer_column_type(rows, "col", sample_size=11) is ColumnType.STRING


def test_sample_values_slices_before_dropping_nulls():
    rows = _column([None] * 10 + ["5"])
    assert sample_values(rows, "col") == []


def test_infer_column_types_uses_first_row_keys(sales_rows):
    types = infer_column_types(sales_rows)
    assert list(types) == ["date", "region", "product", "revenue", "units"]
    assert types == {
        "date": ColumnType.DATE,
        "region": ColumnType.STRING,
        "product": ColumnType.STRING,
        "revenue": ColumnType.NUMBER,
        "units": ColumnType.NUMBER,
    }


def test_infer_column_types_empty_rows():
    assert infer_column_types([]) == {}


def test_coerce_rows_converts_numeric_columns_only():
    rows = [{"n": "4", "s": "4", "bad": "007"}]
    types = {"n": ColumnType.NUMBER, "s": ColumnType.STRING, "bad": ColumnType.NUMBER}
    assert coerce_rows(rows, types) == [{"n": 4.0, "s": "4", "bad": "007"}]


def test_coerce_rows_maps_nan_to_none_and_keeps_input():
    rows = [{"n": math.nan, "s": "x"}]
    out = coerce_rows(rows, {"n": ColumnType.NUMBER, "s": ColumnType.STRING})
    assert out == [{"n": None, "s": "x"}]
    assert math.isnan(rows[0]["n"])


def test_coerce_rows_accepts_reformatted_numbers():
    rows = [{"n": "007", "m": " 10.50 ", "k": "1e5"}]
    types = {"n": ColumnType.NUMBER, "m": ColumnType.NUMBER, "k": ColumnType.NUMBER}
    assert coerce_rows(rows, types) == [{"n": 7.0, "m": 10.5, "k": 100000.0}]


def test_coerce_rows_keeps_unparseable_text():
    rows = [{"n": "1,000"}, {"n": "1_000"}, {"n": "inf"}, {"n": "n/a"}]
    out = coerce_rows(rows, {"n": ColumnType.NUMBER})
    assert [r["n"] for r in out] == ["1,000", "1_000", "inf", "n/a"]


def test_reformatted_numbers_after_sample_are_profiled():
    """Only the leading sample must be strict; later cells just need to parse."""
    rows = [{"v": str(i)} for i in range(1, 11)] + [{"v": "10.50"}, {"v": "5.0"}, {"v": "007"}]
    summary = build_summary(rows)
    assert summary.column_types["v"] is ColumnType.NUMBER
    stats = summary.get_column_stats("v")
    assert stats.sum == 77.5
    assert stats.max == 10.5
