"""Tests for the profile, query and infer CLI commands."""

from __future__ import annotations

import argparse
import json

import pandas as pd
import pytest

from tabular_insights.interfaces.cli.main import (
    build_parser,
    cmd_infer,
    cmd_profile,
    cmd_query,
    main,
    read_rows,
)


@pytest.fixture
def sales_csv(tmp_path, sales_rows):
    path = tmp_path / "sales.csv"
    pd.DataFrame(sales_rows).to_csv(path, index=False)
    return path


@pytest.fixture
def sales_json(tmp_path, sales_rows):
    path = tmp_path / "sales.json"
    path.write_text(json.dumps(sales_rows), encoding="utf-8")
    return path


class TestReadRows:
    """Tests for read_rows function."""

    def test_csv_cells_are_strings(self, sales_csv, sales_rows):
        rows = read_rows(sales_csv)
        assert rows == sales_rows

    def test_json_array(self, sales_json, sales_rows):
        assert read_rows(sales_json) == sales_rows

    def test_json_must_be_array_of_objects(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text('{"a": 1}', encoding="utf-8")
        with pytest.raises(ValueError, match="array of objects"):
            read_rows(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("[{", encoding="utf-8")
        with pytest.raises(ValueError, match="Failed to read JSON"):
            read_rows(path)

    def test_empty_csv(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("", encoding="utf-8")
        assert read_rows(path) == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_rows(tmp_path / "missing.csv")


class TestCmdProfile:
    """Tests for cmd_profile function."""

    def test_missing_input(self, tmp_path):
        args = argparse.Namespace(input=str(tmp_path / "missing.csv"), format="text",
                                  output=None, limits_config=None)
        assert cmd_profile(args) == 2

    def test_text_digest_to_stdout(self, sales_csv, capsys):
        args = argparse.Namespace(input=str(sales_csv), format="text", output=None,
                                  limits_config=None)
        assert cmd_profile(args) == 0
        out = capsys.readouterr().out
        assert out.startswith("## Dataset Overview\n- 5 rows × 5 columns")
        assert "- revenue vs units: r=1 (strong positive)" in out

    def test_json_to_file(self, sales_json, tmp_path):
        output = tmp_path / "out" / "summary.json"
        args = argparse.Namespace(input=str(sales_json), format="json", output=str(output),
                                  limits_config=None)
        assert cmd_profile(args) == 0
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["rowCount"] == 5
        assert data["numericColumns"] == ["revenue", "units"]
        assert len(data["precomputedAggregations"]) == 10

    def test_limits_config(self, sales_csv, tmp_path, capsys):
        limits = tmp_path / "limits.yaml"
        limits.write_text("limits:\n  max_categorical_group_columns: 1\n", encoding="utf-8")
        args = argparse.Namespace(input=str(sales_csv), format="json", output=None,
                                  limits_config=str(limits))
        assert cmd_profile(args) == 0
        data = json.loads(capsys.readouterr().out)
        assert {a["groupBy"] for a in data["precomputedAggregations"]} == {"region", "date"}

    def test_invalid_limits_config(self, sales_csv, tmp_path):
        limits = tmp_path / "limits.yaml"
        limits.write_text("limits:\n  bogus: 1\n", encoding="utf-8")
        args = argparse.Namespace(input=str(sales_csv), format="text", output=None,
                                  limits_config=str(limits))
        assert cmd_profile(args) == 2


class TestCmdQuery:
    """Tests for cmd_query function."""

    def test_match_prints_rows(self, sales_csv, capsys):
        args = argparse.Namespace(input=str(sales_csv), query="total revenue by region",
                                  limits_config=None)
        assert cmd_query(args) == 0
        assert capsys.readouterr().out.splitlines() == [
            "Total revenue by region",
            "  East: 320",
            "  West: 80",
            "  North: 50",
        ]

    def test_no_match(self, sales_csv):
        args = argparse.Namespace(input=str(sales_csv), query="hello world", limits_config=None)
        assert cmd_query(args) == 1

    def test_missing_input(self, tmp_path):
        args = argparse.Namespace(input=str(tmp_path / "missing.csv"), query="revenue",
                                  limits_config=None)
        assert cmd_query(args) == 2


class TestCmdInfer:
    """Tests for cmd_infer function."""

    def test_prints_types(self, sales_csv, capsys):
        assert cmd_infer(argparse.Namespace(input=str(sales_csv))) == 0
        assert capsys.readouterr().out.splitlines() == [
            "date: date",
            "region: string",
            "product: string",
            "revenue: number",
            "units: number",
        ]

    def test_empty_input(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("[]", encoding="utf-8")
        assert cmd_infer(argparse.Namespace(input=str(path))) == 1


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_main_dispatches(sales_csv, capsys):
    assert main(["--errors-only", "query", str(sales_csv), "average units per product"]) == 0
    assert capsys.readouterr().out.splitlines()[0] == "Average units by product"
