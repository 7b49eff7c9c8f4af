"""Tests for profile limits and their YAML loader."""

from pathlib import Path

import pytest
import yaml

from tabular_insights.profiling import config
from tabular_insights.profiling.config import ProfileLimits, load_limits

REPO_LIMITS = Path(__file__).resolve().parents[2] / "config" / "profile_limits.yaml"


def test_defaults_match_module_constants():
    limits = ProfileLimits()
    assert limits.type_sample_size == config.TYPE_SAMPLE_SIZE == 10
    assert limits.max_categorical_group_columns == 4
    assert limits.max_numeric_metric_columns == 6
    assert limits.max_category_cardinality == 20
    assert limits.max_date_group_columns == 2
    assert limits.max_time_series_metric_columns == 4
    assert limits.max_correlation_columns == 5
    assert limits.max_scatter_points == 100
    assert limits.top_values_limit == 10


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"max_scatter_points": 0}, "must be positive"),
        ({"max_correlation_columns": -1}, "must be positive"),
        ({"top_values_limit": 2.5}, "must be an integer"),
        ({"type_sample_size": True}, "must be an integer"),
    ],
    ids=["zero", "negative", "float", "bool"],
)
def test_invalid_limits_rejected(overrides, message):
    with pytest.raises(ValueError, match=message):
        ProfileLimits(**overrides)


def test_repository_limits_file_matches_defaults():
    assert load_limits(REPO_LIMITS) == ProfileLimits()


def test_load_limits_partial_override(tmp_path):
    path = tmp_path / "limits.yaml"
    path.write_text("limits:\n  max_category_cardinality: 50\n", encoding="utf-8")
    limits = load_limits(path)
    assert limits.max_category_cardinality == 50
    assert limits.max_correlation_columns == 5


def test_load_limits_keeps_base_values(tmp_path):
    path = tmp_path / "limits.yaml"
    path.write_text("limits:\n  max_scatter_points: 10\n", encoding="utf-8")
    base = ProfileLimits(top_values_limit=3)
    limits = load_limits(path, base=base)
    assert limits.top_values_limit == 3
    assert limits.max_scatter_points == 10


def test_load_limits_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "limits.yaml"
    path.write_text("", encoding="utf-8")
    assert load_limits(path) == ProfileLimits()


def test_load_limits_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="Limits file not found"):
        load_limits(tmp_path / "missing.yaml")


def test_load_limits_unknown_key(tmp_path):
    path = tmp_path / "limits.yaml"
    path.write_text("limits:\n  max_rows: 5\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Unknown limit"):
        load_limits(path)


def test_load_limits_non_mapping(tmp_path):
    path = tmp_path / "limits.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError, match="must contain a mapping"):
        load_limits(path)


def test_load_limits_invalid_value(tmp_path):
    path = tmp_path / "limits.yaml"
    path.write_text("limits:\n  max_scatter_points: 0\n", encoding="utf-8")
    with pytest.raises(ValueError, match="must be positive"):
        load_limits(path)


def test_load_limits_invalid_yaml(tmp_path):
    path = tmp_path / "limits.yaml"
    path.write_text("limits: [unclosed\n", encoding="utf-8")
    with pytest.raises(yaml.YAMLError):
        load_limits(path)
