"""Tests for lexical relevance matching of queries to aggregations."""

import pytest

from tabular_insights.core.enums import Operation
from tabular_insights.profiling.matcher import (
    RELEVANCE_RULES,
    RelevanceRule,
    find_relevant_aggregation,
    query_words,
    score_aggregation,
)
from tabular_insights.profiling.models import AggregationResult, DataSummary


def _agg(description, group_by, metric, operation):
    return AggregationResult(description, group_by, metric, operation)


TOTAL_BY_REGION = _agg("Total revenue by region", "region", "revenue", Operation.SUM)
AVERAGE_BY_REGION = _agg("Average revenue by region", "region", "revenue", Operation.MEAN)


def _summary(*aggregations):
    return DataSummary(row_count=1, column_count=2, aggregations=tuple(aggregations))


def test_rule_table_ids_in_evaluation_order():
    assert [r.rule_id for r in RELEVANCE_RULES] == [
        "group_by_in_query",
        "metric_in_query",
        "word_in_description",
        "word_in_group_by",
        "word_in_metric",
        "sum_hint",
        "mean_hint",
    ]


def test_rule_rejects_unknown_scope():
    with pytest.raises(ValueError, match="Invalid scope"):
        RelevanceRule("bad", 1, "sentence", lambda q, a: True)


def test_query_words_drop_short_words():
    assert query_words("Total Revenue by a Region") == ["total", "revenue", "region"]


def test_score_breakdown():
    # 3 + 3 (columns in query) + 3 (words in description) + 2 + 2 (words in columns) + 2 (sum hint)
    assert score_aggregation(TOTAL_BY_REGION, "total revenue by region") == 15
    # Mean hint does not fire for a Sum aggregation
    assert score_aggregation(TOTAL_BY_REGION, "average revenue by region") == 12
    assert score_aggregation(AVERAGE_BY_REGION, "average revenue by region") == 15


def test_score_is_case_insensitive():
    assert score_aggregation(TOTAL_BY_REGION, "TOTAL Revenue BY Region") == 15


def test_custom_rules():
    rules = (RelevanceRule("always", 4, "query", lambda q, a: True),)
    assert score_aggregation(TOTAL_BY_REGION, "anything", rules=rules) == 4


def test_operation_hint_selects_between_sum_and_mean():
    summary = _summary(TOTAL_BY_REGION, AVERAGE_BY_REGION)
    assert find_relevant_aggregation(summary, "total revenue by region") is TOTAL_BY_REGION
    assert find_relevant_aggregation(summary, "average revenue by region") is AVERAGE_BY_REGION


def test_ties_keep_earliest_aggregation():
    summary = _summary(TOTAL_BY_REGION, AVERAGE_BY_REGION)
    assert find_relevant_aggregation(summary, "revenue by region") is TOTAL_BY_REGION


def test_no_match_returns_none():
    summary = _summary(TOTAL_BY_REGION, AVERAGE_BY_REGION)
    assert find_relevant_aggregation(summary, "hello world") is None


def test_score_below_threshold_returns_none():
    """An operation hint alone scores 2, below the minimum of 3."""
    summary = _summary(TOTAL_BY_REGION)
    assert score_aggregation(TOTAL_BY_REGION, "sum") == 2
    assert find_relevant_aggregation(summary, "sum") is None
    assert find_relevant_aggregation(summary, "sum", min_score=2) is TOTAL_BY_REGION


def test_empty_bank_returns_none():
    assert find_relevant_aggregation(_summary(), "total revenue") is None


@pytest.mark.parametrize(
    "query, expected",
    [
        ("total revenue by region", "Total revenue by region"),
        ("average units per product", "Average units by product"),
        ("revenue over time", "revenue over time (by date)"),
        ("units by date", "units over time (by date)"),
    ],
)
def test_queries_against_profile(sales_summary, query, expected):
    match = find_relevant_aggregation(sales_summary, query)
    assert match is not None
    assert match.description == expected
