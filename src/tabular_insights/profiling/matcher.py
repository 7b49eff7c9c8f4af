"""Lexical relevance matching of queries against pre-computed aggregations.

Scoring is an explicit rule table evaluated in order. Query-scoped rules look
at the whole lower-cased query; word-scoped rules fire once per query word of
at least MIN_QUERY_WORD_LENGTH characters.

To add a rule, append a `RelevanceRule` to RELEVANCE_RULES. Rules must stay
cheap and deterministic: the matcher is called on every user query.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from tabular_insights.core.enums import Operation
from .config import MIN_QUERY_WORD_LENGTH, MIN_RELEVANCE_SCORE
from .models import AggregationResult, DataSummary

QUERY_SCOPE = "query"
WORD_SCOPE = "word"

SUM_HINTS = ("total", "sum")
MEAN_HINTS = ("average", "avg", "mean")


@dataclass(frozen=True)
class RelevanceRule:
    """One weighted predicate of the relevance score.

    Attributes:
        rule_id: Stable identifier, used in tests and debugging.
        weight: Points added each time the predicate holds.
        scope: "query" (evaluated once on the whole query) or "word"
            (evaluated once per eligible query word).
        predicate: Callable taking (text, aggregation); text is the
            lower-cased query or a single word depending on scope.
    """

    rule_id: str
    weight: int
    scope: str
    predicate: Callable[[str, AggregationResult], bool]

    def __post_init__(self) -> None:
        if self.scope not in (QUERY_SCOPE, WORD_SCOPE):
            raise ValueError(f"Invalid scope: {self.scope}. Must be 'query' or 'word'.")


RELEVANCE_RULES: Tuple[RelevanceRule, ...] = (
    RelevanceRule("group_by_in_query", 3, QUERY_SCOPE, lambda q, a: a.group_by.lower() in q),
    RelevanceRule("metric_in_query", 3, QUERY_SCOPE, lambda q, a: a.metric.lower() in q),
    RelevanceRule("word_in_description", 1, WORD_SCOPE, lambda w, a: w in a.description.lower()),
    RelevanceRule("word_in_group_by", 2, WORD_SCOPE, lambda w, a: w in a.group_by.lower()),
    RelevanceRule("word_in_metric", 2, WORD_SCOPE, lambda w, a: w in a.metric.lower()),
    RelevanceRule(
        "sum_hint",
        2,
        QUERY_SCOPE,
        lambda q, a: a.operation is Operation.SUM and any(h in q for h in SUM_HINTS),
    ),
    RelevanceRule(
        "mean_hint",
        2,
        QUERY_SCOPE,
        lambda q, a: a.operation is Operation.MEAN and any(h in q for h in MEAN_HINTS),
    ),
)


def query_words(query: str) -> List[str]:
    """Lower-cased whitespace-split words long enough to score."""
    return [w for w in query.lower().split() if len(w) >= MIN_QUERY_WORD_LENGTH]


def score_aggregation(
    aggregation: AggregationResult,
    query: str,
    rules: Tuple[RelevanceRule, ...] = RELEVANCE_RULES,
) -> int:
    """Score one aggregation against a query.

    Examples:
        >>> agg = AggregationResult("Total revenue by region", "region", "revenue", Operation.SUM)
        >>> score_aggregation(agg, "total revenue by region")
        15
    """
    q = query.lower()
    words = query_words(q)
    score = 0
    for rule in rules:
        if rule.scope == QUERY_SCOPE:
            if rule.predicate(q, aggregation):
                score += rule.weight
        else:
            score += rule.weight * sum(1 for w in words if rule.predicate(w, aggregation))
    return score


def find_relevant_aggregation(
    summary: DataSummary,
    query: str,
    min_score: int = MIN_RELEVANCE_SCORE,
) -> Optional[AggregationResult]:
    """Return the pre-computed aggregation that best matches a query.

    The highest score wins; on ties the earliest-generated aggregation is kept.

    Args:
        summary: Profile holding the aggregation bank.
        query: Free-text query.
        min_score: Minimum winning score for a match.

    Returns:
        The best AggregationResult, or None when no score reaches ``min_score``.
    """
    best_score = 0
    best: Optional[AggregationResult] = None
    for aggregation in summary.aggregations:
        score = score_aggregation(aggregation, query)
        if score > best_score:
            best_score = score
            best = aggregation
    return best if best_score >= min_score else None


__all__ = [
    "RelevanceRule",
    "RELEVANCE_RULES",
    "query_words",
    "score_aggregation",
    "find_relevant_aggregation",
]
