"""Tabular Insights: profiling and query matching for tabular datasets.

The package turns a sequence of loosely-typed records into a `DataSummary`
(column profiles, pre-computed group-by aggregations, pairwise correlations)
and matches free-text queries against the aggregation bank. A minimal CLI
(profile, query, infer) reads CSV/JSON files and hands the rows to the engine.
"""

__all__ = [
    "__version__",
]

__version__ = "0.1.0"
