"""Group-by aggregation of a numeric column.

Rows are partitioned by the string form of the grouping column and the numeric
values of the metric column are reduced per group. Non-numeric metric values
are dropped from the reduction; they never count as zero.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Sequence, Union

import numpy as np
import pandas as pd

from tabular_insights.core.enums import Operation
from tabular_insights.core.values import is_missing, is_number, round_half_up, value_text

Record = Mapping[str, Any]

# Group key for rows where the grouping column is missing
UNKNOWN_GROUP = "Unknown"


def group_key(value: Any) -> str:
    return UNKNOWN_GROUP if is_missing(value) else value_text(value)


def aggregate(
    rows: Sequence[Record],
    group_column: str,
    value_column: str,
    operation: Union[Operation, str],
) -> List[Dict[str, Any]]:
    """Aggregate ``value_column`` grouped by ``group_column``.

    Args:
        rows: Dataset records.
        group_column: Column whose string form defines the groups.
        value_column: Column whose numeric values are reduced.
        operation: SUM (total), MEAN (total / numeric count, 0 for a group
            without numbers) or COUNT (number of numeric values).

    Returns:
        One ``{group_column: key, value_column: value}`` row per observed group,
        values rounded to 2 decimals, sorted by value descending with ties in
        first-seen group order.

    Raises:
        ValueError: If ``operation`` is not a known Operation.

    Examples:
        >>> rows = [{"region": "East", "revenue": 100}, {"region": "East", "revenue": 200},
        ...         {"region": "West", "revenue": 50}]
        >>> aggregate(rows, "region", "revenue", Operation.SUM)
        [{'region': 'East', 'revenue': 300.0}, {'region': 'West', 'revenue': 50.0}]
    """
    operation = Operation(operation)
    if not rows:
        return []

    frame = pd.DataFrame(
        {
            "key": [group_key(row.get(group_column)) for row in rows],
            "value": [
                float(v) if is_number(v) else np.nan
                for v in (row.get(value_column) for row in rows)
            ],
        }
    )
    grouped = frame.groupby("key", sort=False)["value"]
    totals = grouped.sum()
    counts = grouped.count()

    out: List[Dict[str, Any]] = []
    for key in totals.index:
        total = float(totals[key])
        count = int(counts[key])
        if operation is Operation.COUNT:
            out.append({group_column: key, value_column: count})
            continue
        if operation is Operation.SUM:
            result = total
        else:
            result = total / count if count > 0 else 0.0
        out.append({group_column: key, value_column: round_half_up(result, 2)})

    # sorted() is stable with reverse=True, so equal values keep group order
    return sorted(out, key=lambda r: r[value_column], reverse=True)


__all__ = ["UNKNOWN_GROUP", "group_key", "aggregate"]
