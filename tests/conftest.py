"""Shared pytest fixtures for profiling tests."""

from typing import Any, Dict, List

import pytest

from tabular_insights.profiling import build_summary
from tabular_insights.profiling.models import DataSummary


@pytest.fixture
def region_rows() -> List[Dict[str, Any]]:
    """Three already-typed rows: two East sales and one West sale."""
    return [
        {"region": "East", "revenue": 100},
        {"region": "East", "revenue": 200},
        {"region": "West", "revenue": 50},
    ]


@pytest.fixture
def sales_rows() -> List[Dict[str, Any]]:
    """String-valued rows, as a CSV reader delivers them.

    The last row has an empty revenue cell.
    """
    return [
        {"date": "2024-01-03", "region": "East", "product": "Widget", "revenue": "120", "units": "12"},
        {"date": "2024-01-01", "region": "West", "product": "Gadget", "revenue": "80", "units": "8"},
        {"date": "2024-01-02", "region": "East", "product": "Gadget", "revenue": "200", "units": "20"},
        {"date": "2024-01-01", "region": "North", "product": "Widget", "revenue": "50", "units": "5"},
        {"date": "2024-01-03", "region": "West", "product": "Widget", "revenue": "", "units": "3"},
    ]


@pytest.fixture
def sales_summary(sales_rows) -> DataSummary:  # pylint: disable=redefined-outer-name
    return build_summary(sales_rows)
