"""Core enumerations used across the package."""

from __future__ import annotations

from enum import Enum


class ColumnType(str, Enum):
    """Inferred type of a dataset column.

    Values are strings to ease serialization and CLI interchange.
    """

    NUMBER = "number"
    STRING = "string"
    DATE = "date"


class Operation(str, Enum):
    """Reduction applied to a numeric column within each group."""

    SUM = "sum"
    MEAN = "mean"
    COUNT = "count"


__all__ = ["ColumnType", "Operation"]
