"""In-memory catalog of loaded datasets.

A dataset is identified by a content-addressed id (a hash of its name and raw
rows), so loading the same rows twice under the same name yields the same id.
The catalog builds each dataset's DataSummary on first request and keeps it
until the dataset is replaced or removed.
"""

from __future__ import annotations

import hashlib
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence

from tabular_insights.core.enums import ColumnType
from .builder import build_summary
from .config import ProfileLimits
from .inference import coerce_rows, infer_column_types
from .models import DataSummary

logger = logging.getLogger(__name__)

DATASET_ID_LENGTH = 12


def dataset_id_for(name: str, rows: Sequence[Mapping[str, Any]]) -> str:
    """Content-addressed id: leading hex digits of a SHA-256 over name and rows."""
    payload = json.dumps({"name": name, "rows": list(rows)}, sort_keys=True, default=str)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()[:DATASET_ID_LENGTH]


@dataclass
class Dataset:
    """A loaded dataset with resolved column types.

    Attributes:
        dataset_id: Content-addressed identifier.
        name: Display name (e.g. the uploaded file name).
        rows: Records with numeric cells coerced to numbers.
        columns: Column names, from the first raw row.
        column_types: Inferred type per column.
        uploaded_at: When the dataset was loaded.
    """

    dataset_id: str
    name: str
    rows: List[Dict[str, Any]]
    columns: List[str]
    column_types: Dict[str, ColumnType]
    uploaded_at: datetime = field(default_factory=datetime.now)

    @property
    def row_count(self) -> int:
        return len(self.rows)


def load_dataset(name: str, raw_rows: Sequence[Mapping[str, Any]]) -> Dataset:
    """Infer column types, coerce values and wrap raw rows into a Dataset."""
    raw_rows = list(raw_rows)
    columns = list(raw_rows[0].keys()) if raw_rows else []
    column_types = infer_column_types(raw_rows, columns)
    return Dataset(
        dataset_id=dataset_id_for(name, raw_rows),
        name=name,
        rows=coerce_rows(raw_rows, column_types),
        columns=columns,
        column_types=column_types,
    )


class DatasetCatalog:
    """Hold datasets, track the active one and cache their summaries.

    Examples:
        >>> catalog = DatasetCatalog()
        >>> dataset_id = catalog.add("sales.csv", rows)
        >>> catalog.active().name
        'sales.csv'
        >>> catalog.summary(dataset_id).row_count
        3
    """

    def __init__(self, limits: Optional[ProfileLimits] = None) -> None:
        self.limits = limits or ProfileLimits()
        self._datasets: Dict[str, Dataset] = {}
        self._summaries: Dict[str, DataSummary] = {}
        self._active_id: Optional[str] = None

    def add(self, name: str, raw_rows: Sequence[Mapping[str, Any]]) -> str:
        """Load rows as a dataset, make it active and return its id.

        Re-adding identical content replaces the entry and drops its cached summary.
        """
        dataset = load_dataset(name, raw_rows)
        self._datasets[dataset.dataset_id] = dataset
        self._summaries.pop(dataset.dataset_id, None)
        self._active_id = dataset.dataset_id
        logger.info(
            "Loaded dataset %s (%s): %d rows, %d columns",
            dataset.dataset_id,
            name,
            dataset.row_count,
            len(dataset.columns),
        )
        return dataset.dataset_id

    def get(self, dataset_id: str) -> Dataset:
        """Return a dataset by id.

        Raises:
            KeyError: If no dataset has this id.
        """
        try:
            return self._datasets[dataset_id]
        except KeyError:
            raise KeyError(f"Unknown dataset id: {dataset_id}") from None

    def remove(self, dataset_id: str) -> None:
        """Remove a dataset; clears the active selection if it was active."""
        self._datasets.pop(dataset_id, None)
        self._summaries.pop(dataset_id, None)
        if self._active_id == dataset_id:
            self._active_id = None

    def set_active(self, dataset_id: Optional[str]) -> None:
        """Select the active dataset (None clears the selection).

        Raises:
            KeyError: If ``dataset_id`` is not in the catalog.
        """
        if dataset_id is not None and dataset_id not in self._datasets:
            raise KeyError(f"Unknown dataset id: {dataset_id}")
        self._active_id = dataset_id

    def active(self) -> Optional[Dataset]:
        if self._active_id is None:
            return None
        return self._datasets.get(self._active_id)

    def datasets(self) -> List[Dataset]:
        """Return all datasets in insertion order."""
        return list(self._datasets.values())

    def clear(self) -> None:
        self._datasets.clear()
        self._summaries.clear()
        self._active_id = None

    def summary(self, dataset_id: str) -> DataSummary:
        """Return the dataset's DataSummary, building it on first request."""
        cached = self._summaries.get(dataset_id)
        if cached is not None:
            return cached
        dataset = self.get(dataset_id)
        summary = build_summary(
            dataset.rows, dataset.columns, dataset.column_types, limits=self.limits
        )
        self._summaries[dataset_id] = summary
        return summary

    def __len__(self) -> int:
        return len(self._datasets)

    def __contains__(self, dataset_id: object) -> bool:
        return dataset_id in self._datasets


__all__ = ["Dataset", "DatasetCatalog", "dataset_id_for", "load_dataset"]
