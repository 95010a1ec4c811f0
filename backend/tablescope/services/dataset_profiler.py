"""
Dataset Profiler — Whole-Dataset Analysis

Discovers the columns of a decoded dataset, profiles each one and collects
the dataset-level figures into a single immutable AnalysisResult. The
result keeps a read-only copy of the rows so histograms, correlations and
derived series can be computed later without the caller holding on to the
original data.

Runs entirely in memory and keeps no state between calls.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, List, Sequence, Tuple

from .column_profiler import (
    ColumnProfile,
    DataType,
    column_values,
    compute_column_profile,
    non_null_values,
    order_of,
)
from .date_detector import DEFAULT_MIN_MATCHES, DEFAULT_SAMPLE_SIZE, is_date_column
from .ordering import SortOrder
from .values import Row

logger = logging.getLogger("tablescope.profiler")


class ProfilingError(Exception):
    """Base class for profiling failures."""


class EmptyDatasetError(ProfilingError):
    """Raised when a dataset has no rows to analyze."""

    def __init__(self, message: str = "The dataset is empty or has no valid rows."):
        super().__init__(message)


@dataclass(frozen=True)
class AnalysisResult:
    total_rows: int
    total_columns: int
    has_nulls: bool
    ordered_by_first_column: bool
    total_positive_values: int
    columns_with_nulls: int
    column_stats: Tuple[ColumnProfile, ...]
    numeric_columns: Tuple[str, ...]
    date_columns: Tuple[str, ...]
    rows: Tuple[Row, ...]

    @property
    def columns(self) -> List[str]:
        return [profile.name for profile in self.column_stats]

    def to_dict(self) -> Dict[str, Any]:
        """Summary without the retained rows."""
        return {
            "total_rows": self.total_rows,
            "total_columns": self.total_columns,
            "has_nulls": self.has_nulls,
            "ordered_by_first_column": self.ordered_by_first_column,
            "total_positive_values": self.total_positive_values,
            "columns_with_nulls": self.columns_with_nulls,
            "column_stats": [profile.to_dict() for profile in self.column_stats],
            "numeric_columns": list(self.numeric_columns),
            "date_columns": list(self.date_columns),
        }


def discover_columns(rows: Sequence[Row]) -> List[str]:
    """Ordered union of row keys, in order of first appearance."""
    seen: Dict[str, None] = {}
    for row in rows:
        for key in row:
            if key not in seen:
                seen[key] = None
    return list(seen)


def analyze(
    rows: Sequence[Row],
    date_sample_size: int = DEFAULT_SAMPLE_SIZE,
    date_min_matches: int = DEFAULT_MIN_MATCHES,
) -> AnalysisResult:
    """
    Build the full profile of a dataset.

    Raises EmptyDatasetError when `rows` is empty; every non-empty dataset
    yields a result.
    """
    if len(rows) == 0:
        raise EmptyDatasetError()

    logger.info("analyze: %d rows", len(rows))
    frozen_rows = tuple(MappingProxyType(dict(row)) for row in rows)
    columns = discover_columns(frozen_rows)

    column_stats = tuple(compute_column_profile(frozen_rows, column) for column in columns)

    numeric_columns = tuple(
        profile.name for profile in column_stats if profile.data_type == DataType.NUMERIC
    )
    date_columns = tuple(
        column for column in columns
        if is_date_column(
            non_null_values(column_values(frozen_rows, column)),
            sample_size=date_sample_size,
            min_matches=date_min_matches,
        )
    )

    columns_with_nulls = sum(1 for profile in column_stats if profile.null_count > 0)
    total_positive_values = sum(profile.positive_count for profile in column_stats)

    ordered_by_first_column = False
    if columns:
        first_values = non_null_values(column_values(frozen_rows, columns[0]))
        ordered_by_first_column = order_of(first_values) != SortOrder.UNORDERED

    logger.info(
        "analyze: %d columns (%d numeric, %d date, %d with nulls)",
        len(columns), len(numeric_columns), len(date_columns), columns_with_nulls,
    )

    return AnalysisResult(
        total_rows=len(frozen_rows),
        total_columns=len(columns),
        has_nulls=columns_with_nulls > 0,
        ordered_by_first_column=ordered_by_first_column,
        total_positive_values=total_positive_values,
        columns_with_nulls=columns_with_nulls,
        column_stats=column_stats,
        numeric_columns=numeric_columns,
        date_columns=date_columns,
        rows=frozen_rows,
    )
