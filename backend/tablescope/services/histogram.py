"""Fixed-width histogram binning for numeric columns."""

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

import numpy as np

from .column_profiler import column_values
from .dataset_profiler import AnalysisResult
from .values import to_number

DEFAULT_BIN_COUNT = 8


@dataclass(frozen=True)
class HistogramBin:
    label: str
    count: int
    start: float
    end: float

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "count": self.count, "start": self.start, "end": self.end}


def _format_value(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def build_histogram(values: Sequence[float], bin_count: int = DEFAULT_BIN_COUNT) -> List[HistogramBin]:
    """
    Bin values into `bin_count` equal-width buckets between min and max.

    Each bucket covers [start, end); the maximum is clamped into the last
    bucket. A constant sequence yields a single bucket labelled with the
    value itself.
    """
    if bin_count < 1:
        raise ValueError("bin_count must be at least 1")
    if len(values) == 0:
        return []

    vals = np.asarray(values, dtype=float)
    low = float(np.min(vals))
    high = float(np.max(vals))

    if low == high:
        return [HistogramBin(label=_format_value(low), count=len(vals), start=low, end=high)]

    # Work on halved values: high - low can overflow even when both are finite.
    # Halving is exact, so positions and edges match the unhalved arithmetic.
    half_low = low / 2
    half_width = (high / 2 - half_low) / bin_count
    with np.errstate(divide="ignore", invalid="ignore"):
        positions = np.floor((vals / 2 - half_low) / half_width)
    positions = np.nan_to_num(positions, nan=0.0, posinf=bin_count - 1, neginf=0.0)
    indices = np.clip(positions, 0, bin_count - 1).astype(int)
    counts = np.bincount(indices, minlength=bin_count)

    bins = []
    for index in range(bin_count):
        start = 2 * (half_low + half_width * index)
        end = high if index == bin_count - 1 else 2 * (half_low + half_width * (index + 1))
        bins.append(HistogramBin(
            label=f"{start:.2f}-{end:.2f}",
            count=int(counts[index]),
            start=start,
            end=end,
        ))
    return bins


def numeric_column_values(result: AnalysisResult, column: str) -> List[float]:
    """Values of one column that coerce to numbers, in row order."""
    numbers = (to_number(value) for value in column_values(result.rows, column))
    return [number for number in numbers if number is not None]


def build_column_histograms(
    result: AnalysisResult,
    bin_count: int = DEFAULT_BIN_COUNT,
) -> List[Dict[str, Any]]:
    """One histogram per numeric column, in discovery order."""
    return [
        {
            "column": column,
            "bins": [b.to_dict() for b in build_histogram(numeric_column_values(result, column), bin_count)],
        }
        for column in result.numeric_columns
    ]
