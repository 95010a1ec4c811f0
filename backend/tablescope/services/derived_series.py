"""
Derived Series — Time Series, Scatter Pairs and Column Counts

Projections of an AnalysisResult used to drive charts. The column choices
here are deliberate, named policies rather than optimal selections:

- FIRST_COLUMNS time series: the first date column against the first
  numeric column, both in discovery order.
- EARLY_EXIT scatter pairs: numeric column pairs are visited in order and
  collection stops once `max_pairs` non-empty pairs are found.
"""

from dataclasses import dataclass
from datetime import datetime, time
from typing import Any, Dict, List, Optional, Tuple

from .column_profiler import column_values
from .dataset_profiler import AnalysisResult
from .date_detector import parse_date
from .values import to_number

DEFAULT_MAX_SCATTER_PAIRS = 4


@dataclass(frozen=True)
class TimePoint:
    label: str
    timestamp: datetime
    value: float

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "timestamp": self.timestamp.isoformat(), "value": self.value}


@dataclass(frozen=True)
class TimeSeries:
    date_column: str
    value_column: str
    points: Tuple[TimePoint, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date_column": self.date_column,
            "value_column": self.value_column,
            "points": [point.to_dict() for point in self.points],
        }


@dataclass(frozen=True)
class ScatterPair:
    x: str
    y: str
    points: Tuple[Tuple[float, float], ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "points": [{"x": px, "y": py} for px, py in self.points],
        }


def _date_label(moment: datetime) -> str:
    if moment.time() == time(0):
        return moment.strftime("%Y-%m-%d")
    return moment.strftime("%Y-%m-%d %H:%M:%S")


def select_time_series_columns(result: AnalysisResult) -> Optional[Tuple[str, str]]:
    """FIRST_COLUMNS policy: (first date column, first numeric column) or None."""
    if not result.date_columns or not result.numeric_columns:
        return None
    return result.date_columns[0], result.numeric_columns[0]


def build_time_series(result: AnalysisResult) -> Optional[TimeSeries]:
    """Chronologically sorted (date, value) points; rows failing either parse are dropped."""
    selected = select_time_series_columns(result)
    if selected is None:
        return None
    date_column, value_column = selected

    pairs = []
    for date_value, raw_value in zip(
        column_values(result.rows, date_column),
        column_values(result.rows, value_column),
    ):
        moment = parse_date(date_value)
        number = to_number(raw_value)
        if moment is None or number is None:
            continue
        pairs.append((moment, number))

    # sorted() is stable: equal timestamps keep row order
    pairs = sorted(pairs, key=lambda pair: pair[0])
    return TimeSeries(
        date_column=date_column,
        value_column=value_column,
        points=tuple(TimePoint(label=_date_label(m), timestamp=m, value=v) for m, v in pairs),
    )


def build_scatter_pairs(
    result: AnalysisResult,
    max_pairs: int = DEFAULT_MAX_SCATTER_PAIRS,
) -> List[ScatterPair]:
    """EARLY_EXIT policy: the first `max_pairs` numeric column pairs with at least one point."""
    columns = result.numeric_columns
    coerced = {
        column: [to_number(value) for value in column_values(result.rows, column)]
        for column in columns
    }

    pairs: List[ScatterPair] = []
    if max_pairs < 1:
        return pairs
    for i, x_column in enumerate(columns):
        for y_column in columns[i + 1:]:
            points = tuple(
                (x, y) for x, y in zip(coerced[x_column], coerced[y_column])
                if x is not None and y is not None
            )
            if points:
                pairs.append(ScatterPair(x=x_column, y=y_column, points=points))
            if len(pairs) >= max_pairs:
                return pairs
    return pairs


def column_count_series(result: AnalysisResult) -> List[Dict[str, Any]]:
    """Null and positive counts per column, in discovery order."""
    return [
        {
            "name": profile.name,
            "null_count": profile.null_count,
            "positive_count": profile.positive_count,
        }
        for profile in result.column_stats
    ]
