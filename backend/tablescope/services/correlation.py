"""
Correlation Engine — Pairwise Pearson Correlation

Computes the Pearson coefficient for every ordered pair of numeric columns.
Degenerate inputs never raise: empty or length-mismatched vectors and
constant series all yield 0.

Two pairing policies decide which values are paired for a column pair:

- ROW_ALIGNED: only rows where both columns hold a number take part, so
  paired values always come from the same source row.
- POSITIONAL: each column is filtered on its own and both vectors are cut
  to the shorter length. Values can pair across different rows when the
  columns have nulls in different places; kept for compatibility with
  previously produced matrices.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Sequence, Tuple

import numpy as np

from .column_profiler import column_values
from .values import Row, to_number

logger = logging.getLogger("tablescope.correlation")


class PairingPolicy(str, Enum):
    ROW_ALIGNED = "row_aligned"
    POSITIONAL = "positional"


@dataclass(frozen=True)
class CorrelationMatrix:
    columns: Tuple[str, ...]
    values: Tuple[Tuple[float, ...], ...]
    pairing: PairingPolicy

    def to_dict(self) -> Dict[str, Any]:
        return {
            "columns": list(self.columns),
            "matrix": [list(row) for row in self.values],
            "pairing": self.pairing.value,
        }


def pearson(xs: Sequence[float], ys: Sequence[float]) -> float:
    """Pearson correlation of two equally long series, or 0 when undefined."""
    if len(xs) == 0 or len(ys) == 0 or len(xs) != len(ys):
        return 0.0

    x = np.asarray(xs, dtype=float)
    y = np.asarray(ys, dtype=float)
    if np.all(x == x[0]) or np.all(y == y[0]):
        return 0.0

    # Pearson is scale-invariant; scaling into [-1, 1] keeps the sums finite.
    x = x / np.max(np.abs(x))
    y = y / np.max(np.abs(y))
    dx = x - x.mean()
    dy = y - y.mean()

    numerator = float(np.dot(dx, dy))
    denominator = math.sqrt(float(np.dot(dx, dx)) * float(np.dot(dy, dy)))
    if denominator == 0 or not math.isfinite(denominator):
        return 0.0
    r = numerator / denominator
    if not math.isfinite(r):
        return 0.0
    return max(-1.0, min(1.0, r))


def _positional_pair(x_values: List, y_values: List) -> Tuple[List[float], List[float]]:
    xs = [v for v in x_values if v is not None]
    ys = [v for v in y_values if v is not None]
    length = min(len(xs), len(ys))
    return xs[:length], ys[:length]


def _row_aligned_pair(x_values: List, y_values: List) -> Tuple[List[float], List[float]]:
    pairs = [(x, y) for x, y in zip(x_values, y_values) if x is not None and y is not None]
    return [x for x, _ in pairs], [y for _, y in pairs]


def correlation_matrix(
    numeric_columns: Sequence[str],
    rows: Sequence[Row],
    pairing: PairingPolicy = PairingPolicy.ROW_ALIGNED,
) -> CorrelationMatrix:
    """Square matrix of Pearson coefficients, self-pairs included."""
    coerced = {
        column: [to_number(value) for value in column_values(rows, column)]
        for column in numeric_columns
    }
    pair = _row_aligned_pair if pairing == PairingPolicy.ROW_ALIGNED else _positional_pair

    matrix = []
    for row_column in numeric_columns:
        line = []
        for other_column in numeric_columns:
            xs, ys = pair(coerced[row_column], coerced[other_column])
            line.append(pearson(xs, ys))
        matrix.append(tuple(line))

    logger.debug("correlation_matrix: %d columns, pairing=%s", len(numeric_columns), pairing.value)
    return CorrelationMatrix(
        columns=tuple(numeric_columns),
        values=tuple(matrix),
        pairing=pairing,
    )
