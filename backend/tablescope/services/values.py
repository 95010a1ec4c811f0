"""
Cell Values — Tagged Representation and Coercion

Every cell reaching the profiler is one of three explicit variants:

- NumberValue: a numeric cell (spreadsheet numbers, JSON numbers)
- TextValue:   a textual cell, possibly holding a number written as text
- NULL:        the explicit missing-value marker

Keeping the variants explicit means numeric zero, the empty string and a
missing cell can never be confused with one another.
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union


@dataclass(frozen=True)
class NumberValue:
    value: float


@dataclass(frozen=True)
class TextValue:
    value: str


class NullValue:
    """Singleton marker for an empty cell."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NULL"

    def __bool__(self) -> bool:
        return False


NULL = NullValue()

Value = Union[NumberValue, TextValue, NullValue]
Row = Mapping[str, Value]

DECIMAL_PATTERN = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$", re.ASCII)


# ─── Decoder boundary ────────────────────────────────────────────────


def to_value(raw: Any) -> Value:
    """Wrap a decoded cell (str, number or None) into its Value variant."""
    if raw is None or raw is NULL:
        return NULL
    if isinstance(raw, (NumberValue, TextValue)):
        return raw
    if isinstance(raw, (bool, int, float)):
        return NumberValue(float(raw))
    if isinstance(raw, str):
        return TextValue(raw)
    return TextValue(str(raw))


def normalize_rows(raw_rows: Iterable[Mapping[str, Any]]) -> List[Dict[str, Value]]:
    """Convert decoded rows of plain Python values into rows of Values."""
    return [{key: to_value(cell) for key, cell in row.items()} for row in raw_rows]


# ─── Coercion ────────────────────────────────────────────────────────


def to_number(value: Value) -> Optional[float]:
    """
    Best-effort numeric coercion.

    Text uses the decimal-comma convention: every ',' becomes '.' before
    parsing, so "3,5" reads as 3.5 while "1,234.5" is rejected. Only plain
    ASCII decimal notation is accepted; digit grouping with '_' and
    non-ASCII digits are not numbers.
    Returns None for nulls, unparsable text and non-finite results.
    """
    if isinstance(value, NumberValue):
        return value.value if math.isfinite(value.value) else None
    if isinstance(value, TextValue):
        text = value.value.replace(",", ".").strip()
        if not DECIMAL_PATTERN.match(text):
            return None
        number = float(text)
        return number if math.isfinite(number) else None
    return None


def is_null(value: Value) -> bool:
    if isinstance(value, TextValue):
        return value.value.strip() == ""
    if isinstance(value, NumberValue):
        return False
    return True


def comparable(value: Value) -> Union[float, str]:
    """Native ordering key of a non-null value: numbers stay numbers, text stays text."""
    if isinstance(value, NumberValue):
        return value.value
    if isinstance(value, TextValue):
        return value.value
    raise TypeError("NULL has no ordering key")


def to_raw(value: Value) -> Union[float, str, None]:
    """Unwrap a Value back into a JSON-friendly cell."""
    if isinstance(value, NumberValue):
        return value.value if math.isfinite(value.value) else None
    if isinstance(value, TextValue):
        return value.value
    return None
