"""Per-column statistics: null and positive counts, type and order."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Sequence

from .ordering import SortOrder, detect_order
from .values import NULL, Row, Value, comparable, is_null, to_number


class DataType(str, Enum):
    NUMERIC = "numeric"
    TEXT = "text"
    MIXED = "mixed"
    EMPTY = "empty"


@dataclass(frozen=True)
class ColumnProfile:
    name: str
    total_rows: int
    null_count: int
    positive_count: int
    data_type: DataType
    order: SortOrder

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "total_rows": self.total_rows,
            "null_count": self.null_count,
            "positive_count": self.positive_count,
            "data_type": self.data_type.value,
            "order": self.order.value,
        }


def column_values(rows: Sequence[Row], column_name: str) -> List[Value]:
    """Raw values of one column, with NULL for rows that lack the key."""
    return [row.get(column_name, NULL) for row in rows]


def non_null_values(values: Sequence[Value]) -> List[Value]:
    return [value for value in values if not is_null(value)]


def classify_data_type(non_null: Sequence[Value]) -> DataType:
    if not non_null:
        return DataType.EMPTY
    numeric_count = sum(1 for value in non_null if to_number(value) is not None)
    if numeric_count == len(non_null):
        return DataType.NUMERIC
    if numeric_count == 0:
        return DataType.TEXT
    return DataType.MIXED


def order_of(non_null: Sequence[Value]) -> SortOrder:
    return detect_order([comparable(value) for value in non_null])


def compute_column_profile(rows: Sequence[Row], column_name: str) -> ColumnProfile:
    """
    Profile one column.

    The positive count is taken over every value that coerces to a number,
    independently of the null check; a TextValue of "0" is neither null nor
    positive.
    """
    values = column_values(rows, column_name)
    non_null = non_null_values(values)

    numeric_values = [number for number in map(to_number, values) if number is not None]
    positive_count = sum(1 for number in numeric_values if number > 0)

    return ColumnProfile(
        name=column_name,
        total_rows=len(rows),
        null_count=len(values) - len(non_null),
        positive_count=positive_count,
        data_type=classify_data_type(non_null),
        order=order_of(non_null),
    )
