"""Monotonic order detection for column values."""

from enum import Enum
from typing import Optional, Sequence, Tuple, Union

from .values import TextValue, to_number


class SortOrder(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"
    UNORDERED = "unordered"


def _comparable_pair(
    previous: Union[float, str],
    current: Union[float, str],
) -> Optional[Tuple[Union[float, str], Union[float, str]]]:
    """Neighbours in a common type, or None when a text side is not numeric."""
    if isinstance(previous, str) == isinstance(current, str):
        return previous, current
    if isinstance(previous, str):
        previous = to_number(TextValue(previous))
    else:
        current = to_number(TextValue(current))
    if previous is None or current is None:
        return None
    return previous, current


def detect_order(values: Sequence[Union[float, str]]) -> SortOrder:
    """
    Classify a sequence as ascending, descending or unordered.

    Ties are allowed in both directions, so a constant sequence counts as
    ascending. A number next to a text is compared against the text's
    numeric reading; if the text is not numeric the pair counts as a tie.
    """
    if len(values) < 2:
        return SortOrder.UNORDERED

    ascending = True
    descending = True
    for previous, current in zip(values, values[1:]):
        pair = _comparable_pair(previous, current)
        if pair is None:
            continue
        previous, current = pair
        if current < previous:
            ascending = False
        if current > previous:
            descending = False
        if not ascending and not descending:
            return SortOrder.UNORDERED

    if ascending:
        return SortOrder.ASCENDING
    if descending:
        return SortOrder.DESCENDING
    return SortOrder.UNORDERED
