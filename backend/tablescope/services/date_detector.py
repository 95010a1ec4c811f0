"""
Date Detector — Fixed-Grammar Date Recognition

A value is a date only if it matches one of a closed set of textual
formats. Numbers are never dates: spreadsheet serials and epoch values are
indistinguishable from ordinary measurements.

Accepted formats:
  2024-01-15                          ISO-8601 date
  2024-01-15T08:30[:00[.000]][Z|+01:00]
  2024-01-15 08:30[:00[.000]]         ISO-8601 datetime (space separator allowed)
  2024/01/15                          year first, slashes
  15/01/2024  15-01-2024  15.01.2024  day first (month-first is never accepted)
"""

import logging
import re
from datetime import datetime, timezone
from typing import Optional, Sequence

from .values import TextValue, Value

logger = logging.getLogger("tablescope.date_detector")

DEFAULT_SAMPLE_SIZE = 15
DEFAULT_MIN_MATCHES = 5

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
ISO_DATETIME_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}(:\d{2}(\.\d{3}|\.\d{6})?)?(Z|[+-]\d{2}:\d{2})?$"
)

# (pattern, strptime format)
WHITELIST_FORMATS = [
    (re.compile(r"^\d{4}/\d{2}/\d{2}$"), "%Y/%m/%d"),
    (re.compile(r"^\d{2}/\d{2}/\d{4}$"), "%d/%m/%Y"),
    (re.compile(r"^\d{2}-\d{2}-\d{4}$"), "%d-%m-%Y"),
    (re.compile(r"^\d{2}\.\d{2}\.\d{4}$"), "%d.%m.%Y"),
]


def parse_date(value: Value) -> Optional[datetime]:
    """
    Parse a cell under the fixed date grammar.

    Returns a naive datetime; offset-aware inputs are converted to UTC first
    so every parsed value can be compared with every other. Returns None for
    anything outside the grammar or for impossible calendar dates.
    """
    if not isinstance(value, TextValue):
        return None
    text = value.value.strip()
    if not text:
        return None

    if ISO_DATE_PATTERN.match(text) or ISO_DATETIME_PATTERN.match(text):
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        return parsed

    for pattern, fmt in WHITELIST_FORMATS:
        if pattern.match(text):
            try:
                return datetime.strptime(text, fmt)
            except ValueError:
                return None

    return None


def is_date_column(
    non_null_values: Sequence[Value],
    sample_size: int = DEFAULT_SAMPLE_SIZE,
    min_matches: int = DEFAULT_MIN_MATCHES,
) -> bool:
    """
    Decide whether a column holds dates.

    Only the first `sample_size` non-null values are parsed. The column
    qualifies when at least min(min_matches, non-null count) of them parse;
    a column without non-null values never qualifies.
    """
    if not non_null_values:
        return False

    sample = non_null_values[:sample_size]
    matches = sum(1 for value in sample if parse_date(value) is not None)
    required = min(min_matches, len(non_null_values))
    logger.debug("date sample: %d/%d parsed, %d required", matches, len(sample), required)
    return matches >= required
