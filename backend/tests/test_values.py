"""
Tests for cell value coercion and null classification.
"""

import math

from tablescope.services.values import (
    NULL,
    NullValue,
    NumberValue,
    TextValue,
    is_null,
    normalize_rows,
    to_number,
    to_raw,
    to_value,
)


def test_to_value_variants():
    """Test raw cells map onto the matching Value variant."""
    assert to_value(None) is NULL
    assert to_value(3) == NumberValue(3.0)
    assert to_value(2.5) == NumberValue(2.5)
    assert to_value("abc") == TextValue("abc")
    assert to_value(True) == NumberValue(1.0)


def test_null_is_singleton():
    """Test NullValue always yields the same marker."""
    assert NullValue() is NULL
    assert not NULL


def test_to_number_numbers():
    """Test finite numbers pass through and non-finite ones are rejected."""
    assert to_number(NumberValue(4.0)) == 4.0
    assert to_number(NumberValue(0.0)) == 0.0
    assert to_number(NumberValue(math.inf)) is None
    assert to_number(NumberValue(math.nan)) is None


def test_to_number_text_decimal_comma():
    """Test text uses the decimal-comma convention."""
    assert to_number(TextValue("3,5")) == 3.5
    assert to_number(TextValue(" 42 ")) == 42.0
    assert to_number(TextValue("-1.25")) == -1.25


def test_to_number_text_decimal_grammar():
    """Test only plain ASCII decimal text parses."""
    assert to_number(TextValue("1e3")) == 1000.0
    assert to_number(TextValue(".5")) == 0.5
    assert to_number(TextValue("+2")) == 2.0
    assert to_number(TextValue("7.")) == 7.0
    assert to_number(TextValue("1_000")) is None
    assert to_number(TextValue("١٢")) is None
    assert to_number(TextValue("inf")) is None
    assert to_number(TextValue("nan")) is None
    assert to_number(TextValue("1,2,3")) is None
    assert to_number(TextValue("1,234.5")) is None


def test_to_number_rejects_text():
    """Test non-numeric and non-finite text coerce to None."""
    assert to_number(TextValue("abc")) is None
    assert to_number(TextValue("")) is None
    assert to_number(TextValue("   ")) is None
    assert to_number(TextValue("inf")) is None
    assert to_number(TextValue("nan")) is None
    assert to_number(NULL) is None


def test_is_null():
    """Test null classification of each variant."""
    assert is_null(NULL)
    assert is_null(TextValue(""))
    assert is_null(TextValue("  \t"))
    assert not is_null(TextValue("0"))
    assert not is_null(NumberValue(0.0))


def test_normalize_rows_keeps_key_order():
    """Test normalized rows keep their own key order."""
    rows = normalize_rows([{"b": 1, "a": None}])
    assert list(rows[0]) == ["b", "a"]
    assert rows[0]["a"] is NULL


def test_to_raw_round_trip():
    """Test Values unwrap to JSON-friendly cells."""
    assert to_raw(NumberValue(1.5)) == 1.5
    assert to_raw(TextValue("x")) == "x"
    assert to_raw(NULL) is None
    assert to_raw(NumberValue(math.nan)) is None
