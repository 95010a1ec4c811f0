"""
Tests for whole-dataset analysis.
"""

import dataclasses

import pytest

from tablescope.services.column_profiler import DataType
from tablescope.services.dataset_profiler import (
    EmptyDatasetError,
    ProfilingError,
    analyze,
    discover_columns,
)
from tablescope.services.ordering import SortOrder
from tablescope.services.values import NULL, is_null, normalize_rows


def test_analyze_empty_dataset_fails():
    """Test an empty dataset is the only failure of the engine."""
    with pytest.raises(EmptyDatasetError):
        analyze([])
    assert issubclass(EmptyDatasetError, ProfilingError)


def test_simple_scenario():
    """Test a numeric ascending column next to a text column."""
    rows = normalize_rows([
        {"a": "1", "b": "x"},
        {"a": "2", "b": "y"},
        {"a": "3", "b": "z"},
    ])
    result = analyze(rows)

    assert result.columns == ["a", "b"]
    a, b = result.column_stats
    assert (a.null_count, a.positive_count, a.data_type, a.order) == (
        0, 3, DataType.NUMERIC, SortOrder.ASCENDING
    )
    assert b.data_type == DataType.TEXT
    # "x" < "y" < "z" is ascending text order
    assert b.order == SortOrder.ASCENDING
    assert result.ordered_by_first_column is True
    assert result.numeric_columns == ("a",)


def test_text_column_unordered():
    rows = normalize_rows([{"a": "1", "b": "y"}, {"a": "2", "b": "x"}, {"a": "3", "b": "z"}])
    result = analyze(rows)
    assert result.column_stats[1].order == SortOrder.UNORDERED


def test_mixed_number_and_numeric_text_column():
    """Test numbers and numeric text in one column order by numeric value."""
    result = analyze(normalize_rows([{"a": 1}, {"a": "2"}, {"a": 3}]))

    profile = result.column_stats[0]
    assert profile.data_type == DataType.NUMERIC
    assert profile.order == SortOrder.ASCENDING
    assert result.ordered_by_first_column is True


def test_all_null_scenario():
    """Test a column made only of nulls."""
    result = analyze(normalize_rows([{"a": None}, {"a": None}]))

    profile = result.column_stats[0]
    assert profile.null_count == 2
    assert profile.data_type == DataType.EMPTY
    assert profile.order == SortOrder.UNORDERED
    assert result.has_nulls is True
    assert result.columns_with_nulls == 1
    assert result.ordered_by_first_column is False
    assert result.date_columns == ()


def test_discover_columns_first_appearance_order():
    """Test column discovery keeps first-appearance order across rows."""
    rows = [{"b": 1, "a": 2}, {"c": 3, "a": 4}, {"d": 5, "b": 6}]
    assert discover_columns(rows) == ["b", "a", "c", "d"]


def test_columns_are_case_and_whitespace_sensitive():
    rows = normalize_rows([{"Name": "x", "name": "y", "name ": "z"}])
    assert analyze(rows).columns == ["Name", "name", "name "]


def test_row_count_invariant(sales_dataset):
    """Test every profile reports the dataset row count and balances nulls."""
    result = analyze(sales_dataset)
    for profile in result.column_stats:
        assert profile.total_rows == result.total_rows == len(sales_dataset)
        non_null = sum(1 for row in sales_dataset if not is_null(row.get(profile.name, NULL)))
        assert profile.null_count + non_null == profile.total_rows


def test_sales_summary(sales_dataset):
    """Test dataset-level figures over the sales fixture."""
    result = analyze(sales_dataset)

    assert result.total_rows == 5
    assert result.total_columns == 4
    assert result.numeric_columns == ("units", "price")
    assert result.date_columns == ("date",)
    assert result.columns_with_nulls == 3
    assert result.has_nulls is True
    assert result.total_positive_values == 4 + 4
    assert result.ordered_by_first_column is False


def test_numeric_columns_match_profiles(sales_dataset):
    """Test numeric_columns lists exactly the numeric profiles."""
    result = analyze(sales_dataset)
    assert list(result.numeric_columns) == [
        p.name for p in result.column_stats if p.data_type == DataType.NUMERIC
    ]


def test_result_is_immutable(sales_dataset):
    """Test the result and its retained rows cannot be modified."""
    result = analyze(sales_dataset)
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.total_rows = 0
    with pytest.raises(TypeError):
        result.rows[0]["units"] = None


def test_result_does_not_alias_input(sales_dataset):
    """Test later changes to the input rows do not leak into the result."""
    result = analyze(sales_dataset)
    sales_dataset[0]["units"] = None
    assert result.rows[0]["units"] is not None


def test_date_detection_thresholds_are_configurable():
    rows = normalize_rows([{"d": "2024-01-01"}, {"d": "soon"}, {"d": "later"}])
    assert analyze(rows).date_columns == ()
    assert analyze(rows, date_min_matches=1).date_columns == ("d",)


def test_to_dict_excludes_rows(sales_dataset):
    data = analyze(sales_dataset).to_dict()
    assert "rows" not in data
    assert data["numeric_columns"] == ["units", "price"]
    assert data["column_stats"][0]["name"] == "date"
