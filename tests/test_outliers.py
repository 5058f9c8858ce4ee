"""
Outlier filter tests - open interval around the mean, order preserved.
"""

from dataclasses import dataclass

import pytest

from farm_registry.services.outliers import exclude_outliers, outlier_thresholds


@dataclass
class Record:
    name: str
    yield_: float


def records(*yields: float) -> list[Record]:
    return [Record(f"farm-{i}", y) for i, y in enumerate(yields)]


def test_thresholds_are_30_percent_around_mean():
    lower, upper = outlier_thresholds([1, 2, 3, 2])
    assert lower == pytest.approx(1.4)
    assert upper == pytest.approx(2.6)


def test_keeps_only_values_strictly_inside_bounds():
    kept = exclude_outliers(records(1, 2, 3, 2), "yield_")
    assert [r.yield_ for r in kept] == [2, 2]


def test_preserves_input_order():
    kept = exclude_outliers(records(10, 9, 11, 10.5), "yield_")
    assert [r.name for r in kept] == ["farm-0", "farm-1", "farm-2", "farm-3"]


def test_value_exactly_on_bound_is_excluded():
    # mean 10, deviation 0.5 -> bounds (5, 15), exact in binary floating point
    kept = exclude_outliers(records(5, 15, 10, 10, 10), "yield_", deviation=0.5)
    assert [r.yield_ for r in kept] == [10, 10, 10]


def test_equal_values_are_all_retained():
    assert len(exclude_outliers(records(4.2, 4.2, 4.2), "yield_")) == 3


def test_single_record_is_retained():
    assert len(exclude_outliers(records(0.95), "yield_")) == 1


def test_custom_deviation():
    kept = exclude_outliers(records(8, 10, 12), "yield_", deviation=0.1)
    assert [r.yield_ for r in kept] == [10]


def test_empty_input_is_rejected():
    with pytest.raises(ValueError):
        exclude_outliers([], "yield_")
