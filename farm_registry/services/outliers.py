"""
Outlier filter over a numeric attribute.
A record is an outlier when its value lies outside the open interval
(mean * (1 - deviation), mean * (1 + deviation)).
"""

from operator import attrgetter
from typing import Sequence, TypeVar

T = TypeVar("T")

DEFAULT_DEVIATION = 0.3


def outlier_thresholds(values: Sequence[float], deviation: float = DEFAULT_DEVIATION) -> tuple[float, float]:
    """Return (lower, upper) bounds around the arithmetic mean. `values` must not be empty."""
    if not values:
        raise ValueError("Cannot compute outlier thresholds of an empty collection")
    mean = sum(values) / len(values)
    return mean * (1 - deviation), mean * (1 + deviation)


def exclude_outliers(records: Sequence[T], field: str, deviation: float = DEFAULT_DEVIATION) -> list[T]:
    """Keep records whose `field` is strictly inside the thresholds, preserving order."""
    get = attrgetter(field)
    lower, upper = outlier_thresholds([get(r) for r in records], deviation)
    return [r for r in records if lower < get(r) < upper]
