"""Sort policy for farm listings."""

from enum import Enum
from operator import attrgetter
from typing import Sequence, TypeVar

T = TypeVar("T")


class SortBy(str, Enum):
    """Accepted `sortBy` query values."""

    NAME = "name"
    CREATED_AT = "createdAt"
    DRIVING_DISTANCE = "drivingDistance"


# Attribute compared for each key; all ascending
SORT_ATTRIBUTES = {
    SortBy.NAME: "name",
    SortBy.CREATED_AT: "created_at",
    SortBy.DRIVING_DISTANCE: "driving_distance",
}


def sort_by(records: Sequence[T], key: SortBy) -> list[T]:
    """Stable ascending sort: equal keys keep their input order."""
    return sorted(records, key=attrgetter(SORT_ATTRIBUTES[key]))
