"""Farm request/response schemas - REST API contract."""

import uuid
from datetime import datetime

from pydantic import Field, field_serializer, field_validator

from farm_registry.schemas.base import ApiModel, iso_utc, require_string
from farm_registry.services.sorting import SortBy

# NUMERIC(7, 2)
MAX_MEASURE = 99999.99


class FarmCreate(ApiModel):
    address: str
    name: str
    size: float
    yield_: float = Field(alias="yield")

    @field_validator("address", "name", mode="before")
    @classmethod
    def _text(cls, value, info):
        return require_string(value, info.field_name)

    @field_validator("size", "yield_", mode="before")
    @classmethod
    def _number(cls, value, info):
        field = "yield" if info.field_name == "yield_" else info.field_name
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"{field} must be a number conforming to the specified constraints")
        if not 0 <= value <= MAX_MEASURE:
            raise ValueError(f"{field} must be between 0 and {MAX_MEASURE}")
        return round(float(value), 2)


class FarmListQuery(ApiModel):
    """`GET /farms` query string. Outliers are excluded unless outliers=true."""

    outliers: bool = False
    sort_by: SortBy | None = None

    @field_validator("outliers", mode="before")
    @classmethod
    def _boolean_string(cls, value):
        if value is None:
            return False
        if isinstance(value, bool):
            return value
        if value in ("true", "false"):
            return value == "true"
        raise ValueError("outliers must be a boolean value")

    @field_validator("sort_by", mode="before")
    @classmethod
    def _sort_key(cls, value):
        if value is None or isinstance(value, SortBy):
            return value
        allowed = [key.value for key in SortBy]
        if value not in allowed:
            raise ValueError(f"sortBy must be one of the following values: {', '.join(allowed)}")
        return SortBy(value)


class FarmResponse(ApiModel):
    id: uuid.UUID
    address: str
    name: str
    size: float
    yield_: float = Field(alias="yield")
    created_at: datetime
    updated_at: datetime

    @field_serializer("created_at", "updated_at")
    def _timestamp(self, value: datetime) -> str:
        return iso_utc(value)


class FarmListItem(FarmResponse):
    """Listing view: adds the owner's email and the driving distance (metres) from the requester."""

    owner: str
    driving_distance: float
