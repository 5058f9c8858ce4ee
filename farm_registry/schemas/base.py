"""Shared schema configuration: camelCase on the wire, snake_case in Python."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from farm_registry.core.timeutils import ensure_utc


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def iso_utc(value: datetime) -> str:
    return ensure_utc(value).isoformat()


def require_string(value, field: str) -> str:
    """IsString + IsNotEmpty."""
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    if not value.strip():
        raise ValueError(f"{field} should not be empty")
    return value
