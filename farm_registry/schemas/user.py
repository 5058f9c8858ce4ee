"""User and auth request/response schemas - API contract and validation."""

import uuid
from datetime import datetime

from pydantic import EmailStr, Field, field_serializer, field_validator

from farm_registry.schemas.base import ApiModel, iso_utc, require_string


class UserCreate(ApiModel):
    email: EmailStr
    # bcrypt accepts max 72 bytes; longer passwords are rejected here instead of failing in hashing.
    password: str = Field(..., min_length=1, max_length=72)
    address: str

    @field_validator("address", mode="before")
    @classmethod
    def _address(cls, value):
        return require_string(value, "address")


class UserResponse(ApiModel):
    id: uuid.UUID
    email: str
    address: str
    created_at: datetime
    updated_at: datetime

    @field_serializer("created_at", "updated_at")
    def _timestamp(self, value: datetime) -> str:
        return iso_utc(value)


class LoginRequest(ApiModel):
    email: str
    password: str


class AccessTokenResponse(ApiModel):
    token: str
    token_type: str = "bearer"
    expires_at: datetime

    @field_serializer("expires_at")
    def _timestamp(self, value: datetime) -> str:
        return iso_utc(value)
