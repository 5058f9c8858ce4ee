"""
User model - identity, credentials and the geocoded home location.
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Float, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from farm_registry.core.timeutils import utcnow
from farm_registry.db.base import Base
from farm_registry.services.coordinates import Coordinates

if TYPE_CHECKING:
    from farm_registry.db.models.access_token import AccessToken
    from farm_registry.db.models.farm import Farm


class User(Base):
    """User entity. Coordinates are resolved once at registration and never recomputed."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    farms: Mapped[list["Farm"]] = relationship("Farm", back_populates="user")
    access_tokens: Mapped[list["AccessToken"]] = relationship("AccessToken", back_populates="user")

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(self.latitude, self.longitude)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
