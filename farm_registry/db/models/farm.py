"""
Farm model - owned by exactly one user; (address, name) is unique system-wide.
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Float, ForeignKey, Numeric, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from farm_registry.core.timeutils import utcnow
from farm_registry.db.base import Base
from farm_registry.services.coordinates import Coordinates

if TYPE_CHECKING:
    from farm_registry.db.models.user import User


class Farm(Base):
    """Farm entity. Size and yield keep two fraction digits; read back as float."""

    __tablename__ = "farms"
    __table_args__ = (UniqueConstraint("address", "name", name="uq_farms_address_name"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    size: Mapped[float] = mapped_column(Numeric(7, 2, asdecimal=False), nullable=False)
    yield_: Mapped[float] = mapped_column("yield", Numeric(7, 2, asdecimal=False), nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    user: Mapped["User"] = relationship("User", back_populates="farms")

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(self.latitude, self.longitude)

    def __repr__(self) -> str:
        return f"<Farm(id={self.id}, name={self.name})>"
