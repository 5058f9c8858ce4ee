"""
Farm repository - the farm store used by the listing pipeline and farm CRUD.
Owner loading is explicit (selectinload) so nothing lazy-loads inside async code.
"""

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from farm_registry.db.models.farm import Farm
from farm_registry.db.repositories.base_repository import BaseRepository


class FarmRepository(BaseRepository[Farm]):
    def __init__(self, session):
        super().__init__(session, Farm)

    async def get_all_with_owner(self) -> list[Farm]:
        """Every farm with its owner, in creation order."""
        result = await self.session.execute(
            select(Farm).options(selectinload(Farm.user)).order_by(Farm.created_at, Farm.id)
        )
        return list(result.scalars().all())

    async def get_by_address_and_name(self, address: str, name: str) -> Farm | None:
        result = await self.session.execute(
            select(Farm).where(Farm.address == address, Farm.name == name)
        )
        return result.scalar_one_or_none()
