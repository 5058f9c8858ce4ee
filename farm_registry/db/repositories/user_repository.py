"""
User repository - user lookups used by registration and login.
"""

from sqlalchemy import select

from farm_registry.db.models.user import User
from farm_registry.db.repositories.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    def __init__(self, session):
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> User | None:
        """Find user by email - used for authentication and duplicate checks."""
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()
