"""
Access token repository - bearer credential lookups and expiry purge.
"""

from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.orm import selectinload

from farm_registry.db.models.access_token import AccessToken
from farm_registry.db.repositories.base_repository import BaseRepository


class AccessTokenRepository(BaseRepository[AccessToken]):
    def __init__(self, session):
        super().__init__(session, AccessToken)

    async def get_by_token_with_user(self, token: str) -> AccessToken | None:
        result = await self.session.execute(
            select(AccessToken).where(AccessToken.token == token).options(selectinload(AccessToken.user))
        )
        return result.scalar_one_or_none()

    async def delete_expired(self, now: datetime) -> int:
        """Remove tokens whose expiry is at or before `now`. Returns the number removed."""
        result = await self.session.execute(delete(AccessToken).where(AccessToken.expires_at <= now))
        return result.rowcount or 0
