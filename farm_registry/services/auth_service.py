"""
Auth service - login, bearer credential validation and expired token purge.
Issued tokens are stored; a token is valid only while its stored row exists and has not expired.
"""

import logging

from farm_registry.core.security import create_access_token, decode_access_token, verify_password
from farm_registry.core.timeutils import ensure_utc, utcnow
from farm_registry.db.models.access_token import AccessToken
from farm_registry.db.models.user import User
from farm_registry.db.repositories.access_token_repository import AccessTokenRepository
from farm_registry.db.repositories.user_repository import UserRepository
from farm_registry.exceptions import UnauthorizedError, UnprocessableEntityError
from farm_registry.schemas.user import LoginRequest

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid user email or password"
UNAUTHORIZED = "Unauthorized user."


class AuthService:
    def __init__(self, user_repo: UserRepository, token_repo: AccessTokenRepository):
        self.user_repo = user_repo
        self.token_repo = token_repo

    async def login(self, data: LoginRequest) -> AccessToken:
        user = await self.user_repo.get_by_email(data.email)
        if user is None or not verify_password(data.password, user.hashed_password):
            raise UnprocessableEntityError(INVALID_CREDENTIALS)
        token, expires_at = create_access_token(user.id, {"email": user.email})
        access_token = await self.token_repo.add(AccessToken(token=token, user_id=user.id, expires_at=expires_at))
        logger.info("User %s logged in", user.id)
        return access_token

    async def authenticate(self, token: str | None) -> User:
        """Resolve a raw bearer token to its user or raise UnauthorizedError."""
        if not token or decode_access_token(token) is None:
            raise UnauthorizedError(UNAUTHORIZED)
        access_token = await self.token_repo.get_by_token_with_user(token)
        if access_token is None or ensure_utc(access_token.expires_at) <= utcnow():
            raise UnauthorizedError(UNAUTHORIZED)
        return access_token.user

    async def purge_expired_tokens(self) -> int:
        removed = await self.token_repo.delete_expired(utcnow())
        logger.info("Purged %d expired access tokens", removed)
        return removed
