"""
User service - registration. The address is geocoded once here and stored with the user.
"""

import logging

from farm_registry.core.security import hash_password
from farm_registry.db.models.user import User
from farm_registry.db.repositories.user_repository import UserRepository
from farm_registry.exceptions import UnprocessableEntityError
from farm_registry.schemas.user import UserCreate, UserResponse
from farm_registry.services.geocoding import Geocoder

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, user_repo: UserRepository, geocoder: Geocoder):
        self.user_repo = user_repo
        self.geocoder = geocoder

    async def create_user(self, data: UserCreate) -> UserResponse:
        if await self.user_repo.get_by_email(data.email):
            raise UnprocessableEntityError("A user with this email already exists.")
        coordinates = await self.geocoder.geocode(data.address)
        user = User(
            email=data.email,
            hashed_password=hash_password(data.password),
            address=data.address,
            latitude=coordinates.latitude,
            longitude=coordinates.longitude,
        )
        user = await self.user_repo.add(user)
        logger.info("User %s registered", user.id)
        return UserResponse.model_validate(user)
