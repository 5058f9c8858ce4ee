# Repository pattern: services receive these instead of a raw session

from farm_registry.db.repositories.access_token_repository import AccessTokenRepository
from farm_registry.db.repositories.farm_repository import FarmRepository
from farm_registry.db.repositories.user_repository import UserRepository

__all__ = ["AccessTokenRepository", "FarmRepository", "UserRepository"]
