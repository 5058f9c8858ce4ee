from farm_registry.db.models.access_token import AccessToken
from farm_registry.db.models.farm import Farm
from farm_registry.db.models.user import User

__all__ = ["AccessToken", "Farm", "User"]
