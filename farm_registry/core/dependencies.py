"""
FastAPI dependencies - gateways, services and the authenticated user.
Tests replace the gateway providers through app.dependency_overrides.
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from farm_registry.config import get_settings
from farm_registry.db.models.user import User
from farm_registry.db.repositories import AccessTokenRepository, FarmRepository, UserRepository
from farm_registry.db.session import DbSession
from farm_registry.services.auth_service import AuthService
from farm_registry.services.distance import DistanceGateway, OsrmDistanceGateway
from farm_registry.services.farm_service import FarmService
from farm_registry.services.geocoding import Geocoder, NominatimGeocoder
from farm_registry.services.user_service import UserService

# auto_error=False: a missing header must be a 401 in our envelope, not FastAPI's 403
security = HTTPBearer(auto_error=False)


def get_geocoder() -> Geocoder:
    settings = get_settings()
    return NominatimGeocoder(
        settings.geocoder_url,
        settings.geocoder_user_agent,
        timeout=settings.http_timeout_seconds,
    )


def get_distance_gateway() -> DistanceGateway:
    settings = get_settings()
    return OsrmDistanceGateway(settings.distance_url, timeout=settings.http_timeout_seconds)


GeocoderDep = Annotated[Geocoder, Depends(get_geocoder)]
DistanceGatewayDep = Annotated[DistanceGateway, Depends(get_distance_gateway)]


def get_auth_service(session: DbSession) -> AuthService:
    return AuthService(UserRepository(session), AccessTokenRepository(session))


def get_user_service(session: DbSession, geocoder: GeocoderDep) -> UserService:
    return UserService(UserRepository(session), geocoder)


def get_farm_service(session: DbSession, distance_gateway: DistanceGatewayDep, geocoder: GeocoderDep) -> FarmService:
    return FarmService(
        FarmRepository(session),
        distance_gateway,
        geocoder,
        outlier_deviation=get_settings().outlier_deviation,
    )


async def get_current_user(
    auth: Annotated[AuthService, Depends(get_auth_service)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> User:
    """Resolve the bearer token to a user. Raises UnauthorizedError if missing, invalid or expired."""
    return await auth.authenticate(credentials.credentials if credentials else None)


CurrentUser = Annotated[User, Depends(get_current_user)]
