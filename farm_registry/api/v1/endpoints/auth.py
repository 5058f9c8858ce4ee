"""
Auth endpoints - login issues a stored bearer token.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from farm_registry.core.dependencies import get_auth_service
from farm_registry.schemas.user import AccessTokenResponse, LoginRequest
from farm_registry.services.auth_service import AuthService

router = APIRouter()


@router.post("/login", response_model=AccessTokenResponse)
async def login(data: LoginRequest, auth: Annotated[AuthService, Depends(get_auth_service)]):
    access_token = await auth.login(data)
    return AccessTokenResponse(token=access_token.token, expires_at=access_token.expires_at)
