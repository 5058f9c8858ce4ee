"""
User endpoints - registration.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from farm_registry.core.dependencies import get_user_service
from farm_registry.schemas.user import UserCreate, UserResponse
from farm_registry.services.user_service import UserService

router = APIRouter()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(data: UserCreate, svc: Annotated[UserService, Depends(get_user_service)]):
    """Create a user; the address is geocoded once and stored."""
    return await svc.create_user(data)
