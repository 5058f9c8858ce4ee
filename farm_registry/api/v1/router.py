"""
API v1 router - aggregates all endpoint modules.
"""

from fastapi import APIRouter

from farm_registry.api.v1.endpoints import auth, farms, health, users

api_router = APIRouter(prefix="/v1")

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(farms.router, prefix="/farms", tags=["farms"])
