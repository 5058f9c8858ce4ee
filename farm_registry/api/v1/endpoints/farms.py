"""
Farm endpoints - create, list (distance, outliers, sorting) and delete.
Thin controllers; FarmService holds the logic.
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from pydantic import ValidationError

from farm_registry.core.dependencies import CurrentUser, get_farm_service
from farm_registry.exceptions import bad_request_from_errors
from farm_registry.schemas.farm import FarmCreate, FarmListItem, FarmListQuery, FarmResponse
from farm_registry.services.farm_service import FarmService

router = APIRouter()

FarmServiceDep = Annotated[FarmService, Depends(get_farm_service)]


def _parse_list_query(
    outliers: str | None = Query(None, description="true to keep yield outliers"),
    sort_by: str | None = Query(None, alias="sortBy", description="name | createdAt | drivingDistance"),
) -> FarmListQuery:
    try:
        return FarmListQuery.model_validate({"outliers": outliers, "sortBy": sort_by})
    except ValidationError as e:
        raise bad_request_from_errors(e.errors()) from e


@router.get("", response_model=list[FarmListItem])
async def list_farms(
    user: CurrentUser,
    svc: FarmServiceDep,
    query: Annotated[FarmListQuery, Depends(_parse_list_query)],
):
    """All farms with owner email and driving distance from the requester."""
    return await svc.list_farms(user, include_outliers=query.outliers, sort_key=query.sort_by)


@router.post("", response_model=FarmResponse, status_code=status.HTTP_201_CREATED)
async def create_farm(user: CurrentUser, svc: FarmServiceDep, data: FarmCreate):
    return await svc.create_farm(data, user)


@router.delete("/{farm_id}", response_model=FarmResponse)
async def delete_farm(user: CurrentUser, svc: FarmServiceDep, farm_id: uuid.UUID):
    """Owner-only delete. Returns the deleted farm."""
    return await svc.delete_farm(farm_id, user)
