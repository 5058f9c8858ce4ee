"""
Farm service - farm creation, deletion and the listing pipeline.
Depends on the farm repository and the geo gateways passed in by the caller;
never builds its own collaborators.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.exc import IntegrityError

from farm_registry.db.models.farm import Farm
from farm_registry.db.models.user import User
from farm_registry.db.repositories.farm_repository import FarmRepository
from farm_registry.exceptions import (
    ForbiddenError,
    NotFoundError,
    UnprocessableEntityError,
    UpstreamServiceError,
)
from farm_registry.schemas.farm import FarmCreate, FarmListItem, FarmResponse
from farm_registry.services.distance import DistanceGateway
from farm_registry.services.geocoding import Geocoder
from farm_registry.services.outliers import DEFAULT_DEVIATION, exclude_outliers
from farm_registry.services.sorting import SortBy, sort_by

logger = logging.getLogger(__name__)

DUPLICATE_FARM = "A farm with the same name and address already exists."


@dataclass
class ExtendedFarm:
    """A farm merged with its owner's email and the driving distance from the requester. Request-scoped."""

    id: uuid.UUID
    address: str
    name: str
    size: float
    yield_: float
    created_at: datetime
    updated_at: datetime
    owner: str
    driving_distance: float

    @classmethod
    def from_farm(cls, farm: Farm, driving_distance: float) -> "ExtendedFarm":
        return cls(
            id=farm.id,
            address=farm.address,
            name=farm.name,
            size=farm.size,
            yield_=farm.yield_,
            created_at=farm.created_at,
            updated_at=farm.updated_at,
            owner=farm.user.email if farm.user is not None else "",
            driving_distance=driving_distance,
        )


class FarmService:
    """Handles farm use cases: create, list (distance, outliers, sort), delete."""

    def __init__(
        self,
        farm_repo: FarmRepository,
        distance_gateway: DistanceGateway,
        geocoder: Geocoder,
        outlier_deviation: float = DEFAULT_DEVIATION,
    ):
        self.farm_repo = farm_repo
        self.distance_gateway = distance_gateway
        self.geocoder = geocoder
        self.outlier_deviation = outlier_deviation

    async def create_farm(self, data: FarmCreate, user: User) -> FarmResponse:
        """Reject duplicates before geocoding, then persist with the resolved coordinates."""
        if await self.farm_repo.get_by_address_and_name(data.address, data.name):
            raise UnprocessableEntityError(DUPLICATE_FARM)
        coordinates = await self.geocoder.geocode(data.address)
        farm = Farm(
            user_id=user.id,
            address=data.address,
            name=data.name,
            size=data.size,
            yield_=data.yield_,
            latitude=coordinates.latitude,
            longitude=coordinates.longitude,
        )
        try:
            farm = await self.farm_repo.add(farm)
        except IntegrityError as e:
            # lost a race with a concurrent insert of the same (address, name)
            logger.info("Duplicate farm insert rejected: address=%r name=%r", data.address, data.name)
            raise UnprocessableEntityError(DUPLICATE_FARM) from e
        logger.info("Farm %s created by user %s", farm.id, user.id)
        return FarmResponse.model_validate(farm)

    async def list_farms(
        self,
        user: User,
        include_outliers: bool = False,
        sort_key: SortBy | None = None,
    ) -> list[FarmListItem]:
        farms = await self.farm_repo.get_all_with_owner()
        if not farms:
            raise NotFoundError("Farms not found.")

        records = await self._extend(user, farms)
        if not include_outliers:
            records = exclude_outliers(records, "yield_", self.outlier_deviation)
        if sort_key is not None:
            records = sort_by(records, sort_key)
            if sort_key is SortBy.CREATED_AT:
                # newest first
                records.reverse()
        return [FarmListItem.model_validate(r) for r in records]

    async def delete_farm(self, farm_id: uuid.UUID, user: User) -> FarmResponse:
        """Only the owner may delete. Returns the farm as it was before deletion."""
        farm = await self.farm_repo.get_by_id(farm_id)
        if farm is None:
            raise NotFoundError("Farm not found.")
        if farm.user_id != user.id:
            raise ForbiddenError("User is not the owner of the Farm.")
        snapshot = FarmResponse.model_validate(farm)
        await self.farm_repo.delete(farm)
        logger.info("Farm %s deleted by user %s", farm_id, user.id)
        return snapshot

    async def _extend(self, user: User, farms: list[Farm]) -> list[ExtendedFarm]:
        """One distance call for the requester plus every farm; alignment is positional."""
        row = await self.distance_gateway.distances([user.coordinates, *(f.coordinates for f in farms)])
        if len(row) != len(farms) + 1:
            raise UpstreamServiceError(
                f"Distance service returned {len(row)} distances for {len(farms) + 1} coordinates."
            )
        # row[0] is the requester's distance to itself
        return [ExtendedFarm.from_farm(farm, distance) for farm, distance in zip(farms, row[1:])]
