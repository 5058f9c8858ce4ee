"""
Distance gateway - one row of road distances from an origin to many destinations.
Backed by the OSRM table service (`annotations=distance`, metres).
"""

import logging
from typing import Protocol, Sequence

import httpx

from farm_registry.exceptions import UpstreamServiceError
from farm_registry.services.coordinates import Coordinates

logger = logging.getLogger(__name__)


class DistanceGateway(Protocol):
    async def distances(self, coordinates: Sequence[Coordinates]) -> list[float]: ...


def _osrm_path(coordinates: Sequence[Coordinates]) -> str:
    # OSRM expects "lon,lat" pairs joined by ";"
    return ";".join(f"{c.longitude},{c.latitude}" for c in coordinates)


class OsrmDistanceGateway:
    """
    Returns distances from coordinates[0] to every entry of `coordinates`, in input order.
    Entry 0 is the origin itself (0.0). Any failure aborts with UpstreamServiceError; no retry.
    """

    def __init__(
        self,
        base_url: str,
        profile: str = "driving",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.profile = profile
        self.timeout = timeout
        self.transport = transport

    @property
    def table_url(self) -> str:
        return f"{self.base_url}/table/v1/{self.profile}"

    async def distances(self, coordinates: Sequence[Coordinates]) -> list[float]:
        url = f"{self.table_url}/{_osrm_path(coordinates)}"
        logger.debug("distances: %d coordinates url=%s", len(coordinates), self.table_url)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(url, params={"annotations": "distance", "sources": "0"})
                response.raise_for_status()
                body = response.json()
            if body.get("code") != "Ok":
                raise ValueError(f"OSRM code {body.get('code')!r}: {body.get('message', '')}")
            row = body["distances"][0]
            if len(row) != len(coordinates):
                raise ValueError(f"expected {len(coordinates)} distances, got {len(row)}")
            return [float(d) for d in row]
        except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
            logger.warning("distances failed: url=%s error=%s", self.table_url, e)
            raise UpstreamServiceError(f"Error from {self.table_url}.") from e
