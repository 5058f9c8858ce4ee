"""
Geocoder gateway - resolves a free-text address to coordinates.
Backed by OpenStreetMap Nominatim; called once per user registration and farm creation.
"""

import logging
from typing import Protocol

import httpx

from farm_registry.exceptions import UnprocessableEntityError, UpstreamServiceError
from farm_registry.services.coordinates import Coordinates

logger = logging.getLogger(__name__)

ADDRESS_NOT_FOUND = "Invalid address. Geo location not found."


class Geocoder(Protocol):
    async def geocode(self, address: str) -> Coordinates: ...


class NominatimGeocoder:
    """Nominatim `/search` client. Takes the best (first) match for an address."""

    def __init__(
        self,
        base_url: str,
        user_agent: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout
        self.transport = transport

    async def geocode(self, address: str) -> Coordinates:
        url = f"{self.base_url}/search"
        logger.debug("geocode: address=%r url=%s", address, url)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(
                    url,
                    params={"q": address, "format": "json", "limit": 1},
                    headers={"User-Agent": self.user_agent},
                )
                response.raise_for_status()
                matches = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("geocode failed: address=%r error=%s", address, e)
            raise UpstreamServiceError(f"Error from {self.base_url}.") from e

        # Nominatim reports failures as a JSON object, matches come as a list
        if not isinstance(matches, list):
            logger.warning("geocode: unexpected response for address=%r: %r", address, matches)
            raise UpstreamServiceError(f"Error from {self.base_url}.")
        if not matches:
            raise UnprocessableEntityError(ADDRESS_NOT_FOUND)
        best = matches[0]
        try:
            return Coordinates(float(best["lat"]), float(best["lon"]))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("geocode: malformed match for address=%r: %r", address, best)
            raise UpstreamServiceError(f"Error from {self.base_url}.") from e
