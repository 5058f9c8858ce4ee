"""Coordinate pair shared by the geocoder, the distance gateway and the models."""

from typing import NamedTuple


class Coordinates(NamedTuple):
    """(latitude, longitude) in decimal degrees. This order is used everywhere in the app."""

    latitude: float
    longitude: float
