"""
Geo gateway tests - Nominatim and OSRM clients against httpx.MockTransport.
"""

import httpx
import pytest

from farm_registry.exceptions import UnprocessableEntityError, UpstreamServiceError
from farm_registry.services.coordinates import Coordinates
from farm_registry.services.distance import OsrmDistanceGateway
from farm_registry.services.geocoding import NominatimGeocoder

BUDAPEST = Coordinates(47.4979, 19.0402)
SZOLNOK = Coordinates(47.1621, 20.1825)
SZEGED = Coordinates(46.2530, 20.1414)


def geocoder_with(handler) -> NominatimGeocoder:
    return NominatimGeocoder("https://geo.test", "farm-registry-tests", transport=httpx.MockTransport(handler))


def router_with(handler) -> OsrmDistanceGateway:
    return OsrmDistanceGateway("http://router.test/", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_geocode_parses_lat_lon_in_order():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        seen["agent"] = request.headers["user-agent"]
        return httpx.Response(200, json=[{"lat": "47.4979", "lon": "19.0402", "display_name": "Budapest"}])

    coordinates = await geocoder_with(handler).geocode("Budapest")

    assert coordinates == BUDAPEST
    assert seen["url"].path == "/search"
    assert seen["url"].params["q"] == "Budapest"
    assert seen["url"].params["limit"] == "1"
    assert seen["agent"] == "farm-registry-tests"


@pytest.mark.asyncio
async def test_geocode_without_match_is_unprocessable():
    geocoder = geocoder_with(lambda request: httpx.Response(200, json=[]))
    with pytest.raises(UnprocessableEntityError, match="Invalid address. Geo location not found."):
        await geocoder.geocode("nowhere")


@pytest.mark.asyncio
async def test_geocode_server_error_is_upstream_failure():
    geocoder = geocoder_with(lambda request: httpx.Response(502, text="bad gateway"))
    with pytest.raises(UpstreamServiceError):
        await geocoder.geocode("Budapest")


@pytest.mark.asyncio
async def test_geocode_error_object_is_upstream_failure():
    geocoder = geocoder_with(lambda request: httpx.Response(200, json={"error": "Unable to geocode"}))
    with pytest.raises(UpstreamServiceError, match="Error from https://geo.test."):
        await geocoder.geocode("Budapest")


@pytest.mark.asyncio
async def test_geocode_match_without_coordinates_is_upstream_failure():
    geocoder = geocoder_with(lambda request: httpx.Response(200, json=[{"display_name": "Budapest"}]))
    with pytest.raises(UpstreamServiceError):
        await geocoder.geocode("Budapest")


@pytest.mark.asyncio
async def test_distances_request_and_row():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        return httpx.Response(200, json={"code": "Ok", "distances": [[0, 101234.5, 171000.2]]})

    row = await router_with(handler).distances([BUDAPEST, SZOLNOK, SZEGED])

    assert row == [0.0, 101234.5, 171000.2]
    # OSRM takes lon,lat pairs
    assert seen["url"].path == "/table/v1/driving/19.0402,47.4979;20.1825,47.1621;20.1414,46.253"
    assert seen["url"].params["annotations"] == "distance"
    assert seen["url"].params["sources"] == "0"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, text="oops"),
        httpx.Response(200, text="not json"),
        httpx.Response(200, json={"code": "InvalidQuery", "message": "Query string malformed"}),
        httpx.Response(200, json={"code": "Ok", "distances": []}),
        httpx.Response(200, json={"code": "Ok", "distances": [[0, 1.0]]}),
        httpx.Response(200, json={"code": "Ok", "distances": [[0, None, 2.0]]}),
    ],
    ids=["status", "not-json", "osrm-error", "no-rows", "short-row", "unroutable"],
)
async def test_distances_failures_are_upstream_errors(response):
    gateway = router_with(lambda request: response)
    with pytest.raises(UpstreamServiceError, match="Error from http://router.test/table/v1/driving."):
        await gateway.distances([BUDAPEST, SZOLNOK, SZEGED])


@pytest.mark.asyncio
async def test_distances_transport_error_is_upstream_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamServiceError):
        await router_with(handler).distances([BUDAPEST, SZOLNOK])
