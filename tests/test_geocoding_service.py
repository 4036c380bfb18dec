"""Tests for reverse geocoding fallback"""

import asyncio

import pytest
from geopy.exc import GeocoderTimedOut

from conftest import GOOGLE_URL, FakeGeolocator, FakeResponse, FakeSession
from services.geocoding import GeocodingService, InvalidCoordinates
from services.geocoding.providers import GoogleGeocoder, NominatimGeocoder
from services.geocoding.service import default_providers


class ExplodingProvider:
    name = "exploding"

    def __init__(self, error):
        self.error = error
        self.calls = 0

    async def fetch(self, coordinates):
        self.calls += 1
        raise self.error

    def parse(self, raw):
        return None

    def normalize(self, result, coordinates):
        raise AssertionError("never reached")


def google(payload=None, status=200, error=None):
    response = error if error is not None else FakeResponse(payload, status=status)
    return GoogleGeocoder(api_key="test-key", url=GOOGLE_URL, session=FakeSession({GOOGLE_URL: response}))


def nominatim(raw=None, error=None):
    return NominatimGeocoder(geolocator=FakeGeolocator(raw=raw, error=error))


@pytest.mark.asyncio
async def test_google_success_skips_nominatim(pune_plus_code_payload, nominatim_raw):
    fallback = nominatim(nominatim_raw)
    service = GeocodingService(providers=[google(pune_plus_code_payload), fallback])

    location = await service.reverse_geocode(18.5204, 73.8567)

    assert location.provider == "google"
    assert location.city == "Pune"
    assert location.state == "Maharashtra"
    assert location.postal_code == "411001"
    assert location.formatted_address == "Pune, Maharashtra, 411001 (GWQ4+2H)"
    assert fallback._geolocator.calls == []


@pytest.mark.asyncio
async def test_denied_google_falls_back_to_nominatim(nominatim_raw):
    service = GeocodingService(
        providers=[google({"status": "REQUEST_DENIED"}), nominatim(nominatim_raw)]
    )

    location = await service.reverse_geocode(18.5204, 73.8567)

    assert location.provider == "nominatim"
    assert location.postal_code == "411030"


@pytest.mark.asyncio
async def test_zero_results_falls_back_to_nominatim(nominatim_raw):
    service = GeocodingService(
        providers=[google({"status": "ZERO_RESULTS", "results": []}), nominatim(nominatim_raw)]
    )

    location = await service.reverse_geocode(18.5204, 73.8567)
    assert location.provider == "nominatim"


@pytest.mark.asyncio
async def test_timeouts_everywhere_degrade_to_gps_location():
    service = GeocodingService(
        providers=[google(error=asyncio.TimeoutError()), nominatim(error=GeocoderTimedOut("timed out"))]
    )

    location = await service.reverse_geocode(18.5204, 73.8567)

    assert location.provider == "gps"
    assert location.formatted_address == "GPS Location (18.520400, 73.856700)"
    assert location.city == ""
    assert location.state == ""
    assert location.postal_code == ""
    assert location.coordinates.latitude == 18.5204


@pytest.mark.asyncio
async def test_no_address_anywhere_degrades():
    service = GeocodingService(providers=[nominatim()])

    location = await service.reverse_geocode(0, 0)
    assert location.formatted_address == "GPS Location (0.000000, 0.000000)"


@pytest.mark.asyncio
async def test_unexpected_provider_error_still_degrades(nominatim_raw):
    broken = ExplodingProvider(KeyError("results"))
    service = GeocodingService(providers=[broken, nominatim(nominatim_raw)])

    location = await service.reverse_geocode(18.5204, 73.8567)

    assert broken.calls == 1
    assert location.provider == "nominatim"


@pytest.mark.asyncio
async def test_cancellation_is_not_swallowed():
    service = GeocodingService(providers=[ExplodingProvider(asyncio.CancelledError())])

    with pytest.raises(asyncio.CancelledError):
        await service.reverse_geocode(18.5204, 73.8567)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "lat, lon",
    [(91, 0), (-90.5, 0), (0, 180.1), (float("nan"), 0), (0, float("-inf"))],
)
async def test_invalid_coordinates_raise_before_any_provider(lat, lon):
    provider = ExplodingProvider(AssertionError("provider should not be called"))
    service = GeocodingService(providers=[provider])

    with pytest.raises(InvalidCoordinates):
        await service.reverse_geocode(lat, lon)
    assert provider.calls == 0


@pytest.mark.asyncio
async def test_boundary_coordinates_are_accepted():
    service = GeocodingService(providers=[])

    location = await service.reverse_geocode(90, -180)
    assert location.formatted_address == "GPS Location (90.000000, -180.000000)"


def test_default_providers_with_key():
    providers = default_providers(google_api_key="test-key", timeout=3)

    assert [p.name for p in providers] == ["google", "nominatim"]
    assert providers[0].timeout == 3


def test_default_providers_without_key_uses_nominatim_only():
    providers = default_providers(google_api_key="")
    assert [p.name for p in providers] == ["nominatim"]


def test_service_uses_configured_timeout():
    service = GeocodingService(google_api_key="test-key", timeout=7)
    assert all(p.timeout == 7 for p in service.providers)
