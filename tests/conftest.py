"""Shared fakes for provider and directory HTTP traffic"""

import pytest
from geopy.location import Location


class FakeResponse:
    """Minimal stand-in for an aiohttp response context manager"""

    def __init__(self, payload=None, status=200):
        self.payload = payload
        self.status = status

    async def json(self, content_type="application/json"):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """Routes GETs by URL to canned responses or exceptions"""

    def __init__(self, routes=None):
        self.routes = routes or {}
        self.calls = []

    def get(self, url, params=None, **kwargs):
        self.calls.append((url, params))
        response = self.routes.get(url, FakeResponse(status=404))
        if isinstance(response, Exception):
            raise response
        return response


class FakeGeolocator:
    """Stands in for geopy's Nominatim geocoder"""

    def __init__(self, raw=None, error=None):
        self.raw = raw
        self.error = error
        self.calls = []

    async def reverse(self, query, **kwargs):
        self.calls.append((query, kwargs))
        if self.error is not None:
            raise self.error
        if self.raw is None:
            return None
        lat, lon = query
        return Location(self.raw.get("display_name", ""), (lat, lon, 0), self.raw)


GOOGLE_URL = "https://geo.test/maps/api/geocode/json"
DIRECTORY_URL = "https://directory.test"


@pytest.fixture
def pune_plus_code_payload():
    """Google answer whose formatted address is only a Plus Code and city"""
    return {
        "status": "OK",
        "results": [
            {
                "formatted_address": "GWQ4+2H Pune, Maharashtra, India",
                "address_components": [
                    {"long_name": "GWQ4+2H", "short_name": "GWQ4+2H", "types": ["plus_code"]},
                    {"long_name": "Pune", "short_name": "Pune", "types": ["locality", "political"]},
                    {
                        "long_name": "Maharashtra",
                        "short_name": "MH",
                        "types": ["administrative_area_level_1", "political"],
                    },
                    {"long_name": "India", "short_name": "IN", "types": ["country", "political"]},
                    {"long_name": "411001", "short_name": "411001", "types": ["postal_code"]},
                ],
            }
        ],
    }


@pytest.fixture
def nominatim_raw():
    return {
        "display_name": "Shaniwar Wada, Shaniwar Peth, Pune City, Pune, Maharashtra, 411030, India",
        "address": {
            "tourism": "Shaniwar Wada",
            "suburb": "Shaniwar Peth",
            "city": "Pune",
            "state": "Maharashtra",
            "postcode": "411030",
            "country": "India",
        },
    }
