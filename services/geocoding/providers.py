"""
Reverse geocoding provider adapters.

Each adapter knows how to fetch one provider's raw payload, parse it into a
ProviderResult variant, and normalize that into a NormalizedLocation:

- GoogleGeocoder: Google Geocoding API, structured address_components
- NominatimGeocoder: OpenStreetMap Nominatim, display string plus a loose address dict
"""

import asyncio
import logging
import ssl
from typing import Any, Protocol

import aiohttp
import certifi
from geopy.adapters import AioHTTPAdapter
from geopy.exc import GeopyError
from geopy.geocoders import Nominatim

from core.config import settings

from .address_parser import (
    compose_display_address,
    extract_components,
    find_postal_code,
    guess_city_from_address,
    is_plus_code,
    resolve_city,
)
from .errors import ProviderDenied, ProviderUnavailable
from .models import (
    AddressComponents,
    Coordinates,
    GoogleResult,
    NominatimResult,
    NormalizedLocation,
    ProviderCandidate,
    ProviderResult,
)

logger = logging.getLogger(__name__)

DENIED_STATUSES = {"REQUEST_DENIED", "INVALID_REQUEST"}


def get_ssl_context():
    """Get SSL context for outbound provider requests"""
    return ssl.create_default_context(cafile=certifi.where())


class GeocodingProvider(Protocol):
    name: str

    async def fetch(self, coordinates: Coordinates) -> dict[str, Any] | None: ...

    def parse(self, raw: dict[str, Any]) -> ProviderResult | None: ...

    def normalize(self, result: ProviderResult, coordinates: Coordinates) -> NormalizedLocation: ...


class GoogleGeocoder:
    """Google Geocoding API adapter"""

    name = "google"

    def __init__(
        self,
        api_key: str,
        url: str | None = None,
        language: str | None = None,
        region: str | None = None,
        timeout: float | None = None,
        session: aiohttp.ClientSession | None = None,
    ):
        """
        Args:
            api_key: Google Maps API key
            url: Geocoding endpoint (defaults to settings.GOOGLE_GEOCODE_URL)
            language: Result language
            region: Region bias (ccTLD code)
            timeout: Total request timeout in seconds
            session: Optional shared aiohttp session; one is opened per call otherwise
        """
        self.api_key = api_key
        self.url = url or settings.GOOGLE_GEOCODE_URL
        self.language = language or settings.GEOCODING_LANGUAGE
        self.region = region or settings.GEOCODING_REGION
        self.timeout = timeout if timeout is not None else settings.GEOCODING_TIMEOUT
        self._session = session

    async def fetch(self, coordinates: Coordinates) -> dict[str, Any]:
        """
        Call the API and return the decoded payload.

        Raises:
            ProviderUnavailable: network error, timeout, non-2xx or undecodable body
            ProviderDenied: REQUEST_DENIED / INVALID_REQUEST status
        """
        params = {
            "latlng": f"{coordinates.latitude},{coordinates.longitude}",
            "key": self.api_key,
            "language": self.language,
            "region": self.region,
        }

        try:
            if self._session is not None:
                data = await self._get(self._session, params)
            else:
                async with aiohttp.ClientSession() as session:
                    data = await self._get(session, params)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise ProviderUnavailable(self.name, str(e) or type(e).__name__) from e

        if not isinstance(data, dict):
            raise ProviderUnavailable(self.name, "unexpected response body")

        status = data.get("status")
        logger.debug(f"Google geocode status {status} for {coordinates.latitude}, {coordinates.longitude}")
        if status in DENIED_STATUSES:
            raise ProviderDenied(self.name, status, data.get("error_message"))

        return data

    async def _get(self, session, params: dict[str, str]) -> Any:
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        async with session.get(
            self.url, params=params, ssl=get_ssl_context(), timeout=timeout
        ) as response:
            if not 200 <= response.status < 300:
                raise ProviderUnavailable(self.name, f"HTTP {response.status}")
            return await response.json(content_type=None)

    def parse(self, raw: dict[str, Any]) -> GoogleResult | None:
        """Parse a payload; None unless status is OK with at least one result"""
        if raw.get("status") != "OK":
            return None
        results = [r for r in raw.get("results") or [] if isinstance(r, dict)]
        if not results:
            return None

        candidates = [
            ProviderCandidate(
                formatted_address=result.get("formatted_address") or "",
                components=extract_components(result.get("address_components")),
                component_count=len(result.get("address_components") or []),
            )
            for result in results
        ]

        # Richest result that isn't a Plus Code; first result only if all of them are
        readable = [c for c in candidates if not is_plus_code(c.formatted_address)]
        best = max(readable, key=lambda c: c.component_count) if readable else candidates[0]

        return GoogleResult(candidates=candidates, best=best)

    def normalize(self, result: GoogleResult, coordinates: Coordinates) -> NormalizedLocation:
        best = result.best

        # Postal code may be missing from the best match; take the first one any match has
        postal_code = next(
            (c.components.postal_code for c in result.candidates if c.components.postal_code),
            "",
        )
        components = best.components

        city = resolve_city(components)
        state = components.administrative_area_level_1 or ""
        address = compose_display_address(
            best.formatted_address, components, city, state, postal_code
        )

        if not city:
            city = guess_city_from_address(address)

        return NormalizedLocation(
            formatted_address=address,
            city=city,
            state=state,
            postal_code=postal_code,
            coordinates=coordinates,
            provider="google",
        )


class NominatimGeocoder:
    """OpenStreetMap Nominatim adapter (geopy, aiohttp transport)"""

    name = "nominatim"

    CITY_FIELDS = ("city", "town", "village", "hamlet", "county")

    def __init__(
        self,
        user_agent: str | None = None,
        domain: str | None = None,
        timeout: float | None = None,
        geolocator=None,
    ):
        self.user_agent = user_agent or settings.NOMINATIM_USER_AGENT
        self.domain = domain or settings.NOMINATIM_DOMAIN
        self.timeout = timeout if timeout is not None else settings.GEOCODING_TIMEOUT
        self._geolocator = geolocator

    async def fetch(self, coordinates: Coordinates) -> dict[str, Any] | None:
        """
        Reverse geocode through geopy and return the raw place dict.

        Raises:
            ProviderUnavailable: any geopy error (timeouts, HTTP errors, bad responses)
        """
        try:
            if self._geolocator is not None:
                location = await self._reverse(self._geolocator, coordinates)
            else:
                async with Nominatim(
                    user_agent=self.user_agent,
                    domain=self.domain,
                    timeout=self.timeout,
                    ssl_context=get_ssl_context(),
                    adapter_factory=AioHTTPAdapter,
                ) as geolocator:
                    location = await self._reverse(geolocator, coordinates)
        except GeopyError as e:
            raise ProviderUnavailable(self.name, str(e) or type(e).__name__) from e

        if not location:
            logger.debug(f"Nominatim has no match for {coordinates.latitude}, {coordinates.longitude}")
            return None
        return location.raw

    async def _reverse(self, geolocator, coordinates: Coordinates):
        return await geolocator.reverse(
            (coordinates.latitude, coordinates.longitude),
            exactly_one=True,
            zoom=18,
            addressdetails=True,
        )

    def parse(self, raw: dict[str, Any]) -> NominatimResult | None:
        """Parse a place dict; None when it carries no display address"""
        display_name = raw.get("display_name") or ""
        if not display_name:
            return None

        address = raw.get("address")
        if not isinstance(address, dict):
            address = {}

        city = next((address[f] for f in self.CITY_FIELDS if address.get(f)), None)
        components = AddressComponents(
            locality=city,
            administrative_area_level_1=address.get("state") or None,
            postal_code=address.get("postcode") or None,
        )
        return NominatimResult(
            candidate=ProviderCandidate(
                formatted_address=display_name,
                components=components,
                component_count=len(address),
            )
        )

    def normalize(self, result: NominatimResult, coordinates: Coordinates) -> NormalizedLocation:
        candidate = result.candidate
        address = candidate.formatted_address
        components = candidate.components

        city = components.locality or guess_city_from_address(address, strict=True)
        postal_code = components.postal_code or find_postal_code(address)

        return NormalizedLocation(
            formatted_address=address,
            city=city,
            state=components.administrative_area_level_1 or "",
            postal_code=postal_code,
            coordinates=coordinates,
            provider="nominatim",
        )
