"""Reverse geocoding with provider fallback"""

import logging

from core.config import settings

from .errors import InvalidCoordinates, ProviderDenied, ProviderUnavailable
from .geometry import is_valid_coordinate
from .models import Coordinates, NormalizedLocation
from .providers import GeocodingProvider, GoogleGeocoder, NominatimGeocoder

logger = logging.getLogger(__name__)


def default_providers(
    google_api_key: str | None = None,
    timeout: float | None = None,
) -> list[GeocodingProvider]:
    """Google first when a key is configured, Nominatim always as the fallback"""
    providers: list[GeocodingProvider] = []
    api_key = google_api_key if google_api_key is not None else settings.GOOGLE_MAPS_API_KEY
    if api_key:
        providers.append(GoogleGeocoder(api_key=api_key, timeout=timeout))
    providers.append(NominatimGeocoder(timeout=timeout))
    return providers


class GeocodingService:
    """
    Reverse geocoding service

    Asks each provider in order and returns the first usable result. A
    provider that errors, times out or denies the request is skipped without
    retrying. When every provider is exhausted the result degrades to a
    coordinate-only location, so callers always have something to show.
    """

    def __init__(
        self,
        google_api_key: str | None = None,
        timeout: float | None = None,
        providers: list[GeocodingProvider] | None = None,
    ):
        """
        Initialize geocoding service

        Args:
            google_api_key: Google Maps API key (or set GOOGLE_MAPS_API_KEY env var)
            timeout: Per-provider request timeout in seconds
            providers: Explicit provider order, overriding the defaults
        """
        self.timeout = timeout if timeout is not None else settings.GEOCODING_TIMEOUT
        if providers is None:
            providers = default_providers(google_api_key, self.timeout)
        self.providers = providers

    async def reverse_geocode(self, latitude: float, longitude: float) -> NormalizedLocation:
        """
        Convert coordinates to an address (reverse geocoding)

        Args:
            latitude: Latitude in decimal degrees
            longitude: Longitude in decimal degrees

        Returns:
            NormalizedLocation, degraded to "GPS Location (lat, lon)" if nothing resolves

        Raises:
            InvalidCoordinates: latitude/longitude out of range or not finite
        """
        if not is_valid_coordinate(latitude, longitude):
            raise InvalidCoordinates(latitude, longitude)

        coords = Coordinates(latitude=latitude, longitude=longitude)

        for provider in self.providers:
            try:
                raw = await provider.fetch(coords)
                result = provider.parse(raw) if raw else None
                if result is None:
                    logger.info(f"{provider.name} returned no usable address for {coords.latitude}, {coords.longitude}")
                    continue
                return provider.normalize(result, coords)
            except ProviderDenied as e:
                logger.warning(f"Geocoding provider denied request: {e}")
            except ProviderUnavailable as e:
                logger.warning(f"Geocoding provider unavailable: {e}")
            except Exception as e:
                logger.error(f"Unexpected {provider.name} geocoding error: {e}", exc_info=True)

        logger.info(f"All geocoding providers exhausted for {coords.latitude}, {coords.longitude}; using GPS location")
        return NormalizedLocation.degraded(coords)


async def reverse_geocode(latitude: float, longitude: float) -> NormalizedLocation:
    """Reverse geocode with the configured default providers"""
    return await GeocodingService().reverse_geocode(latitude, longitude)
