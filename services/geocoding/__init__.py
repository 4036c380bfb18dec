"""Geocoding service package"""

from .errors import GeocodingError, InvalidCoordinates, ProviderDenied, ProviderUnavailable
from .geometry import (
    bounding_box,
    calculate_distance,
    distance_km,
    format_distance,
    is_valid_coordinate,
    is_within_bounds,
)
from .models import AddressComponents, BoundingBox, Coordinates, NormalizedLocation
from .providers import GoogleGeocoder, NominatimGeocoder
from .service import GeocodingService, reverse_geocode

__all__ = [
    "AddressComponents",
    "BoundingBox",
    "Coordinates",
    "NormalizedLocation",
    "GeocodingError",
    "InvalidCoordinates",
    "ProviderDenied",
    "ProviderUnavailable",
    "GoogleGeocoder",
    "NominatimGeocoder",
    "GeocodingService",
    "reverse_geocode",
    "bounding_box",
    "calculate_distance",
    "distance_km",
    "format_distance",
    "is_valid_coordinate",
    "is_within_bounds",
]
