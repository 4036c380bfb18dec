from services.geocoding import GeocodingService
from services.location_directory import LocationDirectoryClient


def get_geocoding_service() -> GeocodingService:
    """Fresh geocoding service per request; it holds configuration only"""
    return GeocodingService()


def get_location_directory() -> LocationDirectoryClient:
    """Location directory client for the configured LOCATION_API_URL"""
    return LocationDirectoryClient()
