"""Exceptions for geocoding operations."""


class GeocodingError(Exception):
    """Base class for geocoding failures."""


class ProviderUnavailable(GeocodingError):
    """Raised when a provider cannot be reached, times out, or answers non-2xx."""

    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider}: {message}")
        self.provider = provider


class ProviderDenied(GeocodingError):
    """Raised when a provider rejects the request (bad key, invalid request)."""

    def __init__(self, provider: str, status: str, message: str | None = None):
        super().__init__(f"{provider}: {status}" + (f" ({message})" if message else ""))
        self.provider = provider
        self.status = status


class InvalidCoordinates(GeocodingError, ValueError):
    """Raised for out-of-range or non-finite latitude/longitude."""

    def __init__(self, latitude: float, longitude: float):
        super().__init__(f"Invalid coordinates: ({latitude}, {longitude})")
        self.latitude = latitude
        self.longitude = longitude
