"""Location directory client package"""

from .client import LocationDirectoryClient, LocationDirectoryError
from .models import (
    LocationCity,
    LocationDistrict,
    LocationMatch,
    LocationSearchResult,
    LocationState,
    LocationValidation,
    PincodeLookup,
)

__all__ = [
    "LocationDirectoryClient",
    "LocationDirectoryError",
    "LocationCity",
    "LocationDistrict",
    "LocationMatch",
    "LocationSearchResult",
    "LocationState",
    "LocationValidation",
    "PincodeLookup",
]
