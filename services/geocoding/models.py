"""Pydantic models for geocoding"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class Coordinates(BaseModel):
    """Geographic coordinates"""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(
        ..., ge=-90, le=90, allow_inf_nan=False, description="Latitude in decimal degrees"
    )
    longitude: float = Field(
        ..., ge=-180, le=180, allow_inf_nan=False, description="Longitude in decimal degrees"
    )
    accuracy_meters: float | None = Field(
        None, ge=0, allow_inf_nan=False, description="Reported GPS accuracy radius"
    )


class BoundingBox(BaseModel):
    """Axis-aligned lat/lon rectangle, in degrees"""

    model_config = ConfigDict(frozen=True)

    north: float
    south: float
    east: float
    west: float


class AddressComponents(BaseModel):
    """
    Address slots extracted from a provider's component list.

    A slot is None when the provider did not return that kind of component,
    which is not the same thing as an empty string.
    """

    street_number: str | None = None
    route: str | None = None
    sublocality_level_2: str | None = None
    sublocality_level_1: str | None = None
    sublocality: str | None = None
    locality: str | None = None
    administrative_area_level_2: str | None = None
    administrative_area_level_1: str | None = None
    postal_code: str | None = None


class NormalizedLocation(BaseModel):
    """
    Canonical reverse geocoding output.

    String fields are never None; unresolved values are empty strings so
    forms can bind to them directly.
    """

    formatted_address: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    coordinates: Coordinates
    provider: Literal["google", "nominatim", "gps"] = "gps"

    @classmethod
    def degraded(cls, coordinates: Coordinates) -> "NormalizedLocation":
        """Coordinate-only location used when no provider could resolve an address"""
        return cls(
            formatted_address=(
                f"GPS Location ({coordinates.latitude:.6f}, {coordinates.longitude:.6f})"
            ),
            coordinates=coordinates,
            provider="gps",
        )


class ProviderCandidate(BaseModel):
    """One match returned by a provider"""

    formatted_address: str = ""
    components: AddressComponents = Field(default_factory=AddressComponents)
    component_count: int = 0


class GoogleResult(BaseModel):
    """Parsed Google Geocoding API response"""

    provider: Literal["google"] = "google"
    candidates: list[ProviderCandidate]
    best: ProviderCandidate


class NominatimResult(BaseModel):
    """Parsed Nominatim reverse response"""

    provider: Literal["nominatim"] = "nominatim"
    candidate: ProviderCandidate


ProviderResult = Annotated[Union[GoogleResult, NominatimResult], Field(discriminator="provider")]
