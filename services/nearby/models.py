"""Models for proximity search"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, SerializeAsAny, model_validator

from services.geocoding.geometry import is_valid_coordinate
from services.geocoding.models import Coordinates


class LocatedEntity(BaseModel):
    """A searchable record with a position"""

    id: int | str
    coordinates: Coordinates | None = None
    # Unflagged records are treated as inactive
    is_active: bool = False
    display_name: str = ""
    category: str | None = None
    locality: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class SellerLocation(LocatedEntity):
    """
    Seller storefront as stored in the vendor directory.

    Accepts the flat latitude/longitude shape the directory returns. A pair
    that is missing or out of range leaves coordinates unset, so the seller is
    skipped by nearby search instead of failing the whole request.

    Storefront records use camelCase keys (isActive, businessCategory, ...);
    both spellings are accepted. Fields not declared here are kept and
    serialized back unchanged.
    """

    model_config = ConfigDict(extra="allow")

    is_active: bool = Field(False, validation_alias=AliasChoices("isActive", "is_active"))
    display_name: str = Field(
        "", validation_alias=AliasChoices("name", "display_name"), serialization_alias="name"
    )
    locality: str = Field(
        "", validation_alias=AliasChoices("city", "locality"), serialization_alias="city"
    )
    category: str | None = Field(
        None,
        validation_alias=AliasChoices("businessCategory", "business_category", "category"),
        serialization_alias="business_category",
    )
    address: str = ""
    state: str = ""
    pincode: str = ""
    phone: str | None = None
    email: str | None = None
    rating: float | None = None
    review_count: int | None = Field(None, validation_alias=AliasChoices("reviewCount", "review_count"))
    is_open: bool | None = Field(None, validation_alias=AliasChoices("isOpen", "is_open"))
    opening_hours: str | None = Field(
        None, validation_alias=AliasChoices("openingHours", "opening_hours")
    )
    distance: float | None = None  # km from the searching user

    @model_validator(mode="before")
    @classmethod
    def coordinates_from_lat_lon(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        latitude = data.get("latitude")
        longitude = data.get("longitude")
        data = {k: v for k, v in data.items() if k not in ("latitude", "longitude")}
        if data.get("coordinates") is None and is_valid_coordinate(latitude, longitude):
            data["coordinates"] = {"latitude": latitude, "longitude": longitude}
        return data

    @property
    def city(self) -> str:
        return self.locality


class RankedResult(BaseModel):
    """Search hit with its distance and relevance"""

    entity: SerializeAsAny[LocatedEntity]
    distance_km: float
    relevance_score: float
