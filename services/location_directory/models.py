"""Pydantic models for the location directory API"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DirectoryModel(BaseModel):
    """Directory payloads use camelCase keys"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LocationState(DirectoryModel):
    id: str | int
    name: str
    code: str = ""
    is_active: bool = True


class LocationDistrict(DirectoryModel):
    name: str
    cities_count: int = 0


class LocationCity(DirectoryModel):
    name: str
    pincode: str


class LocationSearchResult(DirectoryModel):
    name: str
    pincode: str
    district: str = ""


class PincodeLookup(DirectoryModel):
    pincode: str
    city: str
    district: str = ""
    state: str
    state_id: str | int


class LocationValidation(DirectoryModel):
    pincode: str
    state_id: str | int
    state_name: str = ""
    is_valid: bool
    city: str | None = None
    district: str | None = None
    state: str | None = None


class LocationMatch(DirectoryModel):
    """A state/city/pincode triple from a cross-state search"""

    state: str
    city: str
    pincode: str
