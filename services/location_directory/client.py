"""
Client for the hierarchical location directory (states → districts →
cities → pincodes) that backs address forms.

A thin typed passthrough: nothing is cached or derived locally. Unlike
reverse geocoding, failures here are raised to the caller, because the
forms cannot be filled without this data.
"""

import asyncio
import logging
from typing import Any
from urllib.parse import quote

import aiohttp
from pydantic import BaseModel, ValidationError

from core.config import settings
from services.geocoding.providers import get_ssl_context

from .models import (
    LocationCity,
    LocationDistrict,
    LocationMatch,
    LocationSearchResult,
    LocationState,
    LocationValidation,
    PincodeLookup,
)

logger = logging.getLogger(__name__)

LOCATION_API_BASE = "/api/location"
SEARCH_PER_STATE_LIMIT = 10
SEARCH_TOTAL_LIMIT = 20


class LocationDirectoryError(Exception):
    """Raised when the directory answers non-2xx or cannot be reached."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


def _segment(value: str | int) -> str:
    return quote(str(value), safe="")


def _parse(model: type[BaseModel], data: Any):
    """Validate one directory record, raising LocationDirectoryError on a malformed payload"""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.error(f"Malformed {model.__name__} from location directory: {e}")
        raise LocationDirectoryError(f"Malformed {model.__name__} from location directory") from e


def _parse_list(model: type[BaseModel], data: Any) -> list:
    if data is None:
        return []
    if not isinstance(data, list):
        raise LocationDirectoryError(f"Expected a list of {model.__name__} from location directory")
    return [_parse(model, item) for item in data]


class LocationDirectoryClient:
    """Typed accessors for the location directory endpoints"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        session: aiohttp.ClientSession | None = None,
    ):
        self.base_url = (base_url or settings.LOCATION_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.LOCATION_API_TIMEOUT
        self._session = session

    async def _get(self, path: str, params: dict[str, Any] | None = None, allow_missing: bool = False) -> Any:
        """
        GET a directory endpoint and unwrap its {"data": ...} envelope.

        Returns None for a 404 when allow_missing is set.
        """
        url = f"{self.base_url}{LOCATION_API_BASE}{path}"
        try:
            if self._session is not None:
                status, payload = await self._request(self._session, url, params)
            else:
                async with aiohttp.ClientSession() as session:
                    status, payload = await self._request(session, url, params)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error(f"Location directory request failed for {path}: {e}")
            raise LocationDirectoryError(f"Failed to reach location directory: {e}") from e

        if status == 404 and allow_missing:
            return None
        if not 200 <= status < 300:
            logger.error(f"Location directory returned {status} for {path}")
            raise LocationDirectoryError(f"Location directory request failed: {status}", status=status)

        if not isinstance(payload, dict):
            return None
        return payload.get("data")

    async def _request(self, session, url: str, params: dict[str, Any] | None) -> tuple[int, Any]:
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        async with session.get(url, params=params, ssl=get_ssl_context(), timeout=timeout) as response:
            if not 200 <= response.status < 300:
                return response.status, None
            return response.status, await response.json(content_type=None)

    async def get_states(self) -> list[LocationState]:
        data = await self._get("/states")
        return _parse_list(LocationState, data)

    async def get_districts(self, state_id: str | int) -> list[LocationDistrict]:
        data = await self._get(f"/states/{_segment(state_id)}/districts")
        return _parse_list(LocationDistrict, data)

    async def get_cities(self, state_id: str | int, district_name: str) -> list[LocationCity]:
        data = await self._get(
            f"/states/{_segment(state_id)}/districts/{_segment(district_name)}/cities"
        )
        return _parse_list(LocationCity, data)

    async def search_cities(
        self, state_id: str | int, query: str, limit: int = 50
    ) -> list[LocationSearchResult]:
        data = await self._get(
            f"/states/{_segment(state_id)}/cities/search",
            params={"q": query, "limit": limit},
        )
        return _parse_list(LocationSearchResult, data)

    async def get_city_by_pincode(self, pincode: str) -> PincodeLookup | None:
        """City details for a pincode, or None if the directory doesn't know it"""
        data = await self._get(f"/pincode/{_segment(pincode)}", allow_missing=True)
        return _parse(PincodeLookup, data) if data else None

    async def validate_pincode(self, state_id: str | int, pincode: str) -> LocationValidation:
        data = await self._get(f"/validate/states/{_segment(state_id)}/pincode/{_segment(pincode)}")
        if not data:
            raise LocationDirectoryError("Location directory returned no validation result")
        return _parse(LocationValidation, data)

    async def search_locations(self, query: str) -> list[LocationMatch]:
        """
        Search cities across every state.

        A state whose search fails is logged and skipped; the state list
        itself must load.
        """
        states = await self.get_states()
        results: list[LocationMatch] = []

        for state in states:
            try:
                cities = await self.search_cities(state.id, query, SEARCH_PER_STATE_LIMIT)
            except LocationDirectoryError as e:
                logger.warning(f"Error searching in state {state.name}: {e}")
                continue
            results.extend(
                LocationMatch(state=state.name, city=city.name, pincode=city.pincode)
                for city in cities
            )

        return results[:SEARCH_TOTAL_LIMIT]

    async def get_all_cities_for_state(self, state_id: str | int) -> list[str]:
        """Every city name in a state, de-duplicated in first-seen order"""
        districts = await self.get_districts(state_id)
        cities: dict[str, None] = {}

        for district in districts:
            try:
                district_cities = await self.get_cities(state_id, district.name)
            except LocationDirectoryError as e:
                logger.warning(f"Error fetching cities for district {district.name}: {e}")
                continue
            for city in district_cities:
                cities.setdefault(city.name, None)

        return list(cities)

    async def get_all_pincodes_for_city(self, state_id: str | int, city_name: str) -> list[str]:
        """Pincodes of cities whose name contains city_name (any case), de-duplicated"""
        districts = await self.get_districts(state_id)
        needle = city_name.lower()
        pincodes: dict[str, None] = {}

        for district in districts:
            try:
                district_cities = await self.get_cities(state_id, district.name)
            except LocationDirectoryError as e:
                logger.warning(f"Error fetching pincodes for district {district.name}: {e}")
                continue
            for city in district_cities:
                if needle in city.name.lower():
                    pincodes.setdefault(city.pincode, None)

        return list(pincodes)
