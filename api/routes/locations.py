"""Location directory endpoints used to populate address forms"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_location_directory
from services.location_directory import (
    LocationCity,
    LocationDirectoryClient,
    LocationDirectoryError,
    LocationDistrict,
    LocationMatch,
    LocationSearchResult,
    LocationState,
    LocationValidation,
    PincodeLookup,
)

router = APIRouter(prefix="/locations", tags=["locations"])


def _upstream_error(e: LocationDirectoryError) -> HTTPException:
    return HTTPException(status_code=502, detail=f"Location directory error: {e}")


@router.get("/states", response_model=List[LocationState])
async def list_states(directory: LocationDirectoryClient = Depends(get_location_directory)):
    try:
        return await directory.get_states()
    except LocationDirectoryError as e:
        raise _upstream_error(e)


@router.get("/states/{state_id}/districts", response_model=List[LocationDistrict])
async def list_districts(
    state_id: str,
    directory: LocationDirectoryClient = Depends(get_location_directory),
):
    try:
        return await directory.get_districts(state_id)
    except LocationDirectoryError as e:
        raise _upstream_error(e)


@router.get("/states/{state_id}/districts/{district_name}/cities", response_model=List[LocationCity])
async def list_cities(
    state_id: str,
    district_name: str,
    directory: LocationDirectoryClient = Depends(get_location_directory),
):
    try:
        return await directory.get_cities(state_id, district_name)
    except LocationDirectoryError as e:
        raise _upstream_error(e)


@router.get("/states/{state_id}/cities/search", response_model=List[LocationSearchResult])
async def search_cities(
    state_id: str,
    q: str = Query(..., min_length=1),
    limit: int = Query(50, ge=1, le=500),
    directory: LocationDirectoryClient = Depends(get_location_directory),
):
    try:
        return await directory.search_cities(state_id, q, limit)
    except LocationDirectoryError as e:
        raise _upstream_error(e)


@router.get("/pincode/{pincode}", response_model=PincodeLookup)
async def city_by_pincode(
    pincode: str,
    directory: LocationDirectoryClient = Depends(get_location_directory),
):
    try:
        result = await directory.get_city_by_pincode(pincode)
    except LocationDirectoryError as e:
        raise _upstream_error(e)

    if result is None:
        raise HTTPException(status_code=404, detail="Pincode not found")
    return result


@router.get("/validate/states/{state_id}/pincode/{pincode}", response_model=LocationValidation)
async def validate_pincode(
    state_id: str,
    pincode: str,
    directory: LocationDirectoryClient = Depends(get_location_directory),
):
    try:
        return await directory.validate_pincode(state_id, pincode)
    except LocationDirectoryError as e:
        raise _upstream_error(e)


@router.get("/search", response_model=List[LocationMatch])
async def search_locations(
    q: str = Query(..., min_length=1),
    directory: LocationDirectoryClient = Depends(get_location_directory),
):
    """City search across all states (max 20 results)"""
    try:
        return await directory.search_locations(q)
    except LocationDirectoryError as e:
        raise _upstream_error(e)


@router.get("/states/{state_id}/cities", response_model=List[str])
async def all_cities_for_state(
    state_id: str,
    directory: LocationDirectoryClient = Depends(get_location_directory),
):
    try:
        return await directory.get_all_cities_for_state(state_id)
    except LocationDirectoryError as e:
        raise _upstream_error(e)


@router.get("/states/{state_id}/pincodes", response_model=List[str])
async def all_pincodes_for_city(
    state_id: str,
    city: str = Query(..., min_length=1),
    directory: LocationDirectoryClient = Depends(get_location_directory),
):
    try:
        return await directory.get_all_pincodes_for_city(state_id, city)
    except LocationDirectoryError as e:
        raise _upstream_error(e)
