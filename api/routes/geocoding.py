"""Geocoding endpoints for the vendor storefront"""

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from api.dependencies import get_geocoding_service
from services.geocoding import (
    GeocodingService,
    InvalidCoordinates,
    NormalizedLocation,
    calculate_distance,
    format_distance,
)

router = APIRouter(prefix="/geocoding", tags=["geocoding"])


class ReverseGeocodeRequest(BaseModel):
    """Request to reverse geocode coordinates"""
    latitude: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")


class DistanceResponse(BaseModel):
    """Great-circle distance between two points"""
    distance_km: float
    formatted: str


async def _reverse(service: GeocodingService, latitude: float, longitude: float) -> NormalizedLocation:
    try:
        return await service.reverse_geocode(latitude, longitude)
    except InvalidCoordinates as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/reverse", response_model=NormalizedLocation)
async def reverse_geocode(
    request: ReverseGeocodeRequest,
    service: GeocodingService = Depends(get_geocoding_service),
):
    """
    Reverse geocoding: Convert coordinates to address

    Always answers with a location; when no provider resolves the point the
    address is "GPS Location (lat, lon)" with empty city/state/postal code.

    Example: {"latitude": 18.5204, "longitude": 73.8567}
    """
    return await _reverse(service, request.latitude, request.longitude)


@router.get("/reverse", response_model=NormalizedLocation)
async def reverse_geocode_get(
    lat: float = Query(..., ge=-90, le=90, description="Latitude in decimal degrees"),
    lon: float = Query(..., ge=-180, le=180, description="Longitude in decimal degrees"),
    service: GeocodingService = Depends(get_geocoding_service),
):
    """
    Reverse geocoding: Convert coordinates to address (GET method)

    Example: /geocoding/reverse?lat=18.5204&lon=73.8567
    """
    return await _reverse(service, lat, lon)


@router.get("/distance", response_model=DistanceResponse)
async def distance(
    lat1: float = Query(..., ge=-90, le=90),
    lon1: float = Query(..., ge=-180, le=180),
    lat2: float = Query(..., ge=-90, le=90),
    lon2: float = Query(..., ge=-180, le=180),
):
    """
    Great-circle distance in km between two points

    Example: /geocoding/distance?lat1=28.6139&lon1=77.2090&lat2=19.0760&lon2=72.8777
    """
    km = calculate_distance(lat1, lon1, lat2, lon2)
    return DistanceResponse(distance_km=km, formatted=format_distance(km))
