"""
Coordinate and geometry helpers.

Distances use the Haversine formula on a spherical Earth (R = 6371 km).
Bounding boxes use the flat 111 km-per-degree approximation and degenerate
near the poles, where cos(latitude) approaches zero. No seller data lives
there, so callers simply must not rely on boxes close to +/-90 degrees.
"""

import math

from .models import BoundingBox, Coordinates

EARTH_RADIUS_KM = 6371
KM_PER_DEGREE = 111


def to_radians(degrees: float) -> float:
    """Convert degrees to radians"""
    return degrees * (math.pi / 180)


def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points in kilometers"""
    d_lat = to_radians(lat2 - lat1)
    d_lon = to_radians(lon2 - lon1)

    a = (
        math.sin(d_lat / 2) * math.sin(d_lat / 2)
        + math.cos(to_radians(lat1)) * math.cos(to_radians(lat2))
        * math.sin(d_lon / 2) * math.sin(d_lon / 2)
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def distance_km(a: Coordinates, b: Coordinates) -> float:
    """Great-circle distance between two coordinates in kilometers"""
    return calculate_distance(a.latitude, a.longitude, b.latitude, b.longitude)


def is_valid_coordinate(latitude: float, longitude: float) -> bool:
    """Range check that fails closed on None, NaN and infinities"""
    if isinstance(latitude, bool) or isinstance(longitude, bool):
        return False
    if not isinstance(latitude, (int, float)) or not isinstance(longitude, (int, float)):
        return False
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        return False
    return -90 <= latitude <= 90 and -180 <= longitude <= 180


def bounding_box(center: Coordinates, radius_km: float) -> BoundingBox:
    """Rectangle around center covering radius_km in each direction"""
    lat_delta = radius_km / KM_PER_DEGREE
    lon_delta = radius_km / (KM_PER_DEGREE * math.cos(to_radians(center.latitude)))

    return BoundingBox(
        north=center.latitude + lat_delta,
        south=center.latitude - lat_delta,
        east=center.longitude + lon_delta,
        west=center.longitude - lon_delta,
    )


def is_within_bounds(point: Coordinates, box: BoundingBox) -> bool:
    """Min/max containment test. A pre-filter only, never the radius test itself."""
    return (
        box.south <= point.latitude <= box.north
        and box.west <= point.longitude <= box.east
    )


def format_distance(distance: float) -> str:
    """Human-readable distance: meters below 1 km, otherwise one-decimal km"""
    if distance < 1:
        # Half-up like the storefront UI, not banker's rounding
        return f"{math.floor(distance * 1000 + 0.5)}m"
    return f"{distance:.1f}km"
