"""
Proximity search over caller-supplied candidates.

Linear scan: filter to active entities with valid coordinates, compute exact
great-circle distances, keep those inside the radius, sort nearest first.
An optional bounding-box pre-filter skips the trig for far-away candidates
on large sets; it is always padded to contain the whole radius, so enabling
it never changes the result.
"""

import math
from typing import Iterable, Sequence, TypeVar

from core.config import settings
from services.geocoding.geometry import (
    EARTH_RADIUS_KM,
    bounding_box,
    distance_km,
    is_valid_coordinate,
    is_within_bounds,
)
from services.geocoding.models import BoundingBox, Coordinates

from .models import LocatedEntity, RankedResult, SellerLocation

DISTANCE_WEIGHT_MAX = 100
DISTANCE_PENALTY_PER_KM = 10
NAME_MATCH_BONUS = 50
CATEGORY_MATCH_BONUS = 30
LOCALITY_MATCH_BONUS = 20

# 111 km/degree already over-covers latitude; this absorbs the longitude
# spread of a circle away from the equator for angular radii up to 0.5 rad.
BOX_PADDING = 1.1
MAX_BOX_ANGLE_RAD = 0.5

E = TypeVar("E", bound=LocatedEntity)


def _has_valid_coordinates(entity: LocatedEntity) -> bool:
    coords = entity.coordinates
    return coords is not None and is_valid_coordinate(coords.latitude, coords.longitude)


def search_box(center: Coordinates, radius_km: float) -> BoundingBox | None:
    """
    Padded pre-filter box, or None where a box can't safely cover the radius
    (polar caps, antimeridian wrap, very large radii).
    """
    box = bounding_box(center, radius_km * BOX_PADDING)
    if box.north >= 90 or box.south <= -90:
        return None
    if box.east > 180 or box.west < -180:
        return None
    if (radius_km / EARTH_RADIUS_KM) / math.cos(math.radians(center.latitude)) > MAX_BOX_ANGLE_RAD:
        return None
    return box


def distance_score(distance: float) -> float:
    """Closer is better: 100 at the center, losing 10 points per km, floored at 0"""
    return max(0.0, DISTANCE_WEIGHT_MAX - distance * DISTANCE_PENALTY_PER_KM)


def relevance_score(
    entity: LocatedEntity,
    center: Coordinates | None,
    query: str | None = None,
    distance: float | None = None,
) -> float:
    """
    Heuristic ranking score.

    Distance contributes max(0, 100 - km * 10). A query adds 50 for a name
    match, 30 for a category match and 20 for a locality match
    (case-insensitive substring). A precomputed distance skips recomputing it
    from center.
    """
    if distance is None and center is not None and _has_valid_coordinates(entity):
        distance = distance_km(center, entity.coordinates)

    score = distance_score(distance) if distance is not None else 0
    if not query:
        return score

    needle = query.lower()
    if needle in (entity.display_name or "").lower():
        score += NAME_MATCH_BONUS
    if entity.category and needle in entity.category.lower():
        score += CATEGORY_MATCH_BONUS
    if entity.locality and needle in entity.locality.lower():
        score += LOCALITY_MATCH_BONUS
    return score


def _with_distances(
    center: Coordinates,
    candidates: Iterable[E],
    box: BoundingBox | None = None,
) -> list[tuple[E, float]]:
    annotated = []
    for entity in candidates:
        if not entity.is_active or not _has_valid_coordinates(entity):
            continue
        if box is not None and not is_within_bounds(entity.coordinates, box):
            continue
        annotated.append((entity, distance_km(center, entity.coordinates)))
    return annotated


def find_nearby(
    center: Coordinates,
    candidates: Iterable[E],
    radius_km: float,
    use_bounding_box: bool = False,
) -> list[RankedResult]:
    """
    Active candidates within radius_km of center, nearest first.

    Ties keep input order. relevance_score carries the distance component only.
    """
    box = search_box(center, radius_km) if use_bounding_box else None
    within = [
        (entity, distance)
        for entity, distance in _with_distances(center, candidates, box)
        if distance <= radius_km
    ]
    within.sort(key=lambda item: item[1])
    return [
        RankedResult(entity=entity, distance_km=distance, relevance_score=distance_score(distance))
        for entity, distance in within
    ]


def ranked_search(
    center: Coordinates,
    candidates: Iterable[E],
    query: str | None = None,
    radius_km: float | None = None,
) -> list[RankedResult]:
    """
    Active candidates ordered by relevance_score, highest first.

    With a radius only candidates inside it are considered. Equal scores are
    ordered by distance, then input order.
    """
    if radius_km is not None:
        pool = [(hit.entity, hit.distance_km) for hit in find_nearby(center, candidates, radius_km)]
    else:
        pool = sorted(_with_distances(center, candidates), key=lambda item: item[1])

    ranked = [
        RankedResult(
            entity=entity,
            distance_km=distance,
            relevance_score=relevance_score(entity, center, query, distance=distance),
        )
        for entity, distance in pool
    ]
    ranked.sort(key=lambda hit: -hit.relevance_score)
    return ranked


def find_nearby_sellers(
    user_location: Coordinates,
    sellers: Sequence[SellerLocation],
    radius_km: float | None = None,
) -> list[SellerLocation]:
    """Sellers within radius_km (default from settings), nearest first, with distance set"""
    if radius_km is None:
        radius_km = settings.DEFAULT_SEARCH_RADIUS_KM
    return [
        hit.entity.model_copy(update={"distance": hit.distance_km})
        for hit in find_nearby(user_location, sellers, radius_km)
    ]


def get_search_priority(
    seller: SellerLocation,
    user_location: Coordinates | None,
    query: str | None = None,
) -> float:
    """Relevance of a seller, reusing its annotated distance when present"""
    return relevance_score(seller, user_location, query, distance=seller.distance)


def sellers_by_location(
    sellers: Iterable[SellerLocation],
    city: str | None = None,
    state: str | None = None,
) -> list[SellerLocation]:
    """Active sellers matching city and/or state exactly, ignoring case"""
    matches = []
    for seller in sellers:
        if city and seller.city.lower() != city.lower():
            continue
        if state and seller.state.lower() != state.lower():
            continue
        if seller.is_active:
            matches.append(seller)
    return matches
