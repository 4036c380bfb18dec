import logging
from typing import List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from core.config import settings
from services.geocoding import Coordinates
from services.nearby import SellerLocation, find_nearby_sellers, ranked_search

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/nearby", tags=["nearby"])


# --- Models ---

class NearbySellersRequest(BaseModel):
    user_location: Coordinates
    sellers: List[SellerLocation]
    radius_km: float = Field(default_factory=lambda: settings.DEFAULT_SEARCH_RADIUS_KM, gt=0)


class NearbySellersResponse(BaseModel):
    sellers: List[SellerLocation]
    count: int
    radius_km: float


class SellerSearchRequest(BaseModel):
    user_location: Coordinates
    sellers: List[SellerLocation]
    query: Optional[str] = None
    radius_km: Optional[float] = Field(None, gt=0)


class SellerSearchHit(BaseModel):
    seller: SellerLocation
    distance_km: float
    relevance_score: float


class SellerSearchResponse(BaseModel):
    results: List[SellerSearchHit]
    query: Optional[str]


# --- Endpoints ---

@router.post("/sellers", response_model=NearbySellersResponse)
async def nearby_sellers(request: NearbySellersRequest):
    sellers = find_nearby_sellers(request.user_location, request.sellers, request.radius_km)
    logger.debug(f"{len(sellers)} of {len(request.sellers)} sellers within {request.radius_km}km")
    return NearbySellersResponse(sellers=sellers, count=len(sellers), radius_km=request.radius_km)


@router.post("/search", response_model=SellerSearchResponse)
async def search_sellers(request: SellerSearchRequest):
    hits = ranked_search(
        request.user_location,
        request.sellers,
        query=request.query,
        radius_km=request.radius_km,
    )
    results = [
        SellerSearchHit(
            seller=hit.entity.model_copy(update={"distance": hit.distance_km}),
            distance_km=hit.distance_km,
            relevance_score=hit.relevance_score,
        )
        for hit in hits
    ]
    return SellerSearchResponse(results=results, query=request.query)
