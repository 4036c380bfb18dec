"""Proximity search package"""

from .models import LocatedEntity, RankedResult, SellerLocation
from .search import (
    find_nearby,
    find_nearby_sellers,
    get_search_priority,
    ranked_search,
    relevance_score,
    sellers_by_location,
)

__all__ = [
    "LocatedEntity",
    "RankedResult",
    "SellerLocation",
    "find_nearby",
    "find_nearby_sellers",
    "get_search_priority",
    "ranked_search",
    "relevance_score",
    "sellers_by_location",
]
