"""Search data models"""

from pydantic import Field
from enum import Enum
from datetime import datetime
from typing import List, Optional

from .catalog import CamelModel, CatalogItem, Condition


class SortBy(str, Enum):
    """Selectable result orderings"""
    NEWEST = "newest"
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    RATING = "rating"
    DISTANCE = "distance"
    RELEVANCE = "relevance"


class AvailabilityWindow(CamelModel):
    """Requested rental window; both ends are required when given"""
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class SearchQuery(CamelModel):
    """Search query parameters"""
    text: Optional[str] = None
    category: Optional[str] = None
    condition: Optional[Condition] = None
    city: Optional[str] = None
    state: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    availability: Optional[AvailabilityWindow] = None
    sort_by: SortBy = SortBy.RELEVANCE
    page: int = 1
    # None takes the configured default page size
    limit: Optional[int] = None


class Pagination(CamelModel):
    """Pagination block of a search response"""
    page: int
    limit: int
    total: int
    pages: int
    has_next: bool
    has_prev: bool


class SearchMeta(CamelModel):
    """Match provenance and timing for a search"""
    fuzzy_matches: int
    exact_matches: int
    total_processed: int
    search_time_ms: float


class SearchResult(CamelModel):
    """Search results with metadata"""
    data: List[CatalogItem] = Field(default_factory=list)
    pagination: Pagination
    search_meta: Optional[SearchMeta] = None
