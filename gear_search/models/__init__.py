"""Data models for Gear Search"""

from .catalog import (
    CamelModel,
    Condition,
    BookingStatus,
    BookingWindow,
    OwnerSummary,
    CatalogItem,
)
from .search import (
    SortBy,
    AvailabilityWindow,
    SearchQuery,
    Pagination,
    SearchMeta,
    SearchResult,
)

__all__ = [
    "CamelModel",
    "Condition",
    "BookingStatus",
    "BookingWindow",
    "OwnerSummary",
    "CatalogItem",
    "SortBy",
    "AvailabilityWindow",
    "SearchQuery",
    "Pagination",
    "SearchMeta",
    "SearchResult",
]
