"""
Catalog filter specification.

A CatalogFilter holds the structured predicates of a search query. The
PostgreSQL store translates it to SQL; the in-memory store and the fuzzy
post-filter evaluate it directly against catalog items.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Iterable, List, Optional

from gear_search.models import CatalogItem, SearchQuery
from gear_search.models.catalog import to_naive_utc


@dataclass(frozen=True)
class CatalogFilter:
    """Structured filter predicates for catalog queries.

    Every field is optional; a None field places no constraint.

    Attributes:
        min_price: Minimum daily rate (inclusive)
        max_price: Maximum daily rate (inclusive)
        category: Exact category
        condition: Exact condition
        city: Case-insensitive substring of the item's city
        state: Case-insensitive substring of the item's state
        available_from: Start of the requested rental window
        available_to: End of the requested rental window
        text: Case-insensitive substring of title, description, brand or model
    """
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    category: Optional[str] = None
    condition: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    available_from: Optional[datetime] = None
    available_to: Optional[datetime] = None
    text: Optional[str] = None

    @classmethod
    def from_query(cls, query: SearchQuery) -> 'CatalogFilter':
        """Build the filter for a (validated) search query."""
        available_from = None
        available_to = None
        if query.availability and query.availability.start_date and query.availability.end_date:
            available_from = to_naive_utc(query.availability.start_date)
            available_to = to_naive_utc(query.availability.end_date)

        text = (query.text or "").strip()

        return cls(
            min_price=query.min_price,
            max_price=query.max_price,
            category=query.category or None,
            condition=query.condition.value if query.condition else None,
            city=query.city or None,
            state=query.state or None,
            available_from=available_from,
            available_to=available_to,
            text=text or None,
        )

    @property
    def has_availability(self) -> bool:
        return self.available_from is not None and self.available_to is not None

    def without_text(self) -> 'CatalogFilter':
        """Copy of this filter with the free-text predicate removed."""
        return replace(self, text=None)

    def matches(self, item: CatalogItem) -> bool:
        """Check an item against every predicate, text included."""
        return self.matches_structured(item) and self.matches_text(item)

    def matches_structured(self, item: CatalogItem) -> bool:
        """Check an item against every predicate except the free text."""
        if self.min_price is not None and item.daily_rate < self.min_price:
            return False
        if self.max_price is not None and item.daily_rate > self.max_price:
            return False

        if self.category and item.category != self.category:
            return False
        if self.condition and item.condition != self.condition:
            return False

        if self.city and not _contains(item.city, self.city):
            return False
        if self.state and not _contains(item.state, self.state):
            return False

        if self.has_availability and not self.is_available(item):
            return False

        return True

    def matches_text(self, item: CatalogItem) -> bool:
        if not self.text:
            return True
        return any(
            _contains(value, self.text)
            for value in (item.title, item.description, item.brand, item.model)
        )

    def is_available(self, item: CatalogItem) -> bool:
        """True unless a pending or approved booking overlaps the requested window."""
        if not self.has_availability:
            return True
        return not any(
            booking.overlaps(self.available_from, self.available_to)
            for booking in item.bookings
        )

    def apply(self, items: Iterable[CatalogItem]) -> List[CatalogItem]:
        """Filter items, preserving their order."""
        return [item for item in items if self.matches(item)]


def _contains(value: Optional[str], needle: str) -> bool:
    return bool(value) and needle.lower() in value.lower()
