"""Catalog item data models"""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from enum import Enum
from datetime import datetime, timezone
from typing import List, Optional


def to_naive_utc(value: datetime) -> datetime:
    """Normalize a datetime to naive UTC so stored and requested dates compare."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys for API consumers"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class Condition(str, Enum):
    """Physical condition of a listed item"""
    NEW = "new"
    LIKE_NEW = "like-new"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class BookingStatus(str, Enum):
    """Booking states that block an item's availability"""
    PENDING = "pending"
    APPROVED = "approved"


class BookingWindow(CamelModel):
    """An active or pending booking on an item"""
    start_date: datetime
    end_date: datetime
    status: BookingStatus = BookingStatus.APPROVED

    def overlaps(self, start: datetime, end: datetime) -> bool:
        """Standard closed-interval overlap test against a requested window."""
        booked_start = to_naive_utc(self.start_date)
        booked_end = to_naive_utc(self.end_date)
        return not (to_naive_utc(end) < booked_start or to_naive_utc(start) > booked_end)


class OwnerSummary(CamelModel):
    """Owner fields attached to every catalog item"""
    id: str
    full_name: Optional[str] = None
    email: Optional[str] = None


class CatalogItem(CamelModel):
    """A rentable listing, read-only from the search engine's perspective"""
    id: str
    title: str
    description: str = ""
    daily_rate: float = Field(ge=0)
    weekly_rate: Optional[float] = Field(default=None, ge=0)
    monthly_rate: Optional[float] = Field(default=None, ge=0)
    category: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    # Kept as a plain string: rows may carry conditions outside Condition
    condition: Optional[str] = None
    city: str = ""
    state: str = ""
    average_rating: Optional[float] = Field(default=None, ge=0, le=5)
    total_reviews: int = Field(default=0, ge=0)
    created_at: datetime
    updated_at: datetime
    owner: Optional[OwnerSummary] = None
    bookings: List[BookingWindow] = Field(default_factory=list)
