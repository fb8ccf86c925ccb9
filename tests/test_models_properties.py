"""
Property-based tests for data models.

These tests verify universal properties that should hold across all valid
executions of the model operations.
"""

from datetime import datetime, timedelta, timezone

import pytest
from hypothesis import given, settings, strategies as st
from pydantic import ValidationError

from gear_search.models import (
    BookingWindow,
    CatalogItem,
    Pagination,
    SearchQuery,
    SearchResult,
    SortBy,
)

from catalog_factories import BASE_TIME, day, make_item


offsets = st.integers(min_value=-30, max_value=30)


@given(booked_start=offsets, booked_length=st.integers(0, 10), start=offsets, length=st.integers(0, 10))
@settings(max_examples=200)
def test_overlap_matches_interval_intersection(booked_start, booked_length, start, length):
    """
    **Property: Booking overlap**

    A booking overlaps a requested window exactly when the two closed
    intervals share at least one instant.
    """
    booking = BookingWindow(start_date=day(booked_start), end_date=day(booked_start + booked_length))

    overlaps = booking.overlaps(day(start), day(start + length))

    intersects = max(booked_start, start) <= min(booked_start + booked_length, start + length)
    assert overlaps is intersects


def test_overlap_compares_aware_and_naive_dates_in_utc():
    booking = BookingWindow(start_date=datetime(2025, 1, 10), end_date=datetime(2025, 1, 12, 23))
    plus_five = timezone(timedelta(hours=5))

    # 03:00+05 on the 13th is 22:00 UTC on the 12th
    assert booking.overlaps(datetime(2025, 1, 13, 3, tzinfo=plus_five), datetime(2025, 1, 14, tzinfo=plus_five))
    # 05:00+05 on the 13th is midnight UTC, after the booking ends
    assert not booking.overlaps(datetime(2025, 1, 13, 5, tzinfo=plus_five), datetime(2025, 1, 14, tzinfo=plus_five))


@pytest.mark.parametrize("overrides", [
    {"daily_rate": -1},
    {"weekly_rate": -5},
    {"average_rating": 5.5},
    {"average_rating": -0.1},
    {"total_reviews": -1},
])
def test_catalog_item_rejects_out_of_range_values(overrides):
    with pytest.raises(ValidationError):
        make_item("bad", **overrides)


def test_catalog_item_dumps_camel_case_and_reads_it_back():
    item = make_item(
        "1", "Canon EOS R5", 50,
        average_rating=4.5,
        bookings=[BookingWindow(start_date=day(1), end_date=day(3))],
    )

    dumped = item.model_dump(mode="json", by_alias=True)

    assert dumped["dailyRate"] == 50
    assert dumped["averageRating"] == 4.5
    assert dumped["owner"]["fullName"] == "Sam Owner"
    assert dumped["bookings"][0]["startDate"] == "2025-01-02T00:00:00"
    assert CatalogItem.model_validate(dumped) == item


def test_catalog_item_accepts_field_names_and_aliases():
    by_name = CatalogItem(
        id="1", title="Tent", daily_rate=10, created_at=BASE_TIME, updated_at=BASE_TIME,
    )
    by_alias = CatalogItem.model_validate({
        "id": "1", "title": "Tent", "dailyRate": 10, "createdAt": BASE_TIME, "updatedAt": BASE_TIME,
    })

    assert by_name == by_alias
    assert by_name.bookings == []
    assert by_name.owner is None


@pytest.mark.parametrize("value,expected", [
    ("newest", SortBy.NEWEST),
    ("price-low", SortBy.PRICE_LOW),
    ("price-high", SortBy.PRICE_HIGH),
    ("rating", SortBy.RATING),
    ("distance", SortBy.DISTANCE),
    ("relevance", SortBy.RELEVANCE),
])
def test_sort_keys_parse_from_wire_values(value, expected):
    assert SearchQuery.model_validate({"sortBy": value}).sort_by is expected


def test_search_query_defaults():
    query = SearchQuery()

    assert query.sort_by is SortBy.RELEVANCE
    assert query.page == 1
    assert query.limit is None
    assert query.text is None
    assert query.availability is None


def test_search_result_serialises_pagination_in_camel_case():
    result = SearchResult(
        data=[make_item("1")],
        pagination=Pagination(page=1, limit=20, total=1, pages=1, has_next=False, has_prev=False),
    )

    dumped = result.model_dump(mode="json", by_alias=True)

    assert dumped["pagination"]["hasNext"] is False
    assert dumped["pagination"]["hasPrev"] is False
    assert dumped["data"][0]["id"] == "1"
    assert dumped["searchMeta"] is None
