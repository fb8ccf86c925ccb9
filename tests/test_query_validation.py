"""Tests for search query parsing and validation."""

from datetime import datetime, timezone

import pytest

from gear_search.error_handling import InvalidQueryError, SearchError
from gear_search.models import AvailabilityWindow, Condition, SearchQuery, SortBy
from gear_search.search import parse_search_query, validate_search_query


def test_parse_accepts_camel_case_parameters():
    query = parse_search_query({
        "text": "canon",
        "minPrice": "10",
        "maxPrice": "80.5",
        "sortBy": "price-low",
        "condition": "like-new",
        "page": "2",
        "limit": "10",
        "availability": {"startDate": "2025-03-01T00:00:00", "endDate": "2025-03-04T12:00:00Z"},
    })

    assert query.text == "canon"
    assert query.min_price == 10
    assert query.max_price == 80.5
    assert query.sort_by is SortBy.PRICE_LOW
    assert query.condition is Condition.LIKE_NEW
    assert query.page == 2
    assert query.limit == 10
    assert query.availability.start_date == datetime(2025, 3, 1)
    assert query.availability.end_date == datetime(2025, 3, 4, 12, tzinfo=timezone.utc)


@pytest.mark.parametrize("params,field", [
    ({"sortBy": "cheapest"}, "sortBy"),
    ({"condition": "broken"}, "condition"),
    ({"minPrice": "ten"}, "minPrice"),
    ({"page": "first"}, "page"),
    ({"availability": {"startDate": "not-a-date"}}, "availability.startDate"),
])
def test_parse_reports_offending_field(params, field):
    with pytest.raises(InvalidQueryError) as exc_info:
        parse_search_query(params)

    assert exc_info.value.field == field
    assert isinstance(exc_info.value, SearchError)


def test_valid_query_passes():
    validate_search_query(SearchQuery(
        text="tent",
        min_price=0,
        max_price=0,
        availability=AvailabilityWindow(start_date=datetime(2025, 1, 1), end_date=datetime(2025, 1, 2)),
        page=3,
        limit=50,
    ))


@pytest.mark.parametrize("query,field", [
    (SearchQuery(page=0), "page"),
    (SearchQuery(limit=0), "limit"),
    (SearchQuery(limit=51), "limit"),
    (SearchQuery(min_price=-1), "min_price"),
    (SearchQuery(max_price=-0.5), "max_price"),
    (SearchQuery(min_price=100, max_price=50), "min_price"),
    (SearchQuery(availability=AvailabilityWindow(start_date=datetime(2025, 1, 1))), "availability"),
    (SearchQuery(availability=AvailabilityWindow(end_date=datetime(2025, 1, 1))), "availability"),
    (
        SearchQuery(availability=AvailabilityWindow(
            start_date=datetime(2025, 1, 5), end_date=datetime(2025, 1, 5),
        )),
        "availability",
    ),
    (
        SearchQuery(availability=AvailabilityWindow(
            start_date=datetime(2025, 1, 5), end_date=datetime(2025, 1, 1),
        )),
        "availability",
    ),
    (
        SearchQuery(availability=AvailabilityWindow(
            start_date=datetime(2025, 1, 1), end_date=datetime(2025, 1, 5, tzinfo=timezone.utc),
        )),
        "availability",
    ),
])
def test_invalid_queries_are_rejected(query, field):
    with pytest.raises(InvalidQueryError) as exc_info:
        validate_search_query(query)

    assert exc_info.value.field == field


def test_max_limit_is_configurable():
    validate_search_query(SearchQuery(limit=100), max_limit=100)

    with pytest.raises(InvalidQueryError):
        validate_search_query(SearchQuery(limit=101), max_limit=100)
