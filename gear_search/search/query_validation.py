"""
Search query parsing and validation.

Validation runs before the engine touches the index or the store.
"""

from typing import Any, Dict

from pydantic import ValidationError

from gear_search.error_handling import InvalidQueryError
from gear_search.models import SearchQuery


def parse_search_query(params: Dict[str, Any]) -> SearchQuery:
    """
    Build a SearchQuery from loosely typed parameters.

    Args:
        params: Field values keyed by field name or camelCase alias

    Returns:
        Parsed SearchQuery (not yet checked for cross-field invariants)

    Raises:
        InvalidQueryError: If a value cannot be parsed (unknown sort key,
            malformed date, non-numeric price, ...)
    """
    try:
        return SearchQuery.model_validate(params)
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error.get("loc", ())) or None
        raise InvalidQueryError(f"Invalid search parameter {field}: {error['msg']}", field=field) from e


def validate_search_query(query: SearchQuery, max_limit: int = 50) -> None:
    """
    Check a query's invariants.

    Args:
        query: Query to check
        max_limit: Largest accepted page size

    Raises:
        InvalidQueryError: On the first violated invariant
    """
    if query.page < 1:
        raise InvalidQueryError(f"page must be >= 1, got {query.page}", field="page")

    if query.limit is not None and (query.limit < 1 or query.limit > max_limit):
        raise InvalidQueryError(
            f"limit must be between 1 and {max_limit}, got {query.limit}", field="limit"
        )

    if query.min_price is not None and query.min_price < 0:
        raise InvalidQueryError("min_price cannot be negative", field="min_price")
    if query.max_price is not None and query.max_price < 0:
        raise InvalidQueryError("max_price cannot be negative", field="max_price")
    if (
        query.min_price is not None
        and query.max_price is not None
        and query.min_price > query.max_price
    ):
        raise InvalidQueryError(
            f"min_price ({query.min_price}) cannot be greater than max_price ({query.max_price})",
            field="min_price",
        )

    window = query.availability
    if window is not None:
        if window.start_date is None or window.end_date is None:
            raise InvalidQueryError(
                "availability requires both start_date and end_date", field="availability"
            )
        try:
            out_of_order = window.start_date >= window.end_date
        except TypeError as e:
            raise InvalidQueryError(
                "availability dates must both carry a timezone or both omit it",
                field="availability",
            ) from e
        if out_of_order:
            raise InvalidQueryError(
                "availability start_date must be before end_date", field="availability"
            )
