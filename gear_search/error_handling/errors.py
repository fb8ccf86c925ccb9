"""
Search engine errors.

All errors are surfaced to the caller unmodified. The hosting layer maps
InvalidQueryError to a client error and the rest to a server error.
"""

from typing import Optional


class SearchError(Exception):
    """Base class for all search engine errors."""


class DataAccessError(SearchError):
    """
    The catalog store (or the backing read of the snapshot) failed.

    Not retried internally. The underlying exception is chained as
    ``__cause__`` when one exists.
    """


class IndexBuildError(DataAccessError):
    """
    A data access failure that happened while rebuilding the fuzzy index.

    Lets operators tell a failed index refresh apart from a failed search.
    """


class InvalidQueryError(SearchError):
    """
    A search query violates one of its invariants.

    Attributes:
        field: Name of the offending query field, if known
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field
