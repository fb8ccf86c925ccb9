"""Search services"""

from .fuzzy_index import FuzzyIndex, FuzzyMatch
from .exact_query import ExactFilterQueryExecutor
from .snapshot_provider import CatalogSnapshotProvider
from .query_validation import parse_search_query, validate_search_query
from .search_engine import SearchEngine

__all__ = [
    "FuzzyIndex",
    "FuzzyMatch",
    "ExactFilterQueryExecutor",
    "CatalogSnapshotProvider",
    "parse_search_query",
    "validate_search_query",
    "SearchEngine",
]
