"""
Error handling module for Gear Search.

Defines the error taxonomy surfaced by the search engine.
"""

from .errors import SearchError, DataAccessError, InvalidQueryError, IndexBuildError

__all__ = ['SearchError', 'DataAccessError', 'InvalidQueryError', 'IndexBuildError']
