"""
Filtering module for catalog items.

This module provides the filter specification shared by the catalog store
query and the post-filtering of fuzzy search results.
"""

from .catalog_filter import CatalogFilter

__all__ = ['CatalogFilter']
