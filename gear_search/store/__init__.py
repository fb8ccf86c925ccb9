"""Catalog store interfaces and implementations"""

from .interfaces import CatalogStore, SnapshotCache
from .memory_store import InMemoryCatalogStore
from .postgres_store import PostgresCatalogStore

__all__ = ["CatalogStore", "SnapshotCache", "InMemoryCatalogStore", "PostgresCatalogStore"]
