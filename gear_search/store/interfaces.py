"""
Capability interfaces for the search engine's collaborators.

These use structural subtyping: any object with matching methods can be
injected, so fakes substitute freely in tests.
"""

from typing import Any, List, Optional, Protocol

from gear_search.filtering import CatalogFilter
from gear_search.models import CatalogItem


class CatalogStore(Protocol):
    """Read access to the persistent catalog."""

    async def query_catalog(self, filters: CatalogFilter) -> List[CatalogItem]:
        """Return every item matching the filter, owner summary attached.

        Raises:
            DataAccessError: If the store read fails
        """
        ...

    async def get_all_catalog_items(self) -> List[CatalogItem]:
        """Return the full catalog with owners and active booking windows.

        Raises:
            DataAccessError: If the store read fails
        """
        ...


class SnapshotCache(Protocol):
    """Key/value cache with expiry. Unavailability reads as a miss."""

    async def get(self, key: str) -> Optional[Any]:
        ...

    async def set(self, key: str, value: Any, ttl_seconds: int) -> bool:
        ...

    async def delete(self, key: str) -> bool:
        ...
