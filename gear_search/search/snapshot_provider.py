"""
Catalog snapshot provider - full catalog from the cache or the store.
"""

import logging
from typing import List

from pydantic import ValidationError

from gear_search.error_handling import DataAccessError
from gear_search.models import CatalogItem
from gear_search.store import CatalogStore, SnapshotCache

logger = logging.getLogger(__name__)


class CatalogSnapshotProvider:
    """Serve the full catalog, caching it between index rebuilds"""

    def __init__(
        self,
        store: CatalogStore,
        cache: SnapshotCache,
        cache_key: str = "search:index",
        ttl_seconds: int = 1800
    ):
        self.store = store
        self.cache = cache
        self.cache_key = cache_key
        self.ttl_seconds = ttl_seconds

    async def get_snapshot(self) -> List[CatalogItem]:
        """
        Get the full catalog.

        Returns the cached snapshot on a hit. On a miss, reads every item
        from the store and caches the result.

        Returns:
            All catalog items with owner summary and active booking windows

        Raises:
            DataAccessError: If the store read fails
        """
        cached = await self.cache.get(self.cache_key)
        if cached is not None:
            try:
                items = [CatalogItem.model_validate(record) for record in cached]
                logger.debug(f"Catalog snapshot cache hit ({len(items)} items)")
                return items
            except (ValidationError, TypeError) as e:
                logger.warning(f"Discarding unreadable catalog snapshot: {e}")

        try:
            items = await self.store.get_all_catalog_items()
        except DataAccessError:
            raise
        except Exception as e:
            raise DataAccessError(f"Failed to read catalog snapshot: {e}") from e

        stored = await self.cache.set(
            self.cache_key,
            [item.model_dump(mode="json") for item in items],
            self.ttl_seconds,
        )
        logger.debug(f"Catalog snapshot loaded from store ({len(items)} items, cached={stored})")
        return items

    async def clear(self) -> bool:
        """Drop the cached snapshot so the next read goes to the store."""
        return await self.cache.delete(self.cache_key)
