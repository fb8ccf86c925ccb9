"""
In-memory catalog store.

Evaluates CatalogFilter directly against a list of items. Used in tests and
for local experimentation without a database.
"""

from typing import Iterable, List, Optional

from gear_search.filtering import CatalogFilter
from gear_search.models import CatalogItem


class InMemoryCatalogStore:
    """Catalog store over a list of items, in insertion order"""

    def __init__(self, items: Optional[Iterable[CatalogItem]] = None):
        self._items: List[CatalogItem] = list(items or [])

    async def query_catalog(self, filters: CatalogFilter) -> List[CatalogItem]:
        return filters.apply(self._items)

    async def get_all_catalog_items(self) -> List[CatalogItem]:
        return list(self._items)

    def upsert(self, item: CatalogItem) -> None:
        """Insert an item, or replace the item with the same id in place."""
        for index, existing in enumerate(self._items):
            if existing.id == item.id:
                self._items[index] = item
                return
        self._items.append(item)

    def delete(self, item_id: str) -> bool:
        before = len(self._items)
        self._items = [item for item in self._items if item.id != item_id]
        return len(self._items) < before
