"""
Exact-filter query executor - structured query against the catalog store.
"""

import logging
from typing import List

from gear_search.error_handling import DataAccessError
from gear_search.filtering import CatalogFilter
from gear_search.models import CatalogItem, SearchQuery
from gear_search.store import CatalogStore

logger = logging.getLogger(__name__)


class ExactFilterQueryExecutor:
    """Run a search query's structured and substring predicates in the store"""

    def __init__(self, store: CatalogStore):
        self.store = store

    async def run(self, query: SearchQuery) -> List[CatalogItem]:
        """
        Execute the exact path for a query.

        Args:
            query: Validated search query; its text, if any, is applied as a
                case-insensitive substring match

        Returns:
            Every matching item, unpaginated, in store order

        Raises:
            DataAccessError: If the store read fails
        """
        return await self.execute(CatalogFilter.from_query(query))

    async def execute(self, filters: CatalogFilter) -> List[CatalogItem]:
        try:
            items = await self.store.query_catalog(filters)
        except DataAccessError:
            raise
        except Exception as e:
            raise DataAccessError(f"Exact catalog query failed: {e}") from e

        logger.debug(f"Exact query matched {len(items)} items")
        return items
