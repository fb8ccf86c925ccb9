"""
Search engine - runs exact and fuzzy catalog search and merges the results.
"""

import asyncio
import logging
import math
import time
from typing import Callable, List, Optional, Tuple

from gear_search.config import FuzzyConfig, SearchSettings
from gear_search.error_handling import IndexBuildError, SearchError
from gear_search.filtering import CatalogFilter
from gear_search.models import (
    CatalogItem,
    Pagination,
    SearchMeta,
    SearchQuery,
    SearchResult,
    SortBy,
)
from gear_search.store import CatalogStore, SnapshotCache
from .exact_query import ExactFilterQueryExecutor
from .fuzzy_index import FuzzyIndex
from .query_validation import validate_search_query
from .snapshot_provider import CatalogSnapshotProvider

logger = logging.getLogger(__name__)


class SearchEngine:
    """
    Orchestrate catalog search.

    Owns the fuzzy index and its build time. The index is built lazily by the
    first text search, rebuilt by the first text search after it goes stale,
    and dropped by invalidate_index(). Concurrent searches that both find the
    index stale both rebuild it; the last one to finish wins.
    """

    def __init__(
        self,
        store: CatalogStore,
        cache: SnapshotCache,
        settings: Optional[SearchSettings] = None,
        fuzzy_config: Optional[FuzzyConfig] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        self.settings = settings or SearchSettings()
        self.fuzzy_config = fuzzy_config or FuzzyConfig()
        self.snapshot_provider = CatalogSnapshotProvider(
            store,
            cache,
            cache_key=self.settings.snapshot_cache_key,
            ttl_seconds=self.settings.snapshot_ttl_seconds,
        )
        self.exact_executor = ExactFilterQueryExecutor(store)
        self._clock = clock
        self._index: Optional[FuzzyIndex] = None
        self._last_index_update: Optional[float] = None

    @property
    def index(self) -> Optional[FuzzyIndex]:
        return self._index

    def is_index_stale(self) -> bool:
        """True when there is no index or it is older than the reindex interval"""
        if self._index is None or self._last_index_update is None:
            return True
        age = self._clock() - self._last_index_update
        return age >= self.settings.reindex_interval_seconds

    async def search(self, query: SearchQuery) -> SearchResult:
        """
        Search the catalog.

        1. Applies the default page size and validates the query
        2. With text: runs the exact and fuzzy paths concurrently, post-filters
           the fuzzy matches and appends those not already matched exactly
        3. Without text: runs the exact path only
        4. Sorts, paginates and attaches match metadata

        Args:
            query: Search parameters

        Returns:
            One page of results with pagination and search metadata

        Raises:
            InvalidQueryError: If the query is malformed (before any I/O)
            DataAccessError: If the catalog store read fails
            IndexBuildError: If refreshing the fuzzy index fails
        """
        start_time = time.time()
        if query.limit is None:
            query = query.model_copy(update={"limit": self.settings.default_limit})
        validate_search_query(query, max_limit=self.settings.max_limit)

        text = (query.text or "").strip()
        filters = CatalogFilter.from_query(query)

        logger.info(
            f"Search request: text={text!r} sort_by={query.sort_by.value} "
            f"page={query.page} limit={query.limit}"
        )

        exact_matches: List[CatalogItem] = []
        fuzzy_matches: List[CatalogItem] = []

        try:
            if text:
                exact_matches, fuzzy_matches = await self._run_both_paths(text, filters)
                all_results = self._merge_results(exact_matches, fuzzy_matches)
            else:
                exact_matches = await self.exact_executor.execute(filters)
                all_results = list(exact_matches)
        except SearchError as e:
            logger.error(f"Search failed: text={text!r} error={type(e).__name__}: {e}")
            raise

        all_results = self._sort_results(all_results, query.sort_by)
        data, pagination = self._paginate_results(all_results, query.page, query.limit)

        search_time_ms = (time.time() - start_time) * 1000

        logger.info(
            f"Search completed: text={text!r} exact={len(exact_matches)} "
            f"fuzzy={len(fuzzy_matches)} total={len(all_results)} "
            f"returned={len(data)} time={search_time_ms:.1f}ms"
        )

        return SearchResult(
            data=data,
            pagination=pagination,
            search_meta=SearchMeta(
                fuzzy_matches=len(fuzzy_matches),
                exact_matches=len(exact_matches),
                total_processed=len(all_results),
                search_time_ms=search_time_ms,
            ),
        )

    async def invalidate_index(self) -> None:
        """Drop the index and the cached snapshot after a catalog change."""
        self._index = None
        self._last_index_update = None
        await self.snapshot_provider.clear()
        logger.info("Search index invalidated")

    async def _run_both_paths(
        self,
        text: str,
        filters: CatalogFilter
    ) -> Tuple[List[CatalogItem], List[CatalogItem]]:
        """
        Run the exact and fuzzy paths concurrently.

        Both paths always run to completion. If either fails, the first
        failure (exact path first) is raised and any second one is logged.
        """
        outcomes = await asyncio.gather(
            self.exact_executor.execute(filters),
            self._perform_fuzzy_search(text, filters),
            return_exceptions=True,
        )

        failures = [outcome for outcome in outcomes if isinstance(outcome, BaseException)]
        if failures:
            for extra in failures[1:]:
                logger.error(f"Concurrent search path also failed: {type(extra).__name__}: {extra}")
            raise failures[0]

        exact_matches, fuzzy_matches = outcomes
        return exact_matches, fuzzy_matches

    async def _update_search_index(self) -> FuzzyIndex:
        """
        Return a fresh index, rebuilding it from a catalog snapshot if needed.

        Raises:
            IndexBuildError: If the snapshot cannot be read
        """
        if not self.is_index_stale():
            return self._index

        logger.info("Updating search index")
        try:
            snapshot = await self.snapshot_provider.get_snapshot()
        except Exception as e:
            logger.error(f"Search index update failed: {e}")
            raise IndexBuildError(f"Search index update failed: {e}") from e

        index = FuzzyIndex.build(snapshot, self.fuzzy_config)
        self._index = index
        self._last_index_update = self._clock()

        logger.info(f"Search index updated ({index.size} items)")
        return index

    async def _perform_fuzzy_search(self, text: str, filters: CatalogFilter) -> List[CatalogItem]:
        """Fuzzy-match the text, then re-apply every structured predicate."""
        index = await self._update_search_index()
        matches = await asyncio.to_thread(index.search, text)

        # The index already answered the text question; only structured filters remain
        structured = filters.without_text()
        return [match.item for match in matches if structured.matches_structured(match.item)]

    def _merge_results(
        self,
        exact_matches: List[CatalogItem],
        fuzzy_matches: List[CatalogItem]
    ) -> List[CatalogItem]:
        """
        Exact matches first, then fuzzy matches not already present.

        Args:
            exact_matches: Exact path results in store order
            fuzzy_matches: Fuzzy path results in relevance order

        Returns:
            Merged list with no repeated item id
        """
        seen_ids = set()
        merged = []

        for item in list(exact_matches) + list(fuzzy_matches):
            if item.id not in seen_ids:
                seen_ids.add(item.id)
                merged.append(item)

        return merged

    def _sort_results(self, items: List[CatalogItem], sort_by: SortBy) -> List[CatalogItem]:
        if sort_by == SortBy.PRICE_LOW:
            return sorted(items, key=lambda item: item.daily_rate)
        if sort_by == SortBy.PRICE_HIGH:
            return sorted(items, key=lambda item: item.daily_rate, reverse=True)
        if sort_by == SortBy.NEWEST:
            return sorted(items, key=lambda item: item.created_at, reverse=True)
        if sort_by == SortBy.RATING:
            return sorted(items, key=lambda item: item.average_rating or 0, reverse=True)

        # RELEVANCE keeps merge order; DISTANCE is accepted but not implemented
        return list(items)

    def _paginate_results(
        self,
        items: List[CatalogItem],
        page: int,
        limit: int
    ) -> Tuple[List[CatalogItem], Pagination]:
        total = len(items)
        pages = math.ceil(total / limit)
        skip = (page - 1) * limit

        return items[skip:skip + limit], Pagination(
            page=page,
            limit=limit,
            total=total,
            pages=pages,
            has_next=page < pages,
            has_prev=page > 1,
        )
