"""
In-process TTL cache.

Used when Redis is not configured and as the cache in tests.
"""

import time
from collections import OrderedDict
from typing import Any, Callable, Optional, Tuple


class MemoryCache:
    """
    Bounded in-memory cache with per-entry expiry.

    Attributes:
        max_entries: Entry count above which the oldest entries are evicted
        default_ttl_seconds: TTL used when set() is given none
    """

    def __init__(
        self,
        max_entries: int = 1000,
        default_ttl_seconds: int = 300,
        clock: Callable[[], float] = time.monotonic
    ):
        self.max_entries = max_entries
        self.default_ttl_seconds = default_ttl_seconds
        self._clock = clock
        self._entries: "OrderedDict[str, Tuple[float, Any]]" = OrderedDict()

    async def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None

        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    async def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> bool:
        ttl = ttl_seconds if ttl_seconds is not None else self.default_ttl_seconds
        self._entries[key] = (self._clock() + ttl, value)
        self._entries.move_to_end(key)

        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)
        return True

    async def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    async def exists(self, key: str) -> bool:
        return await self.get(key) is not None

    async def clear(self) -> None:
        self._entries.clear()

    async def health_check(self) -> bool:
        return True

    def size(self) -> int:
        return len(self._entries)
