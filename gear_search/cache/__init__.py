"""Snapshot cache implementations"""

from .cache_manager import CacheManager
from .memory_cache import MemoryCache

__all__ = ["CacheManager", "MemoryCache"]
