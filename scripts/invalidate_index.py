#!/usr/bin/env python3
"""Clear the cached catalog snapshot so search rebuilds its index from the database."""

import asyncio
import sys

from dotenv import load_dotenv
load_dotenv()

import redis.asyncio as redis

from gear_search.cache import CacheManager
from gear_search.config import get_search_settings


async def invalidate_index():
    settings = get_search_settings()

    if not settings.database.redis_url:
        print('REDIS_URL is not set; nothing to invalidate')
        return

    client = redis.from_url(settings.database.redis_url, decode_responses=True)
    try:
        cache = CacheManager(client)
        key = settings.search.snapshot_cache_key
        if not await cache.exists(key):
            print(f'No cached snapshot under {key}')
        elif await cache.delete(key):
            print(f'Cleared cached snapshot {key}')
        else:
            print(f'Error: could not clear {key}')
            sys.exit(1)
    finally:
        await client.aclose()

if __name__ == '__main__':
    asyncio.run(invalidate_index())
