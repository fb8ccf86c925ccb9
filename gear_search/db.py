"""
Database and cache connection management.
"""

import asyncpg
import redis.asyncio as redis
from typing import Optional
import logging

from gear_search.config import DatabaseConfig

logger = logging.getLogger(__name__)

# Global connection pools
pg_pool: Optional[asyncpg.Pool] = None
redis_client: Optional[redis.Redis] = None


async def init_db(config: Optional[DatabaseConfig] = None):
    """Initialize database connections.

    PostgreSQL is required. Redis is optional: when it is not configured or
    cannot be reached the snapshot cache runs disabled.
    """
    global pg_pool, redis_client

    config = config or DatabaseConfig()

    # PostgreSQL
    try:
        pg_pool = await asyncpg.create_pool(
            config.database_url,
            min_size=config.pool_min_size,
            max_size=config.pool_max_size,
        )
        logger.info("PostgreSQL connection pool created")
    except Exception as e:
        logger.error(f"Failed to connect to PostgreSQL: {e}")
        raise

    # Redis
    if not config.redis_url:
        logger.warning("Redis URL not configured, snapshot cache disabled")
        return

    try:
        redis_client = redis.from_url(config.redis_url, decode_responses=True)
        await redis_client.ping()
        logger.info("Redis connection established")
    except (redis.RedisError, OSError) as e:
        logger.warning(f"Failed to connect to Redis, snapshot cache disabled: {e}")
        redis_client = None


async def close_db():
    """Close database connections"""
    global pg_pool, redis_client

    if pg_pool:
        await pg_pool.close()
        pg_pool = None
        logger.info("PostgreSQL connection pool closed")

    if redis_client:
        await redis_client.aclose()
        redis_client = None
        logger.info("Redis connection closed")


def get_pg_pool() -> asyncpg.Pool:
    """Get PostgreSQL connection pool"""
    if pg_pool is None:
        raise RuntimeError("Database not initialized")
    return pg_pool


def get_redis() -> Optional[redis.Redis]:
    """Get Redis client, or None when caching is disabled"""
    return redis_client
