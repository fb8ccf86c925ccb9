"""
FastAPI application hosting the catalog search engine.
"""

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from gear_search import __version__
from gear_search.cache import CacheManager, MemoryCache
from gear_search.config import get_search_settings
from gear_search.db import init_db, close_db, get_pg_pool, get_redis
from gear_search.search import SearchEngine
from gear_search.store import PostgresCatalogStore
from gear_search.api.routers import search

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    # Startup
    logger.info("Starting Gear Search API...")
    settings = get_search_settings()
    await init_db(settings.database)
    logger.info("Database initialized")

    redis_client = get_redis()
    cache = CacheManager(redis_client) if redis_client is not None else MemoryCache()
    app.state.cache = cache
    app.state.search_engine = SearchEngine(
        store=PostgresCatalogStore(get_pg_pool()),
        cache=cache,
        settings=settings.search,
        fuzzy_config=settings.fuzzy,
    )

    yield

    # Shutdown
    logger.info("Shutting down Gear Search API...")
    await close_db()


app = FastAPI(
    title="Gear Search API",
    description="Catalog search for the gear rental marketplace",
    version=__version__,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    cache = getattr(app.state, "cache", None)
    cache_healthy = await cache.health_check() if cache is not None else False
    return {
        "status": "healthy",
        "version": __version__,
        "cache": "up" if cache_healthy else "down",
    }


app.include_router(search.router, prefix="/api", tags=["search"])
