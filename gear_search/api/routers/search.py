"""
Catalog search routes.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from gear_search.error_handling import InvalidQueryError, SearchError
from gear_search.models import SearchResult
from gear_search.search import SearchEngine, parse_search_query

logger = logging.getLogger(__name__)

router = APIRouter()


def get_search_engine(request: Request) -> SearchEngine:
    """Search engine created at application startup"""
    return request.app.state.search_engine


@router.get("/search", response_model=SearchResult)
async def search_catalog(
    q: Optional[str] = Query(None, description="Free-text query"),
    category: Optional[str] = None,
    condition: Optional[str] = None,
    city: Optional[str] = None,
    state: Optional[str] = None,
    min_price: Optional[str] = Query(None, alias="minPrice"),
    max_price: Optional[str] = Query(None, alias="maxPrice"),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    sort_by: str = Query("relevance", alias="sortBy"),
    page: str = Query("1"),
    limit: Optional[str] = Query(None),
    engine: SearchEngine = Depends(get_search_engine),
):
    """
    Search the gear catalog.

    Text queries combine exact substring matches with fuzzy matches; the
    structured filters apply to both. Malformed parameters return 400.
    """
    params = {
        "text": q,
        "category": category,
        "condition": condition,
        "city": city,
        "state": state,
        "min_price": min_price,
        "max_price": max_price,
        "sort_by": sort_by,
        "page": page,
        "limit": limit,
    }
    if start_date or end_date:
        params["availability"] = {"start_date": start_date, "end_date": end_date}

    try:
        query = parse_search_query(params)
        return await engine.search(query)
    except InvalidQueryError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SearchError as e:
        logger.error(f"Search request failed: {type(e).__name__}: {e}")
        raise HTTPException(status_code=500, detail="Search failed")


@router.post("/search/invalidate")
async def invalidate_search_index(engine: SearchEngine = Depends(get_search_engine)):
    """Drop the search index after a catalog change"""
    await engine.invalidate_index()
    return {"invalidated": True}
