"""
PostgreSQL catalog store.

Reads the marketplace's "Gear", "User" and "Rental" tables. Read-only.
"""

import json
import logging
from typing import Any, List, Tuple

import asyncpg

from gear_search.error_handling import DataAccessError
from gear_search.filtering import CatalogFilter
from gear_search.models import BookingWindow, CatalogItem, OwnerSummary

logger = logging.getLogger(__name__)

# Rental statuses that block availability
ACTIVE_BOOKING_STATUSES = ["PENDING", "APPROVED"]

CATALOG_SELECT = """
    SELECT g.id, g.title, g.description,
           g."dailyRate", g."weeklyRate", g."monthlyRate",
           g.category::text AS category, g.brand, g.model,
           g.condition::text AS condition, g.city, g.state,
           g."averageRating", g."totalReviews", g."createdAt", g."updatedAt",
           u.id AS owner_id, u.full_name AS owner_name, u.email AS owner_email,
           COALESCE(
               (SELECT json_agg(json_build_object(
                           'start_date', r."startDate",
                           'end_date', r."endDate",
                           'status', lower(r.status::text))
                       ORDER BY r."startDate")
                FROM "Rental" r
                WHERE r."gearId" = g.id
                  AND r.status::text = ANY($1::text[])),
               '[]'::json
           ) AS bookings
    FROM "Gear" g
    LEFT JOIN "User" u ON u.id = g."userId"
"""

CATALOG_ORDER = 'ORDER BY g."createdAt" DESC, g.id'


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user text matches literally."""
    return (
        value.replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("_", "\\_")
    )


def build_where(filters: CatalogFilter) -> Tuple[str, List[Any]]:
    """
    Translate a filter into a WHERE clause and its positional parameters.

    Parameter $1 is reserved for the active booking statuses used by the
    select list, so filter parameters start at $2.

    Args:
        filters: Filter specification

    Returns:
        Tuple of (where clause, or "" when unfiltered; parameter list)
    """
    params: List[Any] = [ACTIVE_BOOKING_STATUSES]
    clauses: List[str] = []

    def bind(value: Any) -> str:
        params.append(value)
        return f"${len(params)}"

    if filters.min_price is not None:
        clauses.append(f'g."dailyRate" >= {bind(filters.min_price)}')
    if filters.max_price is not None:
        clauses.append(f'g."dailyRate" <= {bind(filters.max_price)}')

    if filters.category:
        clauses.append(f"g.category::text = {bind(filters.category)}")
    if filters.condition:
        clauses.append(f"g.condition::text = {bind(filters.condition)}")

    if filters.city:
        clauses.append(f"g.city ILIKE {bind('%' + escape_like(filters.city) + '%')}")
    if filters.state:
        clauses.append(f"g.state ILIKE {bind('%' + escape_like(filters.state) + '%')}")

    if filters.has_availability:
        end = bind(filters.available_to)
        start = bind(filters.available_from)
        clauses.append(
            "NOT EXISTS ("
            'SELECT 1 FROM "Rental" b '
            'WHERE b."gearId" = g.id '
            "AND b.status::text = ANY($1::text[]) "
            f'AND b."startDate" <= {end} '
            f'AND b."endDate" >= {start})'
        )

    if filters.text:
        pattern = bind('%' + escape_like(filters.text) + '%')
        clauses.append(
            f"(g.title ILIKE {pattern} OR g.description ILIKE {pattern} "
            f"OR g.brand ILIKE {pattern} OR g.model ILIKE {pattern})"
        )

    where = "WHERE " + " AND ".join(clauses) if clauses else ""
    return where, params


def row_to_item(row: Any) -> CatalogItem:
    """Convert a catalog row into a CatalogItem."""
    bookings = row["bookings"]
    if isinstance(bookings, str):
        bookings = json.loads(bookings)

    owner = None
    if row["owner_id"] is not None:
        owner = OwnerSummary(
            id=row["owner_id"],
            full_name=row["owner_name"],
            email=row["owner_email"],
        )

    return CatalogItem(
        id=row["id"],
        title=row["title"],
        description=row["description"] or "",
        daily_rate=row["dailyRate"],
        weekly_rate=row["weeklyRate"],
        monthly_rate=row["monthlyRate"],
        category=row["category"],
        brand=row["brand"],
        model=row["model"],
        condition=row["condition"],
        city=row["city"] or "",
        state=row["state"] or "",
        average_rating=row["averageRating"] or None,
        total_reviews=row["totalReviews"] or 0,
        created_at=row["createdAt"],
        updated_at=row["updatedAt"],
        owner=owner,
        bookings=[BookingWindow(**booking) for booking in bookings],
    )


class PostgresCatalogStore:
    """Catalog store over an asyncpg pool"""

    def __init__(self, pool: asyncpg.Pool):
        self.pool = pool

    async def query_catalog(self, filters: CatalogFilter) -> List[CatalogItem]:
        where, params = build_where(filters)
        sql = f"{CATALOG_SELECT} {where} {CATALOG_ORDER}"
        return await self._fetch_items(sql, params)

    async def get_all_catalog_items(self) -> List[CatalogItem]:
        sql = f"{CATALOG_SELECT} {CATALOG_ORDER}"
        return await self._fetch_items(sql, [ACTIVE_BOOKING_STATUSES])

    async def _fetch_items(self, sql: str, params: List[Any]) -> List[CatalogItem]:
        try:
            async with self.pool.acquire() as conn:
                rows = await conn.fetch(sql, *params)
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            logger.error(f"Catalog query failed: {e}")
            raise DataAccessError(f"Catalog query failed: {e}") from e

        return [row_to_item(row) for row in rows]
