"""
Command-line catalog search for Gear Search.

Runs one search against the catalog database and prints the page of
results with its match metadata.
"""

import asyncio
import argparse
import logging
import sys
from typing import Any, Dict

# Load environment variables before configuration is read
from dotenv import load_dotenv
load_dotenv()

from gear_search.cache import CacheManager, MemoryCache
from gear_search.config import get_search_settings
from gear_search.db import init_db, close_db, get_pg_pool, get_redis
from gear_search.error_handling import InvalidQueryError
from gear_search.models import CatalogItem, SearchResult, SortBy
from gear_search.search import SearchEngine, parse_search_query
from gear_search.store import PostgresCatalogStore


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def format_item(item: CatalogItem) -> str:
    """
    Format a catalog item for console output.

    Args:
        item: CatalogItem to format

    Returns:
        Multi-line string representation of the item
    """
    lines = [f"📌 {item.title}", f"   ID: {item.id}"]

    price = f"${item.daily_rate:,.2f}/day"
    if item.weekly_rate:
        price += f", ${item.weekly_rate:,.2f}/week"
    lines.append(f"   Price: {price}")

    details = [value for value in (item.brand, item.model, item.category, item.condition) if value]
    if details:
        lines.append(f"   Details: {' · '.join(details)}")

    location = ", ".join(value for value in (item.city, item.state) if value)
    if location:
        lines.append(f"   Location: {location}")

    if item.average_rating is not None:
        lines.append(f"   Rating: {item.average_rating:.1f} ({item.total_reviews} reviews)")

    if item.owner and item.owner.full_name:
        lines.append(f"   Owner: {item.owner.full_name}")

    lines.append("")
    return "\n".join(lines)


def format_results(result: SearchResult) -> str:
    """
    Format a search result page for console output.

    Args:
        result: SearchResult to format

    Returns:
        Formatted string with items, pagination and match metadata
    """
    pagination = result.pagination
    if not result.data:
        return "No gear found matching your criteria.\n"

    output = [
        f"\n{'=' * 60}\n",
        f"Page {pagination.page} of {pagination.pages} ({pagination.total} item(s))\n",
        f"{'=' * 60}\n\n",
    ]
    for item in result.data:
        output.append(format_item(item))
        output.append("\n")

    meta = result.search_meta
    if meta:
        output.append(
            f"Exact matches: {meta.exact_matches} | Fuzzy matches: {meta.fuzzy_matches} | "
            f"Merged: {meta.total_processed} | {meta.search_time_ms:.1f} ms\n"
        )
    output.append(f"{'=' * 60}\n")
    return "".join(output)


def build_query_params(args: argparse.Namespace) -> Dict[str, Any]:
    """Map parsed CLI arguments to search query parameters."""
    params: Dict[str, Any] = {
        "text": args.query,
        "category": args.category,
        "condition": args.condition,
        "city": args.city,
        "state": args.state,
        "min_price": args.min_price,
        "max_price": args.max_price,
        "sort_by": args.sort_by,
        "page": args.page,
        "limit": args.limit,
    }
    if args.start_date or args.end_date:
        params["availability"] = {"start_date": args.start_date, "end_date": args.end_date}
    return params


async def run_search(args: argparse.Namespace) -> int:
    """
    Execute one catalog search.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error, 130 if interrupted)
    """
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Verbose logging enabled")

    try:
        query = parse_search_query(build_query_params(args))
    except InvalidQueryError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    settings = get_search_settings()

    try:
        await init_db(settings.database)
        redis_client = get_redis()
        engine = SearchEngine(
            store=PostgresCatalogStore(get_pg_pool()),
            cache=CacheManager(redis_client) if redis_client is not None else MemoryCache(),
            settings=settings.search,
            fuzzy_config=settings.fuzzy,
        )

        result = await engine.search(query)
        print(format_results(result))
        return 0

    except InvalidQueryError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        logger.info("Search interrupted by user")
        print("\n\n⚠️  Search interrupted by user", file=sys.stderr)
        return 130

    except Exception as e:
        logger.exception(f"Search failed with error: {str(e)}")
        print(f"\n❌ Error: {str(e)}", file=sys.stderr)
        return 1

    finally:
        await close_db()


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="gear-search",
        description="Search the gear rental catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Search for cameras, cheapest first
  gear-search "canon" --sort-by price-low

  # Filter only, no text
  gear-search --category cameras --city austin

  # Only gear free for a date range
  gear-search "tent" --start-date 2025-07-01 --end-date 2025-07-05
        """
    )

    parser.add_argument("query", nargs="?", default=None, help="Free-text search (optional)")
    parser.add_argument("--category", default=None, help="Exact category")
    parser.add_argument("--condition", default=None, help="Exact condition (new, like-new, good, fair, poor)")
    parser.add_argument("--city", default=None, help="City substring")
    parser.add_argument("--state", default=None, help="State substring")
    parser.add_argument("--min-price", type=float, default=None, help="Minimum daily rate")
    parser.add_argument("--max-price", type=float, default=None, help="Maximum daily rate")
    parser.add_argument("--start-date", default=None, help="Availability window start (ISO date)")
    parser.add_argument("--end-date", default=None, help="Availability window end (ISO date)")
    parser.add_argument(
        "--sort-by",
        default=SortBy.RELEVANCE.value,
        choices=[option.value for option in SortBy],
        help="Result ordering (default: relevance)"
    )
    parser.add_argument("--page", type=int, default=1, help="Page number (default: 1)")
    parser.add_argument("--limit", type=int, default=None, help="Page size, 1-50 (default: SEARCH_DEFAULT_LIMIT, 20)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging output")

    return parser


def main() -> int:
    """
    Main entry point for the CLI application.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_argument_parser()
    args = parser.parse_args()

    try:
        return asyncio.run(run_search(args))
    except KeyboardInterrupt:
        print("\n\n⚠️  Search interrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
