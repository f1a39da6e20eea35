"""
Replace sample-based pill counts with exact counts from the index.
"""
import asyncio
from typing import Awaitable, Iterable, Optional, Protocol, TypeVar

import structlog

from cardsearch.core.config import settings
from cardsearch.core.constants import MAX_FILTER_PILLS, MAX_KEYWORD_PILLS, MIN_PILL_RESULTS
from cardsearch.schemas.smart_pills import SmartPill
from cardsearch.services.pills.filters import build_algolia_filter
from cardsearch.services.search_index import SearchIndexError, SearchResult

logger = structlog.get_logger()

T = TypeVar("T")


class SearchIndex(Protocol):
    async def search(
        self,
        query: str,
        hits_per_page: int,
        filters: Optional[str] = None,
        distinct: Optional[bool] = None,
    ) -> SearchResult: ...


async def gather_all(aws: Iterable[Awaitable[T]]) -> list[T]:
    """
    Await every awaitable concurrently, results in input order.

    All of them run to completion before the first unexpected exception is
    re-raised, so no lookup is left running in the background.
    """
    outcomes = await asyncio.gather(*aws, return_exceptions=True)
    for outcome in outcomes:
        if isinstance(outcome, BaseException):
            raise outcome
    return list(outcomes)


async def count_pill(client: SearchIndex, query: str, pill: SmartPill) -> int:
    """
    Exact hit count for `query` narrowed by one pill.

    Uses distinct=True so counts match what the search view shows.
    """
    if pill.is_keyword:
        keyword_query = f"{query} {pill.filter.value}"
        result = await client.search(keyword_query, hits_per_page=0, distinct=True)
    else:
        result = await client.search(
            query,
            hits_per_page=0,
            filters=build_algolia_filter(pill.filter),
            distinct=True,
        )
    return result.nb_hits


async def fetch_actual_counts(
    client: SearchIndex,
    query: str,
    pills: list[SmartPill],
    concurrency: Optional[int] = None,
) -> list[SmartPill]:
    """
    Fetch exact counts for pills and keep the best ones.

    Lookups run concurrently. A failed lookup drops that pill only.

    Args:
        client: Search index client
        query: Active query text
        pills: Candidates from synthesis
        concurrency: Maximum simultaneous lookups

    Returns:
        Up to 10 keyword pills followed by up to 5 filter pills
    """
    semaphore = asyncio.Semaphore(concurrency or settings.smart_pills_count_concurrency)

    async def with_count(pill: SmartPill) -> Optional[SmartPill]:
        async with semaphore:
            try:
                count = await count_pill(client, query, pill)
            except SearchIndexError as e:
                logger.warning("Pill count lookup failed", pill_id=pill.id, error=str(e))
                return None
        return pill.model_copy(update={"count": count})

    counted = await gather_all(with_count(p) for p in pills)
    valid = [p for p in counted if p is not None and p.count >= MIN_PILL_RESULTS]

    keyword_pills = sorted((p for p in valid if p.is_keyword), key=lambda p: p.score, reverse=True)
    filter_pills = sorted((p for p in valid if not p.is_keyword), key=lambda p: p.score, reverse=True)

    dropped = len(pills) - len(valid)
    if dropped:
        logger.debug("Pills dropped after count lookup", query=query, dropped=dropped)

    return keyword_pills[:MAX_KEYWORD_PILLS] + filter_pills[:MAX_FILTER_PILLS]
