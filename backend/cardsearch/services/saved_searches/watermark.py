"""
New-item detection for saved searches.

Each saved search remembers the id of the newest hit seen at its last check
(the watermark). A check fetches the newest hits and counts how many sit
above the watermark. The scan is bounded to the first 100 hits: when the
watermark is not among them the count saturates at 100 and the result is
flagged as saturated. This is a known approximation, not an exact count.
"""
from typing import Optional

import structlog

from cardsearch.core.constants import GRADING_SERVICE_ATTRIBUTE, NEW_ITEMS_SCAN_LIMIT
from cardsearch.schemas.saved_search import SavedSearchFilters, SavedSearchState, UpdateCheckResult
from cardsearch.services.pills.enrichment import SearchIndex, gather_all
from cardsearch.services.pills.filters import join_filters, quote_value
from cardsearch.services.search_index import SearchIndexError

logger = structlog.get_logger()


def _any_of(attribute: str, values: list[str]) -> str:
    if not values:
        return ""
    return "(" + " OR ".join(f"{attribute}:{quote_value(v)}" for v in values) + ")"


def build_saved_search_filter(filters: Optional[SavedSearchFilters]) -> Optional[str]:
    """
    Build the Algolia filter string for a saved search's sidebar refinements.

    Values within one refinement are ORed; refinements are ANDed.
    """
    if filters is None or filters.sidebar_filters is None:
        return None

    sidebar = filters.sidebar_filters
    expression = join_filters([
        _any_of("status", sidebar.status),
        _any_of("marketplace", sidebar.marketplace),
        _any_of(GRADING_SERVICE_ATTRIBUTE, sidebar.grading_service),
    ])
    return expression or None


async def count_new_items(
    client: SearchIndex,
    query: str,
    last_seen_id: str,
    filters: Optional[str],
) -> tuple[int, bool]:
    """
    Count hits newer than the watermark.

    Returns:
        (count, saturated); saturated means the watermark was not found
        within the scan limit
    """
    result = await client.search(
        query,
        hits_per_page=NEW_ITEMS_SCAN_LIMIT,
        filters=filters,
        distinct=True,
    )
    for position, hit in enumerate(result.hits):
        if hit.get("objectID") == last_seen_id:
            return position, False
    return NEW_ITEMS_SCAN_LIMIT, True


async def check_for_updates(client: SearchIndex, saved: SavedSearchState) -> UpdateCheckResult:
    """
    Check one saved search for new items since its watermark.

    The first check only establishes the watermark. Index failures are
    logged and reported as no new items with the previous result count.
    """
    filters = build_saved_search_filter(saved.filters)

    try:
        newest = await client.search(saved.query, hits_per_page=1, filters=filters, distinct=True)
        if not newest.hits:
            return UpdateCheckResult(id=saved.id, new_items_count=0, total_results=0)

        newest_id = newest.hits[0].get("objectID")
        result = UpdateCheckResult(
            id=saved.id,
            total_results=newest.nb_hits,
            newest_item_id=newest_id,
        )

        # First check establishes the baseline
        if not saved.last_seen_id or saved.last_seen_id == newest_id:
            return result

        new_items, saturated = await count_new_items(
            client, saved.query, saved.last_seen_id, filters
        )
    except SearchIndexError as e:
        logger.error("Saved search update check failed", search_id=saved.id, error=str(e))
        return UpdateCheckResult(
            id=saved.id,
            new_items_count=0,
            total_results=saved.last_seen_count or 0,
            newest_item_id=saved.last_seen_id,
        )

    return result.model_copy(update={"new_items_count": new_items, "saturated": saturated})


async def check_all_saved_searches(
    client: SearchIndex,
    searches: list[SavedSearchState],
) -> list[UpdateCheckResult]:
    """Check every saved search concurrently. Results keep input order."""
    return await gather_all(check_for_updates(client, s) for s in searches)
