"""
Smart pill API endpoints.

Provides query-driven filter suggestions, pill toggling and the popular
query catalogue.
"""
from typing import Optional

import structlog
from fastapi import APIRouter, HTTPException, Query, status

from cardsearch.api.deps import PillService
from cardsearch.core.constants import POPULAR_QUERIES
from cardsearch.core.exceptions import UnsupportedFilterError
from cardsearch.schemas.smart_pills import (
    PillToggleRequest,
    PillToggleResponse,
    PopularQueriesResponse,
    PopularQuery,
    SmartPillsResponse,
)
from cardsearch.services.pills.selection import build_search_state, toggle_pill
from cardsearch.services.search_index import SearchIndexError

router = APIRouter()
logger = structlog.get_logger(__name__)

MAX_QUERY_LENGTH = 256


@router.get(
    "/smart-pills",
    response_model=SmartPillsResponse,
    response_model_exclude_none=True,
)
async def get_smart_pills(
    service: PillService,
    q: str = Query("", max_length=MAX_QUERY_LENGTH, description="Search query"),
    threshold: Optional[int] = Query(
        None, ge=0, description="Minimum total hits before pills are suggested"
    ),
):
    """
    Get smart filter suggestions for a query.

    An empty query returns popular default pills. Queries with fewer total
    hits than `threshold` return no pills and reason "below_threshold".
    """
    try:
        return await service.get_smart_pills(q, threshold)
    except SearchIndexError as e:
        logger.error("Error generating smart pills", query=q, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate smart pills",
        )


@router.post("/smart-pills/toggle", response_model=PillToggleResponse)
async def toggle_smart_pill(request: PillToggleRequest):
    """
    Toggle a pill and return the resulting selection and search parameters.

    Keyword pills are appended to the query; the rest become filters.
    """
    active = toggle_pill(request.active_pill_ids, request.toggled_pill_id)

    try:
        state = build_search_state(request.query, request.pills, active)
    except UnsupportedFilterError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    known = [p.id for p in request.pills if p.id in active]
    unknown = sorted(active - set(known))

    return PillToggleResponse(
        active_pill_ids=known + unknown,
        query=state.query,
        filters=state.filters,
    )


@router.get("/popular-queries", response_model=PopularQueriesResponse)
async def get_popular_queries():
    """Return predefined popular search queries."""
    queries = [PopularQuery(**q) for q in POPULAR_QUERIES]
    return PopularQueriesResponse(queries=queries, total=len(queries))
