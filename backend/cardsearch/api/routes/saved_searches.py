"""API routes for saved search update checks."""
from fastapi import APIRouter

from cardsearch.api.deps import SearchClient
from cardsearch.schemas.saved_search import SavedSearchCheckRequest, SavedSearchCheckResponse
from cardsearch.services.saved_searches import check_all_saved_searches

router = APIRouter(prefix="/saved-searches", tags=["Saved Searches"])


@router.post("/check", response_model=SavedSearchCheckResponse)
async def check_saved_searches(
    request: SavedSearchCheckRequest,
    search_client: SearchClient,
) -> SavedSearchCheckResponse:
    """
    Check saved searches for items newer than their watermarks.

    Saved searches are stored by the client; send each one with the
    `lastSeenId` returned as `newestItemId` by the previous check.
    """
    results = await check_all_saved_searches(search_client, request.searches)
    return SavedSearchCheckResponse(
        results=results,
        with_updates=[r.id for r in results if r.new_items_count > 0],
    )
