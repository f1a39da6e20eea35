"""
API dependencies.

The search client and cache are created once in the application lifespan
and kept on `app.state`; these dependencies hand them to routes.
"""
from typing import Annotated, Optional

from fastapi import Depends, Request

from cardsearch.repositories.cache_repo import CacheRepository
from cardsearch.services.pills.service import SmartPillService
from cardsearch.services.search_index import AlgoliaSearchClient


def get_search_client(request: Request) -> AlgoliaSearchClient:
    """Get the process-wide search index client."""
    return request.app.state.search_client


def get_cache(request: Request) -> Optional[CacheRepository]:
    """Get the response cache, or None when running without Redis."""
    return getattr(request.app.state, "cache", None)


def get_smart_pill_service(
    search_client: Annotated[AlgoliaSearchClient, Depends(get_search_client)],
    cache: Annotated[Optional[CacheRepository], Depends(get_cache)],
) -> SmartPillService:
    return SmartPillService(search_client, cache=cache)


# Type aliases for cleaner dependency injection
SearchClient = Annotated[AlgoliaSearchClient, Depends(get_search_client)]
Cache = Annotated[Optional[CacheRepository], Depends(get_cache)]
PillService = Annotated[SmartPillService, Depends(get_smart_pill_service)]
