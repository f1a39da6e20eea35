"""
Health check endpoints.
"""
from datetime import datetime, timezone

from fastapi import APIRouter

from cardsearch.api.deps import Cache

router = APIRouter()


@router.get("/health")
async def health_check(cache: Cache):
    """
    Health check endpoint.

    Reports whether the response cache is connected.
    """
    cache_enabled = cache is not None and await cache.ping()

    return {
        "status": "ok",
        "cacheEnabled": cache_enabled,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
