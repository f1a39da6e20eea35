"""
API module for FastAPI routes.
"""
from fastapi import APIRouter

from cardsearch.api.routes import (
    health,
    saved_searches,
    smart_pills,
)

api_router = APIRouter()

# Include all route modules
api_router.include_router(smart_pills.router, tags=["Smart Pills"])
api_router.include_router(saved_searches.router)

# Health is served at the root, outside the /api prefix
health_router = health.router

__all__ = ["api_router", "health_router"]
