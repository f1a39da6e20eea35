"""
Pydantic schemas for API request/response validation.
"""
from cardsearch.schemas.smart_pills import (
    FilterValue,
    PillFilter,
    SmartPill,
    SmartPillsResponse,
    PopularQuery,
    PopularQueriesResponse,
    PillToggleRequest,
    PillToggleResponse,
)
from cardsearch.schemas.saved_search import (
    SidebarFilters,
    SavedSearchFilters,
    SavedSearchState,
    SavedSearchCheckRequest,
    SavedSearchCheckResponse,
    UpdateCheckResult,
)

__all__ = [
    "FilterValue",
    "PillFilter",
    "SmartPill",
    "SmartPillsResponse",
    "PopularQuery",
    "PopularQueriesResponse",
    "PillToggleRequest",
    "PillToggleResponse",
    "SidebarFilters",
    "SavedSearchFilters",
    "SavedSearchState",
    "SavedSearchCheckRequest",
    "SavedSearchCheckResponse",
    "UpdateCheckResult",
]
