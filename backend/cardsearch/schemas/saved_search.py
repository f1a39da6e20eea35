"""Saved search update-check schemas."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SidebarFilters(BaseModel):
    """Refinement-list selections saved with a search."""
    model_config = ConfigDict(populate_by_name=True)

    status: list[str] = Field(default_factory=list)
    marketplace: list[str] = Field(default_factory=list)
    grading_service: list[str] = Field(default_factory=list, alias="gradingService")


class SavedSearchFilters(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    smart_pills: list[str] = Field(default_factory=list, alias="smartPills")
    sidebar_filters: Optional[SidebarFilters] = Field(None, alias="sidebarFilters")


class SavedSearchState(BaseModel):
    """A saved search with its watermark from the previous check."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    query: str
    filters: Optional[SavedSearchFilters] = None
    last_seen_id: Optional[str] = Field(None, alias="lastSeenId")
    last_seen_count: Optional[int] = Field(None, alias="lastSeenCount")


class SavedSearchCheckRequest(BaseModel):
    searches: list[SavedSearchState] = Field(..., max_length=50)


class UpdateCheckResult(BaseModel):
    """
    Outcome of one update check.

    `saturated` is set when the watermark was not found among the newest
    items scanned; `new_items_count` is then a lower bound.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str
    new_items_count: int = Field(0, alias="newItemsCount")
    total_results: int = Field(0, alias="totalResults")
    newest_item_id: Optional[str] = Field(None, alias="newestItemId")
    saturated: bool = False


class SavedSearchCheckResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    results: list[UpdateCheckResult]
    with_updates: list[str] = Field(..., alias="withUpdates")
