"""Smart pill API schemas."""
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from cardsearch.core.constants import PillColor, PillOperator

FilterValue = Union[bool, int, float, str]


class PillFilter(BaseModel):
    """Abstract filter descriptor attached to a pill."""
    model_config = ConfigDict(frozen=True)

    attribute: str = Field(..., description="Index attribute the filter applies to")
    value: FilterValue
    operator: PillOperator = PillOperator.EQUALS


class SmartPill(BaseModel):
    """A suggested quick filter."""
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    icon: str
    count: int = 0
    filter: PillFilter
    color: PillColor = PillColor.GRAY
    score: float = Field(..., description="Frequency of the feature in the sample")

    @property
    def is_keyword(self) -> bool:
        """Free-text pills alter the query instead of the filter string."""
        return self.filter.operator == PillOperator.CONTAINS


class SmartPillsResponse(BaseModel):
    """Smart pills for a query."""
    model_config = ConfigDict(populate_by_name=True)

    query: str
    total_results: int = Field(..., alias="totalResults")
    pills: list[SmartPill]
    cached: bool = False
    reason: Optional[str] = None
    generated_at: Optional[str] = Field(None, alias="generatedAt")
    sample_size: Optional[int] = Field(None, alias="sampleSize")


class PopularQuery(BaseModel):
    query: str
    nb_hits: int = Field(..., alias="nbHits")

    model_config = ConfigDict(populate_by_name=True)


class PopularQueriesResponse(BaseModel):
    """Static catalogue of popular searches."""
    queries: list[PopularQuery]
    total: int


class PillToggleRequest(BaseModel):
    """Toggle one pill against the current selection."""
    model_config = ConfigDict(populate_by_name=True)

    query: str = ""
    pills: list[SmartPill]
    active_pill_ids: list[str] = Field(default_factory=list, alias="activePillIds")
    toggled_pill_id: str = Field(..., alias="toggledPillId")


class PillToggleResponse(BaseModel):
    """Selection and search parameters after a toggle."""
    model_config = ConfigDict(populate_by_name=True)

    active_pill_ids: list[str] = Field(..., alias="activePillIds")
    query: str
    filters: str
