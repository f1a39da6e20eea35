"""
Pytest configuration and fixtures.

Provides fixtures for:
- A scripted in-memory search index standing in for Algolia
- Search hit builders
- HTTP client with the search client and cache injected
"""
from typing import AsyncGenerator, Callable, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from cardsearch.api.deps import get_cache, get_search_client
from cardsearch.main import app, limiter
from cardsearch.services.search_index import SearchResult


class FakeSearchIndex:
    """
    In-memory search index.

    `responder(query, hits_per_page, filters, distinct)` returns a
    SearchResult or raises. Every call is recorded in `calls`.
    """

    def __init__(self, responder: Callable[..., SearchResult]):
        self.responder = responder
        self.calls: list[dict] = []

    async def search(
        self,
        query: str,
        hits_per_page: int,
        filters: Optional[str] = None,
        distinct: Optional[bool] = None,
    ) -> SearchResult:
        self.calls.append({
            "query": query,
            "hits_per_page": hits_per_page,
            "filters": filters,
            "distinct": distinct,
        })
        return self.responder(query, hits_per_page, filters, distinct)


def make_hit(
    object_id: str = "1",
    title: str = "",
    current_price: Optional[float] = 25.0,
    grading_service: Optional[str] = None,
    grade=None,
    year=None,
    brand: Optional[str] = None,
) -> dict:
    """Build a search hit shaped like the index records."""
    hit = {"objectID": object_id, "title": title, "currentPrice": current_price}
    if grading_service is not None:
        hit["gradingService"] = grading_service
    if grade is not None:
        hit["grade"] = grade
    if year is not None:
        hit["year"] = year
    if brand is not None:
        hit["brand"] = brand
    return hit


@pytest.fixture
def lebron_sample() -> list[dict]:
    """100 hits for a 'lebron' query with a known feature mix."""
    hits = []
    for i in range(100):
        if i < 50:
            hit = make_hit(
                object_id=f"lb-{i}",
                title="2003 Topps Chrome LeBron James Rookie Refractor",
                current_price=750.0,
                grading_service="psa",
                grade=10 if i < 30 else 9,
                year=2003,
                brand="Topps",
            )
        elif i < 80:
            hit = make_hit(
                object_id=f"lb-{i}",
                title="2020 Panini Prizm LeBron James Silver",
                current_price=80.0,
                grading_service="BGS",
                grade=9.5,
                year=2020,
                brand="Panini",
            )
        else:
            hit = make_hit(
                object_id=f"lb-{i}",
                title="LeBron James Lakers Jersey Card",
                current_price=1500.0,
                brand="LeBron James",
            )
        hits.append(hit)
    return hits


@pytest_asyncio.fixture
async def fake_index() -> FakeSearchIndex:
    """Index returning no hits unless a test replaces the responder."""
    return FakeSearchIndex(lambda *args: SearchResult(nb_hits=0, hits=[]))


@pytest_asyncio.fixture(scope="function")
async def client(fake_index) -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client with rate limiting disabled and no cache."""
    app.dependency_overrides[get_search_client] = lambda: fake_index
    app.dependency_overrides[get_cache] = lambda: None
    limiter.enabled = False

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    limiter.enabled = True


@pytest.fixture
def hit_factory() -> Callable[..., dict]:
    """Factory for search hits."""
    return make_hit


@pytest.fixture
def index_factory() -> Callable[[Callable[..., SearchResult]], FakeSearchIndex]:
    """Factory for scripted search indexes."""
    return FakeSearchIndex
