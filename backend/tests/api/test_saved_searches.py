"""
Tests for saved search update checks.
"""
import pytest
from httpx import AsyncClient

from cardsearch.services.search_index import SearchResult


@pytest.mark.asyncio
async def test_check_saved_searches(client: AsyncClient, fake_index):
    hits = [{"objectID": i} for i in ["n1", "n2", "old"]]
    fake_index.responder = lambda q, n, f, d: SearchResult(nb_hits=300, hits=hits[:n])

    response = await client.post(
        "/api/saved-searches/check",
        json={
            "searches": [
                {"id": "a", "query": "jordan", "lastSeenId": "old", "lastSeenCount": 290},
                {"id": "b", "query": "kobe"},
            ]
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["withUpdates"] == ["a"]
    assert data["results"][0] == {
        "id": "a",
        "newItemsCount": 2,
        "totalResults": 300,
        "newestItemId": "n1",
        "saturated": False,
    }
    assert data["results"][1]["newItemsCount"] == 0
    assert data["results"][1]["newestItemId"] == "n1"


@pytest.mark.asyncio
async def test_check_applies_sidebar_filters(client: AsyncClient, fake_index):
    fake_index.responder = lambda *args: SearchResult(nb_hits=1, hits=[{"objectID": "n1"}])

    await client.post(
        "/api/saved-searches/check",
        json={
            "searches": [
                {
                    "id": "a",
                    "query": "jordan",
                    "filters": {"sidebarFilters": {"gradingService": ["PSA"]}},
                }
            ]
        },
    )

    assert fake_index.calls[0]["filters"] == '(gradingService:"PSA")'


@pytest.mark.asyncio
async def test_check_rejects_too_many_searches(client: AsyncClient):
    searches = [{"id": str(i), "query": "x"} for i in range(51)]

    response = await client.post("/api/saved-searches/check", json={"searches": searches})

    assert response.status_code == 422
