"""
Algolia search index client.

Talks to the Algolia REST search API directly. Only the query endpoint is
used: count-only lookups (hitsPerPage=0) and small result samples.

API Documentation: https://www.algolia.com/doc/rest-api/search/
Authentication: application id and search-only API key headers
"""
from dataclasses import dataclass, field
from typing import Any, Optional

import httpx
import structlog

from cardsearch.core.config import settings

logger = structlog.get_logger()


class SearchIndexError(Exception):
    """Raised when the hosted search index cannot answer a query."""
    pass


@dataclass(frozen=True)
class SearchResult:
    """Subset of an Algolia query response used by the application."""
    nb_hits: int
    hits: list[dict[str, Any]] = field(default_factory=list)


class AlgoliaSearchClient:
    """
    Async client for a single Algolia index.

    Construct once per process and share it; the underlying
    httpx.AsyncClient is created lazily and closed with `close()`.
    """

    def __init__(
        self,
        app_id: Optional[str] = None,
        api_key: Optional[str] = None,
        index_name: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.app_id = app_id or settings.algolia_app_id
        self.api_key = api_key or settings.algolia_search_api_key
        self.index_name = index_name or settings.algolia_index_name
        self.timeout = timeout if timeout is not None else float(settings.external_api_timeout)
        self.base_url = f"https://{self.app_id}-dsn.algolia.net"
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                headers={
                    "X-Algolia-Application-Id": self.app_id,
                    "X-Algolia-API-Key": self.api_key,
                    "Content-Type": "application/json",
                },
                transport=self._transport,
            )
        return self._client

    async def search(
        self,
        query: str,
        hits_per_page: int,
        filters: Optional[str] = None,
        distinct: Optional[bool] = None,
    ) -> SearchResult:
        """
        Run a query against the index.

        Args:
            query: Free-text query
            hits_per_page: Number of hits to return (0 for count only)
            filters: Filter expression in Algolia syntax
            distinct: Enable result de-duplication

        Returns:
            SearchResult with the total hit count and returned hits

        Raises:
            SearchIndexError: On HTTP errors, network errors and timeouts
        """
        params: dict[str, Any] = {"query": query, "hitsPerPage": hits_per_page}
        if filters:
            params["filters"] = filters
        if distinct is not None:
            params["distinct"] = distinct

        endpoint = f"/1/indexes/{self.index_name}/query"
        client = await self._get_client()

        try:
            response = await client.post(endpoint, json=params)
        except httpx.TimeoutException as e:
            logger.error("Algolia timeout", index=self.index_name, error=str(e))
            raise SearchIndexError(f"Request timeout: {str(e)}") from e
        except httpx.HTTPError as e:
            logger.error("Algolia network error", index=self.index_name, error=str(e))
            raise SearchIndexError(f"Network error: {str(e)}") from e

        if response.status_code >= 400:
            logger.error(
                "Algolia API error",
                status_code=response.status_code,
                index=self.index_name,
                error=response.text[:200],
            )
            raise SearchIndexError(
                f"Algolia API error {response.status_code}: {response.text[:200]}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise SearchIndexError(f"Invalid response body: {str(e)}") from e
        if not isinstance(data, dict):
            raise SearchIndexError(f"Unexpected response body type: {type(data).__name__}")

        return SearchResult(
            nb_hits=int(data.get("nbHits", 0)),
            hits=data.get("hits", []),
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
