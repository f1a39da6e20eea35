"""Hosted search index client."""
from cardsearch.services.search_index.algolia_client import (
    AlgoliaSearchClient,
    SearchIndexError,
    SearchResult,
)

__all__ = [
    "AlgoliaSearchClient",
    "SearchIndexError",
    "SearchResult",
]
