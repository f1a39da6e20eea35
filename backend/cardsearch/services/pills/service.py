"""
Smart pill generation service.

Sequences sampling, feature extraction, pill synthesis and count enrichment
for a query, with an optional response cache in front.
"""
import asyncio
from datetime import datetime, timedelta, timezone
from typing import Optional

import structlog

from cardsearch.core.config import settings
from cardsearch.core.constants import (
    BELOW_THRESHOLD_REASON,
    DEFAULT_PILL_TEMPLATES,
    PillOperator,
)
from cardsearch.repositories.cache_repo import CacheRepository
from cardsearch.schemas.smart_pills import PillFilter, SmartPill, SmartPillsResponse
from cardsearch.services.pills.enrichment import SearchIndex, fetch_actual_counts, gather_all
from cardsearch.services.pills.extractor import extract_features
from cardsearch.services.pills.filters import build_algolia_filter
from cardsearch.services.pills.synthesizer import features_to_pills
from cardsearch.services.search_index import SearchIndexError

logger = structlog.get_logger()

DEFAULT_CACHE_KEY = "default"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def default_pill_candidates() -> list[SmartPill]:
    """Build pills for the fixed empty-query catalogue."""
    return [
        SmartPill(
            id=template["id"],
            label=template["label"],
            icon=template["icon"],
            color=template["color"],
            filter=PillFilter(
                attribute=template["attribute"],
                value=template["value"],
                operator=template.get("operator", PillOperator.EQUALS),
            ),
            score=1,
        )
        for template in DEFAULT_PILL_TEMPLATES
    ]


class SmartPillService:
    """
    Service for generating smart pills.

    The search client and cache are created once per process and passed in.
    """

    def __init__(
        self,
        search_client: SearchIndex,
        cache: Optional[CacheRepository] = None,
        sample_size: Optional[int] = None,
        count_concurrency: Optional[int] = None,
    ):
        self.search_client = search_client
        self.cache = cache
        self.sample_size = sample_size or settings.smart_pills_sample_size
        self.count_concurrency = count_concurrency or settings.smart_pills_count_concurrency

    async def get_smart_pills(self, query: str, threshold: Optional[int] = None) -> SmartPillsResponse:
        """
        Get smart pills for a query, using the cache when available.

        An empty query returns the default catalogue pills.

        Raises:
            SearchIndexError: If the top-level count or sample lookup fails
        """
        query = query or ""
        if not query:
            cache_key = DEFAULT_CACHE_KEY
            ttl = timedelta(seconds=settings.default_pills_cache_ttl_seconds)
        else:
            cache_key = query.lower()
            ttl = timedelta(seconds=settings.smart_pills_cache_ttl_seconds)

        cached = await self._read_cache(cache_key)
        if cached is not None:
            return cached

        if not query:
            response = await self.generate_default_pills()
        else:
            response = await self.generate_smart_pills(query, threshold or settings.smart_pills_threshold)

        if self.cache is not None and response.pills:
            await self.cache.set(
                cache_key,
                value=response.model_dump(mode="json", by_alias=True),
                ttl=ttl,
            )

        return response

    async def generate_smart_pills(self, query: str, threshold: int) -> SmartPillsResponse:
        """
        Generate smart pills for a query.

        Args:
            query: Search query
            threshold: Minimum total hits required to suggest pills

        Returns:
            Response with enriched pills, or an empty list with
            reason "below_threshold"
        """
        count_result = await self.search_client.search(query, hits_per_page=0)
        total_results = count_result.nb_hits

        if total_results < threshold:
            logger.debug(
                "Query below smart pill threshold",
                query=query,
                total_results=total_results,
                threshold=threshold,
            )
            return SmartPillsResponse(
                query=query,
                total_results=total_results,
                pills=[],
                cached=False,
                reason=BELOW_THRESHOLD_REASON,
            )

        sample = await self.search_client.search(query, hits_per_page=self.sample_size)
        # Threshold and scores use the requested size even if fewer hits come back
        sample_size = self.sample_size

        features = extract_features(sample.hits)
        candidates = features_to_pills(features, total_results, sample_size)
        pills = await fetch_actual_counts(
            self.search_client, query, candidates, concurrency=self.count_concurrency
        )

        logger.info(
            "Smart pills generated",
            query=query,
            total_results=total_results,
            sample_size=sample_size,
            candidates=len(candidates),
            pills=len(pills),
        )

        return SmartPillsResponse(
            query=query,
            total_results=total_results,
            pills=pills,
            cached=False,
            generated_at=_now_iso(),
            sample_size=sample_size,
        )

    async def generate_default_pills(self) -> SmartPillsResponse:
        """
        Evaluate the default catalogue for the empty query.

        Pills that fail to count or match nothing are dropped; the rest are
        sorted by descending count.
        """
        semaphore = asyncio.Semaphore(self.count_concurrency)

        async def with_count(pill: SmartPill) -> Optional[SmartPill]:
            async with semaphore:
                try:
                    result = await self.search_client.search(
                        "",
                        hits_per_page=0,
                        filters=build_algolia_filter(pill.filter),
                        distinct=True,
                    )
                except SearchIndexError as e:
                    logger.warning("Default pill count lookup failed", pill_id=pill.id, error=str(e))
                    return None
            return pill.model_copy(update={"count": result.nb_hits})

        counted = await gather_all(with_count(p) for p in default_pill_candidates())
        pills = sorted(
            (p for p in counted if p is not None and p.count > 0),
            key=lambda p: p.count,
            reverse=True,
        )

        return SmartPillsResponse(
            query="",
            total_results=0,
            pills=pills,
            cached=False,
            generated_at=_now_iso(),
        )

    async def _read_cache(self, cache_key: str) -> Optional[SmartPillsResponse]:
        if self.cache is None:
            return None

        data = await self.cache.get(cache_key)
        if data is None:
            return None

        try:
            response = SmartPillsResponse.model_validate(data)
        except ValueError as e:
            logger.warning("Discarding malformed cache entry", key=cache_key, error=str(e))
            return None

        logger.debug("Smart pills cache hit", key=cache_key)
        return response.model_copy(update={"cached": True})
