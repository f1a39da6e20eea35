"""Tests for exact-count enrichment of smart pills."""
import asyncio

import pytest

from cardsearch.core.constants import PillOperator
from cardsearch.schemas.smart_pills import PillFilter, SmartPill
from cardsearch.services.pills.enrichment import count_pill, fetch_actual_counts, gather_all
from cardsearch.services.search_index import SearchIndexError, SearchResult


def keyword_pill(keyword: str, score: float = 0.5) -> SmartPill:
    return SmartPill(
        id=f"keyword-{keyword}",
        label=keyword.title(),
        icon="🎯",
        filter=PillFilter(attribute="title", value=keyword, operator=PillOperator.CONTAINS),
        score=score,
    )


def service_pill(service: str, score: float = 0.5) -> SmartPill:
    return SmartPill(
        id=f"service-{service.lower()}",
        label=service,
        icon="🏆",
        filter=PillFilter(attribute="gradingService", value=service),
        score=score,
    )


def fixed_count(count: int):
    return lambda *args: SearchResult(nb_hits=count)


class TestCountPill:
    """Test the lookup issued for a single pill."""

    @pytest.mark.asyncio
    async def test_keyword_pill_extends_query(self, index_factory):
        index = index_factory(fixed_count(42))

        count = await count_pill(index, "lebron", keyword_pill("rookie"))

        assert count == 42
        assert index.calls == [
            {"query": "lebron rookie", "hits_per_page": 0, "filters": None, "distinct": True}
        ]

    @pytest.mark.asyncio
    async def test_filter_pill_uses_compiled_filter(self, index_factory):
        index = index_factory(fixed_count(7))

        count = await count_pill(index, "lebron", service_pill("PSA"))

        assert count == 7
        assert index.calls == [
            {"query": "lebron", "hits_per_page": 0, "filters": 'gradingService:"PSA"', "distinct": True}
        ]


class TestFetchActualCounts:
    """Test enrichment, filtering and caps."""

    @pytest.mark.asyncio
    async def test_counts_replace_placeholders(self, index_factory):
        index = index_factory(fixed_count(120))

        pills = await fetch_actual_counts(index, "jordan", [service_pill("PSA")])

        assert len(pills) == 1
        assert pills[0].count == 120

    @pytest.mark.asyncio
    async def test_original_pills_unchanged(self, index_factory):
        index = index_factory(fixed_count(120))
        original = service_pill("PSA")

        await fetch_actual_counts(index, "jordan", [original])

        assert original.count == 0

    @pytest.mark.asyncio
    async def test_low_counts_dropped(self, index_factory):
        counts = {'gradingService:"PSA"': 5, 'gradingService:"BGS"': 4}
        index = index_factory(lambda q, n, filters, d: SearchResult(nb_hits=counts[filters]))

        pills = await fetch_actual_counts(index, "jordan", [service_pill("PSA"), service_pill("BGS")])

        assert [p.id for p in pills] == ["service-psa"]

    @pytest.mark.asyncio
    async def test_failed_lookup_drops_only_that_pill(self, index_factory):
        def responder(query, hits_per_page, filters, distinct):
            if filters == 'gradingService:"BGS"':
                raise SearchIndexError("boom")
            return SearchResult(nb_hits=50)

        index = index_factory(responder)
        pills = await fetch_actual_counts(
            index, "jordan", [service_pill("PSA"), service_pill("BGS"), keyword_pill("auto")]
        )

        assert [p.id for p in pills] == ["keyword-auto", "service-psa"]

    @pytest.mark.asyncio
    async def test_keywords_first_then_filters_by_score(self, index_factory):
        index = index_factory(fixed_count(100))
        candidates = [
            service_pill("PSA", score=0.9),
            keyword_pill("chrome", score=0.2),
            service_pill("BGS", score=0.3),
            keyword_pill("rookie", score=0.6),
        ]

        pills = await fetch_actual_counts(index, "jordan", candidates)

        assert [p.id for p in pills] == [
            "keyword-rookie",
            "keyword-chrome",
            "service-psa",
            "service-bgs",
        ]

    @pytest.mark.asyncio
    async def test_caps_ten_keywords_five_filters(self, index_factory):
        index = index_factory(fixed_count(100))
        candidates = [keyword_pill(f"kw{i}", score=i / 100) for i in range(14)]
        candidates += [service_pill(f"S{i}", score=i / 100) for i in range(8)]

        pills = await fetch_actual_counts(index, "jordan", candidates)

        keywords = [p for p in pills if p.is_keyword]
        filters = [p for p in pills if not p.is_keyword]
        assert len(keywords) == 10
        assert len(filters) == 5
        assert keywords[0].id == "keyword-kw13"
        assert filters[0].id == "service-s7"

    @pytest.mark.asyncio
    async def test_concurrency_is_bounded(self):
        in_flight = 0
        peak = 0

        class SlowIndex:
            async def search(self, query, hits_per_page, filters=None, distinct=None):
                nonlocal in_flight, peak
                in_flight += 1
                peak = max(peak, in_flight)
                await asyncio.sleep(0.01)
                in_flight -= 1
                return SearchResult(nb_hits=10)

        candidates = [service_pill(f"S{i}") for i in range(12)]
        pills = await fetch_actual_counts(SlowIndex(), "jordan", candidates, concurrency=3)

        assert len(pills) == 5
        assert peak <= 3

    @pytest.mark.asyncio
    async def test_unexpected_error_raised_after_siblings_finish(self):
        finished = []

        class BrokenIndex:
            async def search(self, query, hits_per_page, filters=None, distinct=None):
                if filters == 'gradingService:"S0"':
                    raise RuntimeError("malformed response")
                await asyncio.sleep(0.01)
                finished.append(filters)
                return SearchResult(nb_hits=10)

        candidates = [service_pill(f"S{i}") for i in range(4)]

        with pytest.raises(RuntimeError):
            await fetch_actual_counts(BrokenIndex(), "jordan", candidates)

        assert len(finished) == 3

    @pytest.mark.asyncio
    async def test_no_candidates(self, index_factory):
        index = index_factory(fixed_count(100))
        assert await fetch_actual_counts(index, "jordan", []) == []
        assert index.calls == []


class TestGatherAll:
    @pytest.mark.asyncio
    async def test_results_in_input_order(self):
        async def value(v, delay):
            await asyncio.sleep(delay)
            return v

        assert await gather_all([value("a", 0.02), value("b", 0)]) == ["a", "b"]

    @pytest.mark.asyncio
    async def test_first_exception_reraised(self):
        async def fail(exc):
            raise exc

        async def ok():
            return 1

        with pytest.raises(KeyError):
            await gather_all([ok(), fail(KeyError("x")), fail(ValueError("y"))])
