"""
Active pill selection.

Selection changes are pure transitions from one set of active pill ids to the
next; the query text and filter string are recomputed from the new set.
"""
from dataclasses import dataclass
from typing import Iterable

from cardsearch.schemas.smart_pills import SmartPill
from cardsearch.services.pills.filters import build_algolia_filter, join_filters


@dataclass(frozen=True)
class SearchState:
    """Search parameters derived from the active pills."""
    query: str
    filters: str


def toggle_pill(active_ids: Iterable[str], pill_id: str) -> frozenset[str]:
    """Return the selection with `pill_id` added, or removed if it was active."""
    active = frozenset(active_ids)
    if pill_id in active:
        return active - {pill_id}
    return active | {pill_id}


def build_search_state(
    base_query: str,
    pills: Iterable[SmartPill],
    active_ids: Iterable[str],
) -> SearchState:
    """
    Compute query text and filters for the active pills.

    Keyword pills append their value to the base query; every other active
    pill contributes its compiled filter, ANDed together. Pills are applied
    in the order given.
    """
    active = frozenset(active_ids)
    expressions: list[str] = []
    keywords: list[str] = []

    for pill in pills:
        if pill.id not in active:
            continue
        if pill.is_keyword:
            keywords.append(str(pill.filter.value))
        else:
            expression = build_algolia_filter(pill.filter)
            if expression:
                expressions.append(expression)

    query = " ".join([base_query.strip(), *keywords]).strip()
    return SearchState(query=query, filters=join_filters(expressions))
