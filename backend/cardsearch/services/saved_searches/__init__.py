"""Saved search update detection."""
from cardsearch.services.saved_searches.watermark import (
    build_saved_search_filter,
    check_all_saved_searches,
    check_for_updates,
    count_new_items,
)

__all__ = [
    "build_saved_search_filter",
    "check_all_saved_searches",
    "check_for_updates",
    "count_new_items",
]
