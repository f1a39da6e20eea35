"""Smart pill generation: extraction, synthesis, filter compilation and enrichment."""
from cardsearch.services.pills.extractor import FeatureTally, extract_features
from cardsearch.services.pills.synthesizer import features_to_pills
from cardsearch.services.pills.filters import build_algolia_filter
from cardsearch.services.pills.enrichment import fetch_actual_counts
from cardsearch.services.pills.selection import SearchState, build_search_state, toggle_pill
from cardsearch.services.pills.service import SmartPillService

__all__ = [
    "FeatureTally",
    "extract_features",
    "features_to_pills",
    "build_algolia_filter",
    "fetch_actual_counts",
    "SearchState",
    "build_search_state",
    "toggle_pill",
    "SmartPillService",
]
