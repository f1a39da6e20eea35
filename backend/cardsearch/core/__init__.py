"""
Core module containing configuration and shared utilities.
"""
from cardsearch.core.config import settings
from cardsearch.core.constants import (
    PillOperator,
    PillColor,
    CARD_KEYWORDS,
    CARD_MANUFACTURERS,
    PRICE_BUCKETS,
    DEFAULT_PILL_TEMPLATES,
    POPULAR_QUERIES,
)
from cardsearch.core.exceptions import ConfigurationError, UnsupportedFilterError

__all__ = [
    "settings",
    "PillOperator",
    "PillColor",
    "CARD_KEYWORDS",
    "CARD_MANUFACTURERS",
    "PRICE_BUCKETS",
    "DEFAULT_PILL_TEMPLATES",
    "POPULAR_QUERIES",
    "ConfigurationError",
    "UnsupportedFilterError",
]
