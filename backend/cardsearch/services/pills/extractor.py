"""
Feature extraction from a sample of search hits.

Tallies how often grading services, grades, title keywords, price buckets,
years and manufacturers occur so the synthesizer can turn frequent features
into filter suggestions.
"""
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from cardsearch.core.constants import CARD_KEYWORDS, CARD_MANUFACTURERS, PRICE_BUCKETS

TOP_PRICE_BUCKET = list(PRICE_BUCKETS)[-1]


@dataclass
class FeatureTally:
    """Per-category frequency maps for one sample. Keys keep first-seen order."""
    grading_services: Counter = field(default_factory=Counter)
    grades: Counter = field(default_factory=Counter)
    keywords: Counter = field(default_factory=Counter)
    price_ranges: Counter = field(default_factory=Counter)
    years: Counter = field(default_factory=Counter)
    brands: Counter = field(default_factory=Counter)


def price_bucket(price: Any) -> str:
    """Return the canonical bucket label for a price. Missing prices count as 0."""
    try:
        price = float(price or 0)
    except (TypeError, ValueError):
        price = 0.0
    for label, (low, high) in PRICE_BUCKETS.items():
        if (low is None or price >= low) and (high is None or price < high):
            return label
    # NaN fails every comparison and lands in the open-ended top bucket
    return TOP_PRICE_BUCKET


def normalize_grade(raw: Any) -> Optional[float]:
    """
    Coerce a grade to a number.

    Integral grades become ints so that 10 and 10.0 tally together and
    render as "10". Non-numeric grades yield None.
    """
    if raw is None or isinstance(raw, bool):
        return None
    try:
        grade = float(raw)
    except (TypeError, ValueError):
        return None
    if grade != grade:  # NaN
        return None
    return int(grade) if grade.is_integer() else grade


def extract_features(hits: Iterable[dict[str, Any]]) -> FeatureTally:
    """
    Extract feature frequencies from search hits.

    Args:
        hits: Search hits as returned by the index

    Returns:
        FeatureTally for the sample
    """
    features = FeatureTally()

    for hit in hits:
        service = hit.get("gradingService")
        if service:
            features.grading_services[str(service).upper()] += 1

        grade = normalize_grade(hit.get("grade"))
        if grade is not None:
            features.grades[grade] += 1

        title = (hit.get("title") or "").lower()
        for keyword in CARD_KEYWORDS:
            if keyword in title:
                features.keywords[keyword] += 1

        features.price_ranges[price_bucket(hit.get("currentPrice"))] += 1

        year = hit.get("year")
        if year:
            features.years[_year_key(year)] += 1

        # Only count known manufacturers, not player names
        brand = hit.get("brand")
        if brand and brand in CARD_MANUFACTURERS:
            features.brands[brand] += 1

    return features


def _year_key(year: Any) -> str:
    if isinstance(year, float) and year.is_integer():
        return str(int(year))
    return str(year)
