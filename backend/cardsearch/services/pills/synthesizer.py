"""
Turn feature tallies into smart pill candidates.

Candidates carry a score (share of the sample exhibiting the feature) and a
provisional count of 0; exact counts are filled in by enrichment.
"""
import re

from cardsearch.core.constants import (
    BRAND_ATTRIBUTE,
    BRAND_ICON,
    DEFAULT_GRADING_SERVICE_ICON,
    DEFAULT_KEYWORD_ICON,
    GRADE_ATTRIBUTE,
    GRADING_SERVICE_ATTRIBUTE,
    GRADING_SERVICE_ICONS,
    KEYWORD_COLORS,
    KEYWORD_ICONS,
    KEYWORD_LABELS,
    MAX_BRAND_PILLS,
    MAX_SYNTHESIZED_PILLS,
    MAX_YEAR_PILLS,
    MIN_FEATURE_FREQUENCY,
    POPULAR_GRADES,
    PRICE_ATTRIBUTE,
    PRICE_ICON,
    TITLE_ATTRIBUTE,
    YEAR_ATTRIBUTE,
    YEAR_ICON,
    PillColor,
    PillOperator,
)
from cardsearch.schemas.smart_pills import PillFilter, SmartPill
from cardsearch.services.pills.extractor import FeatureTally

_WHITESPACE = re.compile(r"\s+")


def grading_service_icon(service: str) -> str:
    return GRADING_SERVICE_ICONS.get(service, DEFAULT_GRADING_SERVICE_ICON)


def keyword_icon(keyword: str) -> str:
    return KEYWORD_ICONS.get(keyword, DEFAULT_KEYWORD_ICON)


def keyword_label(keyword: str) -> str:
    """Display label for a keyword, falling back to capitalizing its first letter."""
    if keyword in KEYWORD_LABELS:
        return KEYWORD_LABELS[keyword]
    return keyword[:1].upper() + keyword[1:]


def keyword_color(keyword: str) -> PillColor:
    return KEYWORD_COLORS.get(keyword, PillColor.GRAY)


def format_grade(grade: float) -> str:
    """Render 10 and 10.0 as "10", 9.5 as "9.5"."""
    if float(grade).is_integer():
        return str(int(grade))
    return str(grade)


def features_to_pills(
    features: FeatureTally,
    total_results: int,
    sample_size: int,
) -> list[SmartPill]:
    """
    Convert feature tallies to smart pills with placeholder counts.

    Args:
        features: Tallies for the sample
        total_results: Total hits for the query
        sample_size: Number of hits the tallies were built from

    Returns:
        Up to 20 pills sorted by descending score
    """
    if sample_size <= 0:
        return []

    pills: list[SmartPill] = []
    # Float comparison, e.g. 2.0 for a 100-hit sample
    min_threshold = sample_size * MIN_FEATURE_FREQUENCY

    def score(count: int) -> float:
        return count / sample_size

    for service, count in features.grading_services.items():
        if count >= min_threshold:
            pills.append(SmartPill(
                id=f"service-{service.lower()}",
                label=service,
                icon=grading_service_icon(service),
                filter=PillFilter(attribute=GRADING_SERVICE_ATTRIBUTE, value=service),
                color=PillColor.GREEN,
                score=score(count),
            ))

    # Grades (only popular ones: 10, 9.5, 9)
    for grade, count in features.grades.items():
        if count >= min_threshold and grade in POPULAR_GRADES:
            grade_str = format_grade(grade)
            pills.append(SmartPill(
                id=f"grade-{grade_str}",
                label=f"Grade {grade_str}",
                icon="🏆" if grade == 10 else "⭐",
                filter=PillFilter(attribute=GRADE_ATTRIBUTE, value=grade),
                color=PillColor.GREEN,
                score=score(count),
            ))

    # Keywords are matched through the query text, not a filter
    for keyword, count in features.keywords.items():
        if count >= min_threshold:
            pills.append(SmartPill(
                id=f"keyword-{_WHITESPACE.sub('-', keyword)}",
                label=keyword_label(keyword),
                icon=keyword_icon(keyword),
                filter=PillFilter(
                    attribute=TITLE_ATTRIBUTE,
                    value=keyword,
                    operator=PillOperator.CONTAINS,
                ),
                color=keyword_color(keyword),
                score=score(count),
            ))

    for year, count in _top(features.years, MAX_YEAR_PILLS):
        if count >= min_threshold:
            pills.append(SmartPill(
                id=f"year-{year}",
                label=year,
                icon=YEAR_ICON,
                filter=PillFilter(attribute=YEAR_ATTRIBUTE, value=year),
                color=PillColor.GRAY,
                score=score(count),
            ))

    for brand, count in _top(features.brands, MAX_BRAND_PILLS):
        if count >= min_threshold:
            pills.append(SmartPill(
                id=f"brand-{_WHITESPACE.sub('-', brand.lower())}",
                label=brand,
                icon=BRAND_ICON,
                filter=PillFilter(attribute=BRAND_ATTRIBUTE, value=brand),
                color=PillColor.BLUE,
                score=score(count),
            ))

    for price_range, count in features.price_ranges.items():
        if count >= min_threshold:
            slug = price_range.replace("$", "").replace("+", "plus")
            pills.append(SmartPill(
                id=f"price-{slug}",
                label=price_range,
                icon=PRICE_ICON,
                filter=PillFilter(
                    attribute=PRICE_ATTRIBUTE,
                    value=price_range,
                    operator=PillOperator.RANGE,
                ),
                color=PillColor.AMBER,
                score=score(count),
            ))

    # sorted() is stable, so equal scores keep category order
    return sorted(pills, key=lambda p: p.score, reverse=True)[:MAX_SYNTHESIZED_PILLS]


def _top(tally, limit: int) -> list[tuple[str, int]]:
    """Most frequent entries, ties in first-seen order."""
    return sorted(tally.items(), key=lambda item: item[1], reverse=True)[:limit]
