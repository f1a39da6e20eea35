"""
Compile pill filter descriptors into Algolia filter expressions.
"""
from typing import Optional

from cardsearch.core.constants import PRICE_ATTRIBUTE, PRICE_BUCKETS, PillOperator
from cardsearch.core.exceptions import UnsupportedFilterError
from cardsearch.schemas.smart_pills import PillFilter


def build_algolia_filter(pill_filter: PillFilter) -> Optional[str]:
    """
    Build the Algolia filter string for a pill filter.

    Returns None for free-text (contains) filters; the caller appends the
    value to the query text instead.

    Raises:
        UnsupportedFilterError: For range filters the index syntax does not cover
    """
    attribute = pill_filter.attribute
    value = pill_filter.value
    operator = pill_filter.operator

    if isinstance(value, bool):
        return f"{attribute}:{'true' if value else 'false'}"
    if operator == PillOperator.CONTAINS:
        return None
    if operator == PillOperator.RANGE:
        return _price_range_filter(pill_filter)
    if isinstance(value, str):
        return f"{attribute}:{quote_value(value)}"
    return f"{attribute}:{_format_number(value)}"


def quote_value(value: str) -> str:
    """Double-quote a string value, escaping backslashes and quotes."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _price_range_filter(pill_filter: PillFilter) -> str:
    if pill_filter.attribute != PRICE_ATTRIBUTE or pill_filter.value not in PRICE_BUCKETS:
        raise UnsupportedFilterError(
            pill_filter.attribute, pill_filter.value, pill_filter.operator.value
        )

    low, high = PRICE_BUCKETS[pill_filter.value]
    parts = []
    if low is not None:
        parts.append(f"{PRICE_ATTRIBUTE} >= {_format_number(low)}")
    if high is not None:
        parts.append(f"{PRICE_ATTRIBUTE} < {_format_number(high)}")
    return " AND ".join(parts)


def _format_number(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def join_filters(expressions: list[str]) -> str:
    """AND together non-empty filter expressions."""
    return " AND ".join(e for e in expressions if e)
