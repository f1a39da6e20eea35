"""Tests for compiling pill filters into Algolia filter expressions."""
import pytest

from cardsearch.core.constants import PillOperator
from cardsearch.core.exceptions import UnsupportedFilterError
from cardsearch.schemas.smart_pills import PillFilter
from cardsearch.services.pills.filters import build_algolia_filter, join_filters, quote_value


class TestBuildAlgoliaFilter:
    """Test filter compilation."""

    def test_boolean_value(self):
        assert build_algolia_filter(PillFilter(attribute="greatPrice", value=True)) == "greatPrice:true"
        assert build_algolia_filter(PillFilter(attribute="hasOffers", value=False)) == "hasOffers:false"

    def test_contains_is_never_a_filter(self):
        pill_filter = PillFilter(attribute="title", value="rookie", operator=PillOperator.CONTAINS)
        assert build_algolia_filter(pill_filter) is None

    @pytest.mark.parametrize(
        "label,expected",
        [
            ("$0-100", "currentPrice < 100"),
            ("$100-500", "currentPrice >= 100 AND currentPrice < 500"),
            ("$500-1000", "currentPrice >= 500 AND currentPrice < 1000"),
            ("$1000+", "currentPrice >= 1000"),
        ],
    )
    def test_price_ranges(self, label, expected):
        pill_filter = PillFilter(attribute="currentPrice", value=label, operator=PillOperator.RANGE)
        assert build_algolia_filter(pill_filter) == expected

    def test_range_on_other_attribute_rejected(self):
        pill_filter = PillFilter(attribute="grade", value="$0-100", operator=PillOperator.RANGE)
        with pytest.raises(UnsupportedFilterError) as exc_info:
            build_algolia_filter(pill_filter)
        assert exc_info.value.attribute == "grade"

    def test_unknown_price_label_rejected(self):
        pill_filter = PillFilter(attribute="currentPrice", value="$50-75", operator=PillOperator.RANGE)
        with pytest.raises(UnsupportedFilterError):
            build_algolia_filter(pill_filter)

    def test_string_value_quoted(self):
        pill_filter = PillFilter(attribute="gradingService", value="PSA")
        assert build_algolia_filter(pill_filter) == 'gradingService:"PSA"'

    def test_string_with_quotes_escaped(self):
        pill_filter = PillFilter(attribute="brand", value='Topps "Now"')
        assert build_algolia_filter(pill_filter) == 'brand:"Topps \\"Now\\""'

    def test_year_is_quoted_string(self):
        assert build_algolia_filter(PillFilter(attribute="year", value="2003")) == 'year:"2003"'

    def test_numeric_values_unquoted(self):
        assert build_algolia_filter(PillFilter(attribute="grade", value=10)) == "grade:10"
        assert build_algolia_filter(PillFilter(attribute="grade", value=9.5)) == "grade:9.5"
        assert build_algolia_filter(PillFilter(attribute="grade", value=10.0)) == "grade:10"

    def test_compilation_is_deterministic(self):
        pill_filter = PillFilter(attribute="currentPrice", value="$100-500", operator=PillOperator.RANGE)
        assert build_algolia_filter(pill_filter) == build_algolia_filter(pill_filter)


class TestQuoteValue:
    def test_plain(self):
        assert quote_value("PSA") == '"PSA"'

    def test_backslash_and_quote(self):
        assert quote_value('a\\b"c') == '"a\\\\b\\"c"'


class TestJoinFilters:
    def test_joins_with_and(self):
        assert join_filters(['a:"1"', "b:2"]) == 'a:"1" AND b:2'

    def test_skips_empty(self):
        assert join_filters(["", "b:2", ""]) == "b:2"
        assert join_filters([]) == ""
