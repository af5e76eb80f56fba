#!/usr/bin/env python3
"""Tests for the service-type classifier."""
import pytest

from maint_analytics import classify
from maint_analytics.classifier import FALLBACK_LABEL, SERVICE_KEYWORDS


class TestClassify:
    """Tests for classify."""

    @pytest.mark.parametrize(
        "description,expected",
        [
            ("Oil change", "Oil Change"),
            ("OIL CHANGE with filter", "Oil Change"),
            ("Topped up oil", "Oil"),
            ("Rear tire replacement", "Tire"),
            ("Replaced spark plugs", "Spark Plug"),
            ("New air filter", "Air Filter"),
            ("Carburetor sync", "Carb"),
            ("Annual inspection", "Inspection"),
            ("Full detail", "Detail"),
        ],
    )
    def test_keyword_match(self, description, expected):
        assert classify(description) == expected

    def test_first_keyword_in_list_wins(self):
        """List order breaks ties, not position in the text."""
        assert classify("Brake fluid and oil change") == "Oil Change"
        assert classify("Tire and brake check") == "Tire"

    def test_keyword_matches_inside_words(self):
        """Keywords are substrings, so 'brakes' matches 'brake'."""
        assert classify("Front brakes") == "Brake"

    def test_fallback_to_first_three_words(self):
        """Original casing is kept for unmatched descriptions."""
        assert classify("Replaced Headlight Bulb and fuse") == "Replaced Headlight Bulb"

    def test_fallback_short_description(self):
        assert classify("Mirror") == "Mirror"

    def test_fallback_collapses_whitespace(self):
        assert classify("  Mirror   glass  swap now ") == "Mirror glass swap"

    def test_empty_description(self):
        assert classify("") == FALLBACK_LABEL
        assert classify("   ") == FALLBACK_LABEL


class TestServiceKeywords:
    """Tests for the ordered keyword table."""

    def test_specific_before_broad(self):
        """'oil change' is checked before 'oil'."""
        keywords = [k for k, _ in SERVICE_KEYWORDS]
        assert keywords.index("oil change") < keywords.index("oil")

    def test_labels_are_title_cased(self):
        labels = dict(SERVICE_KEYWORDS)
        assert labels["spark plug"] == "Spark Plug"
        assert labels["wax"] == "Wax"
