#!/usr/bin/env python3
"""Tests for Confidence and Rating enums."""

from maint_analytics import Confidence, Rating


class TestConfidence:
    """Tests for Confidence enum."""

    def test_values(self):
        assert Confidence.LOW.value == "low"
        assert Confidence.MEDIUM.value == "medium"
        assert Confidence.HIGH.value == "high"


class TestRating:
    """Tests for Rating enum."""

    def test_declared_cheapest_first(self):
        """Members are declared from cheapest to most expensive."""
        assert [r.value for r in Rating] == ["excellent", "good", "fair", "high"]
