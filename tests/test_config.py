#!/usr/bin/env python3
"""Tests for AnalyticsConfig."""
import pytest

from maint_analytics import AnalyticsConfig, DEFAULT_CONFIG, Rating


class TestDefaults:
    """Default policy values."""

    def test_default_values(self):
        assert DEFAULT_CONFIG.alert_horizon_km == 1000
        assert DEFAULT_CONFIG.high_confidence_count == 5
        assert DEFAULT_CONFIG.medium_confidence_count == 3
        assert DEFAULT_CONFIG.days_per_month == 30
        assert DEFAULT_CONFIG.rating_thresholds == (
            (0.10, Rating.EXCELLENT),
            (0.20, Rating.GOOD),
            (0.35, Rating.FAIR),
        )

    def test_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_CONFIG.alert_horizon_km = 5


class TestFromDict:
    """Tests for AnalyticsConfig.from_dict."""

    def test_none_gives_defaults(self):
        assert AnalyticsConfig.from_dict(None) == DEFAULT_CONFIG
        assert AnalyticsConfig.from_dict({}) == DEFAULT_CONFIG

    def test_partial_override(self):
        config = AnalyticsConfig.from_dict({"alertHorizonKm": 2500, "daysPerMonth": 30.44})
        assert config.alert_horizon_km == 2500
        assert config.days_per_month == 30.44
        assert config.high_confidence_count == 5

    def test_rating_thresholds(self):
        config = AnalyticsConfig.from_dict(
            {"ratingThresholds": {"excellent": 0.5, "good": 1, "fair": 2}}
        )
        assert config.rating_thresholds == (
            (0.5, Rating.EXCELLENT),
            (1.0, Rating.GOOD),
            (2.0, Rating.FAIR),
        )

    def test_missing_threshold_rejected(self):
        with pytest.raises(ValueError, match="fair"):
            AnalyticsConfig.from_dict({"ratingThresholds": {"excellent": 0.1, "good": 0.2}})

    def test_descending_thresholds_rejected(self):
        with pytest.raises(ValueError, match="ascending"):
            AnalyticsConfig.from_dict(
                {"ratingThresholds": {"excellent": 0.3, "good": 0.2, "fair": 0.1}}
            )

    def test_confidence_breakpoints_order_checked(self):
        with pytest.raises(ValueError, match="mediumConfidenceCount"):
            AnalyticsConfig.from_dict({"mediumConfidenceCount": 6})

    def test_non_positive_month_rejected(self):
        with pytest.raises(ValueError, match="daysPerMonth"):
            AnalyticsConfig.from_dict({"daysPerMonth": 0})


class TestToDict:
    """Tests for AnalyticsConfig.to_dict."""

    def test_default_serialization(self):
        assert DEFAULT_CONFIG.to_dict() == {
            "alertHorizonKm": 1000,
            "highConfidenceCount": 5,
            "mediumConfidenceCount": 3,
            "daysPerMonth": 30,
            "ratingThresholds": {"excellent": 0.10, "good": 0.20, "fair": 0.35},
        }

    def test_from_dict_accepts_to_dict_output(self):
        config = AnalyticsConfig(alert_horizon_km=1500, medium_confidence_count=2)
        assert AnalyticsConfig.from_dict(config.to_dict()) == config
