#!/usr/bin/env python3
"""
Tests for the analyze entry point.

Covers the end-to-end properties of the pipeline:
1. Empty input - every output is empty or None, nothing raises
2. Determinism - identical inputs give equal results
3. Interval and urgency behaviour through the whole pipeline
4. The two oil change scenario, including the horizon exclusion
"""
import json

import pytest

from maint_analytics import (
    AnalyticsConfig,
    AnalyticsResult,
    Confidence,
    MaintenanceRecord,
    Rating,
    Vehicle,
    analyze,
    result_to_dict,
)


@pytest.fixture
def oil_change_records():
    return [
        MaintenanceRecord("1", "2024-01-01", "Oil change", 1000, 50, 20),
        MaintenanceRecord("2", "2024-06-01", "Oil change", 6000, 55, 20),
    ]


@pytest.fixture
def vehicle():
    return Vehicle("v1", "Nightster", 6500, 0)


class TestEmptyInput:
    """A vehicle without history has no analytics yet."""

    def test_no_records(self, vehicle):
        result = analyze([], vehicle)
        assert result.patterns == []
        assert result.alerts == []
        assert result.cost_efficiency is None
        assert result.timeline == []
        assert result.breakdown == []
        assert result.cost_trend == []
        assert result.cost_summary.record_count == 0

    def test_no_vehicle(self, oil_change_records):
        assert analyze(oil_change_records, None) == AnalyticsResult()


class TestScenario:
    """Two oil changes 5000 km apart, vehicle at 6500 km."""

    def test_pattern(self, oil_change_records, vehicle):
        result = analyze(oil_change_records, vehicle)
        assert len(result.patterns) == 1
        pattern = result.patterns[0]
        assert pattern.service_type == "Oil Change"
        assert pattern.occurrence_count == 2
        assert pattern.average_interval_km == 5000
        assert pattern.average_cost == pytest.approx(72.5)

    def test_far_prediction_excluded(self, oil_change_records, vehicle):
        """Next oil change at 11000 is 4500 km away, beyond the horizon."""
        assert analyze(oil_change_records, vehicle).alerts == []

    def test_prediction_included_with_wider_horizon(self, oil_change_records, vehicle):
        config = AnalyticsConfig(alert_horizon_km=5000)
        alerts = analyze(oil_change_records, vehicle, config).alerts
        assert len(alerts) == 1
        assert alerts[0].predicted_odometer_km == 11000
        assert alerts[0].distance_remaining_km == 4500
        assert alerts[0].confidence == Confidence.LOW

    def test_cost_efficiency(self, oil_change_records, vehicle):
        eff = analyze(oil_change_records, vehicle).cost_efficiency
        assert eff.total_distance_km == 6500
        assert eff.cost_per_km == pytest.approx(0.0223, abs=1e-4)
        assert eff.rating == Rating.EXCELLENT

    def test_no_distance_traveled(self, oil_change_records):
        vehicle = Vehicle("v1", "Nightster", 6000, 6000)
        result = analyze(oil_change_records, vehicle)
        assert result.cost_efficiency is None
        assert len(result.patterns) == 1

    def test_cost_trend_matches_timeline(self, oil_change_records, vehicle):
        result = analyze(oil_change_records, vehicle)
        assert result.cost_trend == result.timeline
        assert result.cost_trend is not result.timeline
        assert [b.year_month for b in result.timeline] == ["2024-01", "2024-06"]


class TestPipeline:
    """Cross-component behaviour."""

    def test_deterministic(self, vehicle):
        records = [
            MaintenanceRecord("1", "2024-01-01", "Oil change", 1000, 50, 20),
            MaintenanceRecord("2", "2024-02-01", "Chain lube", 1500),
            MaintenanceRecord("3", "2024-03-01", "Oil change", 3500, 50, 20),
            MaintenanceRecord("4", "2024-04-01", "Chain lube", 2500),
            MaintenanceRecord("5", "2024-05-01", "Chain lube", 3500),
        ]
        first = analyze(records, vehicle)
        second = analyze(records, vehicle)
        assert first == second
        assert json.dumps(result_to_dict(first)) == json.dumps(result_to_dict(second))

    def test_interval_in_any_date_order(self):
        records = [
            MaintenanceRecord("a", "2024-09-01", "Oil change", 6000),
            MaintenanceRecord("b", "2024-01-01", "Oil change", 11000),
            MaintenanceRecord("c", "2024-05-01", "Oil change", 1000),
        ]
        result = analyze(records, Vehicle("v1", "Bike", 15000))
        assert result.patterns[0].average_interval_km == 5000

    def test_single_record_types_have_no_alerts(self):
        records = [
            MaintenanceRecord("1", "2024-01-01", "Battery replaced", 1000),
            MaintenanceRecord("2", "2024-01-01", "Wash", 1000),
        ]
        result = analyze(records, Vehicle("v1", "Bike", 1000))
        assert all(p.average_interval_km == 0 for p in result.patterns)
        assert result.alerts == []

    def test_overdue_before_upcoming(self):
        """An overdue oil change (-200) sorts before an upcoming chain service (+800)."""
        records = [
            MaintenanceRecord("1", "2023-01-01", "Oil change", 1000),
            MaintenanceRecord("2", "2023-06-01", "Oil change", 6000),
            MaintenanceRecord("3", "2023-08-01", "Chain adjust", 10000),
            MaintenanceRecord("4", "2023-09-01", "Chain adjust", 11000),
        ]
        alerts = analyze(records, Vehicle("v1", "Bike", 11200)).alerts
        assert [(a.service_type, a.distance_remaining_km) for a in alerts] == [
            ("Oil Change", -200),
            ("Chain", 800),
        ]


class TestResultToDict:
    """Tests for result_to_dict serialization."""

    def test_camel_case_keys_and_enum_values(self, oil_change_records, vehicle):
        data = result_to_dict(analyze(oil_change_records, vehicle))
        assert data["patterns"][0]["serviceType"] == "Oil Change"
        assert data["patterns"][0]["averageIntervalKm"] == 5000
        assert data["costEfficiency"]["rating"] == "excellent"
        assert data["timeline"][0] == {
            "yearMonth": "2024-01",
            "serviceCount": 1,
            "totalCost": 70,
        }
        assert data["breakdown"][0]["percentageOfTotal"] == 100
        assert data["costSummary"]["recordCount"] == 2

    def test_empty_result(self):
        data = result_to_dict(AnalyticsResult())
        assert data["costEfficiency"] is None
        assert data["alerts"] == []
        assert data["costSummary"]["averageCostPerService"] == 0
