#!/usr/bin/env python3
"""Tests for MaintenanceRecord class."""
from datetime import date

from maint_analytics import MaintenanceRecord
from maint_analytics.record import parse_date


class TestMaintenanceRecord:
    """Tests for MaintenanceRecord class."""

    def test_required_attributes(self):
        """Required attributes are stored correctly."""
        record = MaintenanceRecord("r1", "2024-01-15", "Oil change", 12000)
        assert record.id == "r1"
        assert record.date == "2024-01-15"
        assert record.description == "Oil change"
        assert record.odometer_km == 12000

    def test_optional_attributes_default_to_none(self):
        """Optional attributes default to None."""
        record = MaintenanceRecord("r1", "2024-01-15", "Oil change", 12000)
        assert record.parts_cost is None
        assert record.labor_cost is None
        assert record.vehicle_id is None
        assert record.notes is None

    def test_total_cost_sums_parts_and_labor(self):
        record = MaintenanceRecord(
            "r1", "2024-01-15", "Oil change", 12000, parts_cost=50, labor_cost=20.5
        )
        assert record.total_cost == 70.5

    def test_total_cost_treats_missing_as_zero(self):
        """Absent costs count as zero."""
        assert MaintenanceRecord("r1", "2024-01-15", "Wash", 1).total_cost == 0
        assert MaintenanceRecord("r1", "2024-01-15", "Wash", 1, labor_cost=15).total_cost == 15

    def test_service_date(self):
        record = MaintenanceRecord("r1", "2024-01-15", "Oil change", 12000)
        assert record.service_date == date(2024, 1, 15)


class TestParseDate:
    """Tests for parse_date helper."""

    def test_plain_date(self):
        assert parse_date("2024-06-01") == date(2024, 6, 1)

    def test_timestamp_truncated_to_date(self):
        """Full ISO timestamps keep only their calendar date."""
        assert parse_date("2024-06-01T18:30:00Z") == date(2024, 6, 1)
        assert parse_date("2024-06-01 18:30:00") == date(2024, 6, 1)
