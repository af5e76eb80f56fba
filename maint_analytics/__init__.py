"""
Maintenance analytics for a vehicle logbook.

This package derives analytics from a vehicle's service history:
- classify: Free-text description to service type
- aggregate_patterns: Recurrence statistics per service type
- predict: Next-due forecasts with confidence
- compute_cost_efficiency: Distance-normalized cost metrics
- build_timeline / build_breakdown: Monthly and per-type aggregations
- analyze: All of the above bundled as an AnalyticsResult
- mileage_stats: Distance and fuel statistics over odometer readings
- Logbook: YAML-backed vehicle, records, reminders and mileage log
"""

from .ratings import Confidence, Rating
from .config import AnalyticsConfig, DEFAULT_CONFIG
from .record import MaintenanceRecord
from .vehicle import Vehicle
from .classifier import classify
from .patterns import ServicePattern, aggregate_patterns
from .alerts import PredictiveAlert, predict
from .efficiency import CostEfficiency, CostSummary, compute_cost_efficiency, summarize_costs
from .timeline import TimelineBucket, ServiceBreakdownEntry, build_timeline, build_breakdown
from .engine import AnalyticsResult, analyze, alert_to_dict, result_to_dict
from .reminders import Reminder, reminder_from_alert, due_reminders
from .mileage import MileageLog, MileageStats, mileage_stats, mileage_stats_to_dict
from .loader import (
    Logbook,
    load_logbook,
    save_record,
    delete_record,
    save_reminder,
    save_mileage_log,
    save_current_odometer,
)

__all__ = [
    "Confidence",
    "Rating",
    "AnalyticsConfig",
    "DEFAULT_CONFIG",
    "MaintenanceRecord",
    "Vehicle",
    "classify",
    "ServicePattern",
    "aggregate_patterns",
    "PredictiveAlert",
    "predict",
    "CostEfficiency",
    "CostSummary",
    "compute_cost_efficiency",
    "summarize_costs",
    "TimelineBucket",
    "ServiceBreakdownEntry",
    "build_timeline",
    "build_breakdown",
    "AnalyticsResult",
    "analyze",
    "alert_to_dict",
    "result_to_dict",
    "Reminder",
    "reminder_from_alert",
    "due_reminders",
    "MileageLog",
    "MileageStats",
    "mileage_stats",
    "mileage_stats_to_dict",
    "Logbook",
    "load_logbook",
    "save_record",
    "delete_record",
    "save_reminder",
    "save_mileage_log",
    "save_current_odometer",
]
