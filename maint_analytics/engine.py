"""AnalyticsResult bundle and the single entry point that computes it."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .alerts import PredictiveAlert, predict
from .config import AnalyticsConfig, DEFAULT_CONFIG
from .efficiency import CostEfficiency, CostSummary, compute_cost_efficiency, summarize_costs
from .patterns import ServicePattern, aggregate_patterns
from .record import MaintenanceRecord
from .timeline import ServiceBreakdownEntry, TimelineBucket, build_breakdown, build_timeline
from .vehicle import Vehicle

logger = logging.getLogger(__name__)


@dataclass
class AnalyticsResult:
    """Everything derived from one vehicle's history in a single call."""

    patterns: List[ServicePattern] = field(default_factory=list)
    alerts: List[PredictiveAlert] = field(default_factory=list)
    cost_efficiency: Optional[CostEfficiency] = None
    timeline: List[TimelineBucket] = field(default_factory=list)
    breakdown: List[ServiceBreakdownEntry] = field(default_factory=list)
    cost_trend: List[TimelineBucket] = field(default_factory=list)
    cost_summary: CostSummary = field(default_factory=lambda: summarize_costs([]))


def analyze(
    records: List[MaintenanceRecord],
    vehicle: Optional[Vehicle],
    config: AnalyticsConfig = DEFAULT_CONFIG,
) -> AnalyticsResult:
    """
    Run the full analytics pipeline over a vehicle's records.

    Records must already be filtered to the vehicle. With no records or no
    vehicle the result is empty rather than an error: a new vehicle simply
    has no analytics yet.
    """
    if not records or vehicle is None:
        return AnalyticsResult()

    patterns = aggregate_patterns(records)
    alerts = predict(patterns, vehicle.current_odometer, config)
    timeline = build_timeline(records)
    result = AnalyticsResult(
        patterns=patterns,
        alerts=alerts,
        cost_efficiency=compute_cost_efficiency(records, vehicle, config),
        timeline=timeline,
        breakdown=build_breakdown(records),
        cost_trend=list(timeline),
        cost_summary=summarize_costs(records),
    )

    logger.debug(
        "Analyzed %d records for %s: %d patterns, %d alerts",
        len(records),
        vehicle.id,
        len(patterns),
        len(alerts),
    )
    return result


def _pattern_to_dict(pattern: ServicePattern) -> Dict[str, Any]:
    return {
        "serviceType": pattern.service_type,
        "occurrenceCount": pattern.occurrence_count,
        "averageIntervalKm": pattern.average_interval_km,
        "lastPerformedDate": pattern.last_performed_date,
        "lastOdometerKm": pattern.last_odometer_km,
        "averageCost": pattern.average_cost,
    }


def alert_to_dict(alert: PredictiveAlert) -> Dict[str, Any]:
    """Serialize an alert with camelCase keys."""
    return {
        "serviceType": alert.service_type,
        "predictedOdometerKm": alert.predicted_odometer_km,
        "distanceRemainingKm": alert.distance_remaining_km,
        "confidence": alert.confidence.value,
        "lastPerformedDate": alert.last_performed_date,
        "averageIntervalKm": alert.average_interval_km,
    }


def _efficiency_to_dict(eff: Optional[CostEfficiency]) -> Optional[Dict[str, Any]]:
    if eff is None:
        return None
    return {
        "totalDistanceKm": eff.total_distance_km,
        "totalCost": eff.total_cost,
        "costPerKm": eff.cost_per_km,
        "costPerService": eff.cost_per_service,
        "partsCostPerKm": eff.parts_cost_per_km,
        "laborCostPerKm": eff.labor_cost_per_km,
        "monthlyAverageCost": eff.monthly_average_cost,
        "rating": eff.rating.value,
    }


def _bucket_to_dict(bucket: TimelineBucket) -> Dict[str, Any]:
    return {
        "yearMonth": bucket.year_month,
        "serviceCount": bucket.service_count,
        "totalCost": bucket.total_cost,
    }


def _breakdown_to_dict(entry: ServiceBreakdownEntry) -> Dict[str, Any]:
    return {
        "serviceType": entry.service_type,
        "occurrenceCount": entry.occurrence_count,
        "percentageOfTotal": entry.percentage_of_total,
        "totalCost": entry.total_cost,
    }


def result_to_dict(result: AnalyticsResult) -> Dict[str, Any]:
    """Serialize a result to plain camelCase dicts for JSON or YAML output."""
    summary = result.cost_summary
    return {
        "patterns": [_pattern_to_dict(p) for p in result.patterns],
        "alerts": [alert_to_dict(a) for a in result.alerts],
        "costEfficiency": _efficiency_to_dict(result.cost_efficiency),
        "timeline": [_bucket_to_dict(b) for b in result.timeline],
        "breakdown": [_breakdown_to_dict(e) for e in result.breakdown],
        "costTrend": [_bucket_to_dict(b) for b in result.cost_trend],
        "costSummary": {
            "totalParts": summary.total_parts,
            "totalLabor": summary.total_labor,
            "totalCost": summary.total_cost,
            "recordCount": summary.record_count,
            "averageCostPerService": summary.average_cost_per_service,
        },
    }
