"""Distance-normalized cost metrics for a vehicle's maintenance history."""

from dataclasses import dataclass
from typing import List, Optional

from .config import AnalyticsConfig, DEFAULT_CONFIG
from .ratings import Rating
from .record import MaintenanceRecord
from .vehicle import Vehicle


@dataclass
class CostEfficiency:
    """Spending metrics normalized by distance traveled."""

    total_distance_km: int
    total_cost: float
    cost_per_km: float
    cost_per_service: float
    parts_cost_per_km: float
    labor_cost_per_km: float
    monthly_average_cost: float
    rating: Rating


@dataclass
class CostSummary:
    """Plain cost totals, available even without distance data."""

    total_parts: float
    total_labor: float
    total_cost: float
    record_count: int
    average_cost_per_service: float


def rate_cost_per_km(
    cost_per_km: float, config: AnalyticsConfig = DEFAULT_CONFIG
) -> Rating:
    """Return the first rating whose upper bound exceeds cost_per_km."""
    for bound, rating in config.rating_thresholds:
        if cost_per_km < bound:
            return rating
    return Rating.HIGH


def months_spanned(
    records: List[MaintenanceRecord], config: AnalyticsConfig = DEFAULT_CONFIG
) -> float:
    """Months between the earliest and latest record, never less than 1."""
    dates = [r.service_date for r in records]
    span_days = (max(dates) - min(dates)).days
    return max(1, span_days / config.days_per_month)


def compute_cost_efficiency(
    records: List[MaintenanceRecord],
    vehicle: Vehicle,
    config: AnalyticsConfig = DEFAULT_CONFIG,
) -> Optional[CostEfficiency]:
    """
    Compute cost metrics over the whole history.

    Returns None when there are no records or the vehicle has not traveled
    a positive distance since purchase.
    """
    if not records:
        return None

    total_distance = vehicle.total_distance_km
    if total_distance <= 0:
        return None

    total_parts = sum(r.parts_cost or 0 for r in records)
    total_labor = sum(r.labor_cost or 0 for r in records)
    total_cost = total_parts + total_labor
    cost_per_km = total_cost / total_distance

    return CostEfficiency(
        total_distance_km=total_distance,
        total_cost=total_cost,
        cost_per_km=cost_per_km,
        cost_per_service=total_cost / len(records),
        parts_cost_per_km=total_parts / total_distance,
        labor_cost_per_km=total_labor / total_distance,
        monthly_average_cost=total_cost / months_spanned(records, config),
        rating=rate_cost_per_km(cost_per_km, config),
    )


def summarize_costs(records: List[MaintenanceRecord]) -> CostSummary:
    """Sum parts and labor over all records."""
    total_parts = sum(r.parts_cost or 0 for r in records)
    total_labor = sum(r.labor_cost or 0 for r in records)
    total_cost = total_parts + total_labor
    count = len(records)
    return CostSummary(
        total_parts=total_parts,
        total_labor=total_labor,
        total_cost=total_cost,
        record_count=count,
        average_cost_per_service=total_cost / count if count else 0,
    )
