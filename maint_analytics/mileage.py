"""Odometer readings and fuel stops, and the distance/fuel statistics over them."""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .config import AnalyticsConfig, DEFAULT_CONFIG
from .record import parse_date

logger = logging.getLogger(__name__)


class MileageLog:
    """An odometer reading, optionally taken at a fuel stop."""

    def __init__(
            self,
            id: str,
            date: str,
            odometer_km: int,
            fuel_stop: bool = False,
            fuel_liters: Optional[float] = None,
            fuel_cost: Optional[float] = None,
            vehicle_id: Optional[str] = None,
            notes: Optional[str] = None,
    ):
        self.id = id
        self.date = date
        self.odometer_km = odometer_km
        self.fuel_stop = fuel_stop
        self.fuel_liters = fuel_liters
        self.fuel_cost = fuel_cost
        self.vehicle_id = vehicle_id
        self.notes = notes

    @property
    def is_refuel(self) -> bool:
        """A fuel stop with a positive amount of fuel recorded."""
        return self.fuel_stop and (self.fuel_liters or 0) > 0


@dataclass
class MileageStats:
    total_distance_km: int
    average_daily_km: float
    average_monthly_km: float
    total_fuel_cost: float
    total_fuel_liters: float
    average_km_per_liter: float
    fuel_cost_per_km: float
    fuel_stop_count: int


def fuel_efficiency(refuels: List[MileageLog]) -> float:
    """
    Kilometres per liter across consecutive refuels.

    Each leg pairs the distance since the previous refuel with the fuel
    added at the end of it. Legs with no distance are skipped. Returns 0
    when fewer than two usable refuels exist.
    """
    distance = 0
    liters = 0.0
    for prev, cur in zip(refuels, refuels[1:]):
        leg = cur.odometer_km - prev.odometer_km
        if leg > 0 and (cur.fuel_liters or 0) > 0:
            distance += leg
            liters += cur.fuel_liters
    return distance / liters if liters > 0 else 0.0


def mileage_stats(
    logs: List[MileageLog], config: AnalyticsConfig = DEFAULT_CONFIG
) -> MileageStats:
    """Distance and fuel statistics over a vehicle's mileage log."""
    if not logs:
        return MileageStats(0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0)

    ordered = sorted(logs, key=lambda log: log.odometer_km)
    total_distance = ordered[-1].odometer_km - ordered[0].odometer_km

    dates = [parse_date(log.date) for log in logs]
    day_range = max(1, (max(dates) - min(dates)).days)
    daily = total_distance / day_range

    refuels = [log for log in ordered if log.is_refuel]
    total_fuel_cost = sum(log.fuel_cost or 0 for log in refuels)
    total_fuel_liters = sum(log.fuel_liters for log in refuels)

    stats = MileageStats(
        total_distance_km=total_distance,
        average_daily_km=daily,
        average_monthly_km=daily * config.days_per_month,
        total_fuel_cost=total_fuel_cost,
        total_fuel_liters=total_fuel_liters,
        average_km_per_liter=fuel_efficiency(refuels),
        fuel_cost_per_km=total_fuel_cost / total_distance if total_distance > 0 else 0.0,
        fuel_stop_count=len(refuels),
    )
    logger.debug(
        "Mileage over %d logs: %d km, %d refuels",
        len(logs),
        total_distance,
        len(refuels),
    )
    return stats


def with_distance_since_last(
    logs: List[MileageLog],
) -> List[Tuple[MileageLog, Optional[int]]]:
    """Logs newest first, each paired with the distance from the reading before it."""
    ordered = sorted(logs, key=lambda log: log.odometer_km, reverse=True)
    return [
        (log, log.odometer_km - ordered[i + 1].odometer_km if i + 1 < len(ordered) else None)
        for i, log in enumerate(ordered)
    ]


def mileage_stats_to_dict(stats: MileageStats) -> dict:
    """Serialize stats with camelCase keys."""
    return {
        "totalDistanceKm": stats.total_distance_km,
        "averageDailyKm": stats.average_daily_km,
        "averageMonthlyKm": stats.average_monthly_km,
        "totalFuelCost": stats.total_fuel_cost,
        "totalFuelLiters": stats.total_fuel_liters,
        "averageKmPerLiter": stats.average_km_per_liter,
        "fuelCostPerKm": stats.fuel_cost_per_km,
        "fuelStopCount": stats.fuel_stop_count,
    }
