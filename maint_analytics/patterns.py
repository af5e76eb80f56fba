"""ServicePattern dataclass and recurrence statistics per service type."""

import logging
import math
from dataclasses import dataclass
from typing import Dict, List

from .classifier import classify
from .record import MaintenanceRecord

logger = logging.getLogger(__name__)


@dataclass
class ServicePattern:
    """Recurrence statistics for one service type."""

    service_type: str
    occurrence_count: int
    average_interval_km: int
    last_performed_date: str
    last_odometer_km: int
    average_cost: float

    @property
    def is_recurring(self) -> bool:
        return self.occurrence_count >= 2 and self.average_interval_km > 0


def group_by_service_type(
    records: List[MaintenanceRecord],
) -> Dict[str, List[MaintenanceRecord]]:
    """Group records by classified type, keeping first-appearance order."""
    groups: Dict[str, List[MaintenanceRecord]] = {}
    for record in records:
        groups.setdefault(classify(record.description), []).append(record)
    return groups


def average_interval_km(records: List[MaintenanceRecord]) -> int:
    """
    Mean positive odometer gap between consecutive records, in whole km.

    Records are ordered by odometer first. Zero or negative gaps (duplicate
    or corrected entries) are ignored. Returns 0 when no gap remains.
    """
    ordered = sorted(records, key=lambda r: r.odometer_km)
    gaps = [
        later.odometer_km - earlier.odometer_km
        for earlier, later in zip(ordered, ordered[1:])
        if later.odometer_km > earlier.odometer_km
    ]
    if not gaps:
        return 0
    # Half-up rounding, not Python's round-half-even.
    return int(math.floor(sum(gaps) / len(gaps) + 0.5))


def aggregate_patterns(records: List[MaintenanceRecord]) -> List[ServicePattern]:
    """Build one ServicePattern per service type, most frequent first."""
    patterns = []
    for service_type, group in group_by_service_type(records).items():
        last = sorted(group, key=lambda r: r.odometer_km)[-1]
        patterns.append(
            ServicePattern(
                service_type=service_type,
                occurrence_count=len(group),
                average_interval_km=average_interval_km(group),
                last_performed_date=last.date,
                last_odometer_km=last.odometer_km,
                average_cost=sum(r.total_cost for r in group) / len(group),
            )
        )

    logger.debug("Aggregated %d records into %d patterns", len(records), len(patterns))
    return sorted(patterns, key=lambda p: p.occurrence_count, reverse=True)
