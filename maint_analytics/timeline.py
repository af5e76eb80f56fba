"""Monthly timeline and per-type breakdown aggregations for charts."""

from dataclasses import dataclass
from typing import Dict, List

from .classifier import classify
from .record import MaintenanceRecord


@dataclass
class TimelineBucket:
    """Service count and cost for one calendar month."""

    year_month: str
    service_count: int
    total_cost: float


@dataclass
class ServiceBreakdownEntry:
    """Share of the history taken by one service type."""

    service_type: str
    occurrence_count: int
    percentage_of_total: float
    total_cost: float


def month_key(record: MaintenanceRecord) -> str:
    """Zero-padded 'YYYY-MM' key, so lexical order is chronological."""
    return record.service_date.strftime("%Y-%m")


def build_timeline(records: List[MaintenanceRecord]) -> List[TimelineBucket]:
    """One bucket per month containing at least one record, oldest first."""
    buckets: Dict[str, TimelineBucket] = {}
    for record in records:
        key = month_key(record)
        if key not in buckets:
            buckets[key] = TimelineBucket(year_month=key, service_count=0, total_cost=0)
        buckets[key].service_count += 1
        buckets[key].total_cost += record.total_cost

    return [buckets[key] for key in sorted(buckets)]


def build_breakdown(records: List[MaintenanceRecord]) -> List[ServiceBreakdownEntry]:
    """One entry per service type, most frequent first."""
    entries: Dict[str, ServiceBreakdownEntry] = {}
    for record in records:
        service_type = classify(record.description)
        if service_type not in entries:
            entries[service_type] = ServiceBreakdownEntry(
                service_type=service_type,
                occurrence_count=0,
                percentage_of_total=0,
                total_cost=0,
            )
        entries[service_type].occurrence_count += 1
        entries[service_type].total_cost += record.total_cost

    total = len(records)
    for entry in entries.values():
        entry.percentage_of_total = entry.occurrence_count / total * 100

    return sorted(entries.values(), key=lambda e: e.occurrence_count, reverse=True)
