"""MaintenanceRecord class for logged service events."""
from datetime import date
from typing import Optional

from dateutil.parser import isoparse


def parse_date(value: str) -> date:
    """Parse an ISO date or timestamp string into a calendar date."""
    return isoparse(value).date()


class MaintenanceRecord:
    """A record of service work performed on a vehicle."""

    def __init__(
            self,
            id: str,
            date: str,
            description: str,
            odometer_km: int,
            parts_cost: Optional[float] = None,
            labor_cost: Optional[float] = None,
            vehicle_id: Optional[str] = None,
            notes: Optional[str] = None,
    ):
        self.id = id
        self.date = date
        self.description = description
        self.odometer_km = odometer_km
        self.parts_cost = parts_cost
        self.labor_cost = labor_cost
        self.vehicle_id = vehicle_id
        self.notes = notes

    @property
    def total_cost(self) -> float:
        """Parts plus labor, with missing amounts counted as zero."""
        return (self.parts_cost or 0) + (self.labor_cost or 0)

    @property
    def service_date(self) -> date:
        return parse_date(self.date)
