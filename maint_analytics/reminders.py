"""Reminder class and helpers for turning alerts into reminders."""

from datetime import date
from typing import List, Optional

from dateutil.relativedelta import relativedelta

from .alerts import PredictiveAlert
from .record import parse_date
from .vehicle import Vehicle

REPEAT_MONTHS = {
    "monthly": 1,
    "quarterly": 3,
    "biannually": 6,
    "yearly": 12,
}


class Reminder:
    """A date- and/or mileage-based reminder for upcoming service."""

    def __init__(
            self,
            title: str,
            vehicle_id: Optional[str] = None,
            description: Optional[str] = None,
            due_date: Optional[str] = None,
            due_mileage: Optional[int] = None,
            mileage_interval: Optional[int] = None,
            repeat_interval: Optional[str] = None,
            is_active: bool = True,
            dismissed: bool = False,
    ):
        self.title = title
        self.vehicle_id = vehicle_id
        self.description = description
        self.due_date = due_date
        self.due_mileage = due_mileage
        self.mileage_interval = mileage_interval
        self.repeat_interval = repeat_interval
        self.is_active = is_active
        self.dismissed = dismissed

    def is_due(self, vehicle: Vehicle, as_of: date) -> bool:
        """Due once the date has arrived or the odometer reached due_mileage."""
        if not self.is_active or self.dismissed:
            return False
        if self.due_date is not None and parse_date(self.due_date) <= as_of:
            return True
        if self.due_mileage is not None and vehicle.current_odometer >= self.due_mileage:
            return True
        return False

    def next_due_date(self) -> Optional[str]:
        """Due date advanced by one repeat interval, if both are set."""
        months = REPEAT_MONTHS.get(self.repeat_interval or "")
        if months is None or self.due_date is None:
            return None
        return (parse_date(self.due_date) + relativedelta(months=months)).isoformat()


def reminder_from_alert(alert: PredictiveAlert, vehicle_id: str) -> Reminder:
    """Materialize a predictive alert as a mileage-based reminder."""
    return Reminder(
        title=alert.service_type,
        vehicle_id=vehicle_id,
        description=(
            f"Predicted from {alert.confidence.value}-confidence history: "
            f"every {alert.average_interval_km:,} km, last on {alert.last_performed_date}"
        ),
        due_mileage=alert.predicted_odometer_km,
        mileage_interval=alert.average_interval_km,
    )


def due_reminders(
    reminders: List[Reminder], vehicle: Vehicle, as_of: date
) -> List[Reminder]:
    """Active reminders that are due by date or mileage, each listed once."""
    return [r for r in reminders if r.is_due(vehicle, as_of)]
