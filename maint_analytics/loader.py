"""YAML loading and saving utilities for logbook files."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .config import AnalyticsConfig, DEFAULT_CONFIG
from .engine import AnalyticsResult, analyze
from .mileage import MileageLog, MileageStats, mileage_stats
from .record import MaintenanceRecord
from .reminders import Reminder
from .vehicle import Vehicle

logger = logging.getLogger(__name__)


class Logbook:
    """One vehicle with its records, reminders, mileage log and analytics config."""

    def __init__(
        self,
        vehicle: Vehicle,
        records: Optional[List[MaintenanceRecord]] = None,
        reminders: Optional[List[Reminder]] = None,
        config: Optional[AnalyticsConfig] = None,
        mileage: Optional[List[MileageLog]] = None,
    ):
        self.vehicle = vehicle
        self.records = records or []
        self.reminders = reminders or []
        self.config = config or DEFAULT_CONFIG
        self.mileage = mileage or []

    def records_for_vehicle(self) -> List[MaintenanceRecord]:
        """Records belonging to this logbook's vehicle."""
        return [r for r in self.records if r.vehicle_id == self.vehicle.id]

    def analyze(self) -> AnalyticsResult:
        return analyze(self.records_for_vehicle(), self.vehicle, self.config)

    def mileage_for_vehicle(self) -> List[MileageLog]:
        return [m for m in self.mileage if m.vehicle_id == self.vehicle.id]

    def mileage_stats(self) -> MileageStats:
        return mileage_stats(self.mileage_for_vehicle(), self.config)


def _optional_id(value: Any) -> Optional[str]:
    return str(value) if value is not None else None


def _parse_object(
    dct: Dict[str, Any]
) -> Union[Logbook, Vehicle, MaintenanceRecord, MileageLog, Reminder, dict]:
    """Parse dictionary into appropriate object type."""
    # Maintenance record
    if "odometerKm" in dct and "description" in dct:
        return MaintenanceRecord(
            str(dct["id"]),
            dct["date"],
            dct["description"],
            dct["odometerKm"],
            dct.get("partsCost"),
            dct.get("laborCost"),
            _optional_id(dct.get("vehicleId")),
            dct.get("notes"),
        )
    # Mileage log entry (an odometer reading without a description)
    elif "odometerKm" in dct:
        return MileageLog(
            str(dct["id"]),
            dct["date"],
            dct["odometerKm"],
            dct.get("fuelStop", False),
            dct.get("fuelLiters"),
            dct.get("fuelCost"),
            _optional_id(dct.get("vehicleId")),
            dct.get("notes"),
        )
    # Vehicle object (inside 'vehicle' key)
    elif "currentOdometer" in dct:
        return Vehicle(
            str(dct["id"]),
            dct["name"],
            dct["currentOdometer"],
            dct.get("purchaseOdometer"),
            dct.get("purchaseDate"),
        )
    # Reminder
    elif "title" in dct:
        return Reminder(
            dct["title"],
            _optional_id(dct.get("vehicleId")),
            dct.get("description"),
            dct.get("dueDate"),
            dct.get("dueMileage"),
            dct.get("mileageInterval"),
            dct.get("repeatInterval"),
            dct.get("isActive", True),
            dct.get("dismissed", False),
        )
    # Top-level logbook object
    elif "vehicle" in dct:
        vehicle = dct["vehicle"]
        records = dct.get("records") or []
        reminders = dct.get("reminders") or []
        mileage = dct.get("mileage") or []
        # Entries belong to the file's vehicle unless stated
        for item in records + reminders + mileage:
            if item.vehicle_id is None:
                item.vehicle_id = vehicle.id
        return Logbook(
            vehicle,
            records,
            reminders,
            AnalyticsConfig.from_dict(dct.get("analytics")),
            mileage,
        )
    else:
        # Return dict as-is for unknown structures (like 'analytics')
        return dct


def load_logbook(filename: Union[str, Path]) -> Logbook:
    """Load a logbook from a YAML file."""
    with open(filename, "rb") as fp:
        # Unquoted YAML dates load as date objects; str() gives ISO form
        json_data = json.dumps(yaml.load(fp, Loader=yaml.SafeLoader), default=str)
        logbook = json.loads(json_data, object_hook=_parse_object)

    if not isinstance(logbook, Logbook):
        raise ValueError(f"{filename} is not a logbook file (missing 'vehicle')")
    logger.debug("Loaded %d records from %s", len(logbook.records), filename)
    return logbook


def _record_to_dict(record: MaintenanceRecord) -> Dict[str, Any]:
    """Serialize a record to the YAML dict format (camelCase keys)."""
    d: Dict[str, Any] = {
        "id": record.id,
        "date": record.date,
        "description": record.description,
        "odometerKm": record.odometer_km,
    }
    if record.parts_cost is not None:
        d["partsCost"] = record.parts_cost
    if record.labor_cost is not None:
        d["laborCost"] = record.labor_cost
    if record.notes is not None:
        d["notes"] = record.notes
    return d


def _reminder_to_dict(reminder: Reminder) -> Dict[str, Any]:
    """Serialize a reminder to the YAML dict format (camelCase keys)."""
    d: Dict[str, Any] = {"title": reminder.title}
    if reminder.description is not None:
        d["description"] = reminder.description
    if reminder.due_date is not None:
        d["dueDate"] = reminder.due_date
    if reminder.due_mileage is not None:
        d["dueMileage"] = reminder.due_mileage
    if reminder.mileage_interval is not None:
        d["mileageInterval"] = reminder.mileage_interval
    if reminder.repeat_interval is not None:
        d["repeatInterval"] = reminder.repeat_interval
    if not reminder.is_active:
        d["isActive"] = False
    if reminder.dismissed:
        d["dismissed"] = True
    return d


def _mileage_to_dict(log: MileageLog) -> Dict[str, Any]:
    d: Dict[str, Any] = {"id": log.id, "date": log.date, "odometerKm": log.odometer_km}
    if log.fuel_stop:
        d["fuelStop"] = True
    if log.fuel_liters is not None:
        d["fuelLiters"] = log.fuel_liters
    if log.fuel_cost is not None:
        d["fuelCost"] = log.fuel_cost
    if log.notes is not None:
        d["notes"] = log.notes
    return d


def _load_raw(filename: Union[str, Path]) -> Dict[str, Any]:
    with open(filename, "r") as fp:
        return yaml.load(fp, Loader=yaml.SafeLoader)


def _dump_raw(filename: Union[str, Path], data: Dict[str, Any]) -> None:
    with open(filename, "w") as fp:
        yaml.dump(
            data,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )


def save_record(filename: Union[str, Path], record: MaintenanceRecord) -> None:
    """
    Append a maintenance record to a logbook YAML file.

    Loads the raw YAML, appends the record to the records list,
    and writes back to the file.
    """
    data = _load_raw(filename)

    if data.get("records") is None:
        data["records"] = []

    ids = {str(r.get("id")) for r in data["records"]}
    if record.id in ids:
        raise ValueError(f"Record id '{record.id}' already exists in {filename}")

    data["records"].append(_record_to_dict(record))
    _dump_raw(filename, data)


def delete_record(filename: Union[str, Path], index: int) -> None:
    """Remove the record at the given index in a logbook YAML file."""
    data = _load_raw(filename)

    records = data.get("records") or []
    if index < 0 or index >= len(records):
        raise IndexError(f"Record index {index} out of range (0..{len(records) - 1})")

    del records[index]
    _dump_raw(filename, data)


def save_reminder(filename: Union[str, Path], reminder: Reminder) -> None:
    """Append a reminder to a logbook YAML file."""
    data = _load_raw(filename)

    if data.get("reminders") is None:
        data["reminders"] = []

    data["reminders"].append(_reminder_to_dict(reminder))
    _dump_raw(filename, data)


def save_mileage_log(filename: Union[str, Path], log: MileageLog) -> None:
    """Append a mileage log entry to a logbook YAML file."""
    data = _load_raw(filename)

    if data.get("mileage") is None:
        data["mileage"] = []

    ids = {str(m.get("id")) for m in data["mileage"]}
    if log.id in ids:
        raise ValueError(f"Mileage log id '{log.id}' already exists in {filename}")

    data["mileage"].append(_mileage_to_dict(log))
    _dump_raw(filename, data)


def save_current_odometer(filename: Union[str, Path], odometer_km: int) -> None:
    """Update vehicle.currentOdometer in a logbook YAML file."""
    data = _load_raw(filename)
    data["vehicle"]["currentOdometer"] = odometer_km
    _dump_raw(filename, data)
