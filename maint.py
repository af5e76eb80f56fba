#!/usr/bin/env python3
"""
Unified CLI for vehicle maintenance analytics.

Commands:
  report          - Cost efficiency, upcoming services and service patterns
  patterns        - Recurrence statistics per service type
  alerts          - Services predicted due soon or overdue
  costs           - Cost efficiency and cost totals
  timeline        - Monthly service count and cost
  breakdown       - Share of services per type
  log             - Add a new maintenance record
  delete          - Remove a maintenance record by id
  update-odometer - Update the current odometer reading
  remind          - Save reminders for current alerts
  reminders       - List reminders that are due
  mileage         - Distance and fuel statistics from the mileage log
  log-mileage     - Add an odometer reading or fuel stop
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from maint_analytics import (
    AnalyticsResult,
    Logbook,
    MaintenanceRecord,
    MileageLog,
    MileageStats,
    PredictiveAlert,
    Reminder,
    ServicePattern,
    delete_record,
    due_reminders,
    load_logbook,
    reminder_from_alert,
    save_current_odometer,
    save_mileage_log,
    save_record,
    save_reminder,
)
from maint_analytics.efficiency import CostEfficiency, CostSummary
from maint_analytics.mileage import with_distance_since_last
from maint_analytics.timeline import ServiceBreakdownEntry, TimelineBucket

logger = logging.getLogger("maint")

# =============================================================================
# Formatting helpers
# =============================================================================


def format_km(km: Optional[float]) -> str:
    """Format a distance for display."""
    return f"{km:,.0f}" if km is not None else "-"


def format_cost(cost: Optional[float]) -> str:
    """Format cost for display."""
    return f"${cost:,.2f}" if cost is not None else "-"


def format_remaining(alert: PredictiveAlert) -> str:
    """Format remaining distance, marking overdue services."""
    if alert.is_overdue:
        return f"{abs(alert.distance_remaining_km):,.0f} overdue"
    return f"{alert.distance_remaining_km:,.0f}"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def print_header(logbook: Logbook) -> None:
    vehicle = logbook.vehicle
    print(f"Vehicle: {vehicle.name}")
    print(f"Current odometer: {format_km(vehicle.current_odometer)} km")
    print(f"Records: {len(logbook.records_for_vehicle())}")
    print()


# =============================================================================
# Table builders
# =============================================================================


def make_pattern_table(patterns: List[ServicePattern]) -> List[List[str]]:
    """Convert service patterns to table rows."""
    rows = []
    for pattern in patterns:
        rows.append(
            [
                pattern.service_type,
                pattern.occurrence_count,
                format_km(pattern.average_interval_km or None),
                f"{pattern.last_performed_date} @ {format_km(pattern.last_odometer_km)}",
                format_cost(pattern.average_cost),
            ]
        )
    return rows


def make_alert_table(alerts: List[PredictiveAlert]) -> List[List[str]]:
    """Convert predictive alerts to table rows."""
    rows = []
    for alert in alerts:
        rows.append(
            [
                alert.service_type,
                format_km(alert.predicted_odometer_km),
                format_remaining(alert),
                alert.confidence.value,
                alert.last_performed_date,
                format_km(alert.average_interval_km),
            ]
        )
    return rows


def make_efficiency_table(
    eff: CostEfficiency, summary: CostSummary
) -> List[List[str]]:
    """Convert cost efficiency and totals to label/value rows."""
    return [
        ["Distance", f"{format_km(eff.total_distance_km)} km"],
        ["Total cost", format_cost(eff.total_cost)],
        ["  Parts", format_cost(summary.total_parts)],
        ["  Labor", format_cost(summary.total_labor)],
        ["Cost per km", f"${eff.cost_per_km:,.4f}"],
        ["  Parts per km", f"${eff.parts_cost_per_km:,.4f}"],
        ["  Labor per km", f"${eff.labor_cost_per_km:,.4f}"],
        ["Cost per service", format_cost(eff.cost_per_service)],
        ["Monthly average", format_cost(eff.monthly_average_cost)],
        ["Rating", eff.rating.value.upper()],
    ]


def make_timeline_table(buckets: List[TimelineBucket]) -> List[List[str]]:
    """Convert timeline buckets to table rows."""
    return [[b.year_month, b.service_count, format_cost(b.total_cost)] for b in buckets]


def make_breakdown_table(entries: List[ServiceBreakdownEntry]) -> List[List[str]]:
    """Convert breakdown entries to table rows."""
    return [
        [
            e.service_type,
            e.occurrence_count,
            f"{e.percentage_of_total:.1f}%",
            format_cost(e.total_cost),
        ]
        for e in entries
    ]


PATTERN_HEADERS = ["Service", "Count", "Avg Interval (km)", "Last Done", "Avg Cost"]
ALERT_HEADERS = [
    "Service",
    "Due (km)",
    "Remaining (km)",
    "Confidence",
    "Last Done",
    "Interval (km)",
]


def print_alerts(result: AnalyticsResult) -> None:
    if not result.alerts:
        print("No services predicted within the alert horizon.")
        return
    print(tabulate(make_alert_table(result.alerts), headers=ALERT_HEADERS, tablefmt="simple"))


def print_costs(result: AnalyticsResult) -> None:
    if result.cost_efficiency is None:
        print("Cost efficiency unavailable (no records or no distance traveled).")
        return
    print(
        tabulate(
            make_efficiency_table(result.cost_efficiency, result.cost_summary),
            tablefmt="plain",
        )
    )


# =============================================================================
# Analytics commands
# =============================================================================


def cmd_report(args, logbook: Logbook):
    """Cost efficiency, upcoming services and service patterns."""
    result = logbook.analyze()
    print_header(logbook)

    if not result.patterns:
        print("No maintenance records yet.")
        return 0

    print("COSTS:")
    print_costs(result)
    print()

    print("UPCOMING:")
    print_alerts(result)
    print()

    print("PATTERNS:")
    print(
        tabulate(
            make_pattern_table(result.patterns),
            headers=PATTERN_HEADERS,
            tablefmt="simple",
        )
    )
    return 0


def cmd_patterns(args, logbook: Logbook):
    """Recurrence statistics per service type."""
    result = logbook.analyze()
    print_header(logbook)
    patterns = result.patterns
    if args.recurring:
        patterns = [p for p in patterns if p.is_recurring]
    if not patterns:
        print("No service patterns found.")
        return 0
    print(tabulate(make_pattern_table(patterns), headers=PATTERN_HEADERS, tablefmt="simple"))
    return 0


def cmd_alerts(args, logbook: Logbook):
    """Services predicted due soon or overdue."""
    print_header(logbook)
    print_alerts(logbook.analyze())
    return 0


def cmd_costs(args, logbook: Logbook):
    """Cost efficiency and totals."""
    print_header(logbook)
    print_costs(logbook.analyze())
    return 0


def cmd_timeline(args, logbook: Logbook):
    """Monthly service count and cost."""
    result = logbook.analyze()
    print_header(logbook)
    timeline = result.timeline
    if args.since:
        timeline = [b for b in timeline if b.year_month >= args.since]
    if not timeline:
        print("No maintenance records found.")
        return 0
    headers = ["Month", "Services", "Cost"]
    print(tabulate(make_timeline_table(timeline), headers=headers, tablefmt="simple"))
    return 0


def cmd_breakdown(args, logbook: Logbook):
    """Share of services per type."""
    result = logbook.analyze()
    print_header(logbook)
    if not result.breakdown:
        print("No maintenance records found.")
        return 0
    headers = ["Service", "Count", "Share", "Total Cost"]
    print(
        tabulate(make_breakdown_table(result.breakdown), headers=headers, tablefmt="simple")
    )
    return 0


# =============================================================================
# Log command
# =============================================================================


def next_record_id(logbook: Logbook) -> str:
    """One past the highest numeric record id."""
    numeric = [int(r.id) for r in logbook.records if r.id.isdigit()]
    return str(max(numeric, default=0) + 1)


def cmd_log(args, logbook: Logbook):
    """Add a new maintenance record."""
    if args.odometer < 0:
        print("Error: odometer must not be negative")
        return 1
    if args.date:
        try:
            date.fromisoformat(args.date)
        except ValueError:
            print(f"Error: Invalid date '{args.date}' (expected YYYY-MM-DD)")
            return 1

    record = MaintenanceRecord(
        id=args.id or next_record_id(logbook),
        date=args.date or date.today().isoformat(),
        description=args.description,
        odometer_km=args.odometer,
        parts_cost=args.parts,
        labor_cost=args.labor,
        vehicle_id=logbook.vehicle.id,
        notes=args.notes,
    )

    print(f"Adding maintenance record to {args.logbook_file}:")
    print(f"  Id:          {record.id}")
    print(f"  Date:        {record.date}")
    print(f"  Description: {record.description}")
    print(f"  Odometer:    {format_km(record.odometer_km)} km")
    if record.parts_cost is not None:
        print(f"  Parts:       {format_cost(record.parts_cost)}")
    if record.labor_cost is not None:
        print(f"  Labor:       {format_cost(record.labor_cost)}")
    if record.notes:
        print(f"  Notes:       {truncate(record.notes, 60)}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    try:
        save_record(args.logbook_file, record)
    except ValueError as e:
        print(f"Error: {e}")
        return 1
    if record.odometer_km > logbook.vehicle.current_odometer:
        save_current_odometer(args.logbook_file, record.odometer_km)
        print(f"Odometer advanced to {format_km(record.odometer_km)} km.")
    print("Record saved.")
    return 0


def cmd_delete(args, logbook: Logbook):
    """Remove a maintenance record by id."""
    ids = [r.id for r in logbook.records]
    if args.record_id not in ids:
        print(f"Error: No record with id '{args.record_id}'")
        return 1
    index = ids.index(args.record_id)
    record = logbook.records[index]

    print(f"Removing maintenance record from {args.logbook_file}:")
    print(f"  {record.date} @ {format_km(record.odometer_km)} km: {truncate(record.description, 50)}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    delete_record(args.logbook_file, index)
    print("Record deleted.")
    return 0


# =============================================================================
# Odometer and reminder commands
# =============================================================================


def cmd_update_odometer(args, logbook: Logbook):
    """Update the current odometer reading."""
    old_km = logbook.vehicle.current_odometer

    print(f"Vehicle: {logbook.vehicle.name}")
    print(f"Current odometer: {format_km(old_km)} km")
    print(f"New odometer:     {format_km(args.odometer)} km")
    print()

    if args.odometer < old_km and not args.force:
        print("Error: new reading is lower than the current one (use --force)")
        return 1

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_current_odometer(args.logbook_file, args.odometer)
    print("Odometer updated.")
    return 0


def cmd_remind(args, logbook: Logbook):
    """Save a mileage reminder for each current alert without one."""
    result = logbook.analyze()
    existing = {r.title for r in logbook.reminders if r.is_active and not r.dismissed}
    new_reminders = [
        reminder_from_alert(alert, logbook.vehicle.id)
        for alert in result.alerts
        if alert.service_type not in existing
    ]

    if not new_reminders:
        print("No new reminders to create.")
        return 0

    for reminder in new_reminders:
        print(f"  {reminder.title} at {format_km(reminder.due_mileage)} km")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    for reminder in new_reminders:
        save_reminder(args.logbook_file, reminder)
    print(f"Saved {len(new_reminders)} reminder(s).")
    return 0


def make_reminder_table(reminders: List[Reminder]) -> List[List[str]]:
    """Convert reminders to table rows."""
    return [
        [
            r.title,
            r.due_date or "-",
            format_km(r.due_mileage),
            truncate(r.description),
        ]
        for r in reminders
    ]


def cmd_reminders(args, logbook: Logbook):
    """List reminders that are due."""
    try:
        as_of = date.fromisoformat(args.as_of) if args.as_of else date.today()
    except ValueError:
        print(f"Error: Invalid date '{args.as_of}' (expected YYYY-MM-DD)")
        return 1
    due = due_reminders(logbook.reminders, logbook.vehicle, as_of)
    print_header(logbook)
    if not due:
        print(f"No reminders due as of {as_of.isoformat()}.")
        return 0
    headers = ["Reminder", "Due (date)", "Due (km)", "Description"]
    print(tabulate(make_reminder_table(due), headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Mileage commands
# =============================================================================


def make_mileage_table(logs: List[MileageLog]) -> List[List[str]]:
    """Convert mileage logs to rows, newest first with distance since last."""
    rows = []
    for log, distance in with_distance_since_last(logs):
        rows.append(
            [
                log.date,
                format_km(log.odometer_km),
                format_km(distance),
                f"{log.fuel_liters:.1f} L" if log.is_refuel else "-",
                format_cost(log.fuel_cost),
                truncate(log.notes),
            ]
        )
    return rows


def make_mileage_stats_table(stats: MileageStats) -> List[List[str]]:
    return [
        ["Distance", f"{format_km(stats.total_distance_km)} km"],
        ["Daily average", f"{stats.average_daily_km:,.1f} km"],
        ["Monthly average", f"{format_km(stats.average_monthly_km)} km"],
        ["Fuel stops", stats.fuel_stop_count],
        ["Fuel", f"{stats.total_fuel_liters:,.1f} L"],
        ["Fuel cost", format_cost(stats.total_fuel_cost)],
        ["Efficiency", f"{stats.average_km_per_liter:,.1f} km/L"],
        ["Fuel cost per km", f"${stats.fuel_cost_per_km:,.4f}"],
    ]


def cmd_mileage(args, logbook: Logbook):
    """Distance and fuel statistics from the mileage log."""
    logs = logbook.mileage_for_vehicle()
    print_header(logbook)
    if not logs:
        print("No mileage logged yet.")
        return 0

    print("STATS:")
    print(tabulate(make_mileage_stats_table(logbook.mileage_stats()), tablefmt="plain"))
    print()

    print("LOG:")
    headers = ["Date", "Odometer (km)", "Since Last (km)", "Fuel", "Fuel Cost", "Notes"]
    print(tabulate(make_mileage_table(logs), headers=headers, tablefmt="simple"))
    return 0


def next_mileage_id(logbook: Logbook) -> str:
    numeric = [int(m.id) for m in logbook.mileage if m.id.isdigit()]
    return str(max(numeric, default=0) + 1)


def cmd_log_mileage(args, logbook: Logbook):
    """Add an odometer reading or fuel stop."""
    if args.odometer < 0:
        print("Error: odometer must not be negative")
        return 1
    if args.date:
        try:
            date.fromisoformat(args.date)
        except ValueError:
            print(f"Error: Invalid date '{args.date}' (expected YYYY-MM-DD)")
            return 1

    log = MileageLog(
        id=next_mileage_id(logbook),
        date=args.date or date.today().isoformat(),
        odometer_km=args.odometer,
        fuel_stop=args.liters is not None,
        fuel_liters=args.liters,
        fuel_cost=args.fuel_cost,
        vehicle_id=logbook.vehicle.id,
        notes=args.notes,
    )

    print(f"Adding mileage entry to {args.logbook_file}:")
    print(f"  Date:     {log.date}")
    print(f"  Odometer: {format_km(log.odometer_km)} km")
    if log.fuel_stop:
        print(f"  Fuel:     {log.fuel_liters:.1f} L")
    if log.fuel_cost is not None:
        print(f"  Cost:     {format_cost(log.fuel_cost)}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_mileage_log(args.logbook_file, log)
    if log.odometer_km > logbook.vehicle.current_odometer:
        save_current_odometer(args.logbook_file, log.odometer_km)
        print(f"Odometer advanced to {format_km(log.odometer_km)} km.")
    print("Mileage saved.")
    return 0


# =============================================================================
# Main
# =============================================================================

COMMANDS = {
    "report": cmd_report,
    "patterns": cmd_patterns,
    "alerts": cmd_alerts,
    "costs": cmd_costs,
    "timeline": cmd_timeline,
    "breakdown": cmd_breakdown,
    "log": cmd_log,
    "delete": cmd_delete,
    "update-odometer": cmd_update_odometer,
    "remind": cmd_remind,
    "reminders": cmd_reminders,
    "mileage": cmd_mileage,
    "log-mileage": cmd_log_mileage,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Vehicle maintenance analytics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s vehicles/nightster.yaml report
  %(prog)s vehicles/nightster.yaml alerts
  %(prog)s vehicles/nightster.yaml timeline --since 2024-01
  %(prog)s vehicles/nightster.yaml log "Oil change" --odometer 12500 \\
      --parts 55 --labor 20
  %(prog)s vehicles/nightster.yaml update-odometer 13000
  %(prog)s vehicles/nightster.yaml remind --dry-run
  %(prog)s vehicles/nightster.yaml log-mileage 16400 --liters 10.2 --fuel-cost 19.50
""",
    )
    parser.add_argument(
        "logbook_file",
        type=Path,
        help="Path to logbook YAML file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser(
        "report", help="Cost efficiency, upcoming services and service patterns"
    )
    patterns_parser = subparsers.add_parser(
        "patterns", help="Recurrence statistics per service type"
    )
    patterns_parser.add_argument(
        "--recurring",
        action="store_true",
        help="Only show service types with a known interval",
    )
    subparsers.add_parser("alerts", help="Services predicted due soon or overdue")
    subparsers.add_parser("costs", help="Cost efficiency and cost totals")
    timeline_parser = subparsers.add_parser(
        "timeline", help="Monthly service count and cost"
    )
    timeline_parser.add_argument(
        "--since",
        type=str,
        help="Show only months from YYYY-MM onwards",
    )
    subparsers.add_parser("breakdown", help="Share of services per type")

    # Log subcommand
    log_parser = subparsers.add_parser("log", help="Add a new maintenance record")
    log_parser.add_argument(
        "description",
        type=str,
        help="Work performed (e.g., 'Oil change and filter')",
    )
    log_parser.add_argument(
        "--odometer",
        type=int,
        required=True,
        help="Odometer reading in km at time of service",
    )
    log_parser.add_argument(
        "--date",
        type=str,
        help="Service date in YYYY-MM-DD format (default: today)",
    )
    log_parser.add_argument("--parts", type=float, help="Parts cost")
    log_parser.add_argument("--labor", type=float, help="Labor cost")
    log_parser.add_argument("--notes", type=str, help="Notes about the service")
    log_parser.add_argument(
        "--id",
        type=str,
        help="Record id (default: next numeric id)",
    )
    log_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    # Delete subcommand
    delete_parser = subparsers.add_parser(
        "delete", help="Remove a maintenance record by id"
    )
    delete_parser.add_argument("record_id", type=str, help="Id of the record to remove")
    delete_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be removed without saving",
    )

    # Update odometer subcommand
    odometer_parser = subparsers.add_parser(
        "update-odometer", help="Update the current odometer reading"
    )
    odometer_parser.add_argument("odometer", type=int, help="Current odometer in km")
    odometer_parser.add_argument(
        "--force",
        action="store_true",
        help="Allow a reading lower than the current one",
    )
    odometer_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be updated without saving",
    )

    # Reminder subcommands
    remind_parser = subparsers.add_parser(
        "remind", help="Save reminders for current alerts"
    )
    remind_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be saved without saving",
    )
    reminders_parser = subparsers.add_parser(
        "reminders", help="List reminders that are due"
    )
    reminders_parser.add_argument(
        "--as-of",
        type=str,
        help="Check against this date in YYYY-MM-DD format (default: today)",
    )

    # Mileage subcommands
    subparsers.add_parser(
        "mileage", help="Distance and fuel statistics from the mileage log"
    )
    mileage_parser = subparsers.add_parser(
        "log-mileage", help="Add an odometer reading or fuel stop"
    )
    mileage_parser.add_argument("odometer", type=int, help="Odometer reading in km")
    mileage_parser.add_argument(
        "--date",
        type=str,
        help="Reading date in YYYY-MM-DD format (default: today)",
    )
    mileage_parser.add_argument(
        "--liters",
        type=float,
        help="Fuel added; marks the entry as a fuel stop",
    )
    mileage_parser.add_argument("--fuel-cost", type=float, help="Fuel cost")
    mileage_parser.add_argument("--notes", type=str, help="Notes about the reading")
    mileage_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Validate logbook file exists
    if not args.logbook_file.exists():
        print(f"Error: File not found: {args.logbook_file}")
        return 1

    try:
        logbook = load_logbook(args.logbook_file)
    except (KeyError, ValueError) as e:
        print(f"Error: Cannot load {args.logbook_file}: {e}")
        return 1

    logger.debug("Running %s on %s", args.command, args.logbook_file)
    return COMMANDS[args.command](args, logbook)


if __name__ == "__main__":
    sys.exit(main() or 0)
