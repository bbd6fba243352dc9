#!/usr/bin/env python3
"""
Unified CLI for fleet maintenance planning.

Commands:
  status       - Show next maintenance per machine (overdue, urgent, upcoming)
  history      - View maintenance history with the range due after each record
  log          - Add a new maintenance record
  update-hours - Update the service hours of a machine
  alerts       - Show maintenance notifications
  ranges       - Show the maintenance cycle and range descriptions
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from gestifiltres import (
    CYCLE,
    INTERVAL_HOURS,
    InvalidArgumentError,
    MachineStatus,
    MaintenanceRange,
    MaintenanceRecord,
    Status,
    UsedFilter,
    load_fleet,
    normalize_date,
    parse_hours,
    save_maintenance_record,
    save_service_hours,
    validate_service_hours,
)

# =============================================================================
# Formatting helpers
# =============================================================================


def format_hours(hours: Optional[float]) -> str:
    """Format service hours for display."""
    return f"{hours:,.0f}h" if hours is not None else "-"


def format_remaining(svc: MachineStatus) -> str:
    """Format remaining hours, or how far past the missed threshold."""
    projection = svc.projection
    if projection.is_overdue:
        return f"-{projection.overdue_hours:,.0f}h"
    return f"{projection.hours_remaining:,.0f}h"


def format_filters(record: MaintenanceRecord) -> str:
    """Format used filters as 'type:ref x qty'."""
    if not record.filters_used:
        return "-"
    return ", ".join(
        f"{f.filter_type_id}:{f.reference_id} x{f.quantity}" for f in record.filters_used
    )


def parse_filter(text: str) -> UsedFilter:
    """Parse a TYPE:REF[:QTY] filter argument."""
    parts = text.split(":")
    if len(parts) not in (2, 3) or not all(parts[:2]):
        raise InvalidArgumentError(f"Invalid filter '{text}' (expected TYPE:REF[:QTY])")
    quantity = 1
    if len(parts) == 3:
        try:
            quantity = int(parts[2])
        except ValueError:
            raise InvalidArgumentError(f"Invalid filter quantity in '{text}'") from None
        if quantity < 1:
            raise InvalidArgumentError(f"Invalid filter quantity in '{text}'")
    return UsedFilter(parts[0], parts[1], quantity)


# =============================================================================
# Status command
# =============================================================================


def make_status_table(statuses: List[MachineStatus]) -> List[List[str]]:
    """Convert machine status list to table rows."""
    rows = []
    for svc in statuses:
        last_done = "-"
        if svc.last_record:
            last_done = (
                f"{svc.last_record.range.value} @ "
                f"{format_hours(svc.last_record.service_hours)} ({svc.last_record.date})"
            )

        rows.append(
            [
                svc.machine.name,
                format_hours(svc.machine.service_hours),
                last_done,
                svc.projection.range.value,
                format_hours(svc.projection.due_at_hours),
                format_remaining(svc),
            ]
        )
    return rows


def cmd_status(args):
    """Show next maintenance per machine."""
    fleet = load_fleet(args.fleet_file)

    machines = fleet.machines
    if args.machine:
        machine = fleet.get_machine(args.machine)
        if machine is None:
            print(f"Error: Unknown machine '{args.machine}'")
            return 1
        machines = [machine]

    urgent = args.urgent if args.urgent is not None else fleet.urgent_hours
    upcoming = args.upcoming if args.upcoming is not None else fleet.upcoming_hours

    print(f"Machines: {len(machines)}")
    print(f"Maintenance records: {len(fleet.records)}")
    print(f"Thresholds: urgent <= {urgent:,.0f}h, upcoming <= {upcoming:,.0f}h")
    print()

    statuses = [fleet.calculate_machine_status(m, urgent, upcoming) for m in machines]

    headers = ["Machine", "Hours", "Last Done", "Next", "Due At", "Remaining"]
    groups = [
        (Status.OVERDUE, "OVERDUE:"),
        (Status.URGENT, "URGENT:"),
        (Status.UPCOMING, "UPCOMING:"),
        (Status.OK, "OK:"),
    ]
    for status, title in groups:
        group = sorted(
            [s for s in statuses if s.status == status],
            key=lambda s: (s.projection.hours_remaining, s.machine.code),
        )
        if group:
            print(title)
            print(tabulate(make_status_table(group), headers=headers, tablefmt="simple"))
            print()

    return 0


# =============================================================================
# History command
# =============================================================================


def make_history_table(entries: List[MaintenanceRecord], fleet) -> List[List[str]]:
    """Convert maintenance records to table rows."""
    rows = []
    for entry in entries:
        machine = fleet.get_machine(entry.machine_id)
        name = machine.name if machine else entry.machine_id
        following = fleet.next_range_for_record(entry)

        rows.append(
            [
                entry.date,
                name,
                format_hours(entry.service_hours),
                entry.range.value,
                f"{following.range.value} @ {format_hours(following.hours)}",
                format_filters(entry),
            ]
        )
    return rows


def cmd_history(args):
    """View maintenance history."""
    fleet = load_fleet(args.fleet_file)

    entries = fleet.get_history_sorted(sort_by=args.sort, reverse=not args.asc)

    # Apply filters
    if args.machine:
        entries = [e for e in entries if e.machine_id == args.machine]

    if args.range:
        wanted = MaintenanceRange.parse(args.range)
        entries = [e for e in entries if e.range == wanted]

    if args.since:
        since = normalize_date(args.since)
        entries = [e for e in entries if e.date >= since]

    print(f"Total records: {len(fleet.records)}")
    if args.machine or args.range or args.since:
        print(f"Showing: {len(entries)} (filtered)")
    print()

    if not entries:
        print("No maintenance records found.")
        return 0

    headers = ["Date", "Machine", "Hours", "Range", "Next", "Filters"]
    print(tabulate(make_history_table(entries, fleet), headers=headers, tablefmt="simple"))

    return 0


# =============================================================================
# Log command
# =============================================================================


def cmd_log(args):
    """Add a new maintenance record."""
    fleet = load_fleet(args.fleet_file)

    machine = fleet.get_machine(args.machine_id)
    if machine is None:
        print(f"Error: Unknown machine '{args.machine_id}'")
        print("\nAvailable machines:")
        for m in sorted(fleet.machines, key=lambda m: m.code):
            print(f"  {m.id}: {m.name}")
        return 1

    record = MaintenanceRecord(
        machine_id=machine.id,
        range=MaintenanceRange.parse(args.range),
        service_hours=validate_service_hours(args.hours),
        date=normalize_date(args.date or date.today().isoformat()),
        filters_used=[parse_filter(f) for f in args.filter or []],
    )

    # Show what will be added
    print(f"Adding maintenance record to {args.fleet_file}:")
    print(f"  Machine: {machine.name}")
    print(f"  Range:   {record.range.value}")
    print(f"  Hours:   {format_hours(record.service_hours)}")
    print(f"  Date:    {record.date}")
    if record.filters_used:
        print(f"  Filters: {format_filters(record)}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_maintenance_record(args.fleet_file, record)
    print("Record saved.")

    projection = load_fleet(args.fleet_file).next_maintenance(machine)
    print(
        f"Next maintenance: range {projection.range.value} "
        f"at {format_hours(projection.due_at_hours)}"
    )

    return 0


# =============================================================================
# Update Hours command
# =============================================================================


def cmd_update_hours(args):
    """Update the service hours of a machine."""
    fleet = load_fleet(args.fleet_file)
    machine = fleet.get_machine(args.machine_id)
    if machine is None:
        print(f"Error: Unknown machine '{args.machine_id}'")
        return 1

    hours = validate_service_hours(args.hours)

    print(f"Machine: {machine.name}")
    print(f"Current hours: {format_hours(machine.service_hours)}")
    print(f"New hours:     {format_hours(hours)}")
    if hours < machine.service_hours:
        print("Warning: new reading is lower than the current one")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_service_hours(args.fleet_file, machine.id, hours)
    print("Hours updated.")

    return 0


# =============================================================================
# Alerts command
# =============================================================================


def cmd_alerts(args):
    """Show maintenance notifications."""
    fleet = load_fleet(args.fleet_file)
    alerts = fleet.get_maintenance_alerts()

    if not alerts:
        print("No maintenance alerts.")
        return 0

    for alert in alerts:
        print(f"[{alert.status.name}] {alert.message}")

    return 0


# =============================================================================
# Ranges command
# =============================================================================


def cmd_ranges(args):
    """Show the maintenance cycle and range descriptions."""
    print(f"Interval: {INTERVAL_HOURS}h")
    print(f"Cycle: {' '.join(r.value for r in CYCLE)}")
    print()

    rows = [[r.value, r.description] for r in MaintenanceRange]
    print(tabulate(rows, headers=["Range", "Description"], tablefmt="simple"))

    return 0


# =============================================================================
# Main
# =============================================================================


COMMANDS = {
    "status": cmd_status,
    "history": cmd_history,
    "log": cmd_log,
    "update-hours": cmd_update_hours,
    "alerts": cmd_alerts,
    "ranges": cmd_ranges,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fleet maintenance planner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s fleets/fleet.yaml status
  %(prog)s fleets/fleet.yaml status --machine m1 --urgent 25
  %(prog)s fleets/fleet.yaml history --machine m1 --asc
  %(prog)s fleets/fleet.yaml history --range E --since 2024-01-01
  %(prog)s fleets/fleet.yaml log m1 D --hours 12500 --filter oil:HF6177
  %(prog)s fleets/fleet.yaml update-hours m1 12620
  %(prog)s fleets/fleet.yaml alerts
""",
    )
    parser.add_argument(
        "fleet_file",
        type=Path,
        help="Path to fleet YAML file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Status subcommand
    status_parser = subparsers.add_parser(
        "status", help="Show next maintenance per machine"
    )
    status_parser.add_argument(
        "--machine",
        type=str,
        help="Only show this machine id",
    )
    status_parser.add_argument(
        "--urgent",
        type=float,
        help="Urgent threshold in hours (default: fleet setting)",
    )
    status_parser.add_argument(
        "--upcoming",
        type=float,
        help="Upcoming threshold in hours (default: fleet setting)",
    )

    # History subcommand
    history_parser = subparsers.add_parser("history", help="View maintenance history")
    history_parser.add_argument(
        "--machine",
        type=str,
        help="Filter to a machine id",
    )
    history_parser.add_argument(
        "--range",
        type=str,
        help="Filter to a maintenance range (C, D, E or F)",
    )
    history_parser.add_argument(
        "--since",
        type=str,
        help="Show only records since date (YYYY-MM-DD)",
    )
    history_parser.add_argument(
        "--sort",
        choices=["date", "hours", "machine"],
        default="date",
        help="Sort order (default: date)",
    )
    history_parser.add_argument(
        "--asc",
        action="store_true",
        help="Sort ascending instead of descending",
    )

    # Log subcommand
    log_parser = subparsers.add_parser("log", help="Add a new maintenance record")
    log_parser.add_argument(
        "machine_id",
        type=str,
        help="Machine id",
    )
    log_parser.add_argument(
        "range",
        type=str,
        help="Maintenance range performed (C, D, E or F)",
    )
    log_parser.add_argument(
        "--hours",
        type=parse_hours,
        required=True,
        help="Service hours at time of maintenance",
    )
    log_parser.add_argument(
        "--date",
        type=str,
        help="Maintenance date in YYYY-MM-DD format (default: today)",
    )
    log_parser.add_argument(
        "--filter",
        action="append",
        help="Filter used as TYPE:REF[:QTY] (repeatable)",
    )
    log_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    # Update Hours subcommand
    update_hours_parser = subparsers.add_parser(
        "update-hours", help="Update the service hours of a machine"
    )
    update_hours_parser.add_argument(
        "machine_id",
        type=str,
        help="Machine id",
    )
    update_hours_parser.add_argument(
        "hours",
        type=parse_hours,
        help="Current service hours",
    )
    update_hours_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be updated without saving",
    )

    subparsers.add_parser("alerts", help="Show maintenance notifications")
    subparsers.add_parser("ranges", help="Show the maintenance cycle")

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Validate fleet file exists
    if not args.fleet_file.exists():
        print(f"Error: File not found: {args.fleet_file}")
        return 1

    try:
        return COMMANDS[args.command](args)
    except (InvalidArgumentError, KeyError) as e:
        print(f"Error: {e.args[0] if e.args else e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
