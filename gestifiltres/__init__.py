"""
Fleet maintenance planning models.

This package provides the data models and the scheduler for machine
maintenance:
- MaintenanceRange / CYCLE: Service tiers C, D, E, F and their repeating order
- Machine: Fleet machine and its service-hour reading
- MaintenanceRecord: Performed maintenance
- MaintenanceProjection: Next due maintenance (scheduler output)
- Status / MachineStatus / Alert: Alert policy on top of projections
- Fleet: Main aggregate combining all data
"""

from .errors import InvalidArgumentError
from .status import Status
from .maintenance_range import CYCLE, INTERVAL_HOURS, MaintenanceRange
from .machine import Machine
from .maintenance_record import MaintenanceRecord, UsedFilter
from .projection import MaintenanceProjection, RecordProjection
from .machine_status import MachineStatus
from .alert import Alert, alert_for
from .scheduler import (
    compute_next_maintenance,
    compute_next_range_for_record,
    first_due_hours,
    replay_sequence,
)
from .calculations import URGENT_HOURS, UPCOMING_HOURS, check_status
from .validation import normalize_date, parse_hours, validate_service_hours
from .fleet import Fleet
from .loader import (
    load_fleet,
    save_maintenance_record,
    update_maintenance_record,
    delete_maintenance_record,
    save_service_hours,
    add_machine,
    create_fleet,
)

__all__ = [
    "InvalidArgumentError",
    "Status",
    "CYCLE",
    "INTERVAL_HOURS",
    "MaintenanceRange",
    "Machine",
    "MaintenanceRecord",
    "UsedFilter",
    "MaintenanceProjection",
    "RecordProjection",
    "MachineStatus",
    "Alert",
    "alert_for",
    "compute_next_maintenance",
    "compute_next_range_for_record",
    "first_due_hours",
    "replay_sequence",
    "URGENT_HOURS",
    "UPCOMING_HOURS",
    "check_status",
    "normalize_date",
    "parse_hours",
    "validate_service_hours",
    "Fleet",
    "load_fleet",
    "save_maintenance_record",
    "update_maintenance_record",
    "delete_maintenance_record",
    "save_service_hours",
    "add_machine",
    "create_fleet",
]
