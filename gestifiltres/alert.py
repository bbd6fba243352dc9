"""Maintenance notifications raised for machines close to their next service."""

from dataclasses import dataclass

from .machine_status import MachineStatus
from .maintenance_range import MaintenanceRange
from .status import Status


@dataclass(frozen=True)
class Alert:
    """A maintenance notification. The id is stable for a given due point."""

    id: str
    machine_id: str
    message: str
    status: Status
    range: MaintenanceRange
    hours_remaining: float


def alert_for(machine_status: MachineStatus) -> Alert:
    """Build the notification for a machine status."""
    machine = machine_status.machine
    projection = machine_status.projection
    if projection.is_overdue:
        message = (
            f"Machine {machine.name} is overdue for maintenance "
            f"(range {projection.range.value}) by {projection.overdue_hours:,.0f}h."
        )
    else:
        message = (
            f"Machine {machine.name} needs maintenance "
            f"(range {projection.range.value}) in {projection.hours_remaining:,.0f}h."
        )
    return Alert(
        id=f"maint-alert-{machine.id}-{projection.due_at_hours:.0f}",
        machine_id=machine.id,
        message=message,
        status=machine_status.status,
        range=projection.range,
        hours_remaining=projection.hours_remaining,
    )
