"""Fleet class - the main aggregate for machines, records and calculations."""

from typing import List, Optional

from .alert import Alert, alert_for
from .calculations import URGENT_HOURS, UPCOMING_HOURS, check_status
from .machine import Machine
from .machine_status import MachineStatus
from .maintenance_record import MaintenanceRecord
from .projection import MaintenanceProjection, RecordProjection
from .scheduler import compute_next_maintenance, compute_next_range_for_record
from .status import Status


class Fleet:
    """Machines with their maintenance records and alert thresholds."""

    def __init__(
        self,
        machines: List[Machine],
        records: Optional[List[MaintenanceRecord]] = None,
        urgent_hours: float = URGENT_HOURS,
        upcoming_hours: float = UPCOMING_HOURS,
    ):
        self.machines = machines
        self.records = records or []
        self.urgent_hours = urgent_hours
        self.upcoming_hours = upcoming_hours

    def get_machine(self, machine_id: str) -> Optional[Machine]:
        """Find a machine by id."""
        for machine in self.machines:
            if machine.id == machine_id:
                return machine
        return None

    def get_record(self, record_id: str) -> Optional[MaintenanceRecord]:
        """Find a maintenance record by id."""
        for record in self.records:
            if record.id == record_id:
                return record
        return None

    def get_history(self, machine_id: str, reverse: bool = False) -> List[MaintenanceRecord]:
        """Get the maintenance records of a machine, ordered by service hours."""
        return sorted(
            (r for r in self.records if r.machine_id == machine_id),
            key=lambda r: r.service_hours,
            reverse=reverse,
        )

    def last_record(self, machine_id: str) -> Optional[MaintenanceRecord]:
        """Get the most recent maintenance of a machine."""
        history = self.get_history(machine_id)
        return history[-1] if history else None

    def get_history_sorted(
        self, sort_by: str = "date", reverse: bool = True
    ) -> List[MaintenanceRecord]:
        """
        Get all maintenance records sorted by specified field.

        Args:
            sort_by: "date", "hours", or "machine"
            reverse: If True, newest/highest first (default)
        """
        if sort_by == "date":
            return sorted(
                self.records, key=lambda r: (r.date, r.service_hours), reverse=reverse
            )
        elif sort_by == "hours":
            return sorted(self.records, key=lambda r: r.service_hours, reverse=reverse)
        elif sort_by == "machine":
            return sorted(
                self.records,
                key=lambda r: (r.machine_id, r.service_hours),
                reverse=reverse,
            )
        return self.records

    def next_maintenance(self, machine: Machine) -> MaintenanceProjection:
        """Project the next maintenance due for a machine."""
        return compute_next_maintenance(
            machine.service_hours, self.get_history(machine.id)
        )

    def next_range_for_record(self, record: MaintenanceRecord) -> RecordProjection:
        """Range and hours due after a past record of this fleet."""
        return compute_next_range_for_record(record, self.get_history(record.machine_id))

    def calculate_machine_status(
        self,
        machine: Machine,
        urgent_hours: Optional[float] = None,
        upcoming_hours: Optional[float] = None,
    ) -> MachineStatus:
        """
        Calculate the maintenance status of a machine.

        Thresholds default to the fleet settings.
        """
        if urgent_hours is None:
            urgent_hours = self.urgent_hours
        if upcoming_hours is None:
            upcoming_hours = self.upcoming_hours

        projection = self.next_maintenance(machine)
        return MachineStatus(
            machine=machine,
            status=check_status(projection, urgent_hours, upcoming_hours),
            projection=projection,
            last_record=self.last_record(machine.id),
        )

    def get_all_machine_status(
        self,
        urgent_hours: Optional[float] = None,
        upcoming_hours: Optional[float] = None,
    ) -> List[MachineStatus]:
        """Calculate maintenance status for every machine."""
        return [
            self.calculate_machine_status(machine, urgent_hours, upcoming_hours)
            for machine in self.machines
        ]

    def get_upcoming(self) -> List[MachineStatus]:
        """Machines overdue or within the upcoming threshold, most pressing first."""
        upcoming = [s for s in self.get_all_machine_status() if s.status != Status.OK]
        return sorted(
            upcoming,
            key=lambda s: (s.status.value, s.projection.hours_remaining),
        )

    def get_maintenance_alerts(self) -> List[Alert]:
        """Notifications for machines overdue or urgently due."""
        return [alert_for(s) for s in self.get_upcoming() if s.is_due]
