"""MachineStatus dataclass for calculated maintenance status."""

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from .status import Status

if TYPE_CHECKING:
    from .machine import Machine
    from .maintenance_record import MaintenanceRecord
    from .projection import MaintenanceProjection


@dataclass
class MachineStatus:
    """Calculated next-maintenance information for a machine."""

    machine: "Machine"
    status: Status
    projection: "MaintenanceProjection"
    last_record: Optional["MaintenanceRecord"] = None

    @property
    def is_due(self) -> bool:
        return self.status in (Status.OVERDUE, Status.URGENT)
