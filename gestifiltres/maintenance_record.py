"""MaintenanceRecord class for performed maintenance events."""

from typing import List, Optional

from .maintenance_range import MaintenanceRange


class UsedFilter:
    """A filter reference consumed during a maintenance."""

    def __init__(self, filter_type_id: str, reference_id: str, quantity: int = 1):
        self.filter_type_id = filter_type_id
        self.reference_id = reference_id
        self.quantity = quantity

    def __eq__(self, other):
        if not isinstance(other, UsedFilter):
            return NotImplemented
        return (self.filter_type_id, self.reference_id, self.quantity) == (
            other.filter_type_id,
            other.reference_id,
            other.quantity,
        )


class MaintenanceRecord:
    """A record of maintenance performed on a machine."""

    def __init__(
        self,
        machine_id: str,
        range: MaintenanceRange,
        service_hours: float,
        date: str,
        filters_used: Optional[List[UsedFilter]] = None,
        id: Optional[str] = None,
    ):
        self.id = id
        self.machine_id = machine_id
        self.range = range
        self.service_hours = service_hours
        self.date = date
        self.filters_used = filters_used or []

    def __eq__(self, other):
        if not isinstance(other, MaintenanceRecord):
            return NotImplemented
        return (
            self.id == other.id
            and self.machine_id == other.machine_id
            and self.range == other.range
            and self.service_hours == other.service_hours
            and self.date == other.date
        )

    def __repr__(self):
        return (
            f"MaintenanceRecord({self.machine_id!r}, {getattr(self.range, 'value', self.range)}, "
            f"{self.service_hours!r}, {self.date!r})"
        )
