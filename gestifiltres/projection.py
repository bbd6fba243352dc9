"""Projection dataclasses produced by the scheduler."""

from dataclasses import dataclass

from .maintenance_range import INTERVAL_HOURS, MaintenanceRange


@dataclass(frozen=True)
class MaintenanceProjection:
    """Next due maintenance for a machine."""

    range: MaintenanceRange
    due_at_hours: float
    hours_remaining: float
    missed_intervals: int = 0

    @property
    def is_overdue(self) -> bool:
        return self.missed_intervals > 0 or self.hours_remaining < 0

    @property
    def overdue_hours(self) -> float:
        """Hours run past the first threshold that was missed."""
        if not self.is_overdue:
            return 0
        first_missed = self.due_at_hours - self.missed_intervals * INTERVAL_HOURS
        current = self.due_at_hours - self.hours_remaining
        return current - first_missed


@dataclass(frozen=True)
class RecordProjection:
    """What falls due after a given past maintenance record."""

    range: MaintenanceRange
    hours: float
