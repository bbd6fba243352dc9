"""Alert policy applied on top of maintenance projections."""

from .projection import MaintenanceProjection
from .status import Status

URGENT_HOURS = 50
UPCOMING_HOURS = 100


def check_status(
    projection: MaintenanceProjection,
    urgent_hours: float = URGENT_HOURS,
    upcoming_hours: float = UPCOMING_HOURS,
) -> Status:
    """Determine status from a projection and the alert thresholds."""
    if projection.is_overdue:
        return Status.OVERDUE
    if projection.hours_remaining <= urgent_hours:
        return Status.URGENT
    if projection.hours_remaining <= upcoming_hours:
        return Status.UPCOMING
    return Status.OK
