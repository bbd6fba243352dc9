"""Status enum for maintenance urgency levels."""

from enum import Enum


class Status(Enum):
    """Maintenance status categories. Lower value = more urgent."""

    OVERDUE = 1  # A 250h threshold was crossed without a record
    URGENT = 2
    UPCOMING = 3
    OK = 4
