"""Maintenance ranges (gammes) and the cycle they repeat on."""

from enum import Enum
from typing import Tuple, Union

from .errors import InvalidArgumentError


class MaintenanceRange(Enum):
    """Service tiers, C lightest and most frequent, F heaviest."""

    C = "C"
    D = "D"
    E = "E"
    F = "F"

    @property
    def description(self) -> str:
        return RANGE_DESCRIPTIONS[self]

    @classmethod
    def parse(cls, value: Union["MaintenanceRange", str]) -> "MaintenanceRange":
        """Accept a range or its letter (case-insensitive)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        raise InvalidArgumentError(
            f"Unknown maintenance range {value!r} (expected one of C, D, E, F)"
        )


RANGE_DESCRIPTIONS = {
    MaintenanceRange.C: "Light service (250h): engine oil change, oil filter replacement.",
    MaintenanceRange.D: "Intermediate service (500h): range C plus fuel filters.",
    MaintenanceRange.E: "Medium service (1000h): range D plus hydraulic and air filters.",
    MaintenanceRange.F: "Major service (2000h): range E plus full inspection and other replacements.",
}

INTERVAL_HOURS = 250

CYCLE: Tuple[MaintenanceRange, ...] = (
    MaintenanceRange.C,
    MaintenanceRange.D,
    MaintenanceRange.C,
    MaintenanceRange.E,
    MaintenanceRange.C,
    MaintenanceRange.D,
    MaintenanceRange.C,
    MaintenanceRange.F,
)
