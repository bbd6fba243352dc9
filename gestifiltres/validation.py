"""Boundary checks for values entering the planner."""

import math
from typing import Any

from dateutil.parser import isoparse

from .errors import InvalidArgumentError


def validate_service_hours(value: Any, name: str = "service hours") -> float:
    """Return value if it is a finite, non-negative number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidArgumentError(f"{name} must be a number, got {value!r}")
    if math.isnan(value) or math.isinf(value):
        raise InvalidArgumentError(f"{name} must be finite, got {value!r}")
    if value < 0:
        raise InvalidArgumentError(f"{name} must not be negative, got {value!r}")
    return value


def parse_hours(text: str, name: str = "service hours") -> float:
    """Parse hours typed by a user (CLI argument or form field)."""
    try:
        value = float(text)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"Invalid {name}: {text!r}") from None
    if value.is_integer():
        value = int(value)
    return validate_service_hours(value, name)


def normalize_date(value: Any) -> str:
    """
    Normalize a date to an ISO date string (YYYY-MM-DD).

    Accepts full ISO timestamps as stored by the original backend
    ("2024-03-01T08:30:00.000Z") as well as plain dates.
    """
    if hasattr(value, "isoformat"):
        value = value.isoformat()
    if not isinstance(value, str):
        raise InvalidArgumentError(f"Invalid date: {value!r}")
    try:
        return isoparse(value.strip()).date().isoformat()
    except ValueError:
        raise InvalidArgumentError(f"Invalid date: {value!r}") from None
