"""Machine class for fleet identification and service hours."""

from typing import Optional


class Machine:
    """A machine of the fleet and its current service-hour reading."""

    def __init__(
        self,
        id: str,
        code: str,
        designation: str,
        service_hours: float = 0,
        brand: Optional[str] = None,
        type: Optional[str] = None,
        serial_number: Optional[str] = None,
        registration_number: Optional[str] = None,
    ):
        self.id = id
        self.code = code
        self.designation = designation
        self.service_hours = service_hours
        self.brand = brand
        self.type = type
        self.serial_number = serial_number
        self.registration_number = registration_number

    @property
    def name(self) -> str:
        """Human-readable machine name."""
        return f"{self.designation} ({self.code})"
