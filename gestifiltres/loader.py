"""YAML loading and saving utilities for fleet data."""

import logging
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .calculations import URGENT_HOURS, UPCOMING_HOURS
from .fleet import Fleet
from .machine import Machine
from .maintenance_range import MaintenanceRange
from .maintenance_record import MaintenanceRecord, UsedFilter
from .validation import normalize_date, validate_service_hours

logger = logging.getLogger(__name__)


def _parse_machine(dct: Dict[str, Any]) -> Machine:
    return Machine(
        str(dct["id"]),
        str(dct["code"]),
        dct["designation"],
        validate_service_hours(dct.get("serviceHours") or 0, "machine service hours"),
        dct.get("brand"),
        dct.get("type"),
        dct.get("serialNumber"),
        dct.get("registrationNumber"),
    )


def _parse_used_filter(dct: Dict[str, Any]) -> UsedFilter:
    return UsedFilter(
        str(dct["filterTypeId"]),
        str(dct["referenceId"]),
        dct.get("quantity", 1),
    )


def _parse_record(dct: Dict[str, Any]) -> MaintenanceRecord:
    return MaintenanceRecord(
        str(dct["machineId"]),
        MaintenanceRange.parse(dct["range"]),
        validate_service_hours(dct["serviceHours"], "record service hours"),
        normalize_date(dct["date"]),
        [_parse_used_filter(f) for f in dct.get("filtersUsed") or []],
        str(dct["id"]) if dct.get("id") is not None else None,
    )


def _parse_fleet(data: Dict[str, Any]) -> Fleet:
    settings = data.get("settings") or {}
    return Fleet(
        [_parse_machine(m) for m in data.get("machines") or []],
        [_parse_record(r) for r in data.get("maintenance") or []],
        settings.get("urgentHours", URGENT_HOURS),
        settings.get("upcomingHours", UPCOMING_HOURS),
    )


def _read(filename: Union[str, Path]) -> Dict[str, Any]:
    with open(filename, "r") as fp:
        return yaml.load(fp, Loader=yaml.SafeLoader) or {}


def _write(filename: Union[str, Path], data: Dict[str, Any]) -> None:
    with open(filename, "w") as fp:
        yaml.dump(
            data,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )
    logger.info("Wrote fleet file %s", filename)


def load_fleet(filename: Union[str, Path]) -> Fleet:
    """Load a fleet from a YAML file."""
    return _parse_fleet(_read(filename))


def _record_to_dict(record: MaintenanceRecord) -> Dict[str, Any]:
    """Serialize a MaintenanceRecord to the YAML dict format (camelCase keys)."""
    d: Dict[str, Any] = {
        "id": record.id,
        "machineId": record.machine_id,
        "range": MaintenanceRange.parse(record.range).value,
        "serviceHours": record.service_hours,
        "date": record.date,
    }
    if record.filters_used:
        d["filtersUsed"] = [
            {
                "filterTypeId": f.filter_type_id,
                "referenceId": f.reference_id,
                "quantity": f.quantity,
            }
            for f in record.filters_used
        ]
    return d


def _machine_to_dict(machine: Machine) -> Dict[str, Any]:
    """Serialize a Machine to the YAML dict format (camelCase keys)."""
    d: Dict[str, Any] = {
        "id": machine.id,
        "code": machine.code,
        "designation": machine.designation,
        "serviceHours": machine.service_hours,
    }
    if machine.brand is not None:
        d["brand"] = machine.brand
    if machine.type is not None:
        d["type"] = machine.type
    if machine.serial_number is not None:
        d["serialNumber"] = machine.serial_number
    if machine.registration_number is not None:
        d["registrationNumber"] = machine.registration_number
    return d


def _machine_ids(data: Dict[str, Any]) -> List[str]:
    return [str(m["id"]) for m in data.get("machines") or []]


def save_maintenance_record(
    filename: Union[str, Path], record: MaintenanceRecord
) -> MaintenanceRecord:
    """
    Append a maintenance record to a fleet YAML file.

    The record gets a generated id when it has none. Returns the saved
    record.
    """
    validate_service_hours(record.service_hours, "record service hours")
    data = _read(filename)

    if record.machine_id not in _machine_ids(data):
        raise KeyError(f"Unknown machine '{record.machine_id}'")
    if record.id is None:
        record.id = uuid.uuid4().hex[:12]

    if data.get("maintenance") is None:
        data["maintenance"] = []
    data["maintenance"].append(_record_to_dict(record))

    _write(filename, data)
    return record


def update_maintenance_record(
    filename: Union[str, Path], index: int, record: MaintenanceRecord
) -> None:
    """Replace the maintenance record at the given index in a fleet YAML file."""
    data = _read(filename)

    records = data.get("maintenance") or []
    if index < 0 or index >= len(records):
        raise IndexError(
            f"Maintenance index {index} out of range (0..{len(records) - 1})"
        )
    if record.id is None:
        record.id = records[index].get("id")

    records[index] = _record_to_dict(record)

    _write(filename, data)


def delete_maintenance_record(filename: Union[str, Path], record_id: str) -> None:
    """
    Remove a maintenance record from a fleet YAML file by id.

    Projections are recomputed from the remaining records on next load.
    """
    data = _read(filename)

    records = data.get("maintenance") or []
    for i, entry in enumerate(records):
        if str(entry.get("id")) == record_id:
            del records[i]
            break
    else:
        raise KeyError(f"Unknown maintenance record '{record_id}'")

    _write(filename, data)


def save_service_hours(filename: Union[str, Path], machine_id: str, hours: float) -> None:
    """Update the service-hour reading of a machine in a fleet YAML file."""
    validate_service_hours(hours)
    data = _read(filename)

    for machine in data.get("machines") or []:
        if str(machine["id"]) == machine_id:
            machine["serviceHours"] = hours
            break
    else:
        raise KeyError(f"Unknown machine '{machine_id}'")

    _write(filename, data)


def add_machine(filename: Union[str, Path], machine: Machine) -> None:
    """Append a machine to a fleet YAML file."""
    validate_service_hours(machine.service_hours)
    data = _read(filename)

    if machine.id in _machine_ids(data):
        raise ValueError(f"Machine '{machine.id}' already exists")
    if data.get("machines") is None:
        data["machines"] = []
    data["machines"].append(_machine_to_dict(machine))

    _write(filename, data)


def create_fleet(
    filename: Union[str, Path],
    urgent_hours: Optional[float] = None,
    upcoming_hours: Optional[float] = None,
) -> None:
    """Create a new, empty fleet YAML file with its alert settings."""
    data: Dict[str, Any] = {
        "settings": {
            "urgentHours": URGENT_HOURS if urgent_hours is None else urgent_hours,
            "upcomingHours": UPCOMING_HOURS if upcoming_hours is None else upcoming_hours,
        },
        "machines": [],
        "maintenance": [],
    }
    _write(filename, data)
