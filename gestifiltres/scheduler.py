"""
Maintenance scheduling calculator.

Machines are serviced every INTERVAL_HOURS following CYCLE (C D C E C D C F),
which repeats indefinitely. The position in the cycle is recovered by
replaying the recorded history, since logged maintenance does not always
follow the ideal order.
"""

import logging
import math
from typing import Iterable, List, Sequence

from .errors import InvalidArgumentError
from .maintenance_range import CYCLE, INTERVAL_HOURS, MaintenanceRange
from .maintenance_record import MaintenanceRecord
from .projection import MaintenanceProjection, RecordProjection
from .validation import validate_service_hours

logger = logging.getLogger(__name__)


def _validated_history(history: Iterable[MaintenanceRecord]) -> List[MaintenanceRecord]:
    """Check every record and return them sorted by service hours."""
    records = list(history)
    for record in records:
        validate_service_hours(record.service_hours, "record service hours")
        MaintenanceRange.parse(record.range)
    return sorted(records, key=lambda r: r.service_hours)


def replay_sequence(ranges: Iterable[MaintenanceRange]) -> int:
    """
    Replay performed ranges against CYCLE and return the sequence pointer.

    For each range, search forward from the pointer over two concatenated
    cycles for the next matching slot. When none is left in that window,
    resync to the first occurrence of the range in CYCLE. The returned
    pointer is not reduced modulo the cycle length.
    """
    pointer = 0
    window = len(CYCLE) * 2
    for performed in ranges:
        for i in range(pointer, window):
            if CYCLE[i % len(CYCLE)] == performed:
                pointer = i + 1
                break
        else:
            if performed in CYCLE:
                logger.debug(
                    "Range %s not found after slot %d, resyncing", performed, pointer
                )
                pointer = CYCLE.index(performed) + 1
    return pointer


def first_due_hours(current_service_hours: float) -> float:
    """First threshold for a machine with no history (never below one interval)."""
    candidate = max(
        INTERVAL_HOURS,
        math.ceil(current_service_hours / INTERVAL_HOURS) * INTERVAL_HOURS,
    )
    if candidate <= current_service_hours:
        candidate += INTERVAL_HOURS
    return candidate


def compute_next_maintenance(
    current_service_hours: float, history: Iterable[MaintenanceRecord]
) -> MaintenanceProjection:
    """
    Project the next due maintenance for a machine.

    - No history: next multiple of INTERVAL_HOURS above the current hours,
      range C
    - With history: replay the cycle, anchor on the last record, then
      skip every threshold already passed (one cycle slot per skipped
      threshold)

    Raises InvalidArgumentError for negative or non-numeric hours and for
    unknown range tags.
    """
    validate_service_hours(current_service_hours, "current service hours")
    records = _validated_history(history)

    if not records:
        due = first_due_hours(current_service_hours)
        return MaintenanceProjection(
            range=CYCLE[0],
            due_at_hours=due,
            hours_remaining=due - current_service_hours,
        )

    pointer = replay_sequence(MaintenanceRange.parse(r.range) for r in records)

    next_hours = records[-1].service_hours
    missed = 0
    while next_hours + INTERVAL_HOURS <= current_service_hours:
        next_hours += INTERVAL_HOURS
        missed += 1
    next_hours += INTERVAL_HOURS
    if missed:
        logger.debug(
            "Fast-forwarded %d missed interval(s) after %s hours",
            missed,
            records[-1].service_hours,
        )

    return MaintenanceProjection(
        range=CYCLE[(pointer + missed) % len(CYCLE)],
        due_at_hours=next_hours,
        hours_remaining=next_hours - current_service_hours,
        missed_intervals=missed,
    )


def _index_of(record: MaintenanceRecord, records: Sequence[MaintenanceRecord]) -> int:
    for i, candidate in enumerate(records):
        if candidate is record:
            return i
    for i, candidate in enumerate(records):
        if candidate == record:
            return i
    if record.id is not None:
        for i, candidate in enumerate(records):
            if candidate.id == record.id:
                return i
    raise InvalidArgumentError(
        f"Record at {record.service_hours} hours is not part of the machine history"
    )


def compute_next_range_for_record(
    record: MaintenanceRecord, full_machine_history: Iterable[MaintenanceRecord]
) -> RecordProjection:
    """
    What comes after a logged maintenance, sequence-wise.

    Replays the history up to and including the record; the current
    machine hours play no part.
    """
    records = _validated_history(full_machine_history)
    index = _index_of(record, records)
    pointer = replay_sequence(MaintenanceRange.parse(r.range) for r in records[: index + 1])
    return RecordProjection(
        range=CYCLE[pointer % len(CYCLE)],
        hours=records[index].service_hours + INTERVAL_HOURS,
    )
