"""Input validation for planning runs.

Bad quantities and malformed schedule times are rejected here, before any
explosion runs, so the engine never clamps invalid input on its own.
"""

import re
from collections.abc import Iterable

from bom_planner.product.core import (
    Forecast,
    InventoryRecord,
    ProcessConfig,
    WorkerSchedule,
)

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


class InvalidInputError(ValueError):
    """Raised when planning input fails validation."""


def parse_time(time_str: str) -> float:
    """Parse a wall-clock "HH:MM" string into fractional hours."""
    match = _TIME_PATTERN.match(time_str.strip()) if time_str else None
    if match is None:
        raise InvalidInputError(f"Malformed time string: {time_str!r}")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 24 or minutes > 59 or (hours == 24 and minutes != 0):
        raise InvalidInputError(f"Time out of range: {time_str!r}")
    return hours + minutes / 60


def shift_hours(schedule: WorkerSchedule) -> float:
    """Length of one schedule entry in hours. Shifts cannot span midnight."""
    start = parse_time(schedule.start_time)
    end = parse_time(schedule.end_time)
    if end <= start:
        raise InvalidInputError(
            f"Schedule for worker {schedule.worker_id} must end after it starts "
            f"({schedule.start_time}-{schedule.end_time})"
        )
    return end - start


def normalize_process_name(display_name: str) -> str:
    """Derive a process key from its display name: "Tip Assembly" -> "TIP_ASSEMBLY"."""
    name = re.sub(r"\s+", "_", display_name.strip().upper())
    name = re.sub(r"[^A-Z_0-9]", "", name)
    if not name:
        raise InvalidInputError("Display name is required")
    return name


def validate_forecasts(forecasts: Iterable[Forecast]) -> None:
    for f in forecasts:
        if f.forecasted_quantity < 0:
            raise InvalidInputError(f"Invalid forecasted quantity for {f.sku_id}")
        if f.current_in_gallatin < 0:
            raise InvalidInputError(f"Invalid current inventory quantity for {f.sku_id}")


def validate_inventory(records: Iterable[InventoryRecord]) -> None:
    for r in records:
        if r.quantity < 0:
            raise InvalidInputError(
                f"Negative on-hand quantity {r.quantity} for {r.sku_id} ({r.state.name})"
            )


def validate_processes(processes: Iterable[ProcessConfig]) -> None:
    for p in processes:
        if p.seconds_per_unit < 0:
            raise InvalidInputError(f"Seconds per unit cannot be negative for {p.process_name}")


def validate_schedules(schedules: Iterable[WorkerSchedule]) -> None:
    for s in schedules:
        if not 0 <= s.day_of_week <= 6:
            raise InvalidInputError(
                f"Day of week must be 0..6, got {s.day_of_week} for worker {s.worker_id}"
            )
        shift_hours(s)
