"""
Labor Capacity: Available worker-hours versus the hours the forecast requires.

Two ways to turn recurring weekly schedules into hours for a date range:

- "weekly_average": weekly hours / 7 x days in range. Cheap and smooth, but
  ignores which weekdays actually fall inside the range.
- "calendar": counts every calendar day in [start, end) and adds the hours
  scheduled on that weekday.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any

import numpy as np

from bom_planner.planning.explosion import ProcessTotal
from bom_planner.planning.validation import InvalidInputError, shift_hours
from bom_planner.product.core import Worker

LABOR_METHODS = ("weekly_average", "calendar")


@dataclass
class LaborAssessment:
    start: date
    end: date
    days_in_range: int
    available_hours: float
    required_hours: float
    method: str

    @property
    def sufficient(self) -> bool:
        return self.available_hours >= self.required_hours

    @property
    def surplus_hours(self) -> float:
        return self.available_hours - self.required_hours


@dataclass
class WhatIfCapacity:
    """Back-of-envelope capacity for a single process."""

    process_name: str
    seconds_per_unit: float
    worker_count: int
    hours_per_worker: float  # Weekly hours per worker
    timeframe_days: float

    @property
    def total_work_hours(self) -> float:
        return self.worker_count * self.hours_per_worker * (self.timeframe_days / 7)

    @property
    def units_can_complete(self) -> int:
        return math.floor(self.total_work_hours * 3600 / self.seconds_per_unit)

    def hours_for_units(self, units: float) -> float:
        return units * self.seconds_per_unit / 3600

    def days_needed(self, units: float) -> float:
        daily_hours = self.worker_count * self.hours_per_worker / 7
        if daily_hours <= 0:
            return math.inf
        return self.hours_for_units(units) / daily_hours


def _as_datetime(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def days_in_range(start: date | datetime, end: date | datetime) -> int:
    """Whole days covered by [start, end), rounding partial days up."""
    delta = _as_datetime(end) - _as_datetime(start)
    if delta < timedelta(0):
        raise InvalidInputError(f"Date range ends before it starts ({start} > {end})")
    return math.ceil(delta / timedelta(days=1))


def required_hours(process_requirements: dict[str, ProcessTotal]) -> float:
    return sum(t.seconds for t in process_requirements.values()) / 3600


class LaborCapacityCalculator:
    """
    Converts recurring worker schedules into available labor-hours.
    """

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        labor_config = (config or {}).get("planning_parameters", {}).get("labor", {})
        self.method = labor_config.get("method", "weekly_average")
        self.default_window_days = int(labor_config.get("default_window_days", 7))
        if self.method not in LABOR_METHODS:
            raise ValueError(f"Unknown labor method {self.method!r}")

    def hours_by_weekday(self, worker: Worker) -> np.ndarray:
        """Scheduled hours per weekday, index 0 = Sunday."""
        hours = np.zeros(7, dtype=np.float64)
        for schedule in worker.schedules:
            if not (schedule.active and schedule.recurring):
                continue
            if not 0 <= schedule.day_of_week <= 6:
                raise InvalidInputError(
                    f"Day of week must be 0..6, got {schedule.day_of_week}"
                )
            hours[schedule.day_of_week] += shift_hours(schedule)
        return hours

    def weekly_hours(self, worker: Worker) -> float:
        return float(self.hours_by_weekday(worker).sum())

    def available_hours(
        self,
        workers: list[Worker],
        start: date | datetime,
        end: date | datetime,
        method: str | None = None,
    ) -> float:
        method = method or self.method
        if method not in LABOR_METHODS:
            raise ValueError(f"Unknown labor method {method!r}")

        n_days = days_in_range(start, end)
        active = [w for w in workers if w.active]
        if not active:
            return 0.0

        # Shape: [Workers, Weekdays]
        weekday_hours = np.vstack([self.hours_by_weekday(w) for w in active])

        if method == "weekly_average":
            return float(weekday_hours.sum() / 7 * n_days)

        # Count how often each weekday occurs in the range
        first = _as_datetime(start).date()
        day_indices = [
            ((first + timedelta(days=i)).weekday() + 1) % 7 for i in range(n_days)
        ]
        occurrences = np.bincount(np.array(day_indices, dtype=np.int64), minlength=7)
        return float((weekday_hours @ occurrences).sum())

    def assess(
        self,
        workers: list[Worker],
        process_requirements: dict[str, ProcessTotal],
        start: date | datetime | None = None,
        end: date | datetime | None = None,
        method: str | None = None,
    ) -> LaborAssessment:
        """Compare required hours against available hours for [start, end)."""
        if start is None:
            start = date.today()
        if end is None:
            end = _as_datetime(start) + timedelta(days=self.default_window_days)

        method = method or self.method
        return LaborAssessment(
            start=_as_datetime(start).date(),
            end=_as_datetime(end).date(),
            days_in_range=days_in_range(start, end),
            available_hours=self.available_hours(workers, start, end, method),
            required_hours=required_hours(process_requirements),
            method=method,
        )

    @staticmethod
    def what_if(
        process_name: str,
        seconds_per_unit: float,
        worker_count: int,
        hours_per_worker: float,
        timeframe_days: float = 7,
    ) -> WhatIfCapacity:
        if seconds_per_unit < 1:
            raise InvalidInputError("Seconds per unit must be at least 1")
        if worker_count < 0 or hours_per_worker < 0 or timeframe_days < 0:
            raise InvalidInputError("Worker count, hours and timeframe cannot be negative")
        return WhatIfCapacity(
            process_name, seconds_per_unit, worker_count, hours_per_worker, timeframe_days
        )
