"""Tests for the labor capacity calculator."""

from datetime import date, datetime

import pytest

from bom_planner.planning.explosion import ProcessTotal
from bom_planner.planning.labor import LaborCapacityCalculator, days_in_range, required_hours
from bom_planner.planning.validation import InvalidInputError
from bom_planner.product.core import Worker, WorkerSchedule


def daily_worker(worker_id: str, start: str = "08:00", end: str = "16:00") -> Worker:
    return Worker(
        id=worker_id,
        schedules=[WorkerSchedule(worker_id, day, start, end) for day in range(7)],
    )


@pytest.fixture
def calculator() -> LaborCapacityCalculator:
    return LaborCapacityCalculator()


def test_days_in_range_rounds_up():
    assert days_in_range(date(2026, 3, 1), date(2026, 3, 8)) == 7
    assert days_in_range(datetime(2026, 3, 1, 9), datetime(2026, 3, 2, 10)) == 2
    assert days_in_range(date(2026, 3, 1), date(2026, 3, 1)) == 0
    with pytest.raises(InvalidInputError):
        days_in_range(date(2026, 3, 8), date(2026, 3, 1))


def test_weekly_hours_uses_active_recurring_entries(calculator):
    worker = Worker(
        id="w1",
        schedules=[
            WorkerSchedule("w1", 1, "08:00", "16:30"),
            WorkerSchedule("w1", 2, "08:00", "12:15"),
            WorkerSchedule("w1", 3, "08:00", "16:00", active=False),
            WorkerSchedule("w1", 4, "08:00", "16:00", recurring=False),
        ],
    )
    assert calculator.weekly_hours(worker) == pytest.approx(8.5 + 4.25)


def test_one_worker_eight_hours_a_day_for_a_week(calculator):
    hours = calculator.available_hours([daily_worker("w1")], date(2026, 3, 1), date(2026, 3, 8))
    assert hours == pytest.approx(56)


def test_inactive_workers_excluded(calculator):
    retired = daily_worker("w2")
    retired.active = False
    hours = calculator.available_hours(
        [daily_worker("w1"), retired], date(2026, 3, 1), date(2026, 3, 8)
    )
    assert hours == pytest.approx(56)


def test_weekly_average_vs_calendar(calculator):
    # Monday-only worker; 2026-03-02 is a Monday
    worker = Worker(id="w1", schedules=[WorkerSchedule("w1", 1, "08:00", "16:00")])
    start, end = date(2026, 3, 2), date(2026, 3, 5)

    assert calculator.available_hours([worker], start, end) == pytest.approx(8 / 7 * 3)
    assert calculator.available_hours([worker], start, end, method="calendar") == 8
    # Window without a Monday
    assert calculator.available_hours(
        [worker], date(2026, 3, 3), date(2026, 3, 8), method="calendar"
    ) == 0


def test_calendar_method_from_config():
    calculator = LaborCapacityCalculator(
        {"planning_parameters": {"labor": {"method": "calendar"}}}
    )
    hours = calculator.available_hours([daily_worker("w1")], date(2026, 3, 1), date(2026, 3, 15))
    assert hours == pytest.approx(112)


def test_unknown_method_rejected():
    with pytest.raises(ValueError):
        LaborCapacityCalculator({"planning_parameters": {"labor": {"method": "exact"}}})


@pytest.mark.parametrize(
    "start, end",
    [("8:00", "16:00x"), ("25:00", "26:00"), ("16:00", "08:00"), ("", "08:00"), ("08:00", "08:00")],
)
def test_malformed_schedule_rejected(calculator, start, end):
    worker = Worker(id="w1", schedules=[WorkerSchedule("w1", 1, start, end)])
    with pytest.raises(InvalidInputError):
        calculator.weekly_hours(worker)


def test_required_hours_and_sufficiency(calculator):
    requirements = {
        "WELD": ProcessTotal(units=20, seconds=600),
        "PACKING": ProcessTotal(units=70, seconds=4200),
    }
    assert required_hours(requirements) == pytest.approx(4800 / 3600)

    assessment = calculator.assess(
        [daily_worker("w1")], requirements, date(2026, 3, 1), date(2026, 3, 8)
    )
    assert assessment.days_in_range == 7
    assert assessment.available_hours == pytest.approx(56)
    assert assessment.sufficient

    heavy = {"WELD": ProcessTotal(units=10_000, seconds=60 * 3600)}
    assert not calculator.assess(
        [daily_worker("w1")], heavy, date(2026, 3, 1), date(2026, 3, 8)
    ).sufficient


def test_assess_defaults_to_configured_window(calculator):
    assessment = calculator.assess([daily_worker("w1")], {}, start=date(2026, 3, 1))
    assert assessment.end == date(2026, 3, 8)
    assert assessment.required_hours == 0
    assert assessment.sufficient


def test_what_if_capacity():
    what_if = LaborCapacityCalculator.what_if(
        "WELD", seconds_per_unit=30, worker_count=2, hours_per_worker=40, timeframe_days=7
    )
    assert what_if.total_work_hours == 80
    assert what_if.units_can_complete == 9600
    assert what_if.hours_for_units(1200) == 10
    assert what_if.days_needed(1200) == pytest.approx(10 / (80 / 7))

    idle = LaborCapacityCalculator.what_if("WELD", 30, 0, 40)
    assert idle.days_needed(100) == float("inf")

    with pytest.raises(InvalidInputError):
        LaborCapacityCalculator.what_if("WELD", 0, 2, 40)
