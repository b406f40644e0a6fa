"""End-to-end forecast runs over the sample snapshot."""

import copy
import logging
from datetime import date
from pathlib import Path

import pytest

from bom_planner.planning.builder import PlanningInputBuilder
from bom_planner.planning.orchestrator import PlanningOrchestrator

SAMPLE_SNAPSHOT = Path(__file__).parent.parent / "data" / "sample_snapshot.json"

WINDOW = (date(2026, 3, 1), date(2026, 3, 8))


@pytest.fixture
def planner(sample_inputs) -> PlanningOrchestrator:
    return PlanningOrchestrator(sample_inputs)


def test_forecast_run(planner):
    report = planner.run(*WINDOW)
    explosion = report.explosion

    pack_a = explosion.get_plan("sku-pack-a")
    pack_b = explosion.get_plan("sku-pack-b")
    assert pack_a.need_to_build == 70
    assert pack_b.need_to_build == 10
    assert pack_a.build_time_hours == pytest.approx(1.75)

    assert explosion.process_requirements["PACKING"].units == 80
    assert explosion.process_requirements["WELD"].seconds == 2700
    assert "TIPPING" not in explosion.process_requirements
    assert explosion.raw_requirements == {"sku-raw-c": 40, "sku-raw-d": 70}

    [shortage] = report.shortages
    assert shortage.code == "RAW-C"
    assert shortage.shortfall == 10
    assert shortage.for_skus == ["PACK-A"]

    assert report.labor.available_hours == pytest.approx(56)
    assert report.labor.required_hours == pytest.approx(7500 / 3600)
    assert report.labor.surplus_hours == pytest.approx(56 - 7500 / 3600)
    assert report.labor.sufficient


def test_calendar_method_override(planner):
    report = planner.run(*WINDOW, method="calendar")
    assert report.labor.method == "calendar"
    assert report.labor.available_hours == pytest.approx(56)


def test_text_report(planner):
    text = planner.generate_report(planner.run(*WINDOW))
    assert "PACK-A" in text
    assert "RAW-C" in text
    assert "Surplus hours:       53.9" in text
    assert "SUFFICIENT" in text


def test_used_in(planner):
    usage = planner.used_in("sku-raw-c")
    assert usage.codes == ["ASM-B", "PACK-A", "PACK-B"]
    assert [e.quantity for e in usage.entries] == [2.0, 1.0, 2.0]


def test_cycle_logged_as_integrity_warning(sample_document, caplog):
    doc = copy.deepcopy(sample_document)
    doc["bom"].append({"parent": "sku-raw-c", "component": "sku-pack-a", "quantity": 1})
    planner = PlanningOrchestrator(PlanningInputBuilder(doc).build())

    with caplog.at_level(logging.WARNING, logger="bom_planner"):
        usage = planner.used_in("sku-raw-c")

    assert usage.cycle_detected
    assert "cycle detected" in caplog.text


def test_from_snapshot_file():
    planner = PlanningOrchestrator.from_snapshot_file(str(SAMPLE_SNAPSHOT))
    report = planner.run(*WINDOW)
    assert len(report.explosion.plans) == 2
