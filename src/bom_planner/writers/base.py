"""Base class for report writers."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from bom_planner.planning.orchestrator import ForecastReport

logger = logging.getLogger(__name__)


def report_tables(report: ForecastReport) -> dict[str, list[dict[str, Any]]]:
    """Flatten a forecast report into one row list per table."""
    plans = [
        {
            "sku_id": p.sku_id,
            "sku": p.code,
            "name": p.name,
            "forecasted_quantity": p.forecasted_quantity,
            "on_hand": p.on_hand,
            "current_in_gallatin": p.current_in_gallatin,
            "need_to_build": p.need_to_build,
            "build_time_hours": p.build_time_hours,
            "has_forecast": p.has_forecast,
            "truncated": p.truncated,
        }
        for p in report.explosion.plans
    ]
    processes = [
        {"process": name, "units": t.units, "seconds": t.seconds, "hours": t.hours}
        for name, t in sorted(report.explosion.process_requirements.items())
    ]
    shortages = [
        {
            "sku_id": s.sku_id,
            "sku": s.code,
            "name": s.name,
            "needed": s.needed,
            "available": s.available,
            "shortfall": s.shortfall,
            "for_skus": ";".join(s.for_skus),
        }
        for s in report.shortages
    ]
    labor = report.labor
    capacity = [
        {
            "start": labor.start.isoformat(),
            "end": labor.end.isoformat(),
            "days_in_range": labor.days_in_range,
            "method": labor.method,
            "available_hours": labor.available_hours,
            "required_hours": labor.required_hours,
            "surplus_hours": labor.surplus_hours,
            "sufficient": labor.sufficient,
        }
    ]
    return {
        "product_plans": plans,
        "process_requirements": processes,
        "raw_material_shortages": shortages,
        "labor_capacity": capacity,
    }


class BaseWriter(ABC):
    """Writes every table of a forecast report into one output directory."""

    def __init__(self, output_dir: str) -> None:
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def write_report(self, report: ForecastReport) -> list[Path]:
        written = [
            self.write_table(table_name, rows)
            for table_name, rows in report_tables(report).items()
        ]
        logger.info("Wrote %d report tables to %s", len(written), self.output_dir)
        return written

    @abstractmethod
    def write_table(self, table_name: str, rows: list[dict[str, Any]]) -> Path:
        """Write one table and return the file it landed in."""
