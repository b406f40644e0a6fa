import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from bom_planner.config.loader import load_planning_config, load_snapshot
from bom_planner.planning.builder import PlanningInputBuilder, PlanningInputs
from bom_planner.planning.explosion import ExplosionEngine, ExplosionResult
from bom_planner.planning.labor import LaborAssessment, LaborCapacityCalculator
from bom_planner.planning.shortage import RawMaterialShortage, aggregate_shortages
from bom_planner.planning.usage import UsageResult, find_used_in

logger = logging.getLogger(__name__)


@dataclass
class ForecastReport:
    explosion: ExplosionResult
    shortages: list[RawMaterialShortage]
    labor: LaborAssessment


class PlanningOrchestrator:
    """Runs one forecast over a snapshot fetched once up front."""

    def __init__(
        self, inputs: PlanningInputs, config: dict[str, Any] | None = None
    ) -> None:
        self.inputs = inputs
        self.config = config if config is not None else load_planning_config()

        self.explosion_engine = ExplosionEngine(
            inputs.catalog, inputs.graph, inputs.snapshot, self.config
        )
        self.labor = LaborCapacityCalculator(self.config)

        usage_config = self.config.get("planning_parameters", {}).get("usage", {})
        self.usage_max_depth = int(usage_config.get("max_depth", 10))

    @classmethod
    def from_snapshot_file(
        cls, snapshot_path: str, config_path: str | None = None
    ) -> "PlanningOrchestrator":
        inputs = PlanningInputBuilder(load_snapshot(snapshot_path)).build()
        return cls(inputs, load_planning_config(config_path))

    def run(
        self,
        start: date | datetime | None = None,
        end: date | datetime | None = None,
        method: str | None = None,
    ) -> ForecastReport:
        explosion = self.explosion_engine.explode(self.inputs.forecasts.all())
        if explosion.truncated_products:
            logger.warning(
                "BOM integrity: explosion stopped early for %s (cycle or depth cap)",
                ", ".join(explosion.truncated_products),
            )

        shortages = aggregate_shortages(explosion.plans, self.inputs.snapshot)
        labor = self.labor.assess(
            self.inputs.workers, explosion.process_requirements, start, end, method
        )
        logger.info(
            "Forecast run: %d products, %d raw shortages, %.1fh needed / %.1fh available",
            len(explosion.plans),
            len(shortages),
            labor.required_hours,
            labor.available_hours,
        )
        return ForecastReport(explosion, shortages, labor)

    def used_in(self, sku_id: str) -> UsageResult:
        result = find_used_in(
            self.inputs.graph, self.inputs.catalog, sku_id, self.usage_max_depth
        )
        if result.truncated:
            logger.warning(
                "BOM integrity: used-in lookup for %s is incomplete (%s)",
                sku_id,
                "cycle detected" if result.cycle_detected else "depth cap reached",
            )
        return result

    @staticmethod
    def generate_report(report: ForecastReport) -> str:
        """Plain-text summary of a forecast run."""
        labor = report.labor
        explosion = report.explosion
        summary = [
            "==================================================",
            "        PRODUCTION FORECAST & CAPACITY            ",
            "==================================================",
        ]
        for plan in explosion.plans:
            summary.append(
                f"{plan.code:<20} forecast {plan.forecasted_quantity:>8,.0f}  "
                f"on hand {plan.on_hand:>8,.0f}  gallatin {plan.current_in_gallatin:>8,.0f}  "
                f"build {plan.need_to_build:>8,.0f}  ({plan.build_time_hours:.1f}h)"
            )
        summary.append("--------------------------------------------------")
        summary.append("Labor by process:")
        for process, totals in sorted(explosion.process_requirements.items()):
            summary.append(
                f"  {process:<20} {totals.units:>10,.0f} units  {totals.hours:>8.1f}h"
            )
        summary.append("--------------------------------------------------")
        if report.shortages:
            summary.append("Raw material shortages:")
            for s in report.shortages:
                summary.append(
                    f"  {s.code:<20} short {s.shortfall:>10,.0f} "
                    f"(have {s.available:,.0f})  for {', '.join(s.for_skus)}"
                )
        else:
            summary.append("Raw material shortages: none")
        summary.extend(
            [
                "--------------------------------------------------",
                f"Labor window:        {labor.start} .. {labor.end} ({labor.days_in_range} days)",
                f"Hours required:      {labor.required_hours:,.1f}",
                f"Hours available:     {labor.available_hours:,.1f}",
                f"Surplus hours:       {labor.surplus_hours:,.1f}",
                f"Capacity:            {'SUFFICIENT' if labor.sufficient else 'SHORT'}",
                "==================================================",
            ]
        )
        return "\n".join(summary)
