"""Planning module: explosion, shortages, labor capacity and used-in lookups."""

from bom_planner.planning.builder import PlanningInputBuilder, PlanningInputs
from bom_planner.planning.catalog import Catalog
from bom_planner.planning.explosion import ExplosionEngine, ExplosionResult, ProductPlan
from bom_planner.planning.labor import LaborAssessment, LaborCapacityCalculator
from bom_planner.planning.orchestrator import ForecastReport, PlanningOrchestrator
from bom_planner.planning.shortage import RawMaterialShortage, aggregate_shortages
from bom_planner.planning.snapshot import InventorySnapshot
from bom_planner.planning.usage import UsageResult, find_used_in
from bom_planner.planning.validation import InvalidInputError

__all__ = [
    "Catalog",
    "ExplosionEngine",
    "ExplosionResult",
    "ForecastReport",
    "InvalidInputError",
    "InventorySnapshot",
    "LaborAssessment",
    "LaborCapacityCalculator",
    "PlanningInputBuilder",
    "PlanningInputs",
    "PlanningOrchestrator",
    "ProductPlan",
    "RawMaterialShortage",
    "UsageResult",
    "aggregate_shortages",
    "find_used_in",
]
