"""
Explosion Engine: Translates forecasted demand into material and labor requirements.

For every active finished good the engine nets the forecast against stock
(on-hand in the finished-goods states plus units held off-site in Gallatin),
then walks the BOM downward:

- RAW components accumulate raw-material demand.
- ASSEMBLY components are netted against their own stock first; only the
  shortfall that must actually be built propagates to their components.
- Every component reached with demand accrues labor to its process.

The engine is a pure function of its inputs. Each call owns its accumulators
and nothing in the catalog, graph or snapshot is mutated.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from bom_planner.network.bom_graph import BomGraph
from bom_planner.planning.catalog import Catalog
from bom_planner.planning.snapshot import InventorySnapshot
from bom_planner.planning.validation import validate_forecasts
from bom_planner.product.core import Forecast, InventoryState, Sku, SkuKind

logger = logging.getLogger(__name__)


@dataclass
class ProcessTotal:
    units: float = 0.0
    seconds: float = 0.0

    @property
    def hours(self) -> float:
        return self.seconds / 3600


@dataclass
class RawMaterialNeed:
    sku_id: str
    code: str
    name: str
    needed: float
    available: float


@dataclass
class AssemblyNeed:
    sku_id: str
    code: str
    name: str
    needed: float
    available: float
    shortfall: float  # Portion that must be built rather than pulled from stock
    level: int  # 1 = direct component of the finished good


@dataclass
class ProductPlan:
    """Explosion result for one finished good."""

    sku_id: str
    code: str
    name: str
    forecasted_quantity: float
    on_hand: float
    current_in_gallatin: float
    need_to_build: float
    has_forecast: bool
    raw_materials_needed: list[RawMaterialNeed] = field(default_factory=list)
    assemblies_needed: list[AssemblyNeed] = field(default_factory=list)
    process_totals: dict[str, ProcessTotal] = field(default_factory=dict)
    # Set when a cycle or the depth cap stopped the descent on some branch
    truncated: bool = False

    @property
    def build_time_hours(self) -> float:
        return sum(t.seconds for t in self.process_totals.values()) / 3600


@dataclass
class ExplosionResult:
    plans: list[ProductPlan]
    process_requirements: dict[str, ProcessTotal]
    raw_requirements: dict[str, float]

    @property
    def total_labor_hours(self) -> float:
        return sum(t.seconds for t in self.process_requirements.values()) / 3600

    @property
    def truncated_products(self) -> list[str]:
        return [p.code for p in self.plans if p.truncated]

    def get_plan(self, sku_id: str) -> ProductPlan | None:
        for plan in self.plans:
            if plan.sku_id == sku_id:
                return plan
        return None


class _ProductAccumulator:
    """Running totals for one product's explosion."""

    def __init__(self) -> None:
        self.raw: dict[str, RawMaterialNeed] = {}
        self.assemblies: dict[str, AssemblyNeed] = {}
        self.processes: dict[str, ProcessTotal] = {}
        # Assembly stock not yet claimed by an earlier path in this product
        self.remaining_stock: dict[str, float] = {}
        self.truncated = False

    def add_raw(self, sku: Sku, qty: float, available: float) -> None:
        if sku.id not in self.raw:
            self.raw[sku.id] = RawMaterialNeed(sku.id, sku.code, sku.name, 0.0, available)
        self.raw[sku.id].needed += qty

    def add_assembly(self, sku: Sku, qty: float, available: float, level: int) -> float:
        """Record demand for an assembly and return the part that must be built."""
        remaining = self.remaining_stock.get(sku.id, available)
        shortfall = max(0.0, qty - remaining)
        self.remaining_stock[sku.id] = max(0.0, remaining - qty)

        if sku.id not in self.assemblies:
            self.assemblies[sku.id] = AssemblyNeed(
                sku.id, sku.code, sku.name, 0.0, available, 0.0, level
            )
        entry = self.assemblies[sku.id]
        entry.needed += qty
        entry.shortfall += shortfall
        entry.level = min(entry.level, level)
        return shortfall


class ExplosionEngine:
    """
    Forward BOM explosion across the full forecasted product set.
    """

    def __init__(
        self,
        catalog: Catalog,
        graph: BomGraph,
        snapshot: InventorySnapshot,
        config: dict[str, Any] | None = None,
    ) -> None:
        self.catalog = catalog
        self.graph = graph
        self.snapshot = snapshot

        explosion_config = (config or {}).get("planning_parameters", {}).get(
            "explosion", {}
        )
        self.max_depth = int(explosion_config.get("max_depth", 10))
        self.finished_goods_states = [
            InventoryState[s]
            for s in explosion_config.get("finished_goods_states", ["COMPLETED"])
        ]

        # Snapshot of active process rates, read once per engine
        self.seconds_per_unit = catalog.active_process_seconds()

    def explode(self, forecasts: list[Forecast]) -> ExplosionResult:
        """Explode the forecast for every active COMPLETED SKU."""
        validate_forecasts(forecasts)
        forecast_map = {f.sku_id: f for f in forecasts}

        for sku_id in forecast_map:
            sku = self.catalog.get_active_sku(sku_id)
            if sku is None or sku.kind != SkuKind.COMPLETED:
                logger.debug("Ignoring forecast for non-finished SKU %s", sku_id)

        plans = [
            self.explode_product(sku, forecast_map.get(sku.id))
            for sku in self.catalog.completed_skus()
        ]

        process_requirements: dict[str, ProcessTotal] = {}
        raw_requirements: dict[str, float] = {}
        for plan in plans:
            for process, totals in plan.process_totals.items():
                agg = process_requirements.setdefault(process, ProcessTotal())
                agg.units += totals.units
                agg.seconds += totals.seconds
            for raw in plan.raw_materials_needed:
                if raw.needed > 0:
                    raw_requirements[raw.sku_id] = (
                        raw_requirements.get(raw.sku_id, 0.0) + raw.needed
                    )

        logger.debug(
            "Explosion: products=%d, to_build=%.0f, raw_skus=%d, labor_hours=%.2f",
            len(plans),
            sum(p.need_to_build for p in plans),
            len(raw_requirements),
            sum(t.seconds for t in process_requirements.values()) / 3600,
        )

        return ExplosionResult(plans, process_requirements, raw_requirements)

    def need_to_build(self, sku_id: str, forecast: Forecast | None) -> float:
        """max(0, forecast - (on_hand + off-site))"""
        if forecast is None:
            return 0.0
        on_hand = self.snapshot.on_hand(sku_id, self.finished_goods_states)
        supply = on_hand + forecast.current_in_gallatin
        return max(0.0, forecast.forecasted_quantity - supply)

    def explode_product(self, sku: Sku, forecast: Forecast | None) -> ProductPlan:
        on_hand = self.snapshot.on_hand(sku.id, self.finished_goods_states)
        need = self.need_to_build(sku.id, forecast)

        acc = _ProductAccumulator()
        # Final assembly labor
        self._accrue_labor(acc, sku.process, need)
        self._explode_components(acc, sku.id, need, level=1, path=frozenset({sku.id}))

        if acc.truncated:
            logger.debug("Explosion of %s stopped early on at least one branch", sku.code)

        return ProductPlan(
            sku_id=sku.id,
            code=sku.code,
            name=sku.name,
            forecasted_quantity=forecast.forecasted_quantity if forecast else 0.0,
            on_hand=on_hand,
            current_in_gallatin=forecast.current_in_gallatin if forecast else 0.0,
            need_to_build=need,
            has_forecast=forecast is not None,
            raw_materials_needed=sorted(acc.raw.values(), key=lambda r: r.code),
            assemblies_needed=sorted(
                acc.assemblies.values(), key=lambda a: (a.level, a.code)
            ),
            process_totals=dict(sorted(acc.processes.items())),
            truncated=acc.truncated,
        )

    def _explode_components(
        self,
        acc: _ProductAccumulator,
        parent_id: str,
        build_qty: float,
        level: int,
        path: frozenset[str],
    ) -> None:
        for edge in self.graph.components_of(parent_id):
            component = self.catalog.get_active_sku(edge.component_id)
            if component is None:
                logger.debug(
                    "BOM line %s -> %s references a missing or inactive SKU",
                    parent_id,
                    edge.component_id,
                )
                continue

            if component.id in path:
                acc.truncated = True
                logger.debug("Cycle at %s -> %s, not descending", parent_id, component.id)
                continue

            qty_needed = edge.quantity_per_unit * build_qty
            self._accrue_labor(acc, component.process, qty_needed)

            if component.kind == SkuKind.RAW:
                acc.add_raw(component, qty_needed, self.snapshot.available(component.id))
                continue

            available = self.snapshot.available(component.id)
            shortfall = acc.add_assembly(component, qty_needed, available, level)

            if not self.graph.has_components(component.id):
                continue
            if level >= self.max_depth:
                acc.truncated = True
                continue

            # Stocked assemblies don't re-trigger demand for their components
            self._explode_components(
                acc, component.id, shortfall, level + 1, path | {component.id}
            )

    def _accrue_labor(
        self, acc: _ProductAccumulator, process: str | None, units: float
    ) -> None:
        if not process or units <= 0:
            return
        rate = self.seconds_per_unit.get(process)
        if rate is None:
            # Disabled or unknown process: no labor contribution
            return
        totals = acc.processes.setdefault(process, ProcessTotal())
        totals.units += units
        totals.seconds += units * rate
