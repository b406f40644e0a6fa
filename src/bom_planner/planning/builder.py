import logging
from dataclasses import dataclass
from typing import Any

from bom_planner.network.bom_graph import BomGraph
from bom_planner.planning.catalog import Catalog
from bom_planner.planning.forecasts import ForecastBook
from bom_planner.planning.snapshot import InventorySnapshot
from bom_planner.planning.validation import (
    InvalidInputError,
    validate_processes,
    validate_schedules,
)
from bom_planner.product.core import (
    BomEdge,
    InventoryRecord,
    InventoryState,
    ProcessConfig,
    Sku,
    SkuKind,
    Worker,
    WorkerSchedule,
)

logger = logging.getLogger(__name__)


@dataclass
class PlanningInputs:
    """Everything one planning run reads, fetched once up front."""

    catalog: Catalog
    graph: BomGraph
    snapshot: InventorySnapshot
    forecasts: ForecastBook
    workers: list[Worker]


class PlanningInputBuilder:
    """Turns a snapshot document into typed, validated planning inputs."""

    def __init__(self, document: dict[str, Any]) -> None:
        self.document = document
        self.catalog = Catalog()

    def build(self) -> PlanningInputs:
        self._build_skus()
        self._build_bom()
        self._build_processes()

        graph = BomGraph(self.catalog.edges)
        snapshot = InventorySnapshot(self._build_inventory())
        forecasts = ForecastBook(self.catalog)
        for row in self.document.get("forecasts", []):
            forecasts.upsert(
                row["sku"], row.get("quantity", 0), row.get("current_in_gallatin", 0)
            )
        workers = self._build_workers()

        logger.info(
            "Loaded snapshot: skus=%d, bom_lines=%d, forecasts=%d, workers=%d",
            len(self.catalog.skus),
            graph.n_edges,
            len(forecasts),
            len(workers),
        )
        return PlanningInputs(self.catalog, graph, snapshot, forecasts, workers)

    def _build_skus(self) -> None:
        for row in self.document.get("skus", []):
            try:
                kind = SkuKind[str(row["type"]).upper()]
            except KeyError:
                raise InvalidInputError(
                    f"Unknown SKU type {row.get('type')!r} for {row.get('id')}"
                ) from None

            self.catalog.add_sku(
                Sku(
                    id=row["id"],
                    code=row.get("sku", row["id"]),
                    name=row.get("name", ""),
                    kind=kind,
                    process=row.get("process") or None,
                    active=bool(row.get("active", True)),
                )
            )

    def _build_bom(self) -> None:
        for row in self.document.get("bom", []):
            parent_id, component_id = row["parent"], row["component"]
            if parent_id not in self.catalog.skus or component_id not in self.catalog.skus:
                # Kept in the graph; explosion treats it as zero contribution
                logger.warning(
                    "BOM line %s -> %s references an unknown SKU", parent_id, component_id
                )
            self.catalog.add_edge(
                BomEdge(parent_id, component_id, float(row.get("quantity", 1.0)))
            )

    def _build_processes(self) -> None:
        processes = [
            ProcessConfig(
                process_name=row["process_name"],
                seconds_per_unit=float(row["seconds_per_unit"]),
                active=bool(row.get("active", True)),
                display_name=row.get("display_name", row["process_name"]),
                description=row.get("description"),
            )
            for row in self.document.get("processes", [])
        ]
        validate_processes(processes)
        for p in processes:
            self.catalog.add_process(p)

    def _build_inventory(self) -> list[InventoryRecord]:
        records = []
        for row in self.document.get("inventory", []):
            try:
                state = InventoryState[str(row["state"]).upper()]
            except KeyError:
                raise InvalidInputError(
                    f"Unknown inventory state {row.get('state')!r} for {row.get('sku')}"
                ) from None
            records.append(InventoryRecord(row["sku"], state, float(row["quantity"])))
        return records

    def _build_workers(self) -> list[Worker]:
        workers = []
        for row in self.document.get("workers", []):
            schedules = [
                WorkerSchedule(
                    worker_id=row["id"],
                    day_of_week=int(s["day_of_week"]),
                    start_time=s["start_time"],
                    end_time=s["end_time"],
                    active=bool(s.get("active", True)),
                    recurring=s.get("schedule_type", "RECURRING") == "RECURRING",
                )
                for s in row.get("schedules", [])
            ]
            validate_schedules(schedules)
            workers.append(
                Worker(
                    id=row["id"],
                    name=row.get("name", ""),
                    active=bool(row.get("active", True)),
                    schedules=schedules,
                )
            )
        return workers
