from typing import Dict, List, Optional

from bom_planner.product.core import BomEdge, ProcessConfig, Sku, SkuKind


class Catalog:
    """
    The container for the static catalog data: SKUs, BOM lines and processes.
    """

    def __init__(self):
        self.skus: Dict[str, Sku] = {}
        self.edges: List[BomEdge] = []
        self.processes: Dict[str, ProcessConfig] = {}
        self._edge_keys: set = set()

    def add_sku(self, sku: Sku):
        if sku.id in self.skus:
            raise ValueError(f"SKU {sku.id} already exists")
        self.skus[sku.id] = sku

    def add_edge(self, edge: BomEdge):
        key = (edge.parent_id, edge.component_id)
        if key in self._edge_keys:
            raise ValueError(
                f"BOM line {edge.parent_id} -> {edge.component_id} already exists"
            )
        self._edge_keys.add(key)
        self.edges.append(edge)

    def add_process(self, process: ProcessConfig):
        if process.process_name in self.processes:
            raise ValueError(f"Process {process.process_name} already exists")
        self.processes[process.process_name] = process

    def get_sku(self, sku_id: str) -> Optional[Sku]:
        return self.skus.get(sku_id)

    def get_active_sku(self, sku_id: str) -> Optional[Sku]:
        sku = self.skus.get(sku_id)
        if sku is None or not sku.active:
            return None
        return sku

    def completed_skus(self) -> List[Sku]:
        """Active finished goods, ordered by code."""
        completed = [
            s for s in self.skus.values() if s.active and s.kind == SkuKind.COMPLETED
        ]
        return sorted(completed, key=lambda s: s.code)

    def active_process_seconds(self) -> Dict[str, float]:
        """Map of active process name -> seconds per unit."""
        return {
            name: p.seconds_per_unit for name, p in self.processes.items() if p.active
        }
