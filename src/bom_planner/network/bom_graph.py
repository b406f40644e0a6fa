"""Adjacency representation of the Bill of Materials (BOM)."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bom_planner.product.core import BomEdge


class BomGraph:
    """Read-only view of parent -> component edges, indexed both ways.

    Forward index:  parent id    -> edges to its direct components
    Reverse index:  component id -> edges from its direct parents
    """

    def __init__(self, edges: list[BomEdge]) -> None:
        self._components: dict[str, list[BomEdge]] = {}
        self._parents: dict[str, list[BomEdge]] = {}

        for edge in edges:
            self._components.setdefault(edge.parent_id, []).append(edge)
            self._parents.setdefault(edge.component_id, []).append(edge)

        # Sort for deterministic traversal order
        for comp_edges in self._components.values():
            comp_edges.sort(key=lambda e: e.component_id)
        for parent_edges in self._parents.values():
            parent_edges.sort(key=lambda e: e.parent_id)

        self.n_edges = len(edges)

    def components_of(self, parent_id: str) -> list[BomEdge]:
        """Direct component edges of a parent SKU."""
        return list(self._components.get(parent_id, ()))

    def parents_of(self, component_id: str) -> list[BomEdge]:
        """Direct parent edges of a component SKU."""
        return list(self._parents.get(component_id, ()))

    def has_components(self, sku_id: str) -> bool:
        return bool(self._components.get(sku_id))

    def is_used_in_products(self, sku_id: str) -> bool:
        return bool(self._parents.get(sku_id))
