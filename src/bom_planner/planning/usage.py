"""Backward BOM traversal: which products consume a component, transitively."""

from dataclasses import dataclass, field

from bom_planner.network.bom_graph import BomGraph
from bom_planner.planning.catalog import Catalog
from bom_planner.product.core import SkuKind

DEFAULT_MAX_DEPTH = 10


@dataclass
class UsedInProduct:
    sku_id: str
    code: str
    name: str
    kind: SkuKind | None
    quantity: float  # Per-unit multiplier on the edge nearest the queried SKU
    depth: int  # 0 = direct parent


@dataclass
class UsageResult:
    sku_id: str
    entries: list[UsedInProduct] = field(default_factory=list)
    # Set when a cycle or the depth cap cut the walk short
    truncated: bool = False
    cycle_detected: bool = False

    @property
    def codes(self) -> list[str]:
        return [e.code for e in self.entries]


def find_used_in(
    graph: BomGraph,
    catalog: Catalog,
    sku_id: str,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> UsageResult:
    """
    Find every product that uses `sku_id`, directly or through assemblies.

    Example:
        SPRING-OUTER is in TIP-ASSEMBLY, TIP-ASSEMBLY is in PACK-COMPLETE
        -> [TIP-ASSEMBLY (depth 0), PACK-COMPLETE (depth 1)]

    A SKU is expanded at most once and nothing deeper than `max_depth` is
    recorded, so a cyclic graph yields a truncated result instead of looping.
    """
    result = UsageResult(sku_id=sku_id)
    visited: set[str] = set()
    seen: set[tuple[str, int]] = set()

    def traverse(current_id: str, depth: int, path: frozenset[str]) -> None:
        if current_id in visited:
            return
        visited.add(current_id)

        for edge in graph.parents_of(current_id):
            parent_id = edge.parent_id
            if parent_id in path:
                result.cycle_detected = True
                result.truncated = True
                continue
            if depth > max_depth:
                result.truncated = True
                return

            if (parent_id, depth) not in seen:
                seen.add((parent_id, depth))
                parent = catalog.get_sku(parent_id)
                result.entries.append(
                    UsedInProduct(
                        sku_id=parent_id,
                        code=parent.code if parent else parent_id,
                        name=parent.name if parent else "",
                        kind=parent.kind if parent else None,
                        quantity=edge.quantity_per_unit,
                        depth=depth,
                    )
                )

            traverse(parent_id, depth + 1, path | {parent_id})

    traverse(sku_id, 0, frozenset({sku_id}))

    result.entries.sort(key=lambda e: (e.depth, e.code))
    return result
