"""Raw-material shortage roll-up across all forecasted products."""

from dataclasses import dataclass, field

from bom_planner.planning.explosion import ProductPlan
from bom_planner.planning.snapshot import InventorySnapshot


@dataclass
class RawMaterialShortage:
    sku_id: str
    code: str
    name: str
    needed: float
    available: float
    shortfall: float
    # Finished goods whose explosion drove demand for this material
    for_skus: list[str] = field(default_factory=list)


def aggregate_shortages(
    plans: list[ProductPlan], snapshot: InventorySnapshot
) -> list[RawMaterialShortage]:
    """
    Merge per-product raw-material needs into one shortage list.

    Demand is summed across every consuming product before netting against
    stock, and stock is read once per material. A material whose combined
    demand is covered never appears, even if a single product needs it.
    """
    totals: dict[str, RawMaterialShortage] = {}

    for plan in plans:
        for raw in plan.raw_materials_needed:
            if raw.needed <= 0:
                continue
            if raw.sku_id not in totals:
                totals[raw.sku_id] = RawMaterialShortage(
                    sku_id=raw.sku_id,
                    code=raw.code,
                    name=raw.name,
                    needed=0.0,
                    available=snapshot.available(raw.sku_id),
                    shortfall=0.0,
                )
            entry = totals[raw.sku_id]
            entry.needed += raw.needed
            if plan.code not in entry.for_skus:
                entry.for_skus.append(plan.code)

    shortages = []
    for entry in totals.values():
        entry.shortfall = max(0.0, entry.needed - entry.available)
        if entry.shortfall > 0:
            shortages.append(entry)

    shortages.sort(key=lambda s: (-s.shortfall, s.code))
    return shortages
