import numpy as np

from bom_planner.planning.validation import validate_inventory
from bom_planner.product.core import InventoryRecord, InventoryState


class InventorySnapshot:
    """
    Read-only, point-in-time view of on-hand inventory.
    Maps SKU ids and inventory states to integer indices for O(1) access.
    """

    def __init__(self, records: list[InventoryRecord]) -> None:
        validate_inventory(records)

        # 1. Create Index Maps (sorted for deterministic indexing)
        self.sku_id_to_idx: dict[str, int] = {}
        for i, sku_id in enumerate(sorted({r.sku_id for r in records})):
            self.sku_id_to_idx[sku_id] = i

        self.states = list(InventoryState)
        self.state_to_idx: dict[InventoryState, int] = {
            s: i for i, s in enumerate(self.states)
        }

        # 2. Allocate quantity matrix
        # Shape: [SKUs, States]
        # Only positive records count toward availability
        self.n_skus = len(self.sku_id_to_idx)
        self.quantities = np.zeros((self.n_skus, len(self.states)), dtype=np.float64)

        for r in records:
            if r.quantity > 0:
                s_idx = self.sku_id_to_idx[r.sku_id]
                self.quantities[s_idx, self.state_to_idx[r.state]] += r.quantity

        self.quantities.setflags(write=False)

    def available(self, sku_id: str) -> float:
        """On-hand quantity for a SKU across every inventory state."""
        s_idx = self.sku_id_to_idx.get(sku_id)
        if s_idx is None:
            return 0.0
        return float(self.quantities[s_idx].sum())

    def on_hand(self, sku_id: str, states: list[InventoryState]) -> float:
        """On-hand quantity for a SKU restricted to the given states."""
        s_idx = self.sku_id_to_idx.get(sku_id)
        if s_idx is None or not states:
            return 0.0
        cols = [self.state_to_idx[s] for s in states]
        return float(self.quantities[s_idx, cols].sum())

    def by_state(self, sku_id: str) -> dict[InventoryState, float]:
        s_idx = self.sku_id_to_idx.get(sku_id)
        if s_idx is None:
            return {}
        return {
            state: float(qty)
            for state, qty in zip(self.states, self.quantities[s_idx])
            if qty > 0
        }
