import pytest

from bom_planner.planning.snapshot import InventorySnapshot
from bom_planner.planning.validation import InvalidInputError
from bom_planner.product.core import InventoryRecord, InventoryState


@pytest.fixture
def snapshot() -> InventorySnapshot:
    return InventorySnapshot(
        [
            InventoryRecord("PACK-A", InventoryState.COMPLETED, 20),
            InventoryRecord("PACK-A", InventoryState.ASSEMBLED, 5),
            InventoryRecord("PACK-A", InventoryState.COMPLETED, 3),
            InventoryRecord("ASM-B", InventoryState.ASSEMBLED, 50),
            InventoryRecord("RAW-C", InventoryState.RAW, 0),
        ]
    )


def test_available_sums_all_states(snapshot: InventorySnapshot):
    assert snapshot.available("PACK-A") == 28.0
    assert snapshot.available("ASM-B") == 50.0


def test_on_hand_filters_by_state(snapshot: InventorySnapshot):
    assert snapshot.on_hand("PACK-A", [InventoryState.COMPLETED]) == 23.0
    assert snapshot.on_hand("PACK-A", [InventoryState.RAW]) == 0.0
    assert snapshot.on_hand("PACK-A", []) == 0.0


def test_unknown_and_empty_skus(snapshot: InventorySnapshot):
    assert snapshot.available("NOPE") == 0.0
    assert snapshot.available("RAW-C") == 0.0
    assert snapshot.by_state("RAW-C") == {}


def test_by_state(snapshot: InventorySnapshot):
    assert snapshot.by_state("PACK-A") == {
        InventoryState.ASSEMBLED: 5.0,
        InventoryState.COMPLETED: 23.0,
    }


def test_snapshot_is_read_only(snapshot: InventorySnapshot):
    with pytest.raises(ValueError):
        snapshot.quantities[0, 0] = 1.0


def test_negative_quantity_rejected():
    with pytest.raises(InvalidInputError):
        InventorySnapshot([InventoryRecord("RAW-C", InventoryState.RAW, -1)])
