from dataclasses import dataclass, field
import enum


class SkuKind(enum.Enum):
    RAW = "raw"  # Purchased material, never has components
    ASSEMBLY = "assembly"  # Built in-house from raw material
    COMPLETED = "completed"  # Finished good, the unit we forecast


class InventoryState(enum.Enum):
    RECEIVED = "received"
    RAW = "raw"
    ASSEMBLED = "assembled"
    COMPLETED = "completed"
    TRANSFERRED = "transferred"


@dataclass
class Sku:
    """
    Represents a catalog SKU and the labor process used to produce it.
    """

    id: str
    code: str
    name: str
    kind: SkuKind

    # Labor process name (matches ProcessConfig.process_name)
    process: str | None = None
    active: bool = True

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("SKU ID cannot be empty")
        if not self.code:
            self.code = self.id


@dataclass
class BomEdge:
    """
    One line of a Bill of Materials: parent needs `quantity_per_unit`
    of component for every unit built.
    """

    parent_id: str
    component_id: str
    quantity_per_unit: float = 1.0

    def __post_init__(self) -> None:
        if self.parent_id == self.component_id:
            raise ValueError(f"SKU {self.parent_id} cannot be its own component")
        if self.quantity_per_unit <= 0:
            raise ValueError(
                f"Quantity per unit must be positive for "
                f"{self.parent_id} -> {self.component_id}"
            )


@dataclass
class InventoryRecord:
    sku_id: str
    state: InventoryState
    quantity: float = 0.0


@dataclass
class Forecast:
    sku_id: str
    forecasted_quantity: float = 0.0
    # Units held at the off-site Gallatin location, not in InventoryRecord
    current_in_gallatin: float = 0.0


@dataclass
class ProcessConfig:
    process_name: str
    seconds_per_unit: float
    active: bool = True
    display_name: str = ""
    description: str | None = None

    @property
    def hours_per_unit(self) -> float:
        return self.seconds_per_unit / 3600


@dataclass
class WorkerSchedule:
    worker_id: str
    day_of_week: int  # 0 = Sunday .. 6 = Saturday
    start_time: str  # "HH:MM"
    end_time: str  # "HH:MM"
    active: bool = True
    recurring: bool = True


@dataclass
class Worker:
    id: str
    name: str = ""
    active: bool = True
    schedules: list[WorkerSchedule] = field(default_factory=list)
