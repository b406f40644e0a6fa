from typing import Dict, List, Optional

from bom_planner.planning.catalog import Catalog
from bom_planner.planning.validation import InvalidInputError
from bom_planner.product.core import Forecast, SkuKind


def _parse_whole_units(value, label: str) -> int:
    """Planner-entered quantities are whole, non-negative unit counts."""
    try:
        parsed = int(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidInputError(f"Invalid {label}") from None
    if isinstance(value, float) and value != parsed:
        raise InvalidInputError(f"Invalid {label}")
    if parsed < 0:
        raise InvalidInputError(f"Invalid {label}")
    return parsed


class ForecastBook:
    """
    In-memory forecast store: one row per finished good, upserted by planners.
    """

    def __init__(self, catalog: Catalog, forecasts: Optional[List[Forecast]] = None):
        self.catalog = catalog
        self._forecasts: Dict[str, Forecast] = {}
        for f in forecasts or []:
            self.upsert(f.sku_id, f.forecasted_quantity, f.current_in_gallatin)

    def upsert(self, sku_id: str, quantity, current_in_gallatin) -> Forecast:
        sku = self.catalog.get_sku(sku_id)
        if sku is None:
            raise InvalidInputError(f"Unknown SKU {sku_id}")
        if sku.kind != SkuKind.COMPLETED:
            raise InvalidInputError(f"Forecasts apply to completed SKUs only ({sku.code})")

        forecast = Forecast(
            sku_id=sku_id,
            forecasted_quantity=_parse_whole_units(quantity, "forecasted quantity"),
            current_in_gallatin=_parse_whole_units(
                current_in_gallatin, "current inventory quantity"
            ),
        )
        self._forecasts[sku_id] = forecast
        return forecast

    def get(self, sku_id: str) -> Optional[Forecast]:
        return self._forecasts.get(sku_id)

    def all(self) -> List[Forecast]:
        return [self._forecasts[k] for k in sorted(self._forecasts)]

    def __len__(self) -> int:
        return len(self._forecasts)
