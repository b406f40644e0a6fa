import pytest

from bom_planner.planning.forecasts import ForecastBook
from bom_planner.planning.validation import InvalidInputError, normalize_process_name, parse_time


def test_upsert_creates_then_updates(sample_inputs):
    book = ForecastBook(sample_inputs.catalog)
    book.upsert("sku-pack-a", "100", "10")
    book.upsert("sku-pack-a", 120, 0)

    assert len(book) == 1
    forecast = book.get("sku-pack-a")
    assert forecast.forecasted_quantity == 120
    assert forecast.current_in_gallatin == 0


@pytest.mark.parametrize(
    "quantity, gallatin",
    [(-1, 0), (10, -1), ("abc", 0), (10, None), (2.5, 0), (float("inf"), 0)],
)
def test_upsert_rejects_invalid_quantities(sample_inputs, quantity, gallatin):
    book = ForecastBook(sample_inputs.catalog)
    with pytest.raises(InvalidInputError):
        book.upsert("sku-pack-a", quantity, gallatin)


@pytest.mark.parametrize("sku_id", ["sku-asm-b", "sku-missing"])
def test_upsert_only_for_completed_skus(sample_inputs, sku_id):
    book = ForecastBook(sample_inputs.catalog)
    with pytest.raises(InvalidInputError):
        book.upsert(sku_id, 10, 0)


def test_all_sorted_by_sku(sample_inputs):
    assert [f.sku_id for f in sample_inputs.forecasts.all()] == ["sku-pack-a", "sku-pack-b"]


def test_parse_time():
    assert parse_time("08:30") == 8.5
    assert parse_time("7:15") == 7.25
    assert parse_time("24:00") == 24
    with pytest.raises(InvalidInputError):
        parse_time("08:60")


def test_normalize_process_name():
    assert normalize_process_name("Tip Assembly") == "TIP_ASSEMBLY"
    assert normalize_process_name("  weld #2 ") == "WELD_2"
    with pytest.raises(InvalidInputError):
        normalize_process_name("!!!")
