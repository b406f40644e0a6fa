"""CSV and Parquet writers for forecast run tables."""

import csv
from pathlib import Path
from typing import Any

import pyarrow as pa
import pyarrow.parquet as pq

from bom_planner.writers.base import BaseWriter

SCHEMAS = {
    "product_plans": pa.schema(
        [
            ("sku_id", pa.string()),
            ("sku", pa.string()),
            ("name", pa.string()),
            ("forecasted_quantity", pa.float64()),
            ("on_hand", pa.float64()),
            ("current_in_gallatin", pa.float64()),
            ("need_to_build", pa.float64()),
            ("build_time_hours", pa.float64()),
            ("has_forecast", pa.bool_()),
            ("truncated", pa.bool_()),
        ]
    ),
    "process_requirements": pa.schema(
        [
            ("process", pa.string()),
            ("units", pa.float64()),
            ("seconds", pa.float64()),
            ("hours", pa.float64()),
        ]
    ),
    "raw_material_shortages": pa.schema(
        [
            ("sku_id", pa.string()),
            ("sku", pa.string()),
            ("name", pa.string()),
            ("needed", pa.float64()),
            ("available", pa.float64()),
            ("shortfall", pa.float64()),
            ("for_skus", pa.string()),
        ]
    ),
    "labor_capacity": pa.schema(
        [
            ("start", pa.string()),
            ("end", pa.string()),
            ("days_in_range", pa.int32()),
            ("method", pa.string()),
            ("available_hours", pa.float64()),
            ("required_hours", pa.float64()),
            ("surplus_hours", pa.float64()),
            ("sufficient", pa.bool_()),
        ]
    ),
}


class CsvReportWriter(BaseWriter):
    def write_table(self, table_name: str, rows: list[dict[str, Any]]) -> Path:
        filepath = self.output_dir / f"{table_name}.csv"
        with open(filepath, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=SCHEMAS[table_name].names)
            writer.writeheader()
            writer.writerows(rows)
        return filepath


class ParquetReportWriter(BaseWriter):
    def write_table(self, table_name: str, rows: list[dict[str, Any]]) -> Path:
        filepath = self.output_dir / f"{table_name}.parquet"
        table = pa.Table.from_pylist(rows, schema=SCHEMAS[table_name])
        pq.write_table(table, filepath)
        return filepath


WRITERS: dict[str, type[BaseWriter]] = {
    "csv": CsvReportWriter,
    "parquet": ParquetReportWriter,
}


def make_report_writer(output_dir: str, output_format: str = "csv") -> BaseWriter:
    """Pick the writer for an output format."""
    if output_format not in WRITERS:
        raise ValueError(f"Unsupported output format {output_format!r}")
    return WRITERS[output_format](output_dir)
