"""Writers module for exporting forecast reports."""

from bom_planner.writers.base import BaseWriter
from bom_planner.writers.report_writer import (
    CsvReportWriter,
    ParquetReportWriter,
    make_report_writer,
)

__all__ = ["BaseWriter", "CsvReportWriter", "ParquetReportWriter", "make_report_writer"]
