"""
Production Forecast Runner.

Usage:
    poetry run python run_forecast.py data/sample_snapshot.json
    poetry run python run_forecast.py data/sample_snapshot.json --start 2026-03-02 --end 2026-03-09
    poetry run python run_forecast.py data/sample_snapshot.json --used-in RAW-C
"""

import argparse
import logging
import sys
from datetime import date

from bom_planner.planning.orchestrator import PlanningOrchestrator
from bom_planner.planning.validation import InvalidInputError
from bom_planner.writers.report_writer import make_report_writer


def main() -> int:
    """Run the BOM explosion and labor capacity check for a snapshot."""
    parser = argparse.ArgumentParser(
        description="Production Forecast Runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  poetry run python run_forecast.py snapshot.json --method calendar
  poetry run python run_forecast.py snapshot.json --output-dir out --format parquet
        """,
    )

    parser.add_argument("snapshot", help="Planning snapshot JSON document")
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Planning config JSON (default: bundled planning_config.json)",
    )
    parser.add_argument(
        "--start",
        type=date.fromisoformat,
        default=None,
        help="Labor window start, YYYY-MM-DD (default: today)",
    )
    parser.add_argument(
        "--end",
        type=date.fromisoformat,
        default=None,
        help="Labor window end (exclusive), YYYY-MM-DD (default: start + 7 days)",
    )
    parser.add_argument(
        "--method",
        choices=["weekly_average", "calendar"],
        default=None,
        help="How weekly schedules convert to hours for the window",
    )
    parser.add_argument(
        "--used-in",
        type=str,
        default=None,
        metavar="SKU_ID",
        help="List every product that consumes this component instead of forecasting",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Directory for report tables (skipped when omitted)",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["csv", "parquet"],
        default=None,
        help="Output format for report tables (default from config: csv)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )

    args = parser.parse_args()
    logging.basicConfig(
        level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    try:
        planner = PlanningOrchestrator.from_snapshot_file(args.snapshot, args.config)

        if args.used_in:
            usage = planner.used_in(args.used_in)
            print(f"{args.used_in} is used in {len(usage.entries)} products:")
            for entry in usage.entries:
                indent = "  " * (entry.depth + 1)
                print(f"{indent}{entry.code} x{entry.quantity:g} (depth {entry.depth})")
            return 0

        report = planner.run(start=args.start, end=args.end, method=args.method)
    except InvalidInputError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 2

    print("\n" + planner.generate_report(report) + "\n")

    if args.output_dir:
        report_config = planner.config.get("planning_parameters", {}).get("report", {})
        output_format = args.format or report_config.get("output_format", "csv")
        writer = make_report_writer(args.output_dir, output_format)
        for path in writer.write_report(report):
            print(f"Saved {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
