"""
Main entry point for the shift rotation application.
"""

import sys
import argparse
import logging
from datetime import date

from .config import ConfigLoader, ConfigurationError, InvalidDateFormatError
from .exporters import MatrixCSVExporter, SimpleCSVExporter
from .reporter import ScheduleReporter


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"'{value}' is not an ISO 8601 date (YYYY-MM-DD)"
        )


def main():
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="shift-rotation",
        description="Resolve the weekly rotating shift roster",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Roster of the current week
  shift-rotation config/roster.yaml

  # A specific week, only the grid
  shift-rotation config/roster.yaml --date 2026-01-12 --quiet

  # One employee's week, exported as a matrix
  shift-rotation config/roster.yaml --week 3 --employee ana --export-csv out.csv --matrix
        """,
    )

    parser.add_argument("config", type=str, help="Path to YAML configuration file")
    when = parser.add_mutually_exclusive_group()
    when.add_argument(
        "--date", type=_iso_date, help="Any date inside the week to show (default: today)"
    )
    when.add_argument(
        "--week", type=int, help="1-based week number counted from the epoch"
    )
    parser.add_argument("--employee", type=str, help="Show a single employee's week")
    parser.add_argument("--export-csv", type=str, help="Export roster to CSV file")
    parser.add_argument(
        "--matrix",
        action="store_true",
        help="Use the employee by date matrix layout for --export-csv",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress detailed output (only show the roster grid)",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log resolution details"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        print(f"Loading configuration from: {args.config}")
        loader = ConfigLoader(args.config)
        config = loader.load()

        print("✓ Configuration loaded successfully")
        if not args.quiet:
            print(loader.get_summary())
        print()

        if args.week is not None:
            target = config.indexer.week_start(args.week - 1)
        else:
            target = args.date or date.today()

        resolver = config.resolver()
        roster = resolver.week_roster(target)
        reporter = ScheduleReporter(roster)

        if args.employee:
            if resolver.snapshot.employee(args.employee) is None:
                raise ValueError(f"Employee '{args.employee}' not found")
            reporter.print_employee_week(args.employee)
        else:
            reporter.print_report(args.quiet)

        if args.export_csv:
            if args.matrix:
                MatrixCSVExporter(roster).export(args.export_csv)
            else:
                SimpleCSVExporter(roster).export(args.export_csv)

        sys.exit(0)

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    except InvalidDateFormatError as e:
        print(f"Date Format Error: {e}", file=sys.stderr)
        print(
            "\n Tip: Use ISO 8601 format (YYYY-MM-DD) for all dates.", file=sys.stderr
        )
        print("   Example: 2026-01-12", file=sys.stderr)
        sys.exit(1)

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        sys.exit(1)

    except ValueError as e:
        print(f"Validation Error: {e}", file=sys.stderr)
        sys.exit(1)

    except Exception as e:
        print(f"Unexpected Error: {e}", file=sys.stderr)
        import traceback

        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
