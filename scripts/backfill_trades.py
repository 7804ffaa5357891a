#!/usr/bin/env python3
"""
Backfill already-classified trades from CSV, or export the Trade Log.
Usage: from project root:
  python scripts/backfill_trades.py trades.csv
  python scripts/backfill_trades.py --export exports/trades.csv
Columns: signature, block_time, trader_address, asset_id, direction, asset_amount, quote_amount
"""
import argparse
import sys

from pumploss.app_context import AppContext
from pumploss.config.logging_config import setup_logging
from pumploss.core.exceptions import AppError


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("csv_path", nargs="?", help="CSV file to import")
    group.add_argument("--export", metavar="PATH", help="Write the Trade Log to PATH")
    parser.add_argument(
        "--no-refresh",
        action="store_true",
        help="Skip leaderboard refresh after importing",
    )
    args = parser.parse_args(argv)

    context = AppContext()
    context.initialize()
    setup_logging()
    try:
        if args.export:
            count = context.csv_exporter.export_csv(args.export)
            print(f"Exported {count} trades to {args.export}")
            return 0

        try:
            summary = context.csv_importer.import_csv(args.csv_path)
        except AppError as e:
            print(f"Import failed: {e.message}", file=sys.stderr)
            return 1

        print(
            f"Imported {summary.imported_count}, "
            f"duplicates {summary.duplicate_count}, errors {summary.error_count}"
        )
        for error in summary.errors:
            print(f"  {error}", file=sys.stderr)

        if summary.imported_count and not args.no_refresh:
            context.leaderboard.refresh_all()
        return 1 if summary.error_count else 0
    finally:
        context.close()


if __name__ == "__main__":
    sys.exit(main())
