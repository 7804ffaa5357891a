#!/usr/bin/env python3
"""
Recompute cached leaderboards. Meant to be run on a schedule (cron, systemd timer).
Usage: from project root:
  python scripts/refresh_leaderboards.py            # all periods
  python scripts/refresh_leaderboards.py 24h 7d     # selected periods
  python scripts/refresh_leaderboards.py --replay-pending
"""
import argparse
import logging
import sys

from pumploss.app_context import AppContext
from pumploss.config.logging_config import setup_logging
from pumploss.domain.models import LeaderboardPeriod

logger = logging.getLogger("pumploss.scripts.refresh_leaderboards")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument(
        "periods",
        nargs="*",
        choices=[p.value for p in LeaderboardPeriod],
        help="Periods to refresh (default: all)",
    )
    parser.add_argument(
        "--replay-pending",
        action="store_true",
        help="Re-apply logged trades missing from the ledger before refreshing",
    )
    args = parser.parse_args(argv)

    context = AppContext()
    context.initialize()
    setup_logging()
    try:
        if args.replay_pending:
            summary = context.engine.replay_pending_trades()
            print(f"Replayed {summary.received} pending trades: {summary.applied} applied, {summary.errors} errors")

        periods = [LeaderboardPeriod(p) for p in args.periods] or list(LeaderboardPeriod)
        for period in periods:
            record = context.leaderboard.refresh(period)
            print(f"{period.value}: {len(record.entries)} wallets")
    finally:
        context.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
