"""Swap-loss ledger and worst-performer leaderboard."""

__version__ = "0.1.0"
