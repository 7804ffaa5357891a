"""CSV export of the Trade Log."""

import csv
from pathlib import Path
from typing import Callable

from pumploss.csv.importer import CSV_COLUMNS
from pumploss.repositories.protocols import UnitOfWork


class CsvExporter:
    """
    CSV exporter for the Trade Log.

    Writes the importer's column layout, oldest trade first, so an export
    can be replayed into an empty database.
    """

    def __init__(self, uow_factory: Callable[[], UnitOfWork]):
        self._uow_factory = uow_factory

    def export_csv(self, path: str) -> int:
        """Export every trade to a CSV file; returns the row count."""
        with self._uow_factory() as uow:
            trades = uow.trades.list_all()

        file_path = Path(path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        with open(file_path, "w", newline="", encoding="utf-8") as csvfile:
            writer = csv.DictWriter(csvfile, fieldnames=CSV_COLUMNS)
            writer.writeheader()

            for trade in trades:
                writer.writerow({
                    "signature": trade.signature,
                    "block_time": trade.block_time,
                    "trader_address": trade.trader_address,
                    "asset_id": trade.asset_id,
                    "direction": trade.direction.value,
                    "asset_amount": str(trade.asset_amount),
                    "quote_amount": str(trade.quote_amount),
                })

        return len(trades)
