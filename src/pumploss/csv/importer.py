"""CSV backfill of already-classified trades."""

import csv
import logging
from pathlib import Path
from typing import Iterable

from pumploss.core.exceptions import AppError, ValidationError
from pumploss.domain.views import ImportSummary
from pumploss.services.ingestion_service import IngestionService

logger = logging.getLogger(__name__)


# Expected CSV columns
CSV_COLUMNS = [
    "signature",
    "block_time",
    "trader_address",
    "asset_id",
    "direction",
    "asset_amount",
    "quote_amount",
]


class CsvImporter:
    """
    CSV importer for trade backfill.

    Expected format: signature, block_time, trader_address, asset_id, direction, asset_amount, quote_amount
    block_time is epoch seconds or ISO-8601 (UTC if no offset); direction is BUY or SELL.
    Rows go through the same apply path as live trades, so re-importing a
    file only counts duplicates.
    """

    def __init__(self, ingestion_service: IngestionService):
        self._ingestion = ingestion_service

    def import_csv(self, path: str) -> ImportSummary:
        """Import trades from a CSV file."""
        file_path = Path(path)
        if not file_path.exists():
            raise ValidationError(f"File not found: {path}")

        with open(file_path, newline="", encoding="utf-8") as csvfile:
            reader = csv.DictReader(csvfile)

            # Validate columns
            if reader.fieldnames:
                missing = set(CSV_COLUMNS) - set(reader.fieldnames)
                if missing:
                    raise ValidationError(f"Missing required columns: {sorted(missing)}")

            summary = self.import_rows(reader)

        logger.info(
            "Imported %s: %d new, %d duplicates, %d errors",
            file_path.name,
            summary.imported_count,
            summary.duplicate_count,
            summary.error_count,
        )
        return summary

    def import_rows(self, rows: Iterable[dict[str, str]]) -> ImportSummary:
        summary = ImportSummary()
        for row_num, row in enumerate(rows, start=2):  # Start at 2 (header is row 1)
            try:
                result = self._ingestion.ingest_classified(
                    signature=(row.get("signature") or "").strip(),
                    block_time=(row.get("block_time") or "").strip(),
                    trader_address=(row.get("trader_address") or "").strip(),
                    asset_id=(row.get("asset_id") or "").strip(),
                    direction=(row.get("direction") or "").strip(),
                    asset_amount=(row.get("asset_amount") or "").strip(),
                    quote_amount=(row.get("quote_amount") or "").strip(),
                )
            except AppError as e:
                summary.error_count += 1
                summary.errors.append(f"Row {row_num}: {e.message}")
                continue

            if result.is_duplicate:
                summary.duplicate_count += 1
            else:
                summary.imported_count += 1
        return summary
