"""CSV import/export utilities."""

from pumploss.csv.importer import CsvImporter, CSV_COLUMNS
from pumploss.csv.exporter import CsvExporter

__all__ = [
    "CsvImporter",
    "CsvExporter",
    "CSV_COLUMNS",
]
