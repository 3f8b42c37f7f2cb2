"""Utility modules for ScrapeVision."""

from .csv_export import to_csv, export_to_csv, format_confidence, table_rows, CSV_FILENAME, CSV_MIME_TYPE

__all__ = [
    "to_csv",
    "export_to_csv",
    "format_confidence",
    "table_rows",
    "CSV_FILENAME",
    "CSV_MIME_TYPE",
]
