"""Ingestion layer.

Turns the published stock sheet into canonical stock records.
"""

from motostock.ingestion.csv_rows import parse_csv_rows
from motostock.ingestion.normalize import normalize_row, normalize_rows

__all__ = ["normalize_row", "normalize_rows", "parse_csv_rows"]
