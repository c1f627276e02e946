"""Header-row CSV parsing for the published stock sheet."""

from __future__ import annotations

import csv
import io
from typing import Any

from motostock.exceptions import MotostockParseError
from motostock.ingestion.normalize import COL_CATEGORY, COL_CITY

_REQUIRED_COLUMNS: frozenset[str] = frozenset({COL_CITY, COL_CATEGORY})


def parse_csv_rows(text: str) -> list[dict[str, Any]]:
    """Parse CSV *text* into one dict per data row, keyed by header.

    Header cells are trimmed and a UTF-8 BOM is ignored. Blank lines are
    skipped; short rows leave their missing columns as ``None``.

    Raises
    ------
    MotostockParseError
        If the text is not valid CSV or lacks the City/Category columns.
    """
    if text.startswith("\ufeff"):
        text = text[1:]
    reader = csv.reader(io.StringIO(text, newline=""))
    try:
        header = next(reader, None)
        if header is None:
            raise MotostockParseError("CSV is empty")
        columns = [cell.strip() for cell in header]
        missing = _REQUIRED_COLUMNS - set(columns)
        if missing:
            raise MotostockParseError(f"CSV header is missing columns: {sorted(missing)}")

        rows: list[dict[str, Any]] = []
        for cells in reader:
            if not cells or all(not cell.strip() for cell in cells):
                continue
            row: dict[str, Any] = dict.fromkeys(columns)
            for column, cell in zip(columns, cells, strict=False):
                row[column] = cell
            rows.append(row)
    except csv.Error as exc:
        raise MotostockParseError(f"Malformed CSV at line {reader.line_num}: {exc}") from exc
    return rows
