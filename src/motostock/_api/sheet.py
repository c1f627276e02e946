"""Published stock sheet endpoint.

Fetches the CSV export and normalizes it into stock records.
"""

from __future__ import annotations

import logging
from collections import Counter

from motostock._transport import Transport
from motostock.config import MotostockConfig
from motostock.ingestion.csv_rows import parse_csv_rows
from motostock.ingestion.normalize import normalize_rows
from motostock.models.stock import StockRecord

_logger = logging.getLogger(__name__)


def parse_sheet(text: str) -> list[StockRecord]:
    """Parse CSV sheet text into stock records.

    Raises :class:`~motostock.exceptions.MotostockParseError` on malformed CSV.
    """
    rows = parse_csv_rows(text)
    records = normalize_rows(rows)
    if _logger.isEnabledFor(logging.DEBUG):
        distribution = Counter(record.region or "Unknown" for record in records)
        _logger.debug("Region distribution: %s", dict(distribution))
    return records


async def fetch_stock_records(config: MotostockConfig, transport: Transport) -> list[StockRecord]:
    """Download the sheet and return its normalized records.

    Raises
    ------
    MotostockTransportError
        Network failure or non-2xx response.
    MotostockParseError
        The body is not a usable CSV sheet.
    """
    text = await transport.get_text(config.sheet_url)
    records = parse_sheet(text)
    _logger.debug("Fetched %d stock records from sheet", len(records))
    return records
