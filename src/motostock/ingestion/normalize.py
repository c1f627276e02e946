"""Normalization helpers.

Centralizes lenient scalar parsing and turns loosely-structured sheet rows
into canonical :class:`~motostock.models.stock.StockRecord` objects.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable, Mapping
from typing import Any

from motostock._constants import FALLBACK_LAT, FALLBACK_LNG
from motostock.models._base import CategoryId, Demand
from motostock.models.stock import StockRecord
from motostock.reference import lookup_category, lookup_city

_logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

# Sheet column headers.
COL_CITY = "City"
COL_REGION = "Region"
COL_CATEGORY = "Category"
COL_ITEM = "Accessory Name"
COL_STOCK = "Stock"
COL_DEMAND = "Demand"


def safe_float(value: Any) -> float | None:
    if value is None or value == "" or value == "--":
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result) or math.isinf(result):
        return None
    return result


def safe_int(value: Any) -> int | None:
    """Parse the leading integer of *value*.

    Spreadsheet cells come through as text, so ``"15 units"`` yields ``15``
    and ``"12.7"`` yields ``12``. Anything without leading digits is ``None``.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        parsed = safe_float(value)
        return None if parsed is None else int(parsed)
    match = _LEADING_INT.match(str(value))
    if match is None:
        return None
    return int(match.group(1))


def safe_str(value: Any) -> str | None:
    """Return the trimmed text of *value*, or ``None`` when blank."""
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def non_negative_or_zero(value: Any) -> int:
    parsed = safe_int(value)
    if parsed is None:
        return 0
    return 0 if parsed < 0 else parsed


def normalize_category(value: Any) -> CategoryId:
    """Resolve a category label to its id, defaulting to maintenance."""
    category = lookup_category(safe_str(value))
    if category is None:
        return CategoryId.MAINTENANCE
    return category.id


def normalize_demand(value: Any) -> Demand:
    # Exact match only; "high" or " High" are normal demand.
    return Demand.HIGH if value == Demand.HIGH.value else Demand.NORMAL


def normalize_row(row: Mapping[str, Any], index: int) -> StockRecord | None:
    """Convert one raw sheet row into a stock record.

    Returns ``None`` for rows without a city or category; those rows are
    filtered out rather than reported.
    """
    city = safe_str(row.get(COL_CITY))
    category_label = safe_str(row.get(COL_CATEGORY))
    if city is None or category_label is None:
        return None

    region = safe_str(row.get(COL_REGION))
    city_ref = lookup_city(city)
    if city_ref is None:
        _logger.debug("City %r not in reference table; using fallback coordinates", city)
        lat, lng = FALLBACK_LAT, FALLBACK_LNG
    else:
        lat, lng = city_ref.lat, city_ref.lng
        if region is None:
            region = city_ref.region

    item = row.get(COL_ITEM)

    return StockRecord(
        id=index,
        city=city,
        region=region,
        lat=lat,
        lng=lng,
        category=normalize_category(category_label),
        item="" if item is None else str(item),
        stock=non_negative_or_zero(row.get(COL_STOCK)),
        demand=normalize_demand(row.get(COL_DEMAND)),
    )


def normalize_rows(rows: Iterable[Mapping[str, Any]]) -> list[StockRecord]:
    """Normalize rows in source order; ``id`` is the source row index."""
    records: list[StockRecord] = []
    skipped = 0
    for index, row in enumerate(rows):
        record = normalize_row(row, index)
        if record is None:
            skipped += 1
            continue
        records.append(record)
    if skipped:
        _logger.debug("Skipped %d rows without city or category", skipped)
    return records
