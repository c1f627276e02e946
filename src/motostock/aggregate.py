"""Filter and aggregation engine.

Pure functions over a sequence of stock records. Every view is rebuilt
from scratch on each call; nothing here keeps state or memoizes, so
calling a function twice with the same input gives equal results.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence

from motostock._constants import (
    ALL,
    LOW_STOCK_THRESHOLD,
    MARKER_OVERLAP_OFFSET,
    STOCK_BAR_SCALE,
    TOP_CRITICAL_COUNT,
)
from motostock.models._base import CategoryId, Demand
from motostock.models.stock import StockRecord, StockStatus
from motostock.models.views import (
    CategoryTotal,
    CityCategoryStock,
    CityMarker,
    DashboardOverview,
    InventoryPage,
    InventoryRow,
    RegionTotal,
)
from motostock.reference import CATEGORIES, lookup_city

_logger = logging.getLogger(__name__)

# ------------------------------------------------------------------
# Filters
# ------------------------------------------------------------------


def filter_records(
    records: Iterable[StockRecord],
    *,
    region: str = ALL,
    search: str = "",
) -> list[StockRecord]:
    """Region and city-search filter applied to every view.

    A record passes when its region equals *region* (or *region* is
    ``"All"``) and its city contains *search*, ignoring case.
    """
    needle = search.lower()
    return [
        record
        for record in records
        if (region == ALL or record.region == region) and needle in record.city.lower()
    ]


def filter_inventory(
    records: Iterable[StockRecord],
    *,
    category: CategoryId | str = ALL,
    status: StockStatus | str = ALL,
    demand: Demand | str = ALL,
) -> list[StockRecord]:
    """Inventory-table filters, combined with AND. ``"All"`` passes everything."""
    result: list[StockRecord] = []
    for record in records:
        if category != ALL and record.category != category:
            continue
        if status != ALL and record.status != status:
            continue
        if demand != ALL and record.demand != demand:
            continue
        result.append(record)
    return result


# ------------------------------------------------------------------
# Aggregates
# ------------------------------------------------------------------


def total_stock(records: Iterable[StockRecord]) -> int:
    return sum(record.stock for record in records)


def low_stock_count(records: Iterable[StockRecord]) -> int:
    return sum(1 for record in records if record.stock < LOW_STOCK_THRESHOLD)


def high_demand_count(records: Iterable[StockRecord]) -> int:
    return sum(1 for record in records if record.demand == Demand.HIGH)


def stock_by_category(records: Sequence[StockRecord]) -> list[CategoryTotal]:
    """Totals for every category, largest first; ties keep taxonomy order."""
    totals = [
        CategoryTotal(
            id=category.id,
            label=category.label,
            color=category.color,
            value=total_stock(r for r in records if r.category == category.id),
        )
        for category in CATEGORIES
    ]
    return sorted(totals, key=lambda total: total.value, reverse=True)


def stock_by_region(records: Iterable[StockRecord]) -> list[RegionTotal]:
    """Totals per region in first-seen order. Records without a region are left out."""
    totals: dict[str, int] = {}
    for record in records:
        if record.region:
            totals[record.region] = totals.get(record.region, 0) + record.stock
    return [RegionTotal(name=name, value=value) for name, value in totals.items()]


def critical_items(records: Iterable[StockRecord]) -> list[StockRecord]:
    """Records below the low-stock threshold, lowest stock first."""
    return sorted(
        (record for record in records if record.stock < LOW_STOCK_THRESHOLD),
        key=lambda record: record.stock,
    )


def build_overview(records: Sequence[StockRecord]) -> DashboardOverview:
    critical = critical_items(records)
    return DashboardOverview(
        total_stock=total_stock(records),
        low_stock_count=len(critical),
        high_demand_count=high_demand_count(records),
        stock_by_category=stock_by_category(records),
        stock_by_region=stock_by_region(records),
        critical_items=critical,
        top_critical_items=critical[:TOP_CRITICAL_COUNT],
    )


# ------------------------------------------------------------------
# Map
# ------------------------------------------------------------------


def _location_key(lat: float, lng: float) -> str:
    return f"{lat:.2f},{lng:.2f}"


def city_markers(records: Sequence[StockRecord]) -> list[CityMarker]:
    """One marker per known city, spreading markers that share a location.

    Cities missing from the reference table are not placed on the map.
    """
    city_names = list(dict.fromkeys(record.city for record in records))

    markers: list[CityMarker] = []
    for name in city_names:
        city_ref = lookup_city(name)
        if city_ref is None:
            _logger.debug("City %r has no coordinates; skipping map placement", name)
            continue
        details = [record for record in records if record.city == name]
        category_stats = [
            CityCategoryStock(id=category.id, label=category.label, stock=stock)
            for category in CATEGORIES
            if (stock := total_stock(r for r in details if r.category == category.id)) > 0
        ]
        markers.append(
            CityMarker(
                name=name,
                lat=city_ref.lat,
                lng=city_ref.lng,
                total_stock=total_stock(details),
                is_critical=any(record.is_critical for record in details),
                details=details,
                category_stats=category_stats,
            )
        )

    groups: dict[str, list[int]] = {}
    for index, marker in enumerate(markers):
        groups.setdefault(_location_key(marker.lat, marker.lng), []).append(index)

    spread: list[CityMarker] = []
    for index, marker in enumerate(markers):
        group = groups[_location_key(marker.lat, marker.lng)]
        if len(group) < 2:
            spread.append(marker)
            continue
        angle = (group.index(index) / len(group)) * math.pi * 2
        spread.append(
            marker.model_copy(
                update={
                    "lat": marker.lat + math.cos(angle) * MARKER_OVERLAP_OFFSET,
                    "lng": marker.lng + math.sin(angle) * MARKER_OVERLAP_OFFSET,
                }
            )
        )
    return spread


# ------------------------------------------------------------------
# Inventory table
# ------------------------------------------------------------------


def stock_bar_percent(stock: int) -> float:
    return min(100.0, (stock / STOCK_BAR_SCALE) * 100)


def inventory_page(records: Sequence[StockRecord], *, page: int = 1, per_page: int = 10) -> InventoryPage:
    """Slice *records* into a 1-based page of inventory rows."""
    if per_page < 1:
        raise ValueError(f"per_page must be >= 1, got {per_page}")
    total_pages = math.ceil(len(records) / per_page)
    page = max(1, page)
    start = (page - 1) * per_page
    rows = [
        InventoryRow(record=record, status=record.status, bar_percent=stock_bar_percent(record.stock))
        for record in records[start : start + per_page]
    ]
    return InventoryPage(
        rows=rows,
        page=page,
        per_page=per_page,
        total_items=len(records),
        total_pages=total_pages,
    )


def transfer_candidates(records: Iterable[StockRecord], source: StockRecord) -> list[StockRecord]:
    """Other cities in the source's region that carry the same item."""
    if not source.region:
        return []
    return [
        record
        for record in records
        if record.region == source.region and record.city != source.city and record.item == source.item
    ]
