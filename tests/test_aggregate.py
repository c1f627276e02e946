from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from motostock import aggregate
from motostock.models import CategoryId, Demand, StockRecord, StockStatus


def _record(
    record_id: int,
    city: str,
    stock: int,
    *,
    region: str | None = "West India",
    category: CategoryId = CategoryId.SAFETY,
    item: str = "Rain Suit",
    demand: Demand = Demand.NORMAL,
    lat: float = 19.0760,
    lng: float = 72.8777,
) -> StockRecord:
    return StockRecord(
        id=record_id,
        city=city,
        region=region,
        lat=lat,
        lng=lng,
        category=category,
        item=item,
        stock=stock,
        demand=demand,
    )


@pytest.fixture
def records() -> list[StockRecord]:
    return [
        _record(0, "Mumbai", 15, demand=Demand.HIGH),
        _record(1, "Pune", 60, category=CategoryId.ENGINE, item="Oil"),
        _record(2, "Chennai", 5, region="South India", category=CategoryId.TECH, item="Phone Mount"),
        _record(3, "Atlantis", 200, region=None, category=CategoryId.COMFORT, item="Seat Cover"),
        _record(4, "Navi Mumbai", 29, category=CategoryId.SAFETY, item="Gloves", demand=Demand.HIGH),
    ]


@pytest.mark.parametrize(
    ("stock", "expected"),
    [
        (0, StockStatus.LOW_STOCK),
        (29, StockStatus.LOW_STOCK),
        (30, StockStatus.OPTIMAL),
        (150, StockStatus.OPTIMAL),
        (151, StockStatus.SURPLUS),
    ],
)
def test_stock_band_boundaries(stock: int, expected: StockStatus) -> None:
    assert StockStatus.for_stock(stock) == expected


def test_stock_record_rejects_negative_stock() -> None:
    with pytest.raises(ValidationError):
        StockRecord(id=0, city="Pune", lat=18.5, lng=73.8, stock=-1)


def test_region_and_search_filters_combine(records: list[StockRecord]) -> None:
    west = aggregate.filter_records(records, region="West India")
    assert [r.city for r in west] == ["Mumbai", "Pune", "Navi Mumbai"]

    mumbai = aggregate.filter_records(records, region="West India", search="MUMBAI")
    assert [r.city for r in mumbai] == ["Mumbai", "Navi Mumbai"]

    assert aggregate.filter_records(records) == records


def test_region_filter_never_matches_records_without_region(records: list[StockRecord]) -> None:
    assert all(r.region is not None for r in aggregate.filter_records(records, region="West India"))


def test_inventory_filters_are_anded(records: list[StockRecord]) -> None:
    low = aggregate.filter_inventory(records, status=StockStatus.LOW_STOCK)
    assert [r.id for r in low] == [0, 2, 4]

    low_high_safety = aggregate.filter_inventory(
        records, category=CategoryId.SAFETY, status="Low Stock", demand=Demand.HIGH
    )
    assert [r.id for r in low_high_safety] == [0, 4]

    surplus = aggregate.filter_inventory(records, status=StockStatus.SURPLUS)
    assert [r.city for r in surplus] == ["Atlantis"]

    assert aggregate.filter_inventory(records, category="tech") == [records[2]]


def test_overview_aggregates(records: list[StockRecord]) -> None:
    overview = aggregate.build_overview(records)

    assert overview.total_stock == 15 + 60 + 5 + 200 + 29
    assert overview.low_stock_count == 3
    assert overview.high_demand_count == 2
    assert [r.stock for r in overview.critical_items] == [5, 15, 29]
    assert overview.top_critical_items == overview.critical_items


def test_stock_by_category_covers_all_categories_sorted_desc(records: list[StockRecord]) -> None:
    totals = aggregate.stock_by_category(records)

    assert [t.id for t in totals] == [
        CategoryId.COMFORT,
        CategoryId.ENGINE,
        CategoryId.SAFETY,
        CategoryId.TECH,
        CategoryId.MAINTENANCE,
    ]
    assert {t.id: t.value for t in totals}[CategoryId.SAFETY] == 44
    assert totals[-1].value == 0


def test_stock_by_region_excludes_missing_region(records: list[StockRecord]) -> None:
    totals = aggregate.stock_by_region(records)
    assert [(t.name, t.value) for t in totals] == [("West India", 104), ("South India", 5)]


def test_top_critical_items_capped_at_five() -> None:
    records = [_record(i, f"City{i}", i) for i in range(8)]
    overview = aggregate.build_overview(records)
    assert len(overview.critical_items) == 8
    assert [r.stock for r in overview.top_critical_items] == [0, 1, 2, 3, 4]


def test_aggregation_is_idempotent(records: list[StockRecord]) -> None:
    assert aggregate.build_overview(records) == aggregate.build_overview(records)
    assert aggregate.city_markers(records) == aggregate.city_markers(records)


def test_city_markers_skip_unknown_cities_and_flag_critical(records: list[StockRecord]) -> None:
    markers = aggregate.city_markers(records)

    names = [m.name for m in markers]
    assert "Atlantis" not in names
    assert "Navi Mumbai" not in names
    mumbai = next(m for m in markers if m.name == "Mumbai")
    pune = next(m for m in markers if m.name == "Pune")
    assert mumbai.is_critical is True
    assert pune.is_critical is False
    assert pune.total_stock == 60
    assert [(s.id, s.stock) for s in pune.category_stats] == [(CategoryId.ENGINE, 60)]


def test_city_markers_spread_overlapping_cities() -> None:
    records = [
        _record(0, "Bangalore", 40, region="South India"),
        _record(1, "Bengaluru", 40, region="South India"),
    ]

    first, second = aggregate.city_markers(records)

    assert first.lat == pytest.approx(12.9716 + 0.15)
    assert first.lng == pytest.approx(77.5946)
    assert second.lat == pytest.approx(12.9716 + math.cos(math.pi) * 0.15)
    assert second.lng == pytest.approx(77.5946 + math.sin(math.pi) * 0.15)


def test_inventory_page_slices_and_reports_totals() -> None:
    records = [_record(i, f"City{i}", i * 10) for i in range(23)]

    page = aggregate.inventory_page(records, page=3, per_page=10)

    assert page.total_items == 23
    assert page.total_pages == 3
    assert [row.record.id for row in page.rows] == [20, 21, 22]
    assert page.rows[0].status == StockStatus.SURPLUS
    assert page.rows[0].bar_percent == 100.0


def test_stock_bar_percent() -> None:
    assert aggregate.stock_bar_percent(50) == 25.0
    assert aggregate.stock_bar_percent(400) == 100.0


def test_transfer_candidates_same_region_same_item(records: list[StockRecord]) -> None:
    source = records[0]
    extra = _record(9, "Goa", 80)
    candidates = aggregate.transfer_candidates([*records, extra], source)
    assert [r.city for r in candidates] == ["Goa"]


def test_transfer_candidates_empty_without_region(records: list[StockRecord]) -> None:
    assert aggregate.transfer_candidates(records, records[3]) == []
