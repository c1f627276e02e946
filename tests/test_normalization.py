from __future__ import annotations

import pytest

from motostock._constants import FALLBACK_LAT, FALLBACK_LNG
from motostock.exceptions import MotostockParseError
from motostock.ingestion.csv_rows import parse_csv_rows
from motostock.ingestion.normalize import normalize_row, normalize_rows, safe_int
from motostock.models import CategoryId, Demand
from motostock.reference import CITIES, lookup_category, lookup_city


def test_mumbai_safety_row_normalizes_to_canonical_record() -> None:
    record = normalize_row({"City": "Mumbai", "Category": "Safety", "Stock": "15", "Demand": "High"}, 0)

    assert record is not None
    assert record.city == "Mumbai"
    assert record.region == "West India"
    assert record.lat == 19.0760
    assert record.lng == 72.8777
    assert record.category == CategoryId.SAFETY
    assert record.stock == 15
    assert record.demand == Demand.HIGH


@pytest.mark.parametrize(
    "row",
    [
        {"Category": "Safety", "Stock": "10"},
        {"City": "Pune", "Stock": "10"},
        {"City": "", "Category": "Safety"},
        {"City": "Pune", "Category": "   "},
        {"City": None, "Category": "Tech"},
    ],
)
def test_rows_missing_city_or_category_are_dropped(row: dict[str, str | None]) -> None:
    assert normalize_row(row, 0) is None
    assert normalize_rows([row]) == []


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("Safety", CategoryId.SAFETY),
        ("ENGINE", CategoryId.ENGINE),
        ("  tech ", CategoryId.TECH),
        ("comfort", CategoryId.COMFORT),
        ("maint.", CategoryId.MAINTENANCE),
        ("Lighting", CategoryId.MAINTENANCE),
        ("Maintenance", CategoryId.MAINTENANCE),
    ],
)
def test_category_resolves_case_insensitively_with_maintenance_default(label: str, expected: CategoryId) -> None:
    record = normalize_row({"City": "Pune", "Category": label}, 0)
    assert record is not None
    assert record.category == expected


def test_unknown_city_uses_fallback_centroid_and_keeps_given_region() -> None:
    with_region = normalize_row({"City": "Atlantis", "Region": "Lost India", "Category": "Tech"}, 3)
    without_region = normalize_row({"City": "Atlantis", "Category": "Tech"}, 4)

    assert with_region is not None and without_region is not None
    assert (with_region.lat, with_region.lng) == (FALLBACK_LAT, FALLBACK_LNG)
    assert (FALLBACK_LAT, FALLBACK_LNG) == (20.5937, 78.9629)
    assert with_region.region == "Lost India"
    assert without_region.region is None


def test_row_region_wins_over_reference_region() -> None:
    record = normalize_row({"City": "Pune", "Region": "Custom", "Category": "Tech"}, 0)
    assert record is not None
    assert record.region == "Custom"
    assert record.lat == 18.5204


def test_city_and_category_whitespace_is_trimmed() -> None:
    record = normalize_row({"City": "  Chennai ", "Category": " Engine ", "Stock": "7"}, 0)
    assert record is not None
    assert record.city == "Chennai"
    assert record.region == "South India"
    assert record.category == CategoryId.ENGINE


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("42", 42),
        (" 42", 42),
        ("12.7", 12),
        ("15 units", 15),
        ("abc", 0),
        ("", 0),
        (None, 0),
        ("-5", 0),
    ],
)
def test_stock_parses_leading_integer_and_defaults_to_zero(raw: str | None, expected: int) -> None:
    record = normalize_row({"City": "Pune", "Category": "Tech", "Stock": raw}, 0)
    assert record is not None
    assert record.stock == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("High", Demand.HIGH), ("high", Demand.NORMAL), ("Low", Demand.NORMAL), (None, Demand.NORMAL)],
)
def test_demand_is_high_only_on_exact_match(raw: str | None, expected: Demand) -> None:
    record = normalize_row({"City": "Pune", "Category": "Tech", "Demand": raw}, 0)
    assert record is not None
    assert record.demand == expected


def test_ids_follow_source_row_index_including_skipped_rows() -> None:
    rows = [
        {"City": "Pune", "Category": "Tech"},
        {"City": "", "Category": "Tech"},
        {"City": "Goa", "Category": "Safety"},
    ]

    records = normalize_rows(rows)

    assert [r.id for r in records] == [0, 2]
    assert [r.city for r in records] == ["Pune", "Goa"]


def test_missing_accessory_name_becomes_empty_string() -> None:
    record = normalize_row({"City": "Pune", "Category": "Tech"}, 0)
    assert record is not None
    assert record.item == ""


def test_safe_int_handles_numbers_and_bools() -> None:
    assert safe_int(3) == 3
    assert safe_int(3.9) == 3
    assert safe_int(float("nan")) is None
    assert safe_int(True) is None


# ---------------------------------------------------------------------------
# CSV parsing
# ---------------------------------------------------------------------------


def test_parse_csv_rows_uses_header_row_and_skips_blank_lines() -> None:
    text = (
        "\ufeffCity,Region,Category,Accessory Name,Stock,Demand\r\n"
        "Mumbai,West India,Safety,Rain Suit,15,High\r\n"
        "\r\n"
        'Pune,,Engine,"Oil, Synthetic",80,Normal\r\n'
        "Goa,,Tech\r\n"
    )

    rows = parse_csv_rows(text)

    assert len(rows) == 3
    assert rows[0]["City"] == "Mumbai"
    assert rows[1]["Accessory Name"] == "Oil, Synthetic"
    assert rows[2]["Stock"] is None


def test_parse_csv_rows_trims_header_cells() -> None:
    rows = parse_csv_rows(" City , Category \nPune,Tech\n")
    assert rows == [{"City": "Pune", "Category": "Tech"}]


def test_parse_csv_rows_rejects_sheet_without_required_columns() -> None:
    with pytest.raises(MotostockParseError):
        parse_csv_rows("<html><body>Sign in</body></html>")


def test_parse_csv_rows_rejects_empty_text() -> None:
    with pytest.raises(MotostockParseError):
        parse_csv_rows("")


# ---------------------------------------------------------------------------
# Reference tables
# ---------------------------------------------------------------------------


def test_city_table_has_unique_names() -> None:
    names = [city.name for city in CITIES]
    assert len(names) == len(set(names))


def test_city_lookup_is_exact_after_trim() -> None:
    assert lookup_city(" Pune ") is not None
    assert lookup_city("pune") is None
    assert lookup_city(None) is None


def test_category_lookup_by_label() -> None:
    category = lookup_category("SAFETY")
    assert category is not None
    assert category.id == CategoryId.SAFETY
    assert category.color == "#005696"
