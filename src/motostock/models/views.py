"""Derived view models returned by the aggregation engine."""

from __future__ import annotations

from pydantic import Field

from motostock.models._base import CategoryId, MotostockBaseModel
from motostock.models.stock import StockRecord, StockStatus


class CategoryTotal(MotostockBaseModel):
    id: CategoryId
    label: str
    color: str
    value: int


class RegionTotal(MotostockBaseModel):
    name: str
    value: int


class DashboardOverview(MotostockBaseModel):
    """KPI cards, charts and the critical-items table."""

    total_stock: int = 0
    low_stock_count: int = 0
    high_demand_count: int = 0
    stock_by_category: list[CategoryTotal] = Field(default_factory=list)
    stock_by_region: list[RegionTotal] = Field(default_factory=list)
    critical_items: list[StockRecord] = Field(default_factory=list)
    top_critical_items: list[StockRecord] = Field(default_factory=list)


class CityCategoryStock(MotostockBaseModel):
    id: CategoryId
    label: str
    stock: int


class CityMarker(MotostockBaseModel):
    """One map marker; coordinates may be offset to avoid overlaps."""

    name: str
    lat: float
    lng: float
    total_stock: int
    is_critical: bool
    details: list[StockRecord] = Field(default_factory=list)
    category_stats: list[CityCategoryStock] = Field(default_factory=list)


class InventoryRow(MotostockBaseModel):
    record: StockRecord
    status: StockStatus
    bar_percent: float
    """Stock-level bar width, 0-100."""


class InventoryPage(MotostockBaseModel):
    rows: list[InventoryRow] = Field(default_factory=list)
    page: int = 1
    per_page: int = 10
    total_items: int = 0
    total_pages: int = 0
