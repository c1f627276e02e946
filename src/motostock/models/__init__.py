"""Data models for the motostock dashboard."""

from motostock.models._base import CategoryId, Demand, MotostockBaseModel
from motostock.models.dataset import CachedDataset
from motostock.models.insights import (
    DecodedInsights,
    InsightMessage,
    InsightReport,
    InsightShape,
    decode_insights,
)
from motostock.models.notification import Notification, Toast, ToastKind
from motostock.models.reference import CategoryRef, CityRef
from motostock.models.settings import DashboardSettings
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

__all__ = [
    "CachedDataset",
    "CategoryId",
    "CategoryRef",
    "CategoryTotal",
    "CityCategoryStock",
    "CityMarker",
    "CityRef",
    "DashboardOverview",
    "DashboardSettings",
    "DecodedInsights",
    "Demand",
    "InsightMessage",
    "InsightReport",
    "InsightShape",
    "InventoryPage",
    "InventoryRow",
    "MotostockBaseModel",
    "Notification",
    "RegionTotal",
    "StockRecord",
    "StockStatus",
    "Toast",
    "ToastKind",
    "decode_insights",
]
