"""motostock - async inventory dashboard core for a motorcycle-accessory network."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("motostock")
except PackageNotFoundError:
    __version__ = "0+local"
from motostock.cache import DatasetCache, JsonFileStore, KeyValueStore, MemoryStore
from motostock.client import MotostockClient
from motostock.config import MotostockConfig
from motostock.dashboard import MotostockDashboard
from motostock.exceptions import (
    MotostockCacheError,
    MotostockConfigError,
    MotostockError,
    MotostockParseError,
    MotostockTransportError,
)
from motostock.models import (
    CachedDataset,
    CategoryId,
    CategoryRef,
    CityRef,
    DashboardOverview,
    DashboardSettings,
    Demand,
    InsightReport,
    Notification,
    StockRecord,
    StockStatus,
    Toast,
)
from motostock.scheduler import RefreshScheduler, SchedulerState
from motostock.simulator import MutationSimulator
from motostock.state import DashboardStore

__all__ = [
    "__version__",
    "CachedDataset",
    "CategoryId",
    "CategoryRef",
    "CityRef",
    "DashboardOverview",
    "DashboardSettings",
    "DashboardStore",
    "DatasetCache",
    "Demand",
    "InsightReport",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "MotostockCacheError",
    "MotostockClient",
    "MotostockConfig",
    "MotostockConfigError",
    "MotostockDashboard",
    "MotostockError",
    "MotostockParseError",
    "MotostockTransportError",
    "MutationSimulator",
    "Notification",
    "RefreshScheduler",
    "SchedulerState",
    "StockRecord",
    "StockStatus",
    "Toast",
]
