"""Dashboard composition root.

Wires the client, cache, store, refresh scheduler and mutation simulator
together and exposes the operations a front end needs.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from motostock._constants import ALL, SETTINGS_TOAST_DURATION
from motostock.aggregate import build_overview, city_markers, inventory_page, transfer_candidates
from motostock.cache import DatasetCache, KeyValueStore, store_for_path
from motostock.client import MotostockClient
from motostock.config import MotostockConfig
from motostock.exceptions import MotostockError
from motostock.models._base import CategoryId, Demand
from motostock.models.insights import InsightReport
from motostock.models.notification import Notification, ToastKind
from motostock.models.settings import DashboardSettings
from motostock.models.stock import StockRecord, StockStatus
from motostock.models.views import CityMarker, DashboardOverview, InventoryPage
from motostock.scheduler import RefreshScheduler
from motostock.simulator import MutationSimulator, validate_transfer_amount
from motostock.state.store import DashboardStore

_logger = logging.getLogger(__name__)


def settings_from_config(config: MotostockConfig) -> DashboardSettings:
    return DashboardSettings(
        auto_refresh=config.auto_refresh,
        refresh_interval=config.refresh_interval,
        notifications=config.notifications_enabled,
        email_alerts=config.email_alerts,
        theme=config.theme,
    )


class MotostockDashboard:
    """The inventory dashboard's application object.

    Usage::

        async with MotostockDashboard(MotostockConfig.from_env()) as dashboard:
            await dashboard.start()
            overview = dashboard.overview()
    """

    def __init__(
        self,
        config: MotostockConfig,
        *,
        client: MotostockClient | None = None,
        kv_store: KeyValueStore | None = None,
    ) -> None:
        self._config = config
        self._client = client or MotostockClient(config)
        self._store = DashboardStore(settings=settings_from_config(config))
        self._cache = DatasetCache(kv_store if kv_store is not None else store_for_path(config.cache_path))
        self._scheduler = RefreshScheduler(
            self._store,
            self._cache,
            self._client.get_stock_records,
            auto_refresh=config.auto_refresh,
            interval=config.refresh_interval,
        )
        self._simulator = MutationSimulator(
            self._store,
            restock_delay=config.restock_delay,
            toast_duration=config.toast_duration,
        )
        self._entered = False

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> MotostockDashboard:
        await self._client.__aenter__()
        self._entered = True
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self._scheduler.close()
        await self._simulator.close()
        await self._client.__aexit__(*exc)
        self._entered = False

    @property
    def store(self) -> DashboardStore:
        return self._store

    @property
    def scheduler(self) -> RefreshScheduler:
        return self._scheduler

    @property
    def cache(self) -> DatasetCache:
        return self._cache

    # ------------------------------------------------------------------
    # Data lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Paint cached data (if any), refresh, and start auto-refresh."""
        if not self._entered:
            raise MotostockError("Dashboard not initialized. Use 'async with MotostockDashboard(...) as dashboard:'")
        await self._scheduler.start()

    async def refresh(self) -> bool:
        """Refresh now and wait for the result."""
        return await self._scheduler.refresh(background=self._store.has_data)

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------

    def set_region(self, region: str) -> None:
        self._store.set_region(region)

    def set_search(self, search: str) -> None:
        self._store.set_search(search)

    def set_inventory_filters(
        self,
        *,
        category: CategoryId | str = ALL,
        status: StockStatus | str = ALL,
        demand: Demand | str = ALL,
    ) -> None:
        self._store.set_inventory_filters(category=category, status=status, demand=demand)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def overview(self) -> DashboardOverview:
        return build_overview(self._store.filtered_records())

    def map_markers(self) -> list[CityMarker]:
        return city_markers(self._store.filtered_records())

    def inventory(self, *, page: int = 1, per_page: int = 10) -> InventoryPage:
        return inventory_page(self._store.inventory_records(), page=page, per_page=per_page)

    def transfer_targets(self, source: StockRecord) -> list[StockRecord]:
        """Candidate cities for a transfer, searched across the unfiltered dataset."""
        return transfer_candidates(self._store.records, source)

    # ------------------------------------------------------------------
    # Simulated mutations
    # ------------------------------------------------------------------

    def restock(self, city: str, category: str, item: str) -> asyncio.Task[Notification]:
        """Request a simulated restock; it completes after the processing delay."""
        return self._simulator.request_restock(city, category, item)

    def transfer(self, source_city: str, target_city: str, item: str, amount: int) -> int:
        """Validate and apply a simulated stock transfer.

        Raises :class:`ValueError` when *amount* exceeds the source stock
        or is not positive.
        """
        source = next(
            (r for r in self._store.records if r.city == source_city and r.item == item),
            None,
        )
        if source is None:
            raise ValueError(f"No stock record for {item!r} in {source_city}")
        validate_transfer_amount(source, amount)
        return self._simulator.transfer(source_city, target_city, item, amount)

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def mark_as_read(self, notification_id: str) -> None:
        self._store.mark_as_read(notification_id)

    def clear_notification(self, notification_id: str) -> None:
        self._store.clear_notification(notification_id)

    # ------------------------------------------------------------------
    # Settings and insights
    # ------------------------------------------------------------------

    def update_settings(self, settings: DashboardSettings) -> None:
        """Apply new operator settings and reschedule auto-refresh."""
        self._store.set_settings(settings)
        self._scheduler.configure(auto_refresh=settings.auto_refresh, interval=settings.refresh_interval)
        self._simulator.show_toast("Settings saved successfully", ToastKind.SUCCESS, duration=SETTINGS_TOAST_DURATION)

    async def refresh_insights(self) -> InsightReport | None:
        """Fetch a new insight report; on failure the previous one is kept."""
        try:
            report = await self._client.get_insights()
        except MotostockError as exc:
            _logger.warning("Failed to fetch insights: %s", exc)
            return None
        self._store.set_insights(report)
        return report
