"""In-memory dashboard state container.

This is the only component allowed to hold or replace the dataset.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from datetime import UTC, datetime

from motostock._constants import ALL
from motostock.aggregate import filter_inventory, filter_records
from motostock.models._base import CategoryId, Demand
from motostock.models.insights import InsightReport
from motostock.models.notification import Notification, Toast
from motostock.models.settings import DashboardSettings
from motostock.models.stock import StockRecord, StockStatus
from motostock.state.events import DataSource, StateChange

_logger = logging.getLogger(__name__)

Listener = Callable[[StateChange], None]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class DashboardStore:
    """Holds the current dataset plus all UI-facing state.

    Records are immutable; mutations swap in new record objects. Writes
    are last-write-wins: a refresh that lands after a simulated edit
    replaces it.
    """

    def __init__(
        self,
        *,
        settings: DashboardSettings | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._clock = clock
        self._records: list[StockRecord] = []
        self._source: DataSource | None = None
        self._last_updated: datetime | None = None
        self._loading = True
        self._region: str = ALL
        self._search: str = ""
        self._category: CategoryId | str = ALL
        self._status: StockStatus | str = ALL
        self._demand: Demand | str = ALL
        self._notifications: list[Notification] = []
        self._toast: Toast | None = None
        self._settings = settings or DashboardSettings()
        self._insights: InsightReport | None = None
        self._insights_updated_at: datetime | None = None
        self._listeners: list[Listener] = []

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* after every state change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _emit(self, change: StateChange) -> None:
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception:
                _logger.debug("State listener failed for %s", change, exc_info=True)

    # ------------------------------------------------------------------
    # Dataset
    # ------------------------------------------------------------------

    @property
    def records(self) -> tuple[StockRecord, ...]:
        return tuple(self._records)

    @property
    def source(self) -> DataSource | None:
        return self._source

    @property
    def last_updated(self) -> datetime | None:
        return self._last_updated

    @property
    def has_data(self) -> bool:
        return bool(self._records)

    def replace_records(
        self,
        records: Sequence[StockRecord],
        *,
        source: DataSource,
        updated_at: datetime | None = None,
    ) -> None:
        """Swap in a whole new dataset."""
        self._records = list(records)
        self._source = source
        self._last_updated = updated_at or self._clock()
        self._emit(StateChange.RECORDS)

    def update_records(self, transform: Callable[[StockRecord], StockRecord]) -> int:
        """Apply *transform* to every record; returns how many records changed."""
        changed = 0
        updated: list[StockRecord] = []
        for record in self._records:
            new_record = transform(record)
            if new_record is not record:
                changed += 1
            updated.append(new_record)
        if changed:
            self._records = updated
            self._source = DataSource.SIMULATED
            self._emit(StateChange.RECORDS)
        return changed

    # ------------------------------------------------------------------
    # Loading indicator
    # ------------------------------------------------------------------

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def show_loading_indicator(self) -> bool:
        """Spinner is only shown while loading with nothing to paint."""
        return self._loading and not self._records

    def set_loading(self, loading: bool) -> None:
        if self._loading == loading:
            return
        self._loading = loading
        self._emit(StateChange.LOADING)

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------

    @property
    def region(self) -> str:
        return self._region

    @property
    def search(self) -> str:
        return self._search

    def set_region(self, region: str) -> None:
        self._region = region or ALL
        self._emit(StateChange.FILTERS)

    def set_search(self, search: str) -> None:
        self._search = search or ""
        self._emit(StateChange.FILTERS)

    def set_inventory_filters(
        self,
        *,
        category: CategoryId | str = ALL,
        status: StockStatus | str = ALL,
        demand: Demand | str = ALL,
    ) -> None:
        self._category = category
        self._status = status
        self._demand = demand
        self._emit(StateChange.FILTERS)

    @property
    def inventory_filters(self) -> dict[str, str]:
        return {
            "category": str(self._category),
            "status": str(self._status),
            "demand": str(self._demand),
        }

    def filtered_records(self) -> list[StockRecord]:
        """Records passing the region and search filters."""
        return filter_records(self._records, region=self._region, search=self._search)

    def inventory_records(self) -> list[StockRecord]:
        """Filtered records narrowed further by the inventory filters."""
        return filter_inventory(
            self.filtered_records(),
            category=self._category,
            status=self._status,
            demand=self._demand,
        )

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    @property
    def notifications(self) -> tuple[Notification, ...]:
        """Newest first."""
        return tuple(self._notifications)

    @property
    def unread_count(self) -> int:
        return sum(1 for notification in self._notifications if not notification.read)

    def add_notification(self, notification: Notification) -> None:
        self._notifications.insert(0, notification)
        self._emit(StateChange.NOTIFICATIONS)

    def mark_as_read(self, notification_id: str) -> None:
        self._notifications = [
            n.model_copy(update={"read": True}) if n.id == notification_id else n for n in self._notifications
        ]
        self._emit(StateChange.NOTIFICATIONS)

    def clear_notification(self, notification_id: str) -> None:
        self._notifications = [n for n in self._notifications if n.id != notification_id]
        self._emit(StateChange.NOTIFICATIONS)

    def clear_notifications(self, ids: Iterable[str] | None = None) -> None:
        if ids is None:
            self._notifications = []
        else:
            drop = set(ids)
            self._notifications = [n for n in self._notifications if n.id not in drop]
        self._emit(StateChange.NOTIFICATIONS)

    # ------------------------------------------------------------------
    # Toast
    # ------------------------------------------------------------------

    @property
    def toast(self) -> Toast | None:
        return self._toast

    def show_toast(self, toast: Toast) -> None:
        self._toast = toast
        self._emit(StateChange.TOAST)

    def dismiss_toast(self, toast_id: str | None = None) -> None:
        """Hide the toast; with *toast_id*, only if that toast is still showing."""
        if self._toast is None:
            return
        if toast_id is not None and self._toast.id != toast_id:
            return
        self._toast = None
        self._emit(StateChange.TOAST)

    # ------------------------------------------------------------------
    # Settings and insights
    # ------------------------------------------------------------------

    @property
    def settings(self) -> DashboardSettings:
        return self._settings

    def set_settings(self, settings: DashboardSettings) -> None:
        self._settings = settings
        self._emit(StateChange.SETTINGS)

    @property
    def insights(self) -> InsightReport | None:
        return self._insights

    @property
    def insights_updated_at(self) -> datetime | None:
        return self._insights_updated_at

    def set_insights(self, report: InsightReport) -> None:
        self._insights = report
        self._insights_updated_at = self._clock()
        self._emit(StateChange.INSIGHTS)
