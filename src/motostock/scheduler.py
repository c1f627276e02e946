"""Refresh scheduling.

Startup paints from the cache when possible and refreshes in the
background; without a cache it shows the loading indicator and waits
for a foreground refresh. While auto-refresh is enabled a timer fires a
new background refresh every interval, whether or not earlier refreshes
have finished. Refreshes are fire-and-forget: turning auto-refresh off
stops the timer but lets in-flight refreshes complete and apply.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable, Sequence
from enum import StrEnum

from motostock._constants import DEFAULT_REFRESH_INTERVAL
from motostock.cache import DatasetCache
from motostock.exceptions import MotostockError
from motostock.models.stock import StockRecord
from motostock.state.events import DataSource
from motostock.state.store import DashboardStore

_logger = logging.getLogger(__name__)

FetchRecords = Callable[[], Awaitable[Sequence[StockRecord]]]


class SchedulerState(StrEnum):
    IDLE = "idle"
    REFRESHING = "refreshing"


class RefreshScheduler:
    """Drives sheet refreshes into the store and the cache."""

    def __init__(
        self,
        store: DashboardStore,
        cache: DatasetCache,
        fetch: FetchRecords,
        *,
        auto_refresh: bool = True,
        interval: float = DEFAULT_REFRESH_INTERVAL,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._store = store
        self._cache = cache
        self._fetch = fetch
        self._auto_refresh = auto_refresh
        self._interval = float(interval)
        self._sleep = sleep
        self._timer: asyncio.Task[None] | None = None
        self._in_flight: set[asyncio.Task[bool]] = set()
        self._refreshing = 0

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def state(self) -> SchedulerState:
        return SchedulerState.REFRESHING if self._refreshing else SchedulerState.IDLE

    @property
    def auto_refresh(self) -> bool:
        return self._auto_refresh

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def timer_running(self) -> bool:
        return self._timer is not None and not self._timer.done()

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Load the cache, run the initial refresh and start the timer."""
        cached = self._cache.load()
        if cached is not None and cached.records:
            _logger.debug("Painting %d cached records", len(cached.records))
            self._store.replace_records(cached.records, source=DataSource.CACHE, updated_at=cached.last_updated)
            self._store.set_loading(False)
            self.trigger_refresh()
        else:
            await self.refresh(background=False)

        if self._auto_refresh:
            self._start_timer()

    # ------------------------------------------------------------------
    # Refresh
    # ------------------------------------------------------------------

    async def refresh(self, *, background: bool = True) -> bool:
        """Fetch the sheet once and apply it.

        On success the dataset is replaced and re-cached. On failure the
        current dataset is kept. Returns whether the refresh succeeded.
        """
        if not background:
            self._store.set_loading(True)
        self._refreshing += 1
        try:
            records = await self._fetch()
        except MotostockError as exc:
            _logger.warning("Refresh failed; keeping current data: %s", exc)
            return False
        except Exception:
            _logger.exception("Unexpected error during refresh; keeping current data")
            return False
        finally:
            self._refreshing -= 1
            if not background:
                self._store.set_loading(False)

        self._store.replace_records(records, source=DataSource.SHEET)
        self._store.set_loading(False)
        self._cache.save(records)
        _logger.info("Refreshed stock data: %d records", len(records))
        return True

    def trigger_refresh(self) -> asyncio.Task[bool]:
        """Start a background refresh without waiting for it."""
        task = asyncio.get_running_loop().create_task(self.refresh(background=True))
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        return task

    # ------------------------------------------------------------------
    # Timer
    # ------------------------------------------------------------------

    def _start_timer(self) -> None:
        if self.timer_running:
            return
        self._timer = asyncio.get_running_loop().create_task(self._run_timer())

    async def _run_timer(self) -> None:
        while True:
            await self._sleep(self._interval)
            _logger.debug("Auto-refresh tick (interval=%ss)", self._interval)
            self.trigger_refresh()

    def _stop_timer(self) -> None:
        timer = self._timer
        self._timer = None
        if timer is not None and not timer.done():
            timer.cancel()

    def configure(self, *, auto_refresh: bool, interval: float | None = None) -> None:
        """Apply new auto-refresh settings, restarting the timer if needed.

        In-flight refreshes are left alone.
        """
        if interval is not None:
            if interval <= 0:
                raise ValueError(f"interval must be positive, got {interval}")
            self._interval = float(interval)
        self._auto_refresh = auto_refresh
        self._stop_timer()
        if auto_refresh:
            self._start_timer()

    async def close(self) -> None:
        """Stop the timer and abandon any in-flight refreshes (shutdown only)."""
        timer = self._timer
        self._stop_timer()
        tasks = list(self._in_flight)
        for task in tasks:
            task.cancel()
        if timer is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await timer
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
