"""Local restock and transfer simulation.

Both operations edit the in-memory dataset only. Nothing is sent to the
restock webhook, and the next sheet refresh overwrites the edits.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from motostock._constants import DEFAULT_RESTOCK_DELAY, DEFAULT_TOAST_DURATION, SAFE_STOCK_LEVEL
from motostock.models.notification import Notification, Toast, ToastKind
from motostock.models.stock import StockRecord
from motostock.reference import category_label
from motostock.state.store import DashboardStore

_logger = logging.getLogger(__name__)


def validate_transfer_amount(source: StockRecord, amount: int) -> int:
    """Check a transfer amount before calling :meth:`MutationSimulator.transfer`.

    The simulator itself does not validate; the transfer form does.

    Raises :class:`ValueError` unless ``0 < amount <= source.stock``.
    """
    if amount <= 0:
        raise ValueError(f"transfer amount must be positive, got {amount}")
    if amount > source.stock:
        raise ValueError(
            f"cannot transfer {amount} units of {source.item!r} from {source.city}: only {source.stock} in stock"
        )
    return amount


class MutationSimulator:
    """Optimistic, local-only stock edits with status toasts."""

    def __init__(
        self,
        store: DashboardStore,
        *,
        restock_delay: float = DEFAULT_RESTOCK_DELAY,
        toast_duration: float = DEFAULT_TOAST_DURATION,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._store = store
        self._restock_delay = restock_delay
        self._toast_duration = toast_duration
        self._sleep = sleep
        self._tasks: set[asyncio.Task[Notification]] = set()
        self._toast_timers: set[asyncio.TimerHandle] = set()

    # ------------------------------------------------------------------
    # Toasts
    # ------------------------------------------------------------------

    def show_toast(self, message: str, kind: ToastKind = ToastKind.SUCCESS, *, duration: float | None = None) -> Toast:
        """Show a toast, auto-dismissed after *duration* when an event loop is running."""
        toast = Toast(message=message, kind=kind)
        self._store.show_toast(toast)
        if duration is None:
            return toast
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return toast
        handle: asyncio.TimerHandle

        def _dismiss() -> None:
            self._toast_timers.discard(handle)
            self._store.dismiss_toast(toast.id)

        handle = loop.call_later(duration, _dismiss)
        self._toast_timers.add(handle)
        return toast

    # ------------------------------------------------------------------
    # Restock
    # ------------------------------------------------------------------

    async def restock(self, city: str, category: str, item: str) -> Notification:
        """Simulate a restock of *item* in *city*.

        After the processing delay the matching record's stock becomes
        the safe level and a notification is added.
        """
        self.show_toast(f"AI Agent: Analyzing restock requirements for {item}...", ToastKind.INFO)

        await self._sleep(self._restock_delay)

        notification = Notification(city=city, category=category_label(category), item=item)
        self._store.add_notification(notification)
        self.show_toast(
            f"Restock request approved and initiated for {item}.",
            ToastKind.SUCCESS,
            duration=self._toast_duration,
        )

        def _to_safe_level(record: StockRecord) -> StockRecord:
            if record.city == city and record.item == item:
                return record.model_copy(update={"stock": SAFE_STOCK_LEVEL})
            return record

        changed = self._store.update_records(_to_safe_level)
        if not changed:
            _logger.debug("Restock matched no record for city=%s item=%s", city, item)
        return notification

    def request_restock(self, city: str, category: str, item: str) -> asyncio.Task[Notification]:
        """Start :meth:`restock` in the background and return its task."""
        task = asyncio.get_running_loop().create_task(self.restock(city, category, item))
        self._tasks.add(task)
        task.add_done_callback(self._on_restock_done)
        return task

    def _on_restock_done(self, task: asyncio.Task[Notification]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            _logger.warning("Simulated restock failed", exc_info=exc)

    @property
    def pending_restocks(self) -> int:
        return len(self._tasks)

    # ------------------------------------------------------------------
    # Transfer
    # ------------------------------------------------------------------

    def transfer(self, source_city: str, target_city: str, item: str, amount: int) -> int:
        """Move *amount* units of *item* from one city to another.

        No balance check is made here; see :func:`validate_transfer_amount`.
        Returns the number of records changed.
        """

        def _shift(record: StockRecord) -> StockRecord:
            if record.item != item:
                return record
            if record.city == source_city:
                return record.model_copy(update={"stock": record.stock - amount})
            if record.city == target_city:
                return record.model_copy(update={"stock": record.stock + amount})
            return record

        changed = self._store.update_records(_shift)
        self.show_toast(
            f"Successfully transferred {amount} units of {item} from {source_city} to {target_city}.",
            ToastKind.SUCCESS,
            duration=self._toast_duration,
        )
        return changed

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def close(self) -> None:
        """Cancel toast timers and any restock still waiting on its delay."""
        for handle in list(self._toast_timers):
            handle.cancel()
        self._toast_timers.clear()
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
