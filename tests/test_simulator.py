from __future__ import annotations

import asyncio

import pytest

from motostock.ingestion.normalize import normalize_rows
from motostock.models import StockRecord, ToastKind
from motostock.simulator import MutationSimulator, validate_transfer_amount
from motostock.state import DashboardStore, DataSource


def _store() -> DashboardStore:
    store = DashboardStore()
    store.replace_records(
        normalize_rows(
            [
                {"City": "Mumbai", "Category": "Safety", "Accessory Name": "Rain Suit", "Stock": "12"},
                {"City": "Pune", "Category": "Safety", "Accessory Name": "Rain Suit", "Stock": "60"},
                {"City": "Goa", "Category": "Safety", "Accessory Name": "Rain Suit", "Stock": "10"},
                {"City": "Mumbai", "Category": "Engine", "Accessory Name": "Oil", "Stock": "5"},
            ]
        ),
        source=DataSource.SHEET,
    )
    return store


def _stock(store: DashboardStore, city: str, item: str) -> int:
    return next(r.stock for r in store.records if r.city == city and r.item == item)


@pytest.mark.asyncio
async def test_restock_sets_safe_level_after_delay() -> None:
    store = _store()
    delays: list[float] = []

    async def fake_sleep(seconds: float) -> None:
        delays.append(seconds)
        assert _stock(store, "Mumbai", "Rain Suit") == 12
        assert store.toast is not None and store.toast.kind == ToastKind.INFO

    simulator = MutationSimulator(store, restock_delay=2.0, sleep=fake_sleep)

    notification = await simulator.restock("Mumbai", "safety", "Rain Suit")

    assert delays == [2.0]
    assert _stock(store, "Mumbai", "Rain Suit") == 50
    assert _stock(store, "Pune", "Rain Suit") == 60
    assert _stock(store, "Mumbai", "Oil") == 5
    assert notification.category == "Safety"
    assert store.notifications == (notification,)
    assert store.unread_count == 1
    assert store.toast is not None and store.toast.kind == ToastKind.SUCCESS
    assert store.source == DataSource.SIMULATED
    await simulator.close()


@pytest.mark.asyncio
async def test_restock_lowers_stock_above_safe_level_too() -> None:
    store = _store()
    simulator = MutationSimulator(store, restock_delay=0)

    await simulator.restock("Pune", "safety", "Rain Suit")

    assert _stock(store, "Pune", "Rain Suit") == 50
    await simulator.close()


@pytest.mark.asyncio
async def test_restock_unknown_category_keeps_raw_id_as_label() -> None:
    store = _store()
    simulator = MutationSimulator(store, restock_delay=0)

    notification = await simulator.restock("Mumbai", "widgets", "Rain Suit")

    assert notification.category == "widgets"
    await simulator.close()


@pytest.mark.asyncio
async def test_request_restock_runs_in_background() -> None:
    store = _store()
    simulator = MutationSimulator(store, restock_delay=0.01)

    task = simulator.request_restock("Goa", "safety", "Rain Suit")
    assert simulator.pending_restocks == 1
    assert _stock(store, "Goa", "Rain Suit") == 10

    await task
    await asyncio.sleep(0)

    assert _stock(store, "Goa", "Rain Suit") == 50
    assert simulator.pending_restocks == 0
    await simulator.close()


@pytest.mark.asyncio
async def test_newest_notification_first_and_dismissal() -> None:
    store = _store()
    simulator = MutationSimulator(store, restock_delay=0)

    first = await simulator.restock("Mumbai", "safety", "Rain Suit")
    second = await simulator.restock("Goa", "safety", "Rain Suit")

    assert [n.id for n in store.notifications] == [second.id, first.id]
    store.mark_as_read(first.id)
    assert store.unread_count == 1
    store.clear_notification(second.id)
    assert [n.id for n in store.notifications] == [first.id]
    assert store.notifications[0].read is True
    await simulator.close()


@pytest.mark.asyncio
async def test_success_toast_auto_dismisses() -> None:
    store = _store()
    simulator = MutationSimulator(store, restock_delay=0, toast_duration=0.01)

    await simulator.restock("Mumbai", "safety", "Rain Suit")
    assert store.toast is not None
    await asyncio.sleep(0.05)

    assert store.toast is None
    await simulator.close()


def test_transfer_conserves_total_stock() -> None:
    store = _store()
    store.replace_records(
        [
            r.model_copy(update={"stock": 60}) if r.city == "Mumbai" and r.item == "Rain Suit" else r
            for r in store.records
        ],
        source=DataSource.SHEET,
    )
    simulator = MutationSimulator(store)

    changed = simulator.transfer("Mumbai", "Goa", "Rain Suit", 20)

    assert changed == 2
    assert _stock(store, "Mumbai", "Rain Suit") == 40
    assert _stock(store, "Goa", "Rain Suit") == 30
    assert _stock(store, "Pune", "Rain Suit") == 60
    assert _stock(store, "Mumbai", "Oil") == 5
    assert store.toast is not None
    assert "Successfully transferred 20 units of Rain Suit from Mumbai to Goa." == store.toast.message


def test_transfer_does_not_validate_balance() -> None:
    store = _store()
    simulator = MutationSimulator(store)

    simulator.transfer("Goa", "Pune", "Rain Suit", 25)

    assert _stock(store, "Goa", "Rain Suit") == -15
    assert _stock(store, "Pune", "Rain Suit") == 85


def test_validate_transfer_amount() -> None:
    source = StockRecord(id=0, city="Pune", lat=0.0, lng=0.0, item="Oil", stock=10)

    assert validate_transfer_amount(source, 10) == 10
    with pytest.raises(ValueError):
        validate_transfer_amount(source, 11)
    with pytest.raises(ValueError):
        validate_transfer_amount(source, 0)
