"""Canonical stock record model."""

from __future__ import annotations

import enum

from pydantic import Field

from motostock._constants import LOW_STOCK_THRESHOLD, SURPLUS_THRESHOLD
from motostock.models._base import CategoryId, Demand, MotostockBaseModel


class StockStatus(enum.StrEnum):
    """Stock band used for status badges and inventory filtering."""

    LOW_STOCK = "Low Stock"
    OPTIMAL = "Optimal"
    SURPLUS = "Surplus"

    @classmethod
    def for_stock(cls, stock: int) -> StockStatus:
        """Classify a stock level.

        ``stock < 30`` is low, ``stock > 150`` is surplus, and both
        boundaries themselves are optimal.
        """
        if stock < LOW_STOCK_THRESHOLD:
            return cls.LOW_STOCK
        if stock > SURPLUS_THRESHOLD:
            return cls.SURPLUS
        return cls.OPTIMAL


class StockRecord(MotostockBaseModel):
    """Per-city, per-item inventory entry.

    Records are immutable; the mutation simulator replaces them with
    ``model_copy(update=...)`` copies.
    """

    id: int
    """Source row index."""
    city: str
    region: str | None = None
    lat: float
    lng: float
    category: CategoryId = CategoryId.MAINTENANCE
    item: str = ""
    """Accessory name."""
    stock: int = Field(default=0, ge=0)
    demand: Demand = Demand.NORMAL

    @property
    def status(self) -> StockStatus:
        return StockStatus.for_stock(self.stock)

    @property
    def is_critical(self) -> bool:
        return self.stock < LOW_STOCK_THRESHOLD
