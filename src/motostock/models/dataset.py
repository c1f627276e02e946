"""Cached dataset model."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from motostock.models._base import MotostockBaseModel
from motostock.models.stock import StockRecord


class CachedDataset(MotostockBaseModel):
    """The last successfully normalized dataset and when it was stored."""

    records: list[StockRecord] = Field(default_factory=list)
    last_updated: datetime | None = None
