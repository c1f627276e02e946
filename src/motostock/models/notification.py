"""Ephemeral in-memory notices: restock notifications and status toasts."""

from __future__ import annotations

import enum
import uuid
from datetime import UTC, datetime

from pydantic import Field

from motostock.models._base import MotostockBaseModel


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Notification(MotostockBaseModel):
    """A completed restock, shown in the notification tray until dismissed.

    ``category`` holds the category display label.
    """

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    city: str
    category: str
    item: str
    timestamp: datetime = Field(default_factory=_utcnow)
    read: bool = False


class ToastKind(enum.StrEnum):
    INFO = "info"
    SUCCESS = "success"


class Toast(MotostockBaseModel):
    """A transient status message."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    message: str
    kind: ToastKind = ToastKind.SUCCESS
    created_at: datetime = Field(default_factory=_utcnow)
