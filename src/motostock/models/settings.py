"""Operator-editable dashboard settings."""

from __future__ import annotations

from pydantic import ConfigDict, field_validator

from motostock._constants import DEFAULT_REFRESH_INTERVAL, validate_refresh_interval
from motostock.models._base import MotostockBaseModel


class DashboardSettings(MotostockBaseModel):
    """Runtime settings changed from the settings dialog.

    Parameters
    ----------
    auto_refresh : bool
        Whether the background refresh timer runs.
    refresh_interval : int
        Seconds between background refreshes (10-300).
    notifications : bool
        Show in-app notifications.
    email_alerts : bool
        Send e-mail alerts.
    theme : str
        UI theme name.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    auto_refresh: bool = True
    refresh_interval: int = DEFAULT_REFRESH_INTERVAL
    notifications: bool = True
    email_alerts: bool = False
    theme: str = "light"

    @field_validator("refresh_interval")
    @classmethod
    def _check_interval(cls, value: int) -> int:
        return validate_refresh_interval(value)
