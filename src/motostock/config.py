"""Client configuration for motostock."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from motostock._constants import (
    DEFAULT_REFRESH_INTERVAL,
    DEFAULT_RESTOCK_DELAY,
    DEFAULT_TOAST_DURATION,
    INSIGHT_WEBHOOK_URL,
    RESTOCK_WEBHOOK_URL,
    SHEET_URL,
    validate_refresh_interval,
)
from motostock.exceptions import MotostockConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class MotostockConfig:
    """Dashboard configuration.

    Parameters
    ----------
    sheet_url : str
        Published CSV export of the stock spreadsheet.
    insight_webhook_url : str
        Endpoint that returns stock alerts and predictions.
    restock_webhook_url : str
        Restock endpoint. Kept for completeness; restock and transfer
        are local simulations and never call it.
    cache_path : str or None
        JSON file backing the dataset cache. ``None`` keeps the cache
        in memory for the lifetime of the process.
    auto_refresh : bool
        Re-fetch the sheet in the background every ``refresh_interval``.
    refresh_interval : int
        Seconds between background refreshes, within ``[10, 300]``.
    restock_delay : float
        Simulated processing delay before a restock is applied.
    toast_duration : float
        Seconds a status toast stays visible.
    notifications_enabled : bool
        Operator preference for in-app notifications.
    email_alerts : bool
        Operator preference for e-mail alerts.
    theme : str
        UI theme name.
    """

    sheet_url: str = SHEET_URL
    insight_webhook_url: str = INSIGHT_WEBHOOK_URL
    restock_webhook_url: str = RESTOCK_WEBHOOK_URL
    cache_path: str | None = None
    auto_refresh: bool = True
    refresh_interval: int = DEFAULT_REFRESH_INTERVAL
    restock_delay: float = DEFAULT_RESTOCK_DELAY
    toast_duration: float = DEFAULT_TOAST_DURATION
    notifications_enabled: bool = True
    email_alerts: bool = False
    theme: str = "light"

    def __post_init__(self) -> None:
        try:
            validate_refresh_interval(self.refresh_interval)
        except (TypeError, ValueError) as exc:
            raise MotostockConfigError(str(exc)) from exc
        if self.restock_delay < 0:
            raise MotostockConfigError(f"restock_delay must be >= 0, got {self.restock_delay}")

    @classmethod
    def from_env(cls, **overrides: Any) -> MotostockConfig:
        """Create configuration from environment variables.

        Reads optional ``MOTOSTOCK_*`` variables. Explicit keyword
        arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        MotostockConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "MOTOSTOCK_SHEET_URL": "sheet_url",
            "MOTOSTOCK_INSIGHT_WEBHOOK_URL": "insight_webhook_url",
            "MOTOSTOCK_RESTOCK_WEBHOOK_URL": "restock_webhook_url",
            "MOTOSTOCK_CACHE_PATH": "cache_path",
            "MOTOSTOCK_THEME": "theme",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # Numeric fields are handled separately
        interval_env = env.get("MOTOSTOCK_REFRESH_INTERVAL")
        if interval_env is not None and "refresh_interval" not in overrides:
            try:
                config_kwargs["refresh_interval"] = int(interval_env)
            except ValueError as exc:
                raise MotostockConfigError(f"MOTOSTOCK_REFRESH_INTERVAL is not an integer: {interval_env!r}") from exc

        for env_key, field_name in (
            ("MOTOSTOCK_RESTOCK_DELAY", "restock_delay"),
            ("MOTOSTOCK_TOAST_DURATION", "toast_duration"),
        ):
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                try:
                    config_kwargs[field_name] = float(val)
                except ValueError as exc:
                    raise MotostockConfigError(f"{env_key} is not a number: {val!r}") from exc

        if "auto_refresh" not in overrides:
            config_kwargs["auto_refresh"] = _env_bool(env.get("MOTOSTOCK_AUTO_REFRESH"), True)
        if "notifications_enabled" not in overrides:
            config_kwargs["notifications_enabled"] = _env_bool(env.get("MOTOSTOCK_NOTIFICATIONS"), True)
        if "email_alerts" not in overrides:
            config_kwargs["email_alerts"] = _env_bool(env.get("MOTOSTOCK_EMAIL_ALERTS"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
