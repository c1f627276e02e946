"""Change kinds published by the dashboard store."""

from __future__ import annotations

from enum import StrEnum


class StateChange(StrEnum):
    RECORDS = "records"
    LOADING = "loading"
    FILTERS = "filters"
    NOTIFICATIONS = "notifications"
    TOAST = "toast"
    SETTINGS = "settings"
    INSIGHTS = "insights"


class DataSource(StrEnum):
    """Where the current dataset came from."""

    CACHE = "cache"
    SHEET = "sheet"
    SIMULATED = "simulated"
