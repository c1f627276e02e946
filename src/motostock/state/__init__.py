"""State layer.

:class:`~motostock.state.store.DashboardStore` is the single owner of the
dataset, filters, notifications and settings. Every other component
reads and writes through its setters.
"""

from motostock.state.events import DataSource, StateChange
from motostock.state.store import DashboardStore

__all__ = ["DashboardStore", "DataSource", "StateChange"]
