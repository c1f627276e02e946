"""High-level async client for the stock sheet and insight webhook."""

from __future__ import annotations

from typing import Any

import aiohttp

from motostock._api.insights import fetch_insight_report
from motostock._api.sheet import fetch_stock_records
from motostock._transport import HttpTransport, Transport
from motostock.config import MotostockConfig
from motostock.exceptions import MotostockError
from motostock.models.insights import InsightReport
from motostock.models.stock import StockRecord


class MotostockClient:
    """Async client for the remote stock data sources.

    Usage::

        async with MotostockClient(config) as client:
            records = await client.get_stock_records()
    """

    def __init__(
        self,
        config: MotostockConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._external_transport = transport is not None

    @property
    def config(self) -> MotostockConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> MotostockClient:
        if self._external_transport:
            return self
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise MotostockError("Client not initialized. Use 'async with MotostockClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    async def get_stock_records(self) -> list[StockRecord]:
        """Download and normalize the published stock sheet."""
        return await fetch_stock_records(self._config, self._require_transport())

    async def get_insights(self) -> InsightReport:
        """Request an analysis from the insight webhook."""
        return await fetch_insight_report(self._config, self._require_transport())
