"""Insight (analysis) webhook endpoint."""

from __future__ import annotations

import logging

from motostock._transport import Transport
from motostock.config import MotostockConfig
from motostock.models.insights import InsightReport, decode_insights

_logger = logging.getLogger(__name__)

ANALYZE_PAYLOAD: dict[str, str] = {"action": "analyze"}


async def fetch_insight_report(config: MotostockConfig, transport: Transport) -> InsightReport:
    """Ask the webhook to analyze current stock and decode its reply.

    Raises
    ------
    MotostockTransportError
        Network failure or non-2xx response.
    MotostockParseError
        Invalid JSON or no recognised response envelope.
    """
    payload = await transport.post_json(config.insight_webhook_url, ANALYZE_PAYLOAD)
    decoded = decode_insights(payload)
    _logger.debug(
        "Insight report decoded from %s envelope: %d alerts, %d predictions",
        decoded.shape.value,
        len(decoded.report.alerts),
        len(decoded.report.predictions),
    )
    return decoded.report
