"""HTTP transport for the stock sheet and the webhooks."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from motostock._constants import USER_AGENT
from motostock._redact import redact_for_log
from motostock.exceptions import MotostockParseError, MotostockTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the endpoint modules.

    Tests pass doubles that implement these two coroutines.
    """

    async def get_text(self, url: str) -> str: ...

    async def post_json(self, url: str, payload: Mapping[str, Any]) -> Any: ...


class HttpTransport:
    """Plain aiohttp transport; no timeouts, no retries."""

    def __init__(self, http_session: aiohttp.ClientSession) -> None:
        self._http = http_session

    async def get_text(self, url: str) -> str:
        """GET *url* and return the body as text."""
        _logger.debug("GET %s", url)
        headers = {"user-agent": USER_AGENT}
        try:
            async with self._http.get(url, headers=headers) as resp:
                text = await resp.text()
                if not 200 <= resp.status < 300:
                    raise MotostockTransportError(
                        f"HTTP {resp.status} from {url}: {text[:200]}",
                        status_code=resp.status,
                        url=url,
                    )
        except MotostockTransportError:
            raise
        except aiohttp.ClientError as exc:
            raise MotostockTransportError(f"Request to {url} failed: {exc}", url=url) from exc
        _logger.debug("GET %s -> %d chars", url, len(text))
        return text

    async def post_json(self, url: str, payload: Mapping[str, Any]) -> Any:
        """POST *payload* as JSON and return the decoded JSON reply."""
        headers = {
            "content-type": "application/json",
            "user-agent": USER_AGENT,
        }
        body = json.dumps(payload, separators=(",", ":"))
        _logger.debug("POST %s payload=%s", url, redact_for_log(dict(payload)))
        try:
            async with self._http.post(url, data=body, headers=headers) as resp:
                text = await resp.text()
                if not 200 <= resp.status < 300:
                    raise MotostockTransportError(
                        f"HTTP {resp.status} from {url}: {text[:200]}",
                        status_code=resp.status,
                        url=url,
                    )
        except MotostockTransportError:
            raise
        except aiohttp.ClientError as exc:
            raise MotostockTransportError(f"Request to {url} failed: {exc}", url=url) from exc

        try:
            result = json.loads(text)
        except json.JSONDecodeError as exc:
            raise MotostockParseError(f"Invalid JSON from {url}: {text[:200]}") from exc
        _logger.debug("POST %s response=%s", url, redact_for_log(result))
        return result
