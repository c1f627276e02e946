"""Helpers for safe debug logging.

Sheet bodies and webhook replies can be large; this module bounds them
and masks credential-like keys before they reach DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

_SENSITIVE_KEYS: frozenset[str] = frozenset(
    {"password", "token", "apikey", "api_key", "authorization", "cookie", "secret"}
)

_MAX_DEPTH = 20


def _clip_text(text: str, max_string: int) -> str:
    if len(text) <= max_string:
        return text
    lines = text.count("\n") + 1
    return f"{text[:max_string]}…<truncated, {len(text)} chars, {lines} lines>"


def redact_for_log(value: Any, *, max_string: int = 512, max_items: int = 20, _depth: int = 0) -> Any:
    """Return a masked, size-bounded copy of *value* for debug logs.

    Long strings are clipped to *max_string* characters, lists and
    mappings keep at most *max_items* entries.
    """
    if _depth > _MAX_DEPTH:
        return "<max-depth>"

    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return _clip_text(value, max_string)
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"

    def _inner(item: Any) -> Any:
        return redact_for_log(item, max_string=max_string, max_items=max_items, _depth=_depth + 1)

    if isinstance(value, Mapping):
        out: dict[str, Any] = {}
        for position, (raw_key, item) in enumerate(value.items()):
            if position >= max_items:
                out["<more>"] = f"{len(value) - max_items} keys"
                break
            key = str(raw_key)
            out[key] = "<redacted>" if key.lower() in _SENSITIVE_KEYS else _inner(item)
        return out

    if isinstance(value, Sequence):
        items = [_inner(item) for item in value[:max_items]]
        if len(value) > max_items:
            items.append(f"<{len(value) - max_items} more>")
        return items

    return repr(value)
