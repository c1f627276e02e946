"""Best-effort local dataset cache.

The cache lets the dashboard paint the last known dataset before the
first network round trip completes. It is backed by a small string
key-value store (the Python analogue of browser local storage) holding
two entries: the serialized record array and an ISO-8601 timestamp.

Nothing in this module raises to its callers: unreadable entries load as
``None`` and failed writes are logged and dropped.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol

from pydantic import TypeAdapter, ValidationError

from motostock._constants import CACHE_DATA_KEY, CACHE_LAST_UPDATED_KEY
from motostock.exceptions import MotostockCacheError
from motostock.models.dataset import CachedDataset
from motostock.models.stock import StockRecord

_logger = logging.getLogger(__name__)

_RECORDS_ADAPTER: TypeAdapter[list[StockRecord]] = TypeAdapter(list[StockRecord])


def _utcnow() -> datetime:
    return datetime.now(UTC)


class KeyValueStore(Protocol):
    """String-to-string persistent storage."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStore:
    """Process-local store.

    ``max_value_size`` mimics a storage quota: larger values raise
    :class:`MotostockCacheError`.
    """

    def __init__(self, *, max_value_size: int | None = None) -> None:
        self._values: dict[str, str] = {}
        self._max_value_size = max_value_size

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        if self._max_value_size is not None and len(value) > self._max_value_size:
            raise MotostockCacheError(f"value for {key!r} exceeds quota ({len(value)} > {self._max_value_size})")
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)


class JsonFileStore:
    """Store persisted as a single JSON object on disk.

    Writes go to a temporary file that is then renamed over the target,
    so a crash mid-write leaves the previous contents intact.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)
        self._values: dict[str, str] | None = None

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        if self._values is not None:
            return self._values
        values: dict[str, str] = {}
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            text = ""
        except UnicodeDecodeError:
            _logger.warning("Cache file %s is not valid UTF-8; starting empty", self._path)
            text = ""
        except OSError:
            _logger.warning("Could not read cache file %s", self._path, exc_info=True)
            text = ""
        if text:
            try:
                loaded = json.loads(text)
            except json.JSONDecodeError:
                _logger.warning("Cache file %s is not valid JSON; starting empty", self._path)
                loaded = {}
            if isinstance(loaded, dict):
                values = {str(k): v for k, v in loaded.items() if isinstance(v, str)}
        self._values = values
        return values

    def _flush(self, values: dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", dir=self._path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(values, handle)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise MotostockCacheError(f"Could not write cache file {self._path}: {exc}") from exc

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        values = dict(self._load())
        values[key] = value
        self._flush(values)
        self._values = values

    def delete(self, key: str) -> None:
        values = dict(self._load())
        if values.pop(key, None) is None:
            return
        self._flush(values)
        self._values = values


class DatasetCache:
    """Persist and restore the last normalized dataset."""

    def __init__(
        self,
        store: KeyValueStore,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._clock = clock

    def load(self) -> CachedDataset | None:
        """Return the cached dataset, or ``None`` when absent or unreadable."""
        try:
            raw_records = self._store.get(CACHE_DATA_KEY)
        except MotostockCacheError:
            _logger.warning("Reading cached dataset failed", exc_info=True)
            return None
        if raw_records is None:
            return None

        try:
            records = _RECORDS_ADAPTER.validate_json(raw_records)
        except ValidationError:
            _logger.warning("Cached dataset is corrupt; ignoring it", exc_info=True)
            return None

        return CachedDataset(records=records, last_updated=self._load_timestamp())

    def _load_timestamp(self) -> datetime | None:
        try:
            raw = self._store.get(CACHE_LAST_UPDATED_KEY)
        except MotostockCacheError:
            _logger.debug("Reading cache timestamp failed", exc_info=True)
            return None
        if not raw:
            return None
        try:
            parsed = datetime.fromisoformat(raw)
        except ValueError:
            _logger.debug("Cache timestamp %r is not ISO-8601", raw)
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        return parsed

    def save(self, records: Sequence[StockRecord]) -> None:
        """Overwrite the cache with *records* and the current time.

        Failures are logged and swallowed.
        """
        try:
            payload = _RECORDS_ADAPTER.dump_json(list(records)).decode("utf-8")
            self._store.set(CACHE_DATA_KEY, payload)
            self._store.set(CACHE_LAST_UPDATED_KEY, self._clock().isoformat())
        except (MotostockCacheError, ValueError, TypeError):
            _logger.warning("Saving dataset to cache failed", exc_info=True)
            return
        _logger.debug("Cached %d records", len(records))

    def clear(self) -> None:
        for key in (CACHE_DATA_KEY, CACHE_LAST_UPDATED_KEY):
            try:
                self._store.delete(key)
            except MotostockCacheError:
                _logger.warning("Clearing cache key %s failed", key, exc_info=True)


def store_for_path(path: str | os.PathLike[str] | None) -> KeyValueStore:
    """File-backed store for *path*, or an in-memory store when ``None``."""
    if path is None:
        return MemoryStore()
    return JsonFileStore(path)
