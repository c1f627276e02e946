"""Custom exception hierarchy for motostock."""

from __future__ import annotations


class MotostockError(Exception):
    """Base exception for all motostock errors."""


class MotostockConfigError(MotostockError):
    """Invalid or missing configuration."""


class MotostockTransportError(MotostockError):
    """HTTP-level failure (network unreachable, non-2xx response)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class MotostockParseError(MotostockError):
    """Payload could not be decoded (malformed CSV, JSON, or webhook shape)."""


class MotostockCacheError(MotostockError):
    """Reading or writing the local dataset cache failed.

    The cache catches this at its own boundary; callers never see it.
    """
