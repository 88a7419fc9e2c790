"""Shared error types for the voice relay server."""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RateLimitError(Exception):
    """Raised when a sliding-window rate limiter is saturated."""

    retry_in: float
    limit: int
    window_seconds: float


class UpstreamError(Exception):
    """An upstream call failed; surfaced to the client as an error message."""

    def __init__(self, message: str, *, status: int | None = None, detail: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.detail = detail


class UpstreamHTTPError(UpstreamError):
    """The upstream API answered with a non-2xx status."""

    def __init__(self, status: int, message: str, *, detail: Any = None) -> None:
        super().__init__(message, status=status, detail=detail)


class UpstreamCancelledError(Exception):
    """The request was canceled before a reply could be delivered."""


__all__ = ["RateLimitError", "UpstreamCancelledError", "UpstreamError", "UpstreamHTTPError"]
