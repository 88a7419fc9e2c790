"""Cooperative cancellation for in-flight upstream calls."""

from __future__ import annotations

import asyncio

from src.errors import UpstreamCancelledError


class CancellationToken:
    """A flag the upstream client checks whenever it resumes from a network await."""

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise UpstreamCancelledError("upstream request cancelled")


class RequestHandle:
    """Cancelable handle for one upstream call stored in a Session.

    Canceling sets the token (so a result that lands later is discarded) and
    cancels the task running the call, which aborts the pending HTTP request.
    """

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self.token = CancellationToken()
        self._task: asyncio.Task | None = None

    @property
    def cancelled(self) -> bool:
        return self.token.cancelled

    def attach(self, task: asyncio.Task) -> None:
        self._task = task

    def cancel(self) -> None:
        self.token.cancel()
        if self._task is not None and not self._task.done():
            self._task.cancel()


__all__ = ["CancellationToken", "RequestHandle"]
