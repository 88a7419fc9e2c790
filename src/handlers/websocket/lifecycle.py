"""Per-connection WebSocket lifecycle (idle and max-duration enforcement)."""

from __future__ import annotations

import time
import asyncio
import logging
import contextlib
from typing import Any
from collections.abc import Callable

from src.state.settings import WebSocketSettings
from src.config.websocket import (
    WS_CLOSE_IDLE_CODE,
    WS_CLOSE_IDLE_REASON,
    WS_CLOSE_MAX_DURATION_CODE,
    WS_CLOSE_MAX_DURATION_REASON,
)

logger = logging.getLogger(__name__)

TimeFn = Callable[[], float]


class WebSocketLifecycle:
    """Closes a connection that has gone quiet, or that has simply lived too long.

    A connection waiting on an upstream reply (`is_busy_fn`) is never idle.
    """

    def __init__(
        self,
        websocket: Any,
        settings: WebSocketSettings,
        *,
        is_busy_fn: Callable[[], bool] | None = None,
        now_fn: TimeFn | None = None,
    ) -> None:
        self._ws = websocket
        self._settings = settings
        self._is_busy_fn = is_busy_fn or (lambda: False)
        self._now = now_fn or time.monotonic
        self._connection_start = self._now()
        self._last_activity = self._connection_start
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task | None = None

    @property
    def watchdog_tick_s(self) -> float:
        return self._settings.watchdog_tick_s

    def touch(self) -> None:
        self._last_activity = self._now()

    def should_close(self) -> bool:
        return self._stop_event.is_set()

    def expiry(self) -> tuple[int, str] | None:
        """Close code and reason if the connection should be closed now."""
        now = self._now()
        max_duration = self._settings.max_connection_duration_s
        if max_duration > 0 and (now - self._connection_start) >= max_duration:
            return WS_CLOSE_MAX_DURATION_CODE, WS_CLOSE_MAX_DURATION_REASON
        if self._is_busy_fn():
            return None
        idle_timeout = self._settings.idle_timeout_s
        if idle_timeout > 0 and (now - self._last_activity) >= idle_timeout:
            return WS_CLOSE_IDLE_CODE, WS_CLOSE_IDLE_REASON
        return None

    def start(self) -> asyncio.Task:
        if self._task is None:
            self._task = asyncio.create_task(self._watchdog_loop())
        return self._task

    async def stop(self) -> None:
        self._stop_event.set()
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError, Exception):
            await self._task
        self._task = None

    async def _watchdog_loop(self) -> None:
        try:
            while not self._stop_event.is_set():
                await asyncio.sleep(self._settings.watchdog_tick_s)
                if self._stop_event.is_set():
                    break
                expired = self.expiry()
                if expired is None:
                    continue
                code, reason = expired
                logger.info("closing WebSocket: %s", reason)
                self._stop_event.set()
                with contextlib.suppress(Exception):
                    await self._ws.close(code=code, reason=reason)
                break
        except asyncio.CancelledError:
            return
        except Exception:
            logger.debug("lifecycle watchdog exiting due to unexpected error", exc_info=True)


__all__ = ["WebSocketLifecycle"]
