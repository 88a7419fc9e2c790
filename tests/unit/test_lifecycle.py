from __future__ import annotations

import asyncio

import pytest

from src.state.settings import WebSocketSettings
from src.handlers.websocket.lifecycle import WebSocketLifecycle
from src.config.websocket import (
    WS_CLOSE_IDLE_CODE,
    WS_CLOSE_IDLE_REASON,
    WS_CLOSE_MAX_DURATION_CODE,
    WS_CLOSE_MAX_DURATION_REASON,
)


class _FakeWebSocket:
    def __init__(self) -> None:
        self.closed = asyncio.Event()
        self.close_code: int | None = None
        self.close_reason: str | None = None

    async def close(self, *, code: int = 1000, reason: str | None = None) -> None:
        self.close_code = code
        self.close_reason = reason or ""
        self.closed.set()


@pytest.mark.asyncio
async def test_websocket_lifecycle_closes_on_max_duration() -> None:
    ws = _FakeWebSocket()
    lifecycle = WebSocketLifecycle(
        ws,
        WebSocketSettings(idle_timeout_s=9999.0, watchdog_tick_s=0.01, max_connection_duration_s=0.05),
    )
    lifecycle.start()

    await asyncio.wait_for(ws.closed.wait(), timeout=1.0)
    assert ws.close_code == WS_CLOSE_MAX_DURATION_CODE
    assert ws.close_reason == WS_CLOSE_MAX_DURATION_REASON
    assert lifecycle.should_close()

    await lifecycle.stop()


@pytest.mark.asyncio
async def test_websocket_lifecycle_closes_when_idle() -> None:
    ws = _FakeWebSocket()
    lifecycle = WebSocketLifecycle(
        ws,
        WebSocketSettings(idle_timeout_s=0.05, watchdog_tick_s=0.01, max_connection_duration_s=0.0),
    )
    lifecycle.start()

    await asyncio.wait_for(ws.closed.wait(), timeout=1.0)
    assert ws.close_code == WS_CLOSE_IDLE_CODE
    assert ws.close_reason == WS_CLOSE_IDLE_REASON

    await lifecycle.stop()


def test_websocket_lifecycle_busy_connection_is_never_idle() -> None:
    t = [0.0]
    busy = [True]
    lifecycle = WebSocketLifecycle(
        _FakeWebSocket(),
        WebSocketSettings(idle_timeout_s=10.0, watchdog_tick_s=1.0, max_connection_duration_s=0.0),
        is_busy_fn=lambda: busy[0],
        now_fn=lambda: t[0],
    )

    t[0] = 60.0
    assert lifecycle.expiry() is None

    busy[0] = False
    assert lifecycle.expiry() == (WS_CLOSE_IDLE_CODE, WS_CLOSE_IDLE_REASON)

    lifecycle.touch()
    assert lifecycle.expiry() is None
