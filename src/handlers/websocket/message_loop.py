"""Receive loop for relay WebSockets (/ws)."""

from __future__ import annotations

import asyncio
import logging

from fastapi import WebSocket, WebSocketDisconnect

from src.handlers.limits import SlidingWindowRateLimiter

from .dispatch import HANDLERS
from .context import ConnectionContext
from .parser import parse_client_message
from .lifecycle import WebSocketLifecycle
from .limits import consume_limiter, select_rate_limiter

logger = logging.getLogger(__name__)


async def _receive_frame(ws: WebSocket) -> str:
    message = await ws.receive()
    if message["type"] == "websocket.disconnect":
        raise WebSocketDisconnect(code=message.get("code", 1000), reason=message.get("reason"))
    # Binary frames are not part of the protocol; an empty string parses as malformed.
    return message.get("text") or ""


async def _recv_text_with_watchdog(ws: WebSocket, lifecycle: WebSocketLifecycle) -> tuple[str | None, bool]:
    try:
        message = await asyncio.wait_for(_receive_frame(ws), timeout=lifecycle.watchdog_tick_s * 2)
        return message, False
    except TimeoutError:
        return None, lifecycle.should_close()


async def run_message_loop(
    ctx: ConnectionContext,
    lifecycle: WebSocketLifecycle,
    message_limiter: SlidingWindowRateLimiter,
    cancel_limiter: SlidingWindowRateLimiter,
) -> None:
    session_id = ctx.session.session_id
    try:
        while True:
            raw, should_exit = await _recv_text_with_watchdog(ctx.ws, lifecycle)
            if should_exit:
                return
            if raw is None:
                continue

            lifecycle.touch()

            try:
                msg = parse_client_message(raw)
            except ValueError as exc:
                logger.debug("dropping malformed message session_id=%s: %s", session_id, exc)
                continue

            limiter = select_rate_limiter(msg, message_limiter, cancel_limiter)
            if limiter is not None and not await consume_limiter(ctx, limiter):
                continue

            await HANDLERS[type(msg)](ctx, msg)
    except WebSocketDisconnect:
        logger.debug("client disconnected session_id=%s", session_id)
    finally:
        ctx.session.cancel_active()
        ctx.session.drain_and_reset()
        await ctx.cancel_pending()


__all__ = ["run_message_loop"]
