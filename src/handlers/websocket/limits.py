"""Rate limiting for inbound relay messages."""

from __future__ import annotations

import math

from src.errors import RateLimitError
from src.state.messages import EndOfUtterance, Interrupt, InboundMessage
from src.config.websocket import WS_ERROR_RATE_LIMITED
from src.handlers.limits import SlidingWindowRateLimiter

from .context import ConnectionContext


def select_rate_limiter(
    msg: InboundMessage,
    message_limiter: SlidingWindowRateLimiter,
    cancel_limiter: SlidingWindowRateLimiter,
) -> SlidingWindowRateLimiter | None:
    # end always reaches its handler so the buffer is drained.
    if isinstance(msg, EndOfUtterance):
        return None
    if isinstance(msg, Interrupt):
        return cancel_limiter
    return message_limiter


async def consume_limiter(ctx: ConnectionContext, limiter: SlidingWindowRateLimiter) -> bool:
    """Consume one slot; on overflow tell the client and report False so the message is dropped."""
    try:
        limiter.consume()
    except RateLimitError as exc:
        retry_in_s = max(1, math.ceil(exc.retry_in))
        window_s = int(limiter.window_seconds)
        await ctx.send_error(
            f"{limiter.kind} rate limit: at most {limiter.limit} per {window_s} seconds; "
            f"retry in {retry_in_s} seconds",
            reason_code=WS_ERROR_RATE_LIMITED,
            details={
                "kind": limiter.kind,
                "retry_in": retry_in_s,
                "limit": limiter.limit,
                "window_seconds": window_s,
            },
        )
        return False
    return True


__all__ = ["consume_limiter", "select_rate_limiter"]
