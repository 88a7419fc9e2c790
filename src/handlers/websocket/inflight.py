"""Run upstream calls as background tasks and deliver their replies."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Awaitable

from src.state.messages import Reply
from src.config.websocket import WS_ERROR_INTERNAL
from src.errors import UpstreamError, UpstreamCancelledError
from src.upstream.cancellation import RequestHandle, CancellationToken

from .outbound import build_reply
from .context import ConnectionContext

logger = logging.getLogger(__name__)

UpstreamCall = Callable[[CancellationToken], Awaitable[Reply]]


async def _run_call(ctx: ConnectionContext, handle: RequestHandle, call: UpstreamCall) -> None:
    session_id = ctx.session.session_id
    try:
        reply = await call(handle.token)
        if handle.cancelled:
            logger.debug("discarding reply for interrupted %s call session_id=%s", handle.kind, session_id)
            return
        await ctx.send(build_reply(reply))
    except UpstreamCancelledError:
        logger.debug("%s call cancelled session_id=%s", handle.kind, session_id)
    except UpstreamError as exc:
        if handle.cancelled:
            return
        logger.warning("%s call failed session_id=%s: %s", handle.kind, session_id, exc.message)
        await ctx.send_error(exc.message, details=exc.detail)
    except asyncio.CancelledError:
        logger.debug("%s call task cancelled session_id=%s", handle.kind, session_id)
        raise
    except Exception:
        logger.exception("unexpected failure in %s call session_id=%s", handle.kind, session_id)
        await ctx.send_error("Internal server error", reason_code=WS_ERROR_INTERNAL)
    finally:
        ctx.session.clear_active(handle)


def start_call(ctx: ConnectionContext, kind: str, call: UpstreamCall) -> RequestHandle:
    """Start `call` in the background and make it the session's active request."""
    if ctx.deps.settings.server.cancel_superseded:
        ctx.session.cancel_active()

    handle = RequestHandle(kind)
    task = asyncio.create_task(_run_call(ctx, handle, call))
    handle.attach(task)
    ctx.session.set_active_request(handle)
    ctx.track(task)
    return handle


__all__ = ["UpstreamCall", "start_call"]
