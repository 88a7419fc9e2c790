"""Dispatch handlers for parsed relay messages."""

from __future__ import annotations

import base64
import logging
import binascii
from typing import Any
from collections.abc import Callable, Awaitable

from src.config.audio import AUDIO_BYTES_PER_SECOND
from src.config.websocket import WS_INFO_NO_AUDIO, WS_ERROR_UTTERANCE_TOO_LONG
from src.state.messages import Interrupt, TextQuery, AudioChunk, EndOfUtterance

from .inflight import start_call
from .context import ConnectionContext
from .outbound import build_info, build_stopped

logger = logging.getLogger(__name__)

HandlerFn = Callable[[ConnectionContext, Any], Awaitable[None]]


def _decode_chunk(payload: str) -> bytes | None:
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        return None


async def _reject_oversized(ctx: ConnectionContext, received_bytes: int) -> None:
    max_bytes = ctx.deps.settings.limits.max_utterance_audio_bytes
    ctx.session.drain_and_reset()
    await ctx.send_error(
        "utterance exceeded maximum audio duration; send end sooner",
        reason_code=WS_ERROR_UTTERANCE_TOO_LONG,
        details={
            "max_audio_seconds": max_bytes / AUDIO_BYTES_PER_SECOND,
            "max_audio_bytes": max_bytes,
            "received_audio_seconds": received_bytes / AUDIO_BYTES_PER_SECOND,
            "received_audio_bytes": received_bytes,
        },
    )


async def _handle_audio(ctx: ConnectionContext, msg: AudioChunk) -> None:
    frame = _decode_chunk(msg.payload)
    if not frame:
        logger.debug("dropping undecodable audio chunk session_id=%s", ctx.session.session_id)
        return

    max_bytes = ctx.deps.settings.limits.max_utterance_audio_bytes
    received = ctx.session.buffered_bytes + len(frame)
    if max_bytes > 0 and received > max_bytes:
        await _reject_oversized(ctx, received)
        return

    # Also reached while a reply is pending: the frame belongs to the next utterance.
    ctx.session.append(frame)


async def _handle_end(ctx: ConnectionContext, msg: EndOfUtterance) -> None:
    audio = ctx.session.drain_and_reset()
    if not audio:
        await ctx.send(build_info(WS_INFO_NO_AUDIO))
        return

    upstream = ctx.deps.upstream
    language_hint = msg.language_hint
    logger.debug(
        "utterance complete session_id=%s bytes=%s language=%s",
        ctx.session.session_id,
        len(audio),
        language_hint,
    )
    start_call(ctx, "utterance", lambda token: upstream.transcribe_and_respond(audio, language_hint, token))


async def _handle_stop(ctx: ConnectionContext, _msg: Interrupt) -> None:
    ctx.session.cancel_active()
    await ctx.send(build_stopped())


async def _handle_text(ctx: ConnectionContext, msg: TextQuery) -> None:
    upstream = ctx.deps.upstream
    text = msg.text
    start_call(ctx, "text", lambda token: upstream.transcribe_from_text(text, token))


HANDLERS: dict[type, HandlerFn] = {
    AudioChunk: _handle_audio,
    EndOfUtterance: _handle_end,
    Interrupt: _handle_stop,
    TextQuery: _handle_text,
}

__all__ = ["HANDLERS"]
