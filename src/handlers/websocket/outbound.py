"""Outbound relay frames and best-effort send helpers."""

from __future__ import annotations

import logging
from typing import Any

import orjson
from fastapi import WebSocket, WebSocketDisconnect

from src.state.messages import Reply, AudioReply
from src.config.websocket import (
    WS_KEY_INFO,
    WS_KEY_TEXT,
    WS_KEY_TYPE,
    WS_OUT_INFO,
    WS_OUT_TEXT,
    WS_KEY_ERROR,
    WS_OUT_AUDIO,
    WS_OUT_ERROR,
    WS_KEY_BASE64,
    WS_KEY_DETAILS,
    WS_OUT_STOPPED,
    WS_KEY_MIME_TYPE,
)

logger = logging.getLogger(__name__)


def build_audio_reply(base64_audio: str, mime_type: str) -> dict[str, Any]:
    return {WS_KEY_TYPE: WS_OUT_AUDIO, WS_KEY_MIME_TYPE: mime_type, WS_KEY_BASE64: base64_audio}


def build_text_reply(text: str) -> dict[str, Any]:
    return {WS_KEY_TYPE: WS_OUT_TEXT, WS_KEY_TEXT: text}


def build_reply(reply: Reply) -> dict[str, Any]:
    if isinstance(reply, AudioReply):
        return build_audio_reply(reply.base64, reply.mime_type)
    return build_text_reply(reply.text)


def build_stopped() -> dict[str, Any]:
    return {WS_KEY_TYPE: WS_OUT_STOPPED}


def build_info(message: str) -> dict[str, Any]:
    return {WS_KEY_TYPE: WS_OUT_INFO, WS_KEY_INFO: message}


def build_error(message: str, *, details: Any = None, reason_code: str | None = None) -> dict[str, Any]:
    if reason_code:
        details = {"reason_code": reason_code, **(details or {})}
    return {WS_KEY_TYPE: WS_OUT_ERROR, WS_KEY_ERROR: message, WS_KEY_DETAILS: details}


async def safe_send_text(ws: WebSocket, text: str) -> bool:
    try:
        await ws.send_text(text)
    except WebSocketDisconnect:
        return False
    except Exception:
        logger.debug("WebSocket send failed", exc_info=True)
        return False
    return True


async def safe_send_json(ws: WebSocket, payload: dict[str, Any]) -> bool:
    return await safe_send_text(ws, orjson.dumps(payload).decode("utf-8"))


async def reject_connection(
    ws: WebSocket,
    *,
    reason_code: str,
    message: str,
    close_code: int,
) -> None:
    # Accept first so the client receives a structured error before the close frame.
    try:
        await ws.accept()
    except Exception:
        logger.debug("accept failed while rejecting connection", exc_info=True)
        return
    await safe_send_json(ws, build_error(message, reason_code=reason_code))
    try:
        await ws.close(code=close_code, reason=message)
    except Exception:
        return


__all__ = [
    "build_audio_reply",
    "build_error",
    "build_info",
    "build_reply",
    "build_stopped",
    "build_text_reply",
    "reject_connection",
    "safe_send_json",
    "safe_send_text",
]
