"""Parse inbound relay frames into typed messages."""

from __future__ import annotations

from typing import Any

import orjson

from src.state.messages import Interrupt, TextQuery, AudioChunk, EndOfUtterance, InboundMessage
from src.config.websocket import (
    WS_IN_END,
    WS_IN_STOP,
    WS_IN_TEXT,
    WS_IN_AUDIO,
    WS_KEY_TEXT,
    WS_KEY_TYPE,
    WS_KEY_CHUNK,
    WS_KEY_LANGUAGE,
)


def _parse_audio(msg: dict[str, Any]) -> AudioChunk:
    chunk = msg.get(WS_KEY_CHUNK)
    if not isinstance(chunk, str) or not chunk:
        raise ValueError("audio message missing non-empty 'chunk'")
    return AudioChunk(payload=chunk)


def _parse_end(msg: dict[str, Any]) -> EndOfUtterance:
    language = msg.get(WS_KEY_LANGUAGE)
    if language is not None and not isinstance(language, str):
        raise ValueError("'language' must be a string")
    return EndOfUtterance(language_hint=(language or "").strip() or None)


def _parse_text(msg: dict[str, Any]) -> TextQuery:
    text = msg.get(WS_KEY_TEXT)
    if not isinstance(text, str) or not text.strip():
        raise ValueError("text message missing non-empty 'text'")
    return TextQuery(text=text.strip())


def parse_client_message(raw: str) -> InboundMessage:
    """Decode one text frame. Raises ValueError for anything the relay does not understand."""
    try:
        msg = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON: {exc}") from exc

    if not isinstance(msg, dict):
        raise ValueError("message must be a JSON object")

    msg_type = msg.get(WS_KEY_TYPE)
    if not isinstance(msg_type, str) or not msg_type:
        raise ValueError("message missing non-empty 'type'")

    if msg_type == WS_IN_AUDIO:
        return _parse_audio(msg)
    if msg_type == WS_IN_END:
        return _parse_end(msg)
    if msg_type == WS_IN_STOP:
        return Interrupt()
    if msg_type == WS_IN_TEXT:
        return _parse_text(msg)
    raise ValueError(f"unknown message type '{msg_type}'")


__all__ = ["parse_client_message"]
