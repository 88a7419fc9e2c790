"""Inbound client messages and upstream replies (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AudioChunk:
    """One captured PCM16 frame, still encoded as received."""

    payload: str
    encoding: str = "base64"


@dataclass(frozen=True, slots=True)
class EndOfUtterance:
    language_hint: str | None = None


@dataclass(frozen=True, slots=True)
class Interrupt:
    pass


@dataclass(frozen=True, slots=True)
class TextQuery:
    text: str


InboundMessage = AudioChunk | EndOfUtterance | Interrupt | TextQuery


@dataclass(frozen=True, slots=True)
class TextReply:
    text: str


@dataclass(frozen=True, slots=True)
class AudioReply:
    base64: str
    mime_type: str


Reply = TextReply | AudioReply


__all__ = [
    "AudioChunk",
    "AudioReply",
    "EndOfUtterance",
    "InboundMessage",
    "Interrupt",
    "Reply",
    "TextQuery",
    "TextReply",
]
