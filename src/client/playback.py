"""Play relay replies: server audio when present, local speech synthesis otherwise."""

from __future__ import annotations

import re
import base64
import logging
import binascii
from typing import Any, Protocol

from src.config.audio import DEFAULT_REPLY_AUDIO_MIME_TYPE
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

_DEVANAGARI = re.compile(r"[\u0900-\u097F]")
_LATIN = re.compile(r"[A-Za-z]")

LANG_HINDI = "hi-IN"
LANG_ENGLISH = "en-IN"
LANG_MIXED = "mixed"
FALLBACK_SPEECH_LANGUAGE = LANG_ENGLISH


def detect_language(text: str) -> str:
    """Cheap script check: Devanagari only, Latin only, both, or neither ("")."""
    has_devanagari = bool(_DEVANAGARI.search(text))
    has_latin = bool(_LATIN.search(text))
    if has_devanagari and not has_latin:
        return LANG_HINDI
    if has_latin and not has_devanagari:
        return LANG_ENGLISH
    if has_devanagari and has_latin:
        return LANG_MIXED
    return ""


def speech_language(text: str) -> str:
    lang = detect_language(text)
    return lang if lang in {LANG_HINDI, LANG_ENGLISH} else FALLBACK_SPEECH_LANGUAGE


class AudioPlayer(Protocol):
    def play(self, data: bytes, mime_type: str) -> None: ...

    def stop(self) -> None: ...


class SpeechSynthesizer(Protocol):
    def speak(self, text: str, language: str) -> None: ...

    def stop(self) -> None: ...


class PlaybackController:
    """Keeps at most one audio source (reply audio or synthesized speech) active."""

    def __init__(self, player: AudioPlayer, synthesizer: SpeechSynthesizer) -> None:
        self._player = player
        self._synthesizer = synthesizer

    def handle(self, message: dict[str, Any]) -> None:
        msg_type = message.get(WS_KEY_TYPE)
        if msg_type == WS_OUT_AUDIO:
            self._handle_audio(message)
        elif msg_type == WS_OUT_TEXT:
            text = message.get(WS_KEY_TEXT)
            if isinstance(text, str) and text.strip():
                self.speak(text)
        elif msg_type == WS_OUT_STOPPED:
            self.stop()
        elif msg_type == WS_OUT_INFO:
            logger.info("relay: %s", message.get(WS_KEY_INFO))
        elif msg_type == WS_OUT_ERROR:
            logger.error("relay error: %s details=%s", message.get(WS_KEY_ERROR), message.get(WS_KEY_DETAILS))
        else:
            logger.debug("ignoring relay message type=%r", msg_type)

    def _handle_audio(self, message: dict[str, Any]) -> None:
        payload = message.get(WS_KEY_BASE64)
        if not isinstance(payload, str) or not payload:
            return
        try:
            data = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError):
            logger.warning("relay sent undecodable audio; ignoring")
            return
        mime_type = message.get(WS_KEY_MIME_TYPE) or DEFAULT_REPLY_AUDIO_MIME_TYPE
        self.play_audio(data, mime_type)

    def play_audio(self, data: bytes, mime_type: str) -> None:
        self.stop()
        self._player.play(data, mime_type)

    def speak(self, text: str) -> None:
        self.stop()
        self._synthesizer.speak(text, speech_language(text))

    def stop(self) -> None:
        self._player.stop()
        self._synthesizer.stop()


__all__ = [
    "AudioPlayer",
    "PlaybackController",
    "SpeechSynthesizer",
    "detect_language",
    "speech_language",
]
