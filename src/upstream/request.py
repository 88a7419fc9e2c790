"""Request bodies for the generateContent endpoint."""

from __future__ import annotations

from typing import Any

from src.config.audio import WAV_MIME_TYPE
from src.config.upstream import GEMINI_RESPONSE_MIME_TYPE

from .prompts import AUDIO_SYSTEM_INSTRUCTION, TEXT_SYSTEM_INSTRUCTION, format_language_hint


def _system_instruction(text: str) -> dict[str, Any]:
    return {"parts": [{"text": text}]}


def build_audio_request(audio_b64: str, language_hint: str | None = None) -> dict[str, Any]:
    parts: list[dict[str, Any]] = []
    if language_hint:
        parts.append({"text": format_language_hint(language_hint)})
    parts.append({"inlineData": {"mimeType": WAV_MIME_TYPE, "data": audio_b64}})
    return {
        "systemInstruction": _system_instruction(AUDIO_SYSTEM_INSTRUCTION),
        "contents": [{"role": "user", "parts": parts}],
        "generationConfig": {"responseMimeType": GEMINI_RESPONSE_MIME_TYPE},
    }


def build_text_request(text: str) -> dict[str, Any]:
    return {
        "systemInstruction": _system_instruction(TEXT_SYSTEM_INSTRUCTION),
        "contents": [{"parts": [{"text": text}]}],
    }


__all__ = ["build_audio_request", "build_text_request"]
