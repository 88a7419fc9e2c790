"""Upstream generative-language API configuration (env names and defaults)."""

from __future__ import annotations

ENV_GEMINI_MODEL = "GEMINI_MODEL"
ENV_GEMINI_BASE_URL = "GEMINI_BASE_URL"
ENV_GEMINI_TIMEOUT_S = "GEMINI_TIMEOUT_S"
ENV_PREFER_AUDIO_FROM_GEMINI = "PREFER_AUDIO_FROM_GEMINI"

DEFAULT_GEMINI_MODEL: str = "gemini-2.0-flash"
DEFAULT_GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_GEMINI_TIMEOUT_S: float = 60.0

# Accept audio output when the model returns it; otherwise the client speaks the text.
DEFAULT_PREFER_AUDIO_FROM_GEMINI: bool = True

GEMINI_API_KEY_HEADER: str = "x-goog-api-key"
GEMINI_API_KEY_QUERY_PARAM: str = "key"
GEMINI_RESPONSE_MIME_TYPE: str = "text/plain"

__all__ = [
    "DEFAULT_GEMINI_BASE_URL",
    "DEFAULT_GEMINI_MODEL",
    "DEFAULT_GEMINI_TIMEOUT_S",
    "DEFAULT_PREFER_AUDIO_FROM_GEMINI",
    "ENV_GEMINI_BASE_URL",
    "ENV_GEMINI_MODEL",
    "ENV_GEMINI_TIMEOUT_S",
    "ENV_PREFER_AUDIO_FROM_GEMINI",
    "GEMINI_API_KEY_HEADER",
    "GEMINI_API_KEY_QUERY_PARAM",
    "GEMINI_RESPONSE_MIME_TYPE",
]
