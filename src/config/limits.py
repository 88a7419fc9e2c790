"""Admission control and rate limit configuration (env names and defaults)."""

from __future__ import annotations

ENV_MAX_CONCURRENT_CONNECTIONS = "MAX_CONCURRENT_CONNECTIONS"
ENV_MAX_UTTERANCE_AUDIO_SECONDS = "MAX_UTTERANCE_AUDIO_SECONDS"
ENV_WS_MESSAGE_WINDOW_SECONDS = "WS_MESSAGE_WINDOW_SECONDS"
ENV_WS_MAX_MESSAGES_PER_WINDOW = "WS_MAX_MESSAGES_PER_WINDOW"
ENV_WS_CANCEL_WINDOW_SECONDS = "WS_CANCEL_WINDOW_SECONDS"
ENV_WS_MAX_CANCELS_PER_WINDOW = "WS_MAX_CANCELS_PER_WINDOW"

DISABLED_VALUES = {"0", "none", "null", "disabled", "disable", "off"}

DEFAULT_MAX_CONCURRENT_CONNECTIONS: int = 100

# Upper bound on one utterance's buffered audio (0 disables).
DEFAULT_MAX_UTTERANCE_AUDIO_SECONDS: float = float(5 * 60)

DEFAULT_WS_MESSAGE_WINDOW_SECONDS: float = 60.0

# A 4096-sample frame at 16kHz is ~4 messages/second per recording client.
DEFAULT_WS_MAX_MESSAGES_PER_WINDOW: int = 5000

# 0 means "same as the message window".
DEFAULT_WS_CANCEL_WINDOW_SECONDS: float = 0.0
DEFAULT_WS_MAX_CANCELS_PER_WINDOW: int = 50

__all__ = [
    "DEFAULT_MAX_CONCURRENT_CONNECTIONS",
    "DEFAULT_MAX_UTTERANCE_AUDIO_SECONDS",
    "DEFAULT_WS_CANCEL_WINDOW_SECONDS",
    "DEFAULT_WS_MAX_CANCELS_PER_WINDOW",
    "DEFAULT_WS_MAX_MESSAGES_PER_WINDOW",
    "DEFAULT_WS_MESSAGE_WINDOW_SECONDS",
    "DISABLED_VALUES",
    "ENV_MAX_CONCURRENT_CONNECTIONS",
    "ENV_MAX_UTTERANCE_AUDIO_SECONDS",
    "ENV_WS_CANCEL_WINDOW_SECONDS",
    "ENV_WS_MAX_CANCELS_PER_WINDOW",
    "ENV_WS_MAX_MESSAGES_PER_WINDOW",
    "ENV_WS_MESSAGE_WINDOW_SECONDS",
]
