"""WebSocket protocol configuration and constants."""

from __future__ import annotations

WS_ENDPOINT_PATH = "/ws"

# Every frame is a JSON object with a "type" discriminator.
WS_KEY_TYPE = "type"

# Inbound message types and their fields
WS_IN_AUDIO = "audio"
WS_IN_END = "end"
WS_IN_STOP = "stop"
WS_IN_TEXT = "text"
WS_KEY_CHUNK = "chunk"
WS_KEY_LANGUAGE = "language"
WS_KEY_TEXT = "text"

# Outbound message types and their fields
WS_OUT_AUDIO = "audio"
WS_OUT_TEXT = "text"
WS_OUT_STOPPED = "stopped"
WS_OUT_INFO = "info"
WS_OUT_ERROR = "error"
WS_KEY_MIME_TYPE = "mimeType"
WS_KEY_BASE64 = "base64"
WS_KEY_INFO = "info"
WS_KEY_ERROR = "error"
WS_KEY_DETAILS = "details"

WS_INFO_NO_AUDIO = "No audio received"

# Close codes
WS_CLOSE_UNAUTHORIZED_CODE = 4001
WS_CLOSE_BUSY_CODE = 4002
WS_CLOSE_IDLE_CODE = 4000
WS_CLOSE_MAX_DURATION_CODE = 4003

WS_CLOSE_IDLE_REASON = "idle timeout"
WS_CLOSE_MAX_DURATION_REASON = "max connection duration reached"

# Lifecycle (env names and defaults)
ENV_WS_IDLE_TIMEOUT_S = "WS_IDLE_TIMEOUT_S"
ENV_WS_WATCHDOG_TICK_S = "WS_WATCHDOG_TICK_S"
ENV_WS_MAX_CONNECTION_DURATION_S = "WS_MAX_CONNECTION_DURATION_S"

DEFAULT_WS_IDLE_TIMEOUT_S: float = 150.0
DEFAULT_WS_WATCHDOG_TICK_S: float = 5.0
DEFAULT_WS_MAX_CONNECTION_DURATION_S: float = 90 * 60.0

# Error reason codes (details.reason_code values)
WS_ERROR_AUTH_FAILED = "authentication_failed"
WS_ERROR_SERVER_AT_CAPACITY = "server_at_capacity"
WS_ERROR_RATE_LIMITED = "rate_limited"
WS_ERROR_UTTERANCE_TOO_LONG = "utterance_too_long"
WS_ERROR_INTERNAL = "internal_error"

__all__ = [
    "DEFAULT_WS_IDLE_TIMEOUT_S",
    "DEFAULT_WS_MAX_CONNECTION_DURATION_S",
    "DEFAULT_WS_WATCHDOG_TICK_S",
    "ENV_WS_IDLE_TIMEOUT_S",
    "ENV_WS_MAX_CONNECTION_DURATION_S",
    "ENV_WS_WATCHDOG_TICK_S",
    "WS_CLOSE_BUSY_CODE",
    "WS_CLOSE_IDLE_CODE",
    "WS_CLOSE_IDLE_REASON",
    "WS_CLOSE_MAX_DURATION_CODE",
    "WS_CLOSE_MAX_DURATION_REASON",
    "WS_CLOSE_UNAUTHORIZED_CODE",
    "WS_ENDPOINT_PATH",
    "WS_ERROR_AUTH_FAILED",
    "WS_ERROR_INTERNAL",
    "WS_ERROR_RATE_LIMITED",
    "WS_ERROR_SERVER_AT_CAPACITY",
    "WS_ERROR_UTTERANCE_TOO_LONG",
    "WS_INFO_NO_AUDIO",
    "WS_IN_AUDIO",
    "WS_IN_END",
    "WS_IN_STOP",
    "WS_IN_TEXT",
    "WS_KEY_BASE64",
    "WS_KEY_CHUNK",
    "WS_KEY_DETAILS",
    "WS_KEY_ERROR",
    "WS_KEY_INFO",
    "WS_KEY_LANGUAGE",
    "WS_KEY_MIME_TYPE",
    "WS_KEY_TEXT",
    "WS_KEY_TYPE",
    "WS_OUT_AUDIO",
    "WS_OUT_ERROR",
    "WS_OUT_INFO",
    "WS_OUT_STOPPED",
    "WS_OUT_TEXT",
]
