"""Load runtime settings from the environment.

Env names and defaults live in `src/config/*`; this module resolves them once
into the frozen dataclasses of `src.state.settings`.
"""

from __future__ import annotations

import os

from src.config.audio import AUDIO_BYTES_PER_SECOND
from src.config.secrets import ENV_RELAY_API_KEY, ENV_GOOGLE_API_KEY
from src.config.server import (
    ENV_HOST,
    ENV_PORT,
    DEFAULT_HOST,
    DEFAULT_PORT,
    ENV_RELAY_CANCEL_SUPERSEDED,
    DEFAULT_RELAY_CANCEL_SUPERSEDED,
)
from src.state.settings import (
    AppSettings,
    AuthSettings,
    LimitsSettings,
    ServerSettings,
    UpstreamSettings,
    WebSocketSettings,
)
from src.config.upstream import (
    ENV_GEMINI_MODEL,
    DEFAULT_GEMINI_MODEL,
    ENV_GEMINI_BASE_URL,
    ENV_GEMINI_TIMEOUT_S,
    DEFAULT_GEMINI_BASE_URL,
    DEFAULT_GEMINI_TIMEOUT_S,
    ENV_PREFER_AUDIO_FROM_GEMINI,
    DEFAULT_PREFER_AUDIO_FROM_GEMINI,
)
from src.config.websocket import (
    ENV_WS_IDLE_TIMEOUT_S,
    ENV_WS_WATCHDOG_TICK_S,
    DEFAULT_WS_IDLE_TIMEOUT_S,
    DEFAULT_WS_WATCHDOG_TICK_S,
    ENV_WS_MAX_CONNECTION_DURATION_S,
    DEFAULT_WS_MAX_CONNECTION_DURATION_S,
)
from src.config.limits import (
    DISABLED_VALUES,
    ENV_WS_CANCEL_WINDOW_SECONDS,
    ENV_WS_MAX_CANCELS_PER_WINDOW,
    ENV_WS_MESSAGE_WINDOW_SECONDS,
    ENV_MAX_CONCURRENT_CONNECTIONS,
    ENV_MAX_UTTERANCE_AUDIO_SECONDS,
    ENV_WS_MAX_MESSAGES_PER_WINDOW,
    DEFAULT_WS_CANCEL_WINDOW_SECONDS,
    DEFAULT_WS_MAX_CANCELS_PER_WINDOW,
    DEFAULT_WS_MESSAGE_WINDOW_SECONDS,
    DEFAULT_MAX_CONCURRENT_CONNECTIONS,
    DEFAULT_MAX_UTTERANCE_AUDIO_SECONDS,
    DEFAULT_WS_MAX_MESSAGES_PER_WINDOW,
)


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _seconds_or_disabled_env(name: str, default: float) -> float:
    """Like `_float_env` but "off"/"none"/"0" and friends mean 0 (disabled)."""
    raw = os.getenv(name)
    if raw is not None and raw.strip().lower() in DISABLED_VALUES:
        return 0.0
    return max(0.0, _float_env(name, default))


def _load_auth_settings() -> AuthSettings:
    return AuthSettings(api_key=(os.getenv(ENV_RELAY_API_KEY) or "").strip())


def _load_limits_settings() -> LimitsSettings:
    max_connections = _int_env(ENV_MAX_CONCURRENT_CONNECTIONS, DEFAULT_MAX_CONCURRENT_CONNECTIONS)
    if max_connections <= 0:
        max_connections = DEFAULT_MAX_CONCURRENT_CONNECTIONS

    max_seconds = _seconds_or_disabled_env(ENV_MAX_UTTERANCE_AUDIO_SECONDS, DEFAULT_MAX_UTTERANCE_AUDIO_SECONDS)

    msg_window = _float_env(ENV_WS_MESSAGE_WINDOW_SECONDS, DEFAULT_WS_MESSAGE_WINDOW_SECONDS)
    msg_limit = _int_env(ENV_WS_MAX_MESSAGES_PER_WINDOW, DEFAULT_WS_MAX_MESSAGES_PER_WINDOW)
    cancel_window = _float_env(ENV_WS_CANCEL_WINDOW_SECONDS, DEFAULT_WS_CANCEL_WINDOW_SECONDS)
    if cancel_window <= 0:
        cancel_window = msg_window
    cancel_limit = _int_env(ENV_WS_MAX_CANCELS_PER_WINDOW, DEFAULT_WS_MAX_CANCELS_PER_WINDOW)

    return LimitsSettings(
        max_concurrent_connections=max_connections,
        max_utterance_audio_bytes=int(max_seconds * AUDIO_BYTES_PER_SECOND),
        ws_message_window_seconds=msg_window,
        ws_max_messages_per_window=msg_limit,
        ws_cancel_window_seconds=cancel_window,
        ws_max_cancels_per_window=cancel_limit,
    )


def _load_websocket_settings() -> WebSocketSettings:
    watchdog_tick = _float_env(ENV_WS_WATCHDOG_TICK_S, DEFAULT_WS_WATCHDOG_TICK_S)
    return WebSocketSettings(
        idle_timeout_s=_float_env(ENV_WS_IDLE_TIMEOUT_S, DEFAULT_WS_IDLE_TIMEOUT_S),
        watchdog_tick_s=watchdog_tick if watchdog_tick > 0 else DEFAULT_WS_WATCHDOG_TICK_S,
        max_connection_duration_s=_float_env(ENV_WS_MAX_CONNECTION_DURATION_S, DEFAULT_WS_MAX_CONNECTION_DURATION_S),
    )


def _load_upstream_settings() -> UpstreamSettings:
    timeout_s = _float_env(ENV_GEMINI_TIMEOUT_S, DEFAULT_GEMINI_TIMEOUT_S)
    return UpstreamSettings(
        api_key=(os.getenv(ENV_GOOGLE_API_KEY) or "").strip(),
        model=_str_env(ENV_GEMINI_MODEL, DEFAULT_GEMINI_MODEL),
        base_url=_str_env(ENV_GEMINI_BASE_URL, DEFAULT_GEMINI_BASE_URL).rstrip("/"),
        timeout_s=timeout_s if timeout_s > 0 else DEFAULT_GEMINI_TIMEOUT_S,
        prefer_audio=_bool_env(ENV_PREFER_AUDIO_FROM_GEMINI, DEFAULT_PREFER_AUDIO_FROM_GEMINI),
    )


def _load_server_settings() -> ServerSettings:
    return ServerSettings(
        host=_str_env(ENV_HOST, DEFAULT_HOST),
        port=_int_env(ENV_PORT, DEFAULT_PORT),
        cancel_superseded=_bool_env(ENV_RELAY_CANCEL_SUPERSEDED, DEFAULT_RELAY_CANCEL_SUPERSEDED),
    )


def load_settings() -> AppSettings:
    return AppSettings(
        auth=_load_auth_settings(),
        limits=_load_limits_settings(),
        websocket=_load_websocket_settings(),
        upstream=_load_upstream_settings(),
        server=_load_server_settings(),
    )


__all__ = ["load_settings"]
