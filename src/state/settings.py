"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AuthSettings:
    api_key: str


@dataclass(frozen=True, slots=True)
class LimitsSettings:
    max_concurrent_connections: int
    max_utterance_audio_bytes: int
    ws_message_window_seconds: float
    ws_max_messages_per_window: int
    ws_cancel_window_seconds: float
    ws_max_cancels_per_window: int


@dataclass(frozen=True, slots=True)
class WebSocketSettings:
    idle_timeout_s: float
    watchdog_tick_s: float
    max_connection_duration_s: float


@dataclass(frozen=True, slots=True)
class UpstreamSettings:
    api_key: str
    model: str
    base_url: str
    timeout_s: float
    prefer_audio: bool


@dataclass(frozen=True, slots=True)
class ServerSettings:
    host: str
    port: int
    cancel_superseded: bool


@dataclass(frozen=True, slots=True)
class AppSettings:
    auth: AuthSettings
    limits: LimitsSettings
    websocket: WebSocketSettings
    upstream: UpstreamSettings
    server: ServerSettings


__all__ = [
    "AppSettings",
    "AuthSettings",
    "LimitsSettings",
    "ServerSettings",
    "UpstreamSettings",
    "WebSocketSettings",
]
