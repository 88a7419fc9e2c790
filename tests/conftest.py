from __future__ import annotations

import sys
import asyncio
import dataclasses
from typing import Any
from pathlib import Path

import orjson
import pytest

from src.state.messages import TextReply
from src.state.settings import (
    AppSettings,
    AuthSettings,
    LimitsSettings,
    ServerSettings,
    UpstreamSettings,
    WebSocketSettings,
)


def pytest_configure() -> None:
    # Keep `import src...` working when running `pytest` from the repo root.
    repo_root = Path(__file__).resolve().parents[1]
    repo_root_str = str(repo_root)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


def make_settings(**overrides: Any) -> AppSettings:
    """Test settings; `overrides` maps a section name to field overrides."""
    settings = AppSettings(
        auth=AuthSettings(api_key=""),
        limits=LimitsSettings(
            max_concurrent_connections=8,
            max_utterance_audio_bytes=0,
            ws_message_window_seconds=60.0,
            ws_max_messages_per_window=0,
            ws_cancel_window_seconds=60.0,
            ws_max_cancels_per_window=0,
        ),
        websocket=WebSocketSettings(idle_timeout_s=0.0, watchdog_tick_s=0.05, max_connection_duration_s=0.0),
        upstream=UpstreamSettings(
            api_key="test-key",
            model="gemini-test",
            base_url="https://upstream.test/v1beta",
            timeout_s=5.0,
            prefer_audio=True,
        ),
        server=ServerSettings(host="127.0.0.1", port=3000, cancel_superseded=True),
    )
    for section, values in overrides.items():
        settings = dataclasses.replace(settings, **{section: dataclasses.replace(getattr(settings, section), **values)})
    return settings


class FakeUpstream:
    """Stands in for GeminiClient. Each call waits on its own gate unless auto-released."""

    def __init__(self, *, auto_release: bool = True, delay: float = 0.0) -> None:
        self.auto_release = auto_release
        self.delay = delay
        self.calls: list[tuple[str, Any, str | None]] = []
        self.gates: list[asyncio.Event] = []
        self.replies: list[Any] = []
        self.default_reply = TextReply(text="ok")
        self.error: BaseException | None = None
        self.closed = False

    async def transcribe_and_respond(self, audio: bytes, language_hint: str | None, token) -> Any:
        return await self._respond(("audio", audio, language_hint), token)

    async def transcribe_from_text(self, text: str, token) -> Any:
        return await self._respond(("text", text, None), token)

    async def _respond(self, call: tuple[str, Any, str | None], token) -> Any:
        index = len(self.calls)
        self.calls.append(call)
        gate = asyncio.Event()
        self.gates.append(gate)
        if self.auto_release:
            gate.set()
        await gate.wait()
        if self.delay:
            await asyncio.sleep(self.delay)
        token.raise_if_cancelled()
        if self.error is not None:
            raise self.error
        if index < len(self.replies):
            return self.replies[index]
        return self.default_reply

    async def aclose(self) -> None:
        self.closed = True


class FakeWebSocket:
    """Collects outbound JSON frames."""

    def __init__(self) -> None:
        self.sent: list[dict[str, Any]] = []
        self.closed = False

    async def send_text(self, text: str) -> None:
        if self.closed:
            raise RuntimeError("socket closed")
        self.sent.append(orjson.loads(text))

    async def close(self, *, code: int = 1000, reason: str | None = None) -> None:
        self.closed = True

    def types(self) -> list[str]:
        return [m["type"] for m in self.sent]


@pytest.fixture
def settings_factory():
    return make_settings


@pytest.fixture
def fake_upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def fake_ws() -> FakeWebSocket:
    return FakeWebSocket()


@pytest.fixture
def upstream_factory():
    return FakeUpstream
