from __future__ import annotations

import base64
import asyncio

import orjson
import pytest

from src.state.session import Session, RelayState
from src.state.runtime import RuntimeDeps
from src.handlers.connections import ConnectionManager
from src.handlers.websocket.dispatch import HANDLERS
from src.handlers.websocket.context import ConnectionContext
from src.handlers.websocket.parser import parse_client_message
from src.state.messages import TextReply, AudioReply
from src.errors import UpstreamHTTPError


def _ctx(ws, upstream, settings) -> ConnectionContext:
    deps = RuntimeDeps(connections=ConnectionManager(max_connections=4), upstream=upstream, settings=settings)
    return ConnectionContext(ws=ws, session=Session(session_id="test"), deps=deps)


async def _send(ctx: ConnectionContext, **msg) -> None:
    parsed = parse_client_message(orjson.dumps(msg).decode())
    await HANDLERS[type(parsed)](ctx, parsed)


async def _settle(ctx: ConnectionContext) -> None:
    await asyncio.gather(*list(ctx.pending), return_exceptions=True)


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode()


@pytest.mark.asyncio
async def test_chunks_are_concatenated_into_one_upstream_call(fake_ws, fake_upstream, settings_factory) -> None:
    ctx = _ctx(fake_ws, fake_upstream, settings_factory())

    await _send(ctx, type="audio", chunk=_b64(b"AAAA"))
    await _send(ctx, type="audio", chunk=_b64(b"BB"))
    await _send(ctx, type="end", language="hi-IN")
    await _settle(ctx)

    assert fake_upstream.calls == [("audio", b"AAAABB", "hi-IN")]
    assert fake_ws.sent == [{"type": "text", "text": "ok"}]
    assert ctx.session.state is RelayState.IDLE
    assert ctx.session.active_request is None


@pytest.mark.asyncio
async def test_audio_reply_is_forwarded(fake_ws, fake_upstream, settings_factory) -> None:
    fake_upstream.default_reply = AudioReply(base64="T2dn", mime_type="audio/ogg")
    ctx = _ctx(fake_ws, fake_upstream, settings_factory())

    await _send(ctx, type="text", text="hello")
    await _settle(ctx)

    assert fake_upstream.calls == [("text", "hello", None)]
    assert fake_ws.sent == [{"type": "audio", "mimeType": "audio/ogg", "base64": "T2dn"}]


@pytest.mark.asyncio
async def test_end_without_audio_sends_only_info(fake_ws, fake_upstream, settings_factory) -> None:
    ctx = _ctx(fake_ws, fake_upstream, settings_factory())

    await _send(ctx, type="end")
    await _settle(ctx)

    assert fake_ws.sent == [{"type": "info", "info": "No audio received"}]
    assert fake_upstream.calls == []


@pytest.mark.asyncio
async def test_undecodable_chunks_are_dropped(fake_ws, fake_upstream, settings_factory) -> None:
    ctx = _ctx(fake_ws, fake_upstream, settings_factory())

    await _send(ctx, type="audio", chunk="not base64!!")
    await _send(ctx, type="audio", chunk="====")

    assert ctx.session.buffered_bytes == 0
    assert fake_ws.sent == []


@pytest.mark.asyncio
async def test_stop_suppresses_pending_reply(fake_ws, upstream_factory, settings_factory) -> None:
    upstream = upstream_factory(auto_release=False)
    ctx = _ctx(fake_ws, upstream, settings_factory())

    await _send(ctx, type="audio", chunk=_b64(b"xx"))
    await _send(ctx, type="end")
    await asyncio.sleep(0)
    assert ctx.session.state is RelayState.AWAITING_REPLY

    await _send(ctx, type="stop")
    upstream.gates[0].set()
    await _settle(ctx)

    assert fake_ws.sent == [{"type": "stopped"}]
    assert ctx.session.active_request is None


@pytest.mark.asyncio
async def test_stop_when_idle_still_acknowledges(fake_ws, fake_upstream, settings_factory) -> None:
    ctx = _ctx(fake_ws, fake_upstream, settings_factory())
    await _send(ctx, type="audio", chunk=_b64(b"keep"))

    await _send(ctx, type="stop")

    assert fake_ws.sent == [{"type": "stopped"}]
    assert ctx.session.buffered_bytes == 4


@pytest.mark.asyncio
async def test_audio_during_pending_reply_starts_next_utterance(fake_ws, upstream_factory, settings_factory) -> None:
    upstream = upstream_factory(auto_release=False)
    ctx = _ctx(fake_ws, upstream, settings_factory())

    await _send(ctx, type="audio", chunk=_b64(b"first"))
    await _send(ctx, type="end")
    await _send(ctx, type="audio", chunk=_b64(b"next"))

    assert ctx.session.buffered_bytes == 4
    await asyncio.sleep(0)
    upstream.gates[0].set()
    await _settle(ctx)

    assert upstream.calls == [("audio", b"first", None)]
    assert fake_ws.sent == [{"type": "text", "text": "ok"}]
    assert ctx.session.drain_and_reset() == b"next"


@pytest.mark.asyncio
async def test_new_utterance_supersedes_inflight_call(fake_ws, upstream_factory, settings_factory) -> None:
    upstream = upstream_factory(auto_release=False)
    ctx = _ctx(fake_ws, upstream, settings_factory())

    await _send(ctx, type="audio", chunk=_b64(b"one"))
    await _send(ctx, type="end")
    await asyncio.sleep(0)
    await _send(ctx, type="text", text="second question")
    await asyncio.sleep(0)

    for gate in upstream.gates:
        gate.set()
    await _settle(ctx)

    assert [c[0] for c in upstream.calls] == ["audio", "text"]
    assert fake_ws.sent == [{"type": "text", "text": "ok"}]
    assert ctx.session.active_request is None


@pytest.mark.asyncio
async def test_concurrent_calls_both_reply_when_not_superseding(fake_ws, upstream_factory, settings_factory) -> None:
    upstream = upstream_factory(auto_release=False)
    upstream.replies = [AudioReply(base64="AAAA", mime_type="audio/ogg"), TextReply(text="ok")]
    ctx = _ctx(fake_ws, upstream, settings_factory(server={"cancel_superseded": False}))

    await _send(ctx, type="audio", chunk=_b64(b"one"))
    await _send(ctx, type="end")
    await asyncio.sleep(0)
    await _send(ctx, type="audio", chunk=_b64(b"two"))
    await _send(ctx, type="end")
    await asyncio.sleep(0)
    assert len(upstream.gates) == 2

    # Completions may arrive out of order.
    upstream.gates[1].set()
    await asyncio.sleep(0.01)
    upstream.gates[0].set()
    await _settle(ctx)

    assert fake_ws.sent == [
        {"type": "text", "text": "ok"},
        {"type": "audio", "mimeType": "audio/ogg", "base64": "AAAA"},
    ]
    assert ctx.session.active_request is None


@pytest.mark.asyncio
async def test_older_completion_keeps_newer_handle(fake_ws, upstream_factory, settings_factory) -> None:
    upstream = upstream_factory(auto_release=False)
    ctx = _ctx(fake_ws, upstream, settings_factory(server={"cancel_superseded": False}))

    await _send(ctx, type="text", text="first")
    await _send(ctx, type="text", text="second")
    await asyncio.sleep(0)
    newest = ctx.session.active_request

    upstream.gates[0].set()
    await asyncio.sleep(0.01)
    assert ctx.session.active_request is newest

    upstream.gates[1].set()
    await _settle(ctx)
    assert ctx.session.active_request is None


@pytest.mark.asyncio
async def test_upstream_failure_sends_error_and_session_stays_usable(fake_ws, fake_upstream, settings_factory) -> None:
    detail = {"error": {"code": 429, "message": "quota"}}
    fake_upstream.error = UpstreamHTTPError(429, "Gemini API error: 429 quota", detail=detail)
    ctx = _ctx(fake_ws, fake_upstream, settings_factory())

    await _send(ctx, type="text", text="hello")
    await _settle(ctx)
    fake_upstream.error = None
    await _send(ctx, type="text", text="again")
    await _settle(ctx)

    assert fake_ws.sent == [
        {"type": "error", "error": "Gemini API error: 429 quota", "details": detail},
        {"type": "text", "text": "ok"},
    ]


@pytest.mark.asyncio
async def test_unexpected_failure_reports_internal_error(fake_ws, fake_upstream, settings_factory) -> None:
    fake_upstream.error = KeyError("boom")
    ctx = _ctx(fake_ws, fake_upstream, settings_factory())

    await _send(ctx, type="text", text="hello")
    await _settle(ctx)

    assert len(fake_ws.sent) == 1
    assert fake_ws.sent[0]["type"] == "error"
    assert fake_ws.sent[0]["details"] == {"reason_code": "internal_error"}
    assert ctx.session.active_request is None


@pytest.mark.asyncio
async def test_oversized_utterance_is_discarded(fake_ws, fake_upstream, settings_factory) -> None:
    ctx = _ctx(fake_ws, fake_upstream, settings_factory(limits={"max_utterance_audio_bytes": 6}))

    await _send(ctx, type="audio", chunk=_b64(b"1234"))
    await _send(ctx, type="audio", chunk=_b64(b"5678"))

    assert ctx.session.buffered_bytes == 0
    assert len(fake_ws.sent) == 1
    error = fake_ws.sent[0]
    assert error["type"] == "error"
    assert error["details"]["reason_code"] == "utterance_too_long"
    assert error["details"]["received_audio_bytes"] == 8

    await _send(ctx, type="end")
    assert fake_ws.sent[-1] == {"type": "info", "info": "No audio received"}


@pytest.mark.asyncio
async def test_cancel_pending_on_close(fake_ws, upstream_factory, settings_factory) -> None:
    upstream = upstream_factory(auto_release=False)
    ctx = _ctx(fake_ws, upstream, settings_factory(server={"cancel_superseded": False}))

    await _send(ctx, type="text", text="a")
    await _send(ctx, type="text", text="b")
    await asyncio.sleep(0)
    tasks = list(ctx.pending)

    ctx.session.cancel_active()
    await ctx.cancel_pending()

    assert all(t.done() for t in tasks)
    assert ctx.pending == set()
    assert fake_ws.sent == []
