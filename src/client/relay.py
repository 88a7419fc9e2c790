"""WebSocket client for the voice relay."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import Any
from collections.abc import Callable

import orjson
import websockets

from src.config.websocket import (
    WS_IN_END,
    WS_IN_STOP,
    WS_IN_TEXT,
    WS_IN_AUDIO,
    WS_KEY_TEXT,
    WS_KEY_TYPE,
    WS_KEY_CHUNK,
    WS_KEY_LANGUAGE,
)

logger = logging.getLogger(__name__)

MessageFn = Callable[[dict[str, Any]], None]

_CLOSE = object()


class RelayClient:
    """Sends relay messages in order and hands every inbound message to `on_message`.

    All outbound traffic goes through one queue, so audio frames queued from
    the microphone always precede the "end" that follows them.
    """

    def __init__(
        self,
        url: str,
        *,
        api_key: str = "",
        on_message: MessageFn | None = None,
        open_timeout: float = 10.0,
    ) -> None:
        self.url = url
        self._api_key = api_key
        self._on_message = on_message
        self._open_timeout = open_timeout
        self._ws: Any = None
        self._outbox: asyncio.Queue = asyncio.Queue()
        self._inbox: asyncio.Queue[dict[str, Any]] = asyncio.Queue()
        self._tasks: list[asyncio.Task] = []

    async def __aenter__(self) -> RelayClient:
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def connect(self) -> None:
        headers = [("x-api-key", self._api_key)] if self._api_key else []
        self._ws = await websockets.connect(
            self.url,
            additional_headers=headers,
            open_timeout=self._open_timeout,
            max_size=None,
        )
        self._tasks = [
            asyncio.create_task(self._writer()),
            asyncio.create_task(self._reader()),
        ]
        logger.info("connected to %s", self.url)

    async def close(self) -> None:
        self._outbox.put_nowait(_CLOSE)
        writer = self._tasks[0] if self._tasks else None
        if writer is not None:
            with contextlib.suppress(Exception):
                await asyncio.wait_for(writer, timeout=5.0)
        if self._ws is not None:
            await self._ws.close()
        for task in self._tasks:
            task.cancel()
        for task in self._tasks:
            with contextlib.suppress(asyncio.CancelledError, Exception):
                await task
        self._tasks = []

    async def _writer(self) -> None:
        while True:
            item = await self._outbox.get()
            if item is _CLOSE:
                return
            try:
                await self._ws.send(orjson.dumps(item).decode("utf-8"))
            except websockets.exceptions.ConnectionClosed:
                logger.warning("relay connection closed while sending")
                return

    async def _reader(self) -> None:
        try:
            async for raw in self._ws:
                if not isinstance(raw, str):
                    continue
                try:
                    msg = orjson.loads(raw)
                except orjson.JSONDecodeError:
                    logger.debug("dropping non-JSON frame from relay")
                    continue
                if not isinstance(msg, dict):
                    continue
                if self._on_message is not None:
                    self._on_message(msg)
                self._inbox.put_nowait(msg)
        except websockets.exceptions.ConnectionClosed as exc:
            logger.info("relay connection closed: %s", exc)

    def queue_audio(self, chunk_b64: str) -> None:
        """Queue one base64 PCM16 frame. Must be called on the event loop."""
        self._outbox.put_nowait({WS_KEY_TYPE: WS_IN_AUDIO, WS_KEY_CHUNK: chunk_b64})

    async def end_utterance(self, language: str | None = None) -> None:
        msg: dict[str, Any] = {WS_KEY_TYPE: WS_IN_END}
        if language:
            msg[WS_KEY_LANGUAGE] = language
        await self._outbox.put(msg)

    async def interrupt(self) -> None:
        await self._outbox.put({WS_KEY_TYPE: WS_IN_STOP})

    async def send_text(self, text: str) -> None:
        await self._outbox.put({WS_KEY_TYPE: WS_IN_TEXT, WS_KEY_TEXT: text})

    async def next_message(self, *, timeout: float | None = None) -> dict[str, Any]:
        return await asyncio.wait_for(self._inbox.get(), timeout=timeout)


__all__ = ["RelayClient"]
