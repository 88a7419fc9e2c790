"""Everything one relay connection's handlers share."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import Any
from dataclasses import field, dataclass

from fastapi import WebSocket

from src.state.session import Session
from src.state.runtime import RuntimeDeps

from .outbound import build_error, safe_send_json

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ConnectionContext:
    ws: WebSocket
    session: Session
    deps: RuntimeDeps
    send_lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    pending: set[asyncio.Task] = field(default_factory=set)

    async def send(self, payload: dict[str, Any]) -> bool:
        # Call completions and the receive loop both write; frames must not interleave.
        async with self.send_lock:
            return await safe_send_json(self.ws, payload)

    async def send_error(
        self,
        message: str,
        *,
        reason_code: str | None = None,
        details: Any = None,
    ) -> bool:
        return await self.send(build_error(message, details=details, reason_code=reason_code))

    def track(self, task: asyncio.Task) -> None:
        self.pending.add(task)
        task.add_done_callback(self.pending.discard)

    async def cancel_pending(self) -> None:
        tasks = list(self.pending)
        for task in tasks:
            task.cancel()
        for task in tasks:
            with contextlib.suppress(asyncio.CancelledError, Exception):
                await task
        self.pending.clear()


__all__ = ["ConnectionContext"]
