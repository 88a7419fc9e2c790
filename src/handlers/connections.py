"""WebSocket admission control and live-session bookkeeping."""

from __future__ import annotations

import asyncio
from typing import Any

from src.state.session import Session


class ConnectionManager:
    """Caps concurrent relay connections and tracks their sessions."""

    def __init__(self, *, max_connections: int) -> None:
        self._max = max(1, int(max_connections))
        self._lock = asyncio.Lock()
        self._sessions: dict[int, Session | None] = {}

    async def connect(self, ws: Any) -> bool:
        """Reserve a slot for `ws` (without accepting it). False when full."""
        key = id(ws)
        async with self._lock:
            if key in self._sessions:
                return True
            if len(self._sessions) >= self._max:
                return False
            self._sessions[key] = None
            return True

    def attach_session(self, ws: Any, session: Session) -> None:
        key = id(ws)
        if key in self._sessions:
            self._sessions[key] = session

    async def disconnect(self, ws: Any) -> None:
        async with self._lock:
            self._sessions.pop(id(ws), None)

    def get_connection_count(self) -> int:
        return len(self._sessions)

    def get_awaiting_count(self) -> int:
        """Connections with an upstream call in flight."""
        return sum(1 for s in self._sessions.values() if s is not None and s.active_request is not None)


__all__ = ["ConnectionManager"]
