"""Per-connection relay state: buffered utterance audio plus one in-flight request."""

from __future__ import annotations

from enum import Enum
from typing import Protocol
from dataclasses import field, dataclass


class Cancelable(Protocol):
    def cancel(self) -> None: ...


class RelayState(str, Enum):
    IDLE = "idle"
    BUFFERING = "buffering"
    AWAITING_REPLY = "awaiting_reply"


@dataclass(slots=True)
class Session:
    """Mutable state owned by exactly one connection.

    Only touched from that connection's event-loop context, so no locking.
    """

    session_id: str
    _frames: list[bytes] = field(default_factory=list)
    _buffered_bytes: int = 0
    _active: Cancelable | None = None

    @property
    def buffered_bytes(self) -> int:
        return self._buffered_bytes

    @property
    def active_request(self) -> Cancelable | None:
        return self._active

    @property
    def state(self) -> RelayState:
        if self._active is not None:
            return RelayState.AWAITING_REPLY
        if self._frames:
            return RelayState.BUFFERING
        return RelayState.IDLE

    def append(self, frame: bytes) -> None:
        if not frame:
            raise ValueError("audio frame must be non-empty")
        self._frames.append(bytes(frame))
        self._buffered_bytes += len(frame)

    def drain_and_reset(self) -> bytes:
        audio = b"".join(self._frames)
        self._frames = []
        self._buffered_bytes = 0
        return audio

    def set_active_request(self, handle: Cancelable) -> None:
        # Replaces the reference only; the caller decides whether the prior call is canceled.
        self._active = handle

    def cancel_active(self) -> None:
        handle = self._active
        self._active = None
        if handle is not None:
            handle.cancel()

    def clear_active(self, handle: Cancelable) -> None:
        """Forget `handle` if it is still the active one (a newer call may have replaced it)."""
        if self._active is handle:
            self._active = None


__all__ = ["Cancelable", "RelayState", "Session"]
