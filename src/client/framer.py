"""Cut captured audio into fixed-size base64 PCM16 frames."""

from __future__ import annotations

import base64
import logging
from collections.abc import Callable

import numpy as np

from src.config.audio import CLIENT_FRAME_SAMPLES

from .pcm import float_to_pcm16

logger = logging.getLogger(__name__)

FrameFn = Callable[[str], None]


class AudioFramer:
    """Accumulates float samples while recording and emits one frame per `frame_samples`.

    `on_frame` receives base64-encoded PCM16. Input fed while not recording is
    dropped.
    """

    def __init__(self, on_frame: FrameFn, *, frame_samples: int = CLIENT_FRAME_SAMPLES) -> None:
        if frame_samples <= 0:
            raise ValueError("frame_samples must be positive")
        self._on_frame = on_frame
        self._frame_samples = int(frame_samples)
        self._pending = np.zeros(0, dtype=np.float32)
        self._recording = False
        self.frames_sent = 0

    @property
    def recording(self) -> bool:
        return self._recording

    def start(self) -> None:
        self._pending = np.zeros(0, dtype=np.float32)
        self.frames_sent = 0
        self._recording = True

    def stop(self, *, flush: bool = True) -> None:
        if not self._recording:
            return
        self._recording = False
        if flush and self._pending.size:
            self._emit(self._pending)
        self._pending = np.zeros(0, dtype=np.float32)

    def feed(self, samples: np.ndarray) -> None:
        if not self._recording:
            return
        block = np.asarray(samples, dtype=np.float32)
        if block.ndim > 1:
            # Keep the first channel of multi-channel capture.
            block = block[:, 0]
        self._pending = np.concatenate((self._pending, block))

        n = self._frame_samples
        while self._pending.size >= n:
            frame, self._pending = self._pending[:n], self._pending[n:]
            self._emit(frame)

    def _emit(self, frame: np.ndarray) -> None:
        self._on_frame(base64.b64encode(float_to_pcm16(frame)).decode("ascii"))
        self.frames_sent += 1


__all__ = ["AudioFramer"]
