"""Microphone capture feeding an AudioFramer."""

from __future__ import annotations

import asyncio
import logging

import sounddevice as sd

from src.config.audio import AUDIO_CHANNELS, CLIENT_FRAME_SAMPLES, AUDIO_SAMPLE_RATE_HZ

from .framer import AudioFramer

logger = logging.getLogger(__name__)


class Microphone:
    """Captures mono float32 audio at the relay's sample rate.

    sounddevice calls back on its own thread; blocks are handed to the framer
    on the event loop.
    """

    def __init__(
        self,
        framer: AudioFramer,
        loop: asyncio.AbstractEventLoop,
        *,
        device: int | str | None = None,
        block_size: int = CLIENT_FRAME_SAMPLES,
    ) -> None:
        self._framer = framer
        self._loop = loop
        self._device = device
        self._block_size = block_size
        self._stream: sd.InputStream | None = None

    def _callback(self, indata, frames, time_info, status) -> None:  # noqa: ARG002
        if status:
            logger.debug("input stream status: %s", status)
        self._loop.call_soon_threadsafe(self._framer.feed, indata.copy())

    def start(self) -> None:
        if self._stream is not None:
            return
        self._framer.start()
        self._stream = sd.InputStream(
            samplerate=AUDIO_SAMPLE_RATE_HZ,
            channels=AUDIO_CHANNELS,
            dtype="float32",
            blocksize=self._block_size,
            device=self._device,
            callback=self._callback,
        )
        self._stream.start()

    async def stop(self, *, flush: bool = True) -> None:
        stream = self._stream
        self._stream = None
        if stream is not None:
            stream.stop()
            stream.close()
        # Blocks already handed to the loop must reach the framer before the final flush.
        await asyncio.sleep(0)
        self._framer.stop(flush=flush)


__all__ = ["Microphone"]
