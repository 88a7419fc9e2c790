"""Reply audio playback through the default output device."""

from __future__ import annotations

import io
import logging

import sounddevice as sd
import soundfile as sf

logger = logging.getLogger(__name__)


class SoundDevicePlayer:
    """Decodes a reply (WAV/OGG/FLAC, whatever libsndfile reads) and plays it without blocking."""

    def __init__(self, *, device: int | str | None = None) -> None:
        self._device = device
        self._playing = False

    def play(self, data: bytes, mime_type: str) -> None:
        try:
            samples, sample_rate = sf.read(io.BytesIO(data), dtype="float32")
        except RuntimeError as exc:
            logger.warning("cannot decode %s reply audio: %s", mime_type, exc)
            return
        sd.play(samples, sample_rate, device=self._device)
        self._playing = True

    def stop(self) -> None:
        if self._playing:
            sd.stop()
            self._playing = False

    def wait(self) -> None:
        if self._playing:
            sd.wait()
            self._playing = False


__all__ = ["SoundDevicePlayer"]
