"""Audio format constants shared by the relay server and client."""

from __future__ import annotations

# Clients stream PCM16 mono @ 16kHz; the upstream WAV container declares the same.
AUDIO_SAMPLE_RATE_HZ: int = 16000
AUDIO_CHANNELS: int = 1
AUDIO_BIT_DEPTH: int = 16
AUDIO_BYTES_PER_SECOND: int = AUDIO_SAMPLE_RATE_HZ * AUDIO_CHANNELS * (AUDIO_BIT_DEPTH // 8)

# Samples per client frame (matches a 4096-sample capture buffer, ~256ms).
CLIENT_FRAME_SAMPLES: int = 4096

WAV_MIME_TYPE: str = "audio/wav"

# Used by the client when an audio reply carries no mimeType.
DEFAULT_REPLY_AUDIO_MIME_TYPE: str = "audio/ogg"

__all__ = [
    "AUDIO_BIT_DEPTH",
    "AUDIO_BYTES_PER_SECOND",
    "AUDIO_CHANNELS",
    "AUDIO_SAMPLE_RATE_HZ",
    "CLIENT_FRAME_SAMPLES",
    "DEFAULT_REPLY_AUDIO_MIME_TYPE",
    "WAV_MIME_TYPE",
]
