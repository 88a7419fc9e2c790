"""Configuration module exports (env-resolved constants only)."""

from .limits import (
    DEFAULT_MAX_CONCURRENT_CONNECTIONS,
)
from .audio import (
    AUDIO_BIT_DEPTH,
    AUDIO_CHANNELS,
    AUDIO_SAMPLE_RATE_HZ,
)

__all__ = [
    "AUDIO_BIT_DEPTH",
    "AUDIO_CHANNELS",
    "AUDIO_SAMPLE_RATE_HZ",
    "DEFAULT_MAX_CONCURRENT_CONNECTIONS",
]
