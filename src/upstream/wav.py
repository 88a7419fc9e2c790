"""Minimal RIFF/WAVE container for raw PCM uploads."""

from __future__ import annotations

import struct

from src.config.audio import AUDIO_CHANNELS, AUDIO_BIT_DEPTH, AUDIO_SAMPLE_RATE_HZ

_PCM_FORMAT_TAG = 1
_FMT_CHUNK_SIZE = 16
_HEADER = struct.Struct("<4sI4s4sIHHIIHH4sI")


def build_wav_header(*, data_length: int, sample_rate: int, channels: int, bit_depth: int) -> bytes:
    if data_length < 0:
        raise ValueError("data_length must be >= 0")
    byte_rate = sample_rate * channels * bit_depth // 8
    block_align = channels * bit_depth // 8
    return _HEADER.pack(
        b"RIFF",
        36 + data_length,
        b"WAVE",
        b"fmt ",
        _FMT_CHUNK_SIZE,
        _PCM_FORMAT_TAG,
        channels,
        sample_rate,
        byte_rate,
        block_align,
        bit_depth,
        b"data",
        data_length,
    )


def pcm16_to_wav(
    pcm: bytes,
    *,
    sample_rate: int = AUDIO_SAMPLE_RATE_HZ,
    channels: int = AUDIO_CHANNELS,
    bit_depth: int = AUDIO_BIT_DEPTH,
) -> bytes:
    """Wrap raw little-endian PCM in a WAV container."""
    header = build_wav_header(
        data_length=len(pcm),
        sample_rate=sample_rate,
        channels=channels,
        bit_depth=bit_depth,
    )
    return header + pcm


__all__ = ["build_wav_header", "pcm16_to_wav"]
