from __future__ import annotations

import struct

import pytest

from src.upstream.wav import pcm16_to_wav, build_wav_header


def test_pcm16_to_wav_header_fields() -> None:
    pcm = b"\x01\x00\xff\x7f" * 10
    wav = pcm16_to_wav(pcm)

    assert len(wav) == 44 + len(pcm)
    assert wav[44:] == pcm
    fields = struct.unpack("<4sI4s4sIHHIIHH4sI", wav[:44])
    assert fields == (
        b"RIFF",
        36 + len(pcm),
        b"WAVE",
        b"fmt ",
        16,
        1,
        1,
        16000,
        32000,
        2,
        16,
        b"data",
        len(pcm),
    )


def test_build_wav_header_stereo_byte_rate() -> None:
    header = build_wav_header(data_length=0, sample_rate=48000, channels=2, bit_depth=16)
    _, riff_size, *_rest = struct.unpack("<4sI4s4sIHHIIHH4sI", header)
    assert riff_size == 36
    assert struct.unpack_from("<I", header, 28)[0] == 48000 * 2 * 2
    assert struct.unpack_from("<H", header, 32)[0] == 4


def test_build_wav_header_rejects_negative_length() -> None:
    with pytest.raises(ValueError):
        build_wav_header(data_length=-1, sample_rate=16000, channels=1, bit_depth=16)
