"""Float sample to PCM16 conversion."""

from __future__ import annotations

import numpy as np


def float_to_pcm16(samples: np.ndarray) -> bytes:
    """Convert float samples in [-1, 1] to little-endian int16 bytes.

    Out-of-range values are clamped. Positive samples scale by 0x7FFF and
    negative ones by 0x8000, so both -1.0 and 1.0 reach the int16 limits.
    """
    x = np.asarray(samples, dtype=np.float32).reshape(-1)
    x = np.nan_to_num(x, nan=0.0, posinf=1.0, neginf=-1.0)
    x = np.clip(x, -1.0, 1.0)
    scaled = np.where(x < 0, x * 0x8000, x * 0x7FFF)
    return scaled.astype("<i2").tobytes()


__all__ = ["float_to_pcm16"]
