"""Fallback synthesizer that prints replies instead of speaking them."""

from __future__ import annotations

import sys
from typing import TextIO


class TranscriptSynthesizer:
    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream or sys.stdout

    def speak(self, text: str, language: str) -> None:
        print(f"[{language}] {text}", file=self._stream, flush=True)

    def stop(self) -> None:
        return None

    def wait(self) -> None:
        return None


__all__ = ["TranscriptSynthesizer"]
