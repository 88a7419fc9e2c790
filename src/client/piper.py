"""Local speech synthesis with the Piper CLI, piped to aplay."""

from __future__ import annotations

import logging
import subprocess

logger = logging.getLogger(__name__)


class PiperSynthesizer:
    """Speaks text with one Piper voice model per language.

    `voices` maps a language tag ("en-IN", "hi-IN") to a model path. Unknown
    languages use `default_language`'s voice.
    """

    def __init__(
        self,
        piper_path: str,
        voices: dict[str, str],
        *,
        default_language: str = "en-IN",
        sample_rate: int = 22050,
        speed: float = 1.0,
    ) -> None:
        self.piper_path = piper_path
        self.voices = dict(voices)
        self.default_language = default_language
        self.sample_rate = sample_rate
        self.speed = speed
        self._procs: list[subprocess.Popen] = []

    def _model_for(self, language: str) -> str | None:
        return self.voices.get(language) or self.voices.get(self.default_language)

    def speak(self, text: str, language: str) -> None:
        if not text.strip():
            return
        model = self._model_for(language)
        if model is None:
            logger.warning("no Piper voice configured for %s; not speaking reply", language)
            return

        self.stop()
        cmd = [
            self.piper_path,
            "--model",
            model,
            "--output_raw",
            "--length_scale",
            str(1.0 / self.speed),
        ]
        try:
            piper_proc = subprocess.Popen(
                cmd,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
            )
        except OSError as exc:
            logger.error("TTS failed to start: %s", exc)
            return
        try:
            aplay_proc = subprocess.Popen(
                ["aplay", "-r", str(self.sample_rate), "-f", "S16_LE", "-t", "raw", "-q"],
                stdin=piper_proc.stdout,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as exc:
            logger.error("TTS playback failed to start: %s", exc)
            piper_proc.kill()
            piper_proc.wait()
            return

        # aplay owns the pipe now.
        if piper_proc.stdout:
            piper_proc.stdout.close()
        self._procs = [piper_proc, aplay_proc]
        if piper_proc.stdin:
            try:
                piper_proc.stdin.write(text.encode("utf-8"))
                piper_proc.stdin.close()
            except OSError as exc:
                logger.warning("Piper exited before reading text: %s", exc)
                self.stop()

    def stop(self) -> None:
        for proc in self._procs:
            if proc.poll() is None:
                proc.terminate()
        for proc in self._procs:
            try:
                proc.wait(timeout=1.0)
            except subprocess.TimeoutExpired:
                proc.kill()
        self._procs = []

    def wait(self) -> None:
        for proc in self._procs:
            proc.wait()
        self._procs = []


__all__ = ["PiperSynthesizer"]
