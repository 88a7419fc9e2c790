from .wav import pcm16_to_wav
from .client import GeminiClient
from .cancellation import RequestHandle, CancellationToken

__all__ = ["CancellationToken", "GeminiClient", "RequestHandle", "pcm16_to_wav"]
