"""Terminal client for the voice relay.

Device-backed pieces (microphone, player) are imported from their modules so
that framing and playback logic stay importable without PortAudio.
"""

from .pcm import float_to_pcm16
from .framer import AudioFramer
from .playback import PlaybackController, detect_language

__all__ = ["AudioFramer", "PlaybackController", "detect_language", "float_to_pcm16"]
