from __future__ import annotations

import base64

import pytest

from src.client.playback import PlaybackController, detect_language, speech_language


class _Recorder:
    def __init__(self, events: list[tuple]) -> None:
        self.events = events

    def play(self, data: bytes, mime_type: str) -> None:
        self.events.append(("play", data, mime_type))

    def speak(self, text: str, language: str) -> None:
        self.events.append(("speak", text, language))

    def stop(self) -> None:
        self.events.append(("stop",))


@pytest.fixture
def controller_events() -> tuple[PlaybackController, list[tuple]]:
    events: list[tuple] = []
    recorder = _Recorder(events)
    return PlaybackController(recorder, recorder), events


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("नमस्ते", "hi-IN"),
        ("hello there", "en-IN"),
        ("नमस्ते hello", "mixed"),
        ("12345 !?", ""),
        ("", ""),
    ],
)
def test_detect_language(text: str, expected: str) -> None:
    assert detect_language(text) == expected


def test_speech_language_falls_back_to_indian_english() -> None:
    assert speech_language("नमस्ते hello") == "en-IN"
    assert speech_language("...") == "en-IN"
    assert speech_language("नमस्ते") == "hi-IN"


def test_audio_reply_stops_current_then_plays(controller_events) -> None:
    controller, events = controller_events
    controller.handle({"type": "audio", "mimeType": "audio/ogg", "base64": base64.b64encode(b"abc").decode()})
    assert events == [("stop",), ("stop",), ("play", b"abc", "audio/ogg")]


def test_text_reply_is_spoken_with_detected_language(controller_events) -> None:
    controller, events = controller_events
    controller.handle({"type": "text", "text": "नमस्ते"})
    assert events[-1] == ("speak", "नमस्ते", "hi-IN")
    assert events[:-1] == [("stop",), ("stop",)]


def test_stopped_halts_playback(controller_events) -> None:
    controller, events = controller_events
    controller.handle({"type": "stopped"})
    assert events == [("stop",), ("stop",)]


@pytest.mark.parametrize(
    "message",
    [
        {"type": "info", "info": "No audio received"},
        {"type": "error", "error": "boom", "details": None},
        {"type": "audio", "base64": "***"},
        {"type": "text", "text": "   "},
        {"type": "mystery"},
    ],
)
def test_non_playable_messages_do_not_touch_audio(controller_events, message) -> None:
    controller, events = controller_events
    controller.handle(message)
    assert events == []
