from __future__ import annotations

import json

import pytest

from src.handlers.websocket.parser import parse_client_message
from src.state.messages import Interrupt, TextQuery, AudioChunk, EndOfUtterance


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (json.dumps({"type": "audio", "chunk": "AAAA"}), AudioChunk(payload="AAAA")),
        (json.dumps({"type": "end"}), EndOfUtterance(language_hint=None)),
        (json.dumps({"type": "end", "language": "hi-IN"}), EndOfUtterance(language_hint="hi-IN")),
        (json.dumps({"type": "end", "language": ""}), EndOfUtterance(language_hint=None)),
        (json.dumps({"type": "end", "language": None}), EndOfUtterance(language_hint=None)),
        (json.dumps({"type": "stop"}), Interrupt()),
        (json.dumps({"type": "text", "text": " hello "}), TextQuery(text="hello")),
    ],
)
def test_parse_client_message_ok(raw: str, expected: object) -> None:
    assert parse_client_message(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        "",
        json.dumps([]),
        json.dumps("audio"),
        json.dumps({"chunk": "AAAA"}),
        json.dumps({"type": 5}),
        json.dumps({"type": "dance"}),
        json.dumps({"type": "audio"}),
        json.dumps({"type": "audio", "chunk": 12}),
        json.dumps({"type": "end", "language": 1}),
        json.dumps({"type": "text"}),
        json.dumps({"type": "text", "text": "   "}),
    ],
)
def test_parse_client_message_invalid(raw: str) -> None:
    with pytest.raises(ValueError):
        parse_client_message(raw)
