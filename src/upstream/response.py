"""Map generateContent responses (and failures) to relay replies."""

from __future__ import annotations

from typing import Any

import orjson
import httpx

from src.errors import UpstreamHTTPError
from src.state.messages import Reply, TextReply, AudioReply


def _candidate_parts(data: Any) -> list[dict[str, Any]]:
    if not isinstance(data, dict):
        return []
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return []
    first = candidates[0]
    content = first.get("content") if isinstance(first, dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return []
    return [p for p in parts if isinstance(p, dict)]


def _audio_part(parts: list[dict[str, Any]]) -> AudioReply | None:
    for part in parts:
        inline = part.get("inlineData")
        if not isinstance(inline, dict):
            continue
        mime_type = inline.get("mimeType")
        data = inline.get("data")
        if isinstance(mime_type, str) and mime_type.startswith("audio/") and isinstance(data, str) and data:
            return AudioReply(base64=data, mime_type=mime_type)
    return None


def parse_reply(data: Any, *, prefer_audio: bool) -> Reply:
    """Build a reply from `candidates[0].content.parts`.

    Text fragments are newline-joined in order and trimmed. Audio output wins
    over text when the model returned any and audio is preferred.
    """
    parts = _candidate_parts(data)
    if prefer_audio:
        audio = _audio_part(parts)
        if audio is not None:
            return audio
    texts = [p["text"] for p in parts if isinstance(p.get("text"), str) and p["text"]]
    return TextReply(text="\n".join(texts).strip())


def _safe_json(response: httpx.Response) -> Any:
    try:
        return orjson.loads(response.content)
    except orjson.JSONDecodeError:
        return None


def http_error_from_response(response: httpx.Response) -> UpstreamHTTPError:
    detail = _safe_json(response)
    message = None
    if isinstance(detail, dict):
        error = detail.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            message = error["message"]
    message = message or response.reason_phrase
    return UpstreamHTTPError(
        response.status_code,
        f"Gemini API error: {response.status_code} {message}".strip(),
        detail=detail,
    )


__all__ = ["http_error_from_response", "parse_reply"]
