"""HTTP client for the Gemini generateContent API."""

from __future__ import annotations

import base64
import logging

import httpx
import orjson

from src.state.messages import Reply
from src.errors import UpstreamError
from src.state.settings import UpstreamSettings
from src.config.upstream import GEMINI_API_KEY_HEADER, GEMINI_API_KEY_QUERY_PARAM

from .wav import pcm16_to_wav
from .cancellation import CancellationToken
from .request import build_text_request, build_audio_request
from .response import parse_reply, http_error_from_response

logger = logging.getLogger(__name__)


class GeminiClient:
    """Turns one utterance (or one text query) into one reply.

    A single `httpx.AsyncClient` is shared by every connection; each call is
    independent and carries its own cancellation token.
    """

    def __init__(self, settings: UpstreamSettings, *, http_client: httpx.AsyncClient | None = None) -> None:
        self._settings = settings
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=settings.timeout_s)

    @property
    def endpoint(self) -> str:
        return f"{self._settings.base_url.rstrip('/')}/models/{self._settings.model}:generateContent"

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._settings.api_key:
            headers[GEMINI_API_KEY_HEADER] = self._settings.api_key
        return headers

    def _params(self) -> dict[str, str]:
        if not self._settings.api_key:
            return {}
        return {GEMINI_API_KEY_QUERY_PARAM: self._settings.api_key}

    async def transcribe_and_respond(
        self,
        audio: bytes,
        language_hint: str | None,
        token: CancellationToken,
    ) -> Reply:
        wav = pcm16_to_wav(audio)
        audio_b64 = base64.b64encode(wav).decode("ascii")
        return await self._generate(build_audio_request(audio_b64, language_hint), token)

    async def transcribe_from_text(self, text: str, token: CancellationToken) -> Reply:
        return await self._generate(build_text_request(text), token)

    async def _generate(self, body: dict, token: CancellationToken) -> Reply:
        token.raise_if_cancelled()
        try:
            response = await self._http.post(
                self.endpoint,
                params=self._params(),
                headers=self._headers(),
                content=orjson.dumps(body),
            )
        except httpx.HTTPError as exc:
            token.raise_if_cancelled()
            raise UpstreamError(f"Gemini request failed: {exc}") from exc

        # A reply that lands after an interrupt is discarded.
        token.raise_if_cancelled()

        if not response.is_success:
            raise http_error_from_response(response)

        try:
            data = orjson.loads(response.content)
        except orjson.JSONDecodeError as exc:
            raise UpstreamError("Gemini returned a non-JSON response", status=response.status_code) from exc

        reply = parse_reply(data, prefer_audio=self._settings.prefer_audio)
        logger.debug("upstream reply: %s", type(reply).__name__)
        return reply

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()


__all__ = ["GeminiClient"]
