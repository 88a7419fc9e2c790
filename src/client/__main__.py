"""Talk to the relay from a terminal: `python -m src.client`."""

from __future__ import annotations

import os
import asyncio
import logging
import argparse

from dotenv import load_dotenv

from src.config.secrets import ENV_RELAY_API_KEY
from src.config.logging import LOG_FORMAT
from src.config.websocket import WS_KEY_TYPE, WS_OUT_INFO, WS_OUT_TEXT, WS_OUT_AUDIO, WS_OUT_ERROR, WS_ENDPOINT_PATH

from .piper import PiperSynthesizer
from .relay import RelayClient
from .framer import AudioFramer
from .microphone import Microphone
from .player import SoundDevicePlayer
from .playback import LANG_HINDI, LANG_ENGLISH, PlaybackController
from .transcript import TranscriptSynthesizer

logger = logging.getLogger(__name__)

REPLY_TYPES = {WS_OUT_AUDIO, WS_OUT_TEXT, WS_OUT_INFO, WS_OUT_ERROR}


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Voice relay terminal client")
    parser.add_argument("--url", default=f"ws://localhost:3000{WS_ENDPOINT_PATH}", help="relay WebSocket URL")
    parser.add_argument("--api-key", default=os.getenv(ENV_RELAY_API_KEY, ""), help="relay API key, if required")
    parser.add_argument("--text", default=None, help="send one text query instead of recording")
    parser.add_argument("--language", default=None, help="language hint sent with each utterance (e.g. hi-IN)")
    parser.add_argument("--device", default=None, help="sounddevice input/output device")
    parser.add_argument("--piper", default=os.getenv("PIPER_PATH", ""), help="path to the piper binary")
    parser.add_argument("--voice-en", default=os.getenv("PIPER_VOICE_EN", ""), help="Piper model for en-IN")
    parser.add_argument("--voice-hi", default=os.getenv("PIPER_VOICE_HI", ""), help="Piper model for hi-IN")
    parser.add_argument("--reply-timeout", type=float, default=90.0, help="seconds to wait for a reply")
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args()


def _build_synthesizer(args: argparse.Namespace) -> PiperSynthesizer | TranscriptSynthesizer:
    voices = {lang: path for lang, path in ((LANG_ENGLISH, args.voice_en), (LANG_HINDI, args.voice_hi)) if path}
    if args.piper and voices:
        return PiperSynthesizer(args.piper, voices)
    return TranscriptSynthesizer()


async def _await_reply(client: RelayClient, timeout: float) -> dict | None:
    try:
        while True:
            msg = await client.next_message(timeout=timeout)
            if msg.get(WS_KEY_TYPE) in REPLY_TYPES:
                return msg
    except TimeoutError:
        logger.warning("no reply within %.0fs", timeout)
        return None


async def _text_mode(client: RelayClient, args, player, synthesizer) -> None:
    await client.send_text(args.text)
    if await _await_reply(client, args.reply_timeout) is not None:
        await asyncio.to_thread(player.wait)
        await asyncio.to_thread(synthesizer.wait)


async def _voice_mode(client: RelayClient, args, controller: PlaybackController) -> None:
    loop = asyncio.get_running_loop()
    framer = AudioFramer(client.queue_audio)
    mic = Microphone(framer, loop, device=args.device)

    while True:
        line = await asyncio.to_thread(input, "[Enter] talk, [q] quit > ")
        if line.strip().lower() == "q":
            return

        # Barge in on whatever is still playing or pending.
        controller.stop()
        await client.interrupt()

        mic.start()
        await asyncio.to_thread(input, "listening... [Enter] to send > ")
        await mic.stop(flush=True)
        logger.info("sent %s frames", framer.frames_sent)
        await client.end_utterance(args.language)


async def _run(args: argparse.Namespace) -> None:
    player = SoundDevicePlayer(device=args.device)
    synthesizer = _build_synthesizer(args)
    controller = PlaybackController(player, synthesizer)

    async with RelayClient(args.url, api_key=args.api_key, on_message=controller.handle) as client:
        if args.text:
            await _text_mode(client, args, player, synthesizer)
        else:
            await _voice_mode(client, args, controller)
    controller.stop()


def main() -> None:
    load_dotenv()
    args = _parse_args()
    logging.basicConfig(level=args.log_level.upper(), format=LOG_FORMAT)
    try:
        asyncio.run(_run(args))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
