"""Runtime dependency construction (upstream client + admission control)."""

from __future__ import annotations

import logging

import httpx

from src.state import RuntimeDeps
from src.state.settings import AppSettings
from src.upstream.client import GeminiClient
from src.handlers.connections import ConnectionManager

from .settings import load_settings

logger = logging.getLogger(__name__)


async def build_runtime_deps(
    settings: AppSettings | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> RuntimeDeps:
    settings = settings or load_settings()

    if not settings.upstream.api_key:
        logger.warning("GOOGLE_API_KEY is not set; upstream calls will be rejected")
    if not settings.auth.api_key:
        logger.info("RELAY_API_KEY is not set; WebSocket authentication is disabled")

    upstream = GeminiClient(settings.upstream, http_client=http_client)
    connections = ConnectionManager(max_connections=settings.limits.max_concurrent_connections)

    logger.info(
        "relay ready: model=%s max_connections=%s cancel_superseded=%s",
        settings.upstream.model,
        settings.limits.max_concurrent_connections,
        settings.server.cancel_superseded,
    )
    return RuntimeDeps(connections=connections, upstream=upstream, settings=settings)


__all__ = ["RuntimeDeps", "build_runtime_deps"]
