"""Secrets and authentication configuration."""

from __future__ import annotations

# Key for the upstream generative-language API.
ENV_GOOGLE_API_KEY = "GOOGLE_API_KEY"

# Optional shared key clients must present on the WebSocket. Empty disables auth.
ENV_RELAY_API_KEY = "RELAY_API_KEY"

__all__ = ["ENV_GOOGLE_API_KEY", "ENV_RELAY_API_KEY"]
