"""Process-level server settings (env names and defaults)."""

from __future__ import annotations

ENV_HOST = "HOST"
ENV_PORT = "PORT"

DEFAULT_HOST: str = "0.0.0.0"  # noqa: S104
DEFAULT_PORT: int = 3000

# When a new utterance or text query starts while a call is in flight, cancel
# the older call so at most one upstream request is live per connection.
ENV_RELAY_CANCEL_SUPERSEDED = "RELAY_CANCEL_SUPERSEDED"
DEFAULT_RELAY_CANCEL_SUPERSEDED: bool = True

__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "DEFAULT_RELAY_CANCEL_SUPERSEDED",
    "ENV_HOST",
    "ENV_PORT",
    "ENV_RELAY_CANCEL_SUPERSEDED",
]
