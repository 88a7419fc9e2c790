"""Run the relay server: `python -m src`."""

from __future__ import annotations

import uvicorn
from dotenv import load_dotenv

from src.runtime.settings import load_settings


def main() -> None:
    load_dotenv()
    settings = load_settings()
    uvicorn.run(
        "src.server:app",
        host=settings.server.host,
        port=settings.server.port,
        ws_max_size=16 * 1024 * 1024,
    )


if __name__ == "__main__":
    main()
