"""Entry point for running the game server via ``python -m tictactoe``."""

from __future__ import annotations

import logging

import uvicorn

from .config import load_settings


def main() -> None:
    """Start the FastAPI-powered tic-tac-toe server."""

    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "tictactoe.api:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
