"""Runtime settings read from ``TICTACTOE_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 8000
    # Pause before the computer replies, in seconds
    ai_delay: float = 0.5
    log_level: str = "INFO"


def _number(env: Mapping[str, str], name: str, default, cast):
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a {cast.__name__}, got {raw!r}") from exc


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if env is None else env
    ai_delay = _number(env, "TICTACTOE_AI_DELAY", Settings.ai_delay, float)
    if ai_delay < 0:
        raise ValueError("TICTACTOE_AI_DELAY must not be negative")
    return Settings(
        host=env.get("TICTACTOE_HOST", Settings.host),
        port=_number(env, "TICTACTOE_PORT", Settings.port, int),
        ai_delay=ai_delay,
        log_level=env.get("TICTACTOE_LOG_LEVEL", Settings.log_level).upper(),
    )
