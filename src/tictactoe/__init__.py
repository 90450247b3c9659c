"""Tic-tac-toe package exposing game rules, computer players, and the web API."""

from .ai import Difficulty, MinimaxAI, select_move
from .game import GameStatus, InvalidMoveError, NoAvailableMoveError, evaluate
from .session import (
    GameMode,
    Session,
    apply_human_move,
    get_board,
    get_status,
    maybe_computer_move,
    new_session,
)

__all__ = [
    "Difficulty",
    "GameMode",
    "GameStatus",
    "InvalidMoveError",
    "MinimaxAI",
    "NoAvailableMoveError",
    "Session",
    "apply_human_move",
    "evaluate",
    "get_board",
    "get_status",
    "maybe_computer_move",
    "new_session",
    "select_move",
]
