"""Turn controller: one game session, its mode and its computer opponent."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple

from .ai import Difficulty, select_move
from .game import (
    O,
    PLAYERS,
    X,
    Board,
    GameStatus,
    InvalidMoveError,
    Player,
    apply_move,
    evaluate,
    new_board,
    other_player,
)

logger = logging.getLogger(__name__)


class GameMode(str, Enum):
    HUMAN_VS_HUMAN = "player"
    HUMAN_VS_COMPUTER = "ai"


@dataclass(frozen=True)
class Session:
    mode: GameMode = GameMode.HUMAN_VS_HUMAN
    difficulty: Optional[Difficulty] = None
    computer_player: Optional[Player] = None
    board: Board = field(default_factory=new_board)
    current_player: Player = X
    status: GameStatus = field(default_factory=GameStatus.in_progress)
    move_log: Tuple[Tuple[Player, int], ...] = ()

    def __post_init__(self) -> None:
        if self.mode is not GameMode.HUMAN_VS_COMPUTER:
            return
        if self.difficulty is None:
            raise ValueError("A computer opponent needs a difficulty")
        if self.computer_player not in PLAYERS:
            raise ValueError(f"Unknown computer mark {self.computer_player!r}")

    @property
    def is_computer_turn(self) -> bool:
        return (
            self.mode is GameMode.HUMAN_VS_COMPUTER
            and not self.status.is_terminal
            and self.current_player == self.computer_player
        )


def new_session(
    mode: GameMode,
    difficulty: Optional[Difficulty] = None,
    computer_player: Player = O,
) -> Session:
    """Start a game; X always moves first.

    ``difficulty`` and ``computer_player`` only matter against the computer,
    where the difficulty defaults to the random policy.
    """
    mode = GameMode(mode)
    if mode is GameMode.HUMAN_VS_HUMAN:
        session = Session(mode=mode)
    else:
        session = Session(
            mode=mode,
            difficulty=Difficulty(difficulty or Difficulty.RANDOM),
            computer_player=computer_player,
        )
    logger.debug(
        "New session mode=%s difficulty=%s", session.mode.value, session.difficulty
    )
    return session


def reset_session(session: Session) -> Session:
    """Fresh board with the same mode and difficulty."""
    return replace(
        session,
        board=new_board(),
        current_player=X,
        status=GameStatus.in_progress(),
        move_log=(),
    )


def _play(session: Session, index: int) -> Session:
    if session.status.is_terminal:
        raise InvalidMoveError("Game already finished")
    player = session.current_player
    board = apply_move(session.board, index, player)
    status = evaluate(board)
    if status.is_terminal:
        logger.info(
            "Game finished: %s%s",
            status.state.value,
            f" by {status.winner}" if status.winner else "",
        )
    return replace(
        session,
        board=board,
        status=status,
        current_player=player if status.is_terminal else other_player(player),
        move_log=session.move_log + ((player, index),),
    )


def apply_human_move(session: Session, index: int) -> Session:
    if session.is_computer_turn:
        raise InvalidMoveError("It is the computer's turn")
    return _play(session, index)


def maybe_computer_move(
    session: Session, rng: Optional[random.Random] = None
) -> Session:
    """Play the computer's reply if it is due, else return ``session`` as is."""
    if not session.is_computer_turn:
        return session
    index = select_move(session.board, session.computer_player, session.difficulty, rng)
    return _play(session, index)


def play_turn(
    session: Session, index: int, rng: Optional[random.Random] = None
) -> Session:
    """Human move followed immediately by any computer reply."""
    return maybe_computer_move(apply_human_move(session, index), rng)


def get_status(session: Session) -> GameStatus:
    return session.status


def get_board(session: Session) -> Board:
    return session.board


def status_message(session: Session) -> str:
    status = session.status
    if status.winner:
        return f"Player {status.winner} Wins!"
    if status.is_terminal:
        return "Game Draw!"
    return f"Player {session.current_player}'s Turn"
