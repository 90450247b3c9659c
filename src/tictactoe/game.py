"""Core rules for classic 3x3 tic-tac-toe: board, moves and result evaluation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

Player = str  # "X" or "O"
Board = Tuple[str, ...]

EMPTY = ""
X: Player = "X"
O: Player = "O"
PLAYERS: Tuple[Player, Player] = (X, O)

BOARD_SIZE = 9
CENTER = 4
CORNERS: Tuple[int, ...] = (0, 2, 6, 8)

WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


class InvalidMoveError(ValueError):
    """Raised for occupied cells, out-of-range indices and out-of-turn moves."""


class NoAvailableMoveError(RuntimeError):
    """Raised when a move policy is asked to play on a full board."""


# ---------- Board ----------


def new_board() -> Board:
    return (EMPTY,) * BOARD_SIZE


def other_player(player: Player) -> Player:
    return O if player == X else X


def _check_index(index: int) -> None:
    if (
        isinstance(index, bool)
        or not isinstance(index, int)
        or not 0 <= index < BOARD_SIZE
    ):
        raise InvalidMoveError(f"Cell index {index!r} is outside 0-8")


def is_occupied(board: Board, index: int) -> bool:
    _check_index(index)
    return board[index] != EMPTY


def available_moves(board: Board) -> List[int]:
    """Indices of empty cells in ascending order."""
    return [i for i, c in enumerate(board) if c == EMPTY]


def apply_move(board: Board, index: int, player: Player) -> Board:
    """Return a new board with ``player`` placed on ``index``."""
    if player not in PLAYERS:
        raise InvalidMoveError(f"Unknown player mark {player!r}")
    if is_occupied(board, index):
        raise InvalidMoveError("Cell already occupied")
    return board[:index] + (player,) + board[index + 1 :]


# ---------- Result ----------


class GameState(str, Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    DRAWN = "drawn"


@dataclass(frozen=True)
class GameStatus:
    state: GameState
    winner: Optional[Player] = None
    # Winning triple, kept so callers can highlight the cells
    line: Optional[Tuple[int, int, int]] = None

    @classmethod
    def in_progress(cls) -> "GameStatus":
        return cls(GameState.IN_PROGRESS)

    @classmethod
    def won(cls, player: Player, line: Tuple[int, int, int]) -> "GameStatus":
        return cls(GameState.WON, winner=player, line=line)

    @classmethod
    def drawn(cls) -> "GameStatus":
        return cls(GameState.DRAWN)

    @property
    def is_terminal(self) -> bool:
        return self.state is not GameState.IN_PROGRESS


def winning_line(board: Board) -> Optional[Tuple[int, int, int]]:
    """First complete line in ``WINNING_LINES`` order, or None."""
    for a, b, c in WINNING_LINES:
        v = board[a]
        if v != EMPTY and v == board[b] == board[c]:
            return (a, b, c)
    return None


def has_won(board: Board, player: Player) -> bool:
    return any(
        board[a] == board[b] == board[c] == player for a, b, c in WINNING_LINES
    )


def evaluate(board: Board) -> GameStatus:
    """Classify ``board`` as won, drawn or still in progress."""
    if len(board) != BOARD_SIZE:
        raise ValueError(f"Board must have {BOARD_SIZE} cells, got {len(board)}")
    line = winning_line(board)
    if line is not None:
        return GameStatus.won(board[line[0]], line)
    if EMPTY not in board:
        return GameStatus.drawn()
    return GameStatus.in_progress()
