"""Computer move policies: random, heuristic and exhaustive minimax."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from .game import (
    CENTER,
    CORNERS,
    Board,
    GameState,
    NoAvailableMoveError,
    Player,
    apply_move,
    available_moves,
    evaluate,
    has_won,
    other_player,
)

WIN_SCORE = 10
LOSS_SCORE = -10
DRAW_SCORE = 0

Policy = Callable[[Board, Player, Optional[random.Random]], int]


class Difficulty(str, Enum):
    RANDOM = "easy"
    HEURISTIC = "medium"
    OPTIMAL = "hard"


def _moves_or_raise(board: Board) -> List[int]:
    moves = available_moves(board)
    if not moves:
        raise NoAvailableMoveError("No valid moves available")
    return moves


# ---------- Easy ----------


def random_move(
    board: Board, player: Player, rng: Optional[random.Random] = None
) -> int:
    """Uniformly random empty cell."""
    moves = _moves_or_raise(board)
    return (rng or random).choice(moves)


# ---------- Medium ----------


def _completing_move(board: Board, player: Player, moves: List[int]) -> Optional[int]:
    for move in moves:
        if has_won(apply_move(board, move, player), player):
            return move
    return None


def heuristic_move(
    board: Board, player: Player, rng: Optional[random.Random] = None
) -> int:
    """Win, else block, else center, else a random corner, else anything."""
    moves = _moves_or_raise(board)
    rng = rng or random

    win = _completing_move(board, player, moves)
    if win is not None:
        return win
    block = _completing_move(board, other_player(player), moves)
    if block is not None:
        return block

    if CENTER in moves:
        return CENTER
    corners = [i for i in CORNERS if i in moves]
    if corners:
        return rng.choice(corners)
    return rng.choice(moves)


# ---------- Hard ----------


@dataclass
class MinimaxAI:
    """Exhaustive minimax from ``player``'s point of view.

    Terminal positions score +10 (``player`` wins), -10 (opponent wins) or 0
    (draw). Scores are not discounted by depth, so a win in one move and a
    win in five are worth the same. Ties between moves go to the lowest
    index, which makes the choice deterministic for a given board.

    Subtree values are exact, so they are cached per (board, side to move)
    without changing which move is chosen.
    """

    player: Player
    _tt: Dict[Tuple[Board, Player], int] = field(default_factory=dict, repr=False)

    # ---- public API ----

    def choose(self, board: Board) -> int:
        return self.best_move(board, self.player)[0]

    def best_move(self, board: Board, to_move: Player) -> Tuple[int, int]:
        """Return ``(index, score)`` for the side to move.

        Maximizes when ``to_move`` is this AI's player, minimizes otherwise.
        """
        moves = _moves_or_raise(board)
        maximizing = to_move == self.player
        nxt = other_player(to_move)
        best_index = moves[0]
        best_score = self.score(apply_move(board, best_index, to_move), nxt)
        for move in moves[1:]:
            score = self.score(apply_move(board, move, to_move), nxt)
            if (maximizing and score > best_score) or (
                not maximizing and score < best_score
            ):
                best_index, best_score = move, score
        return best_index, best_score

    def score(self, board: Board, to_move: Player) -> int:
        """Minimax value of ``board`` with ``to_move`` about to play."""
        status = evaluate(board)
        if status.state is GameState.WON:
            return WIN_SCORE if status.winner == self.player else LOSS_SCORE
        if status.state is GameState.DRAWN:
            return DRAW_SCORE

        key = (board, to_move)
        cached = self._tt.get(key)
        if cached is not None:
            return cached

        nxt = other_player(to_move)
        scores = [
            self.score(apply_move(board, move, to_move), nxt)
            for move in available_moves(board)
        ]
        value = max(scores) if to_move == self.player else min(scores)
        self._tt[key] = value
        return value


_SOLVERS: Dict[Player, MinimaxAI] = {}


def minimax_move(
    board: Board, player: Player, rng: Optional[random.Random] = None
) -> int:
    """Optimal move for ``player``; ``rng`` is accepted for a uniform signature."""
    solver = _SOLVERS.get(player)
    if solver is None:
        solver = _SOLVERS[player] = MinimaxAI(player=player)
    return solver.choose(board)


POLICIES: Dict[Difficulty, Policy] = {
    Difficulty.RANDOM: random_move,
    Difficulty.HEURISTIC: heuristic_move,
    Difficulty.OPTIMAL: minimax_move,
}


def select_move(
    board: Board,
    player: Player,
    difficulty: Difficulty,
    rng: Optional[random.Random] = None,
) -> int:
    return POLICIES[Difficulty(difficulty)](board, player, rng)
