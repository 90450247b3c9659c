"""FastAPI JSON API exposing tic-tac-toe sessions to a presentation layer."""

from __future__ import annotations

import logging
import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, Literal, Optional

from fastapi import BackgroundTasks, FastAPI, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from .ai import Difficulty
from .config import load_settings
from .game import InvalidMoveError, available_moves
from .session import (
    GameMode,
    Session,
    apply_human_move,
    maybe_computer_move,
    new_session,
    reset_session,
    status_message,
)

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """Stored game plus the bookkeeping for a pending computer reply."""

    session: Session
    ai_pending: bool = False
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


SESSIONS: Dict[str, GameSession] = {}
app = FastAPI(title="Tic-Tac-Toe", description="Tic-tac-toe against a friend or the computer")

AI_THINK_DELAY: float = load_settings().ai_delay


class NewGameRequest(BaseModel):
    """Request payload for starting a new game."""

    model_config = ConfigDict(populate_by_name=True)

    mode: GameMode = Field(
        default=GameMode.HUMAN_VS_COMPUTER,
        description="'player' for two humans, 'ai' to play the computer",
    )
    difficulty: Difficulty = Field(
        default=Difficulty.RANDOM,
        description="Computer strength: easy, medium or hard",
    )
    computer_player: Literal["X", "O"] = Field(default="O", alias="computerPlayer")


class MoveRequest(BaseModel):
    """Request payload for submitting a move on an existing game."""

    index: int = Field(ge=0, le=8)


def _get_session(game_id: str) -> GameSession:
    try:
        return SESSIONS[game_id]
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found") from exc


def _needs_ai(stored: GameSession) -> bool:
    """Flag a computer reply as pending; call with the lock held."""
    if stored.session.is_computer_turn and not stored.ai_pending:
        stored.ai_pending = True
        return True
    return False


def _run_ai_turn(game_id: str) -> None:
    stored = SESSIONS.get(game_id)
    if not stored:
        return

    time.sleep(max(0.0, AI_THINK_DELAY))

    with stored.lock:
        try:
            stored.session = maybe_computer_move(stored.session)
        finally:
            stored.ai_pending = False


def _serialize_session(game_id: str, stored: GameSession) -> Dict[str, object]:
    with stored.lock:
        session = stored.session
        status = session.status
        state: Dict[str, object] = {
            "id": game_id,
            "mode": session.mode.value,
            "difficulty": session.difficulty.value if session.difficulty else None,
            "computerPlayer": session.computer_player,
            "board": list(session.board),
            "currentPlayer": session.current_player,
            "status": status.state.value,
            "winner": status.winner,
            "winningLine": list(status.line) if status.line else None,
            "availableMoves": [] if status.is_terminal else available_moves(session.board),
            "moveLog": [
                {"player": player, "index": index} for player, index in session.move_log
            ],
            "aiPending": stored.ai_pending,
            "message": status_message(session),
        }
        if session.move_log:
            state["lastMove"] = state["moveLog"][-1]
        return state


def _apply_player_move(
    game_id: str,
    stored: GameSession,
    index: int,
    background_tasks: Optional[BackgroundTasks] = None,
) -> None:
    with stored.lock:
        if stored.ai_pending:
            raise HTTPException(status_code=400, detail="AI is completing its move")
        try:
            stored.session = apply_human_move(stored.session, index)
        except InvalidMoveError as exc:
            logger.debug("Rejected move %s on game %s: %s", index, game_id, exc)
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        should_schedule_ai = _needs_ai(stored)

    if should_schedule_ai and background_tasks is not None:
        background_tasks.add_task(_run_ai_turn, game_id)


@app.get("/healthz")
def health_check() -> Dict[str, str]:
    return {"status": "ok"}


@app.post("/api/game")
def create_game(
    request: NewGameRequest, background_tasks: BackgroundTasks
) -> Dict[str, object]:
    session = new_session(request.mode, request.difficulty, request.computer_player)
    game_id = uuid.uuid4().hex
    stored = GameSession(session=session)
    SESSIONS[game_id] = stored
    logger.info("Created game %s (mode=%s)", game_id, session.mode.value)
    # The computer may hold X and open the game
    with stored.lock:
        if _needs_ai(stored):
            background_tasks.add_task(_run_ai_turn, game_id)
    return _serialize_session(game_id, stored)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    stored = _get_session(game_id)
    return _serialize_session(game_id, stored)


@app.post("/api/game/{game_id}/move")
def make_move(
    game_id: str, request: MoveRequest, background_tasks: BackgroundTasks
) -> Dict[str, object]:
    stored = _get_session(game_id)
    _apply_player_move(game_id, stored, request.index, background_tasks)
    return _serialize_session(game_id, stored)


@app.post("/api/game/{game_id}/reset")
def reset_game(game_id: str, background_tasks: BackgroundTasks) -> Dict[str, object]:
    stored = _get_session(game_id)
    with stored.lock:
        if stored.ai_pending:
            raise HTTPException(status_code=400, detail="AI is completing its move")
        stored.session = reset_session(stored.session)
        if _needs_ai(stored):
            background_tasks.add_task(_run_ai_turn, game_id)
    return _serialize_session(game_id, stored)
