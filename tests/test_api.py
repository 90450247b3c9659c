"""Tests for the FastAPI tic-tac-toe interface."""

from __future__ import annotations

from fastapi.testclient import TestClient

from tictactoe import api
from tictactoe.api import app


client = TestClient(app)
api.AI_THINK_DELAY = 0.0


def _new_game(**payload):
    response = client.post("/api/game", json=payload)
    assert response.status_code == 200
    return response.json()


def test_health_check():
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_create_game_and_first_move():
    payload = _new_game(mode="ai", difficulty="hard")
    assert payload["currentPlayer"] == "X"
    assert payload["board"] == [""] * 9
    assert payload["moveLog"] == []
    assert payload["status"] == "in_progress"
    assert payload["message"] == "Player X's Turn"

    game_id = payload["id"]
    move_response = client.post(f"/api/game/{game_id}/move", json={"index": 0})
    assert move_response.status_code == 200
    state = move_response.json()
    assert state["board"][0] == "X"
    assert state["moveLog"][0] == {"player": "X", "index": 0}
    assert state["currentPlayer"] == "O"
    assert state["aiPending"] is True

    follow_up = client.get(f"/api/game/{game_id}")
    assert follow_up.status_code == 200
    final_state = follow_up.json()
    assert final_state["currentPlayer"] == "X"
    assert final_state["aiPending"] is False
    assert final_state["lastMove"] == {"player": "O", "index": 4}


def test_invalid_move_rejected():
    game_id = _new_game(mode="player")["id"]

    first_move = client.post(f"/api/game/{game_id}/move", json={"index": 0})
    assert first_move.status_code == 200

    duplicate_move = client.post(f"/api/game/{game_id}/move", json={"index": 0})
    assert duplicate_move.status_code == 400
    assert duplicate_move.json()["detail"]

    state = client.get(f"/api/game/{game_id}").json()
    assert state["board"][0] == "X"
    assert state["currentPlayer"] == "O"


def test_two_player_win_reported():
    game_id = _new_game(mode="player")["id"]
    for index in (0, 3, 1, 4, 2):
        response = client.post(f"/api/game/{game_id}/move", json={"index": index})
        assert response.status_code == 200
    state = response.json()
    assert state["status"] == "won"
    assert state["winner"] == "X"
    assert state["winningLine"] == [0, 1, 2]
    assert state["availableMoves"] == []
    assert state["message"] == "Player X Wins!"

    late = client.post(f"/api/game/{game_id}/move", json={"index": 8})
    assert late.status_code == 400


def test_reset_game():
    game_id = _new_game(mode="player")["id"]
    client.post(f"/api/game/{game_id}/move", json={"index": 4})
    response = client.post(f"/api/game/{game_id}/reset")
    assert response.status_code == 200
    state = response.json()
    assert state["board"] == [""] * 9
    assert state["currentPlayer"] == "X"
    assert state["mode"] == "player"


def test_computer_opens_as_x():
    payload = _new_game(mode="ai", difficulty="hard", computerPlayer="X")
    assert payload["aiPending"] is True
    state = client.get(f"/api/game/{payload['id']}").json()
    assert state["board"][0] == "X"
    assert state["currentPlayer"] == "O"


def test_rejects_unknown_computer_mark():
    response = client.post("/api/game", json={"mode": "ai", "computerPlayer": "Z"})
    assert response.status_code == 422


def test_rejects_unsupported_difficulty():
    response = client.post("/api/game", json={"mode": "ai", "difficulty": "insane"})
    assert response.status_code == 422


def test_rejects_out_of_range_index():
    game_id = _new_game(mode="player")["id"]
    response = client.post(f"/api/game/{game_id}/move", json={"index": 9})
    assert response.status_code == 422


def test_missing_game_returns_404():
    missing = client.get("/api/game/INVALID")
    assert missing.status_code == 404
