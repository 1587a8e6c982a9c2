"""Tests for the FastAPI ImpossibleXO interface."""

from __future__ import annotations

from fastapi.testclient import TestClient

from impossiblexo import ui
from impossiblexo.ui import app


client = TestClient(app)
ui.AI_THINK_DELAY = (0.0, 0.0)


def new_game(**payload):
    response = client.post("/api/game", json=payload)
    assert response.status_code == 200
    return response.json()


def test_create_game_and_first_move():
    payload = new_game(depth=7)
    assert payload["currentPlayer"] == "X"
    assert payload["moveLog"] == []
    assert payload["spaces"] == [""] * 9
    assert payload["availableSpaces"] == list(range(9))
    assert payload["opponent"] == "impossible"
    assert payload["aiPending"] is False

    game_id = payload["id"]
    move_response = client.post(f"/api/game/{game_id}/move", json={"space": 4})
    assert move_response.status_code == 200
    state = move_response.json()
    assert state["moveLog"][0] == {"player": "X", "space": 4}
    assert state["spaces"][4] == "X"
    assert state["currentPlayer"] == "O"
    assert state["aiPending"] is True

    follow_up = client.get(f"/api/game/{game_id}")
    assert follow_up.status_code == 200
    final_state = follow_up.json()
    assert final_state["currentPlayer"] == "X"
    assert final_state["aiPending"] is False
    assert final_state["moveLog"][-1]["player"] == "O"
    assert final_state["lastMove"] == final_state["moveLog"][-1]
    assert final_state["spaces"].count("O") == 1


def test_computer_can_move_first():
    payload = new_game(opponent="dumb", humanFirst=False)
    assert payload["aiPending"] is True

    state = client.get(f"/api/game/{payload['id']}").json()
    assert state["currentPlayer"] == "O"
    assert [move["player"] for move in state["moveLog"]] == ["X"]


def test_invalid_move_rejected():
    game_id = new_game(depth=1)["id"]

    first_move = client.post(f"/api/game/{game_id}/move", json={"space": 0})
    assert first_move.status_code == 200

    duplicate_move = client.post(f"/api/game/{game_id}/move", json={"space": 0})
    assert duplicate_move.status_code == 400
    assert duplicate_move.json()["detail"]


def test_rejects_unsupported_settings():
    assert client.post("/api/game", json={"depth": 10}).status_code == 422
    assert client.post("/api/game", json={"opponent": "genius"}).status_code == 422

    game_id = new_game()["id"]
    off_board = client.post(f"/api/game/{game_id}/move", json={"space": 9})
    assert off_board.status_code == 422


def test_missing_game_returns_404():
    assert client.get("/api/game/missing").status_code == 404
    assert client.post("/api/game/missing/move", json={"space": 0}).status_code == 404


def test_human_against_human_to_the_finish():
    game_id = new_game(opponent="human")["id"]
    state = None
    for space in (0, 3, 1, 4, 2):
        response = client.post(f"/api/game/{game_id}/move", json={"space": space})
        assert response.status_code == 200
        state = response.json()
        assert state["aiPending"] is False

    assert state["winner"] == "X"
    assert state["drawn"] is False
    assert state["availableSpaces"] == []

    late = client.post(f"/api/game/{game_id}/move", json={"space": 8})
    assert late.status_code == 400


def test_scores_for_side_to_move():
    game_id = new_game(opponent="human")["id"]
    for space in (0, 3, 1, 4):
        client.post(f"/api/game/{game_id}/move", json={"space": space})

    response = client.get(f"/api/game/{game_id}/scores")
    assert response.status_code == 200
    payload = response.json()
    assert payload["player"] == "X"
    assert payload["scores"]["2"] == 1

    state = client.get(f"/api/game/{game_id}").json()
    assert state["spaces"][2] == ""


def test_index_serves_page():
    response = client.get("/")
    assert response.status_code == 200
    assert "ImpossibleXO" in response.text
