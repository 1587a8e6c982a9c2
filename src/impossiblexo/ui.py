"""FastAPI-powered web UI for playing ImpossibleXO in the browser."""

from __future__ import annotations

import logging
import random
import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional, Tuple

from fastapi import BackgroundTasks, FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ConfigDict, Field

from .board import Mark
from .game import Game
from .minimax import Minimax
from .players import DumbComputer, Human, ImpossibleComputer, Player

logger = logging.getLogger(__name__)

OpponentType = Literal["impossible", "dumb", "human"]

DEFAULT_DEPTH = 7
MAX_DEPTH = 9
AI_THINK_DELAY: Tuple[float, float] = (0.4, 0.9)


@dataclass
class GameSession:
    """Container for an active game and its (optional) computer opponent."""

    game: Game
    opponent: str
    depth: int
    computer: Optional[Player] = None
    move_log: List[Dict[str, int | str]] = field(default_factory=list)
    ai_pending: bool = False
    advisors: Dict[Mark, Minimax] = field(default_factory=dict, repr=False)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def computer_to_move(self) -> bool:
        return (
            self.computer is not None
            and not self.game.over()
            and self.game.current_player is self.computer
        )

    def advisor(self, mark: Mark) -> Minimax:
        # One engine per mark: cached scores are relative to max_mark.
        engine = self.advisors.get(mark)
        if engine is None:
            engine = Minimax(self.depth)
            engine.max_mark = mark
            engine.min_mark = mark.opposite
            self.advisors[mark] = engine
        return engine


SESSIONS: Dict[str, GameSession] = {}
app = FastAPI(
    title="ImpossibleXO", description="Tic-tac-toe against a minimax opponent"
)


class NewGameRequest(BaseModel):
    """Request payload for starting a new game."""

    model_config = ConfigDict(populate_by_name=True)

    depth: int = Field(
        default=DEFAULT_DEPTH,
        ge=0,
        le=MAX_DEPTH,
        description="Minimax depth limit controlling computer strength",
    )
    opponent: OpponentType = "impossible"
    human_first: bool = Field(default=True, alias="humanFirst")


class MoveRequest(BaseModel):
    """Request payload for submitting a move on an existing game."""

    space: int = Field(ge=0, le=8)


def _build_opponent(opponent: str, mark: Mark, depth: int) -> Player:
    if opponent == "impossible":
        return ImpossibleComputer(mark, mark.opposite, depth_limit=depth)
    if opponent == "dumb":
        return DumbComputer(mark, mark.opposite)
    return Human(mark, mark.opposite)


def _create_session(request: NewGameRequest) -> Tuple[str, GameSession]:
    """Create a new game session and register it for later access."""

    human_mark = Mark.X if request.human_first else Mark.O
    human = Human(human_mark)
    other = _build_opponent(request.opponent, human_mark.opposite, request.depth)
    players = [human, other] if request.human_first else [other, human]

    session = GameSession(
        game=Game(depth_limit=request.depth, players=players),
        opponent=request.opponent,
        depth=request.depth,
        computer=None if request.opponent == "human" else other,
    )
    session_id = uuid.uuid4().hex
    SESSIONS[session_id] = session
    logger.info(
        "created game %s: opponent=%s depth=%d human_first=%s",
        session_id,
        request.opponent,
        request.depth,
        request.human_first,
    )
    return session_id, session


def _get_session(game_id: str) -> GameSession:
    try:
        return SESSIONS[game_id]
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found") from exc


def _run_ai_turn(game_id: str) -> None:
    session = SESSIONS.get(game_id)
    if not session:
        return

    time.sleep(max(0.0, random.uniform(*AI_THINK_DELAY)))

    with session.lock:
        try:
            if not session.computer_to_move():
                return
            game = session.game
            space = game.play_turn()
            session.move_log.append(
                {"player": session.computer.mark.value, "space": space}
            )
            logger.info("game %s: %s took space %d", game_id, session.computer, space)
        finally:
            session.ai_pending = False


def _serialize_session(game_id: str, session: GameSession) -> Dict[str, object]:
    with session.lock:
        game = session.game
        winner = game.winner()
        state: Dict[str, object] = {
            "id": game_id,
            "currentPlayer": game.current_player.mark.value,
            "winner": winner.value if winner else None,
            "drawn": game.drawn(),
            "spaces": [
                "" if space == Mark.BLANK else space.value
                for space in game.board.spaces
            ],
            "availableSpaces": (
                [] if game.over() else game.board.spaces_with_mark(Mark.BLANK)
            ),
            "opponent": session.opponent,
            "depth": session.depth,
            "moveLog": list(session.move_log),
            "aiPending": session.ai_pending,
        }
        if session.move_log:
            state["lastMove"] = session.move_log[-1]
        return state


def _schedule_ai(
    game_id: str, session: GameSession, background_tasks: Optional[BackgroundTasks]
) -> None:
    with session.lock:
        if not session.computer_to_move() or session.ai_pending:
            return
        session.ai_pending = True
    if background_tasks is not None:
        background_tasks.add_task(_run_ai_turn, game_id)


def _apply_player_move(game_id: str, session: GameSession, space: int) -> None:
    with session.lock:
        game = session.game
        if game.over():
            raise HTTPException(status_code=400, detail="Game already finished")

        if session.ai_pending or session.computer_to_move():
            raise HTTPException(
                status_code=400, detail="Computer is completing its move"
            )

        player = game.current_player
        try:
            game.play(space)
        except ValueError as exc:
            logger.warning("game %s: rejected move %d: %s", game_id, space, exc)
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        session.move_log.append({"player": player.mark.value, "space": space})


@app.post("/api/game")
def create_game(
    request: NewGameRequest, background_tasks: BackgroundTasks
) -> Dict[str, object]:
    game_id, session = _create_session(request)
    _schedule_ai(game_id, session, background_tasks)
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/move")
def make_move(
    game_id: str, request: MoveRequest, background_tasks: BackgroundTasks
) -> Dict[str, object]:
    session = _get_session(game_id)
    _apply_player_move(game_id, session, request.space)
    _schedule_ai(game_id, session, background_tasks)
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}/scores")
def move_scores(game_id: str) -> Dict[str, object]:
    """Minimax scores for the side to move, from that side's point of view."""

    session = _get_session(game_id)
    with session.lock:
        game = session.game
        mark = game.current_player.mark
        if game.over():
            scores: Dict[int, int] = {}
        else:
            scores = session.advisor(mark).scores(game.board, mark)
    return {
        "player": mark.value,
        "scores": {str(space): score for space, score in scores.items()},
    }


@app.get("/", response_class=HTMLResponse)
def index() -> str:
    return HTML_PAGE


HTML_PAGE = """<!DOCTYPE html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <title>ImpossibleXO</title>
    <style>
      :root {
        color-scheme: light;
        font-family: system-ui, -apple-system, BlinkMacSystemFont, \"Segoe UI\", sans-serif;
      }
      body {
        margin: 0;
        min-height: 100vh;
        display: flex;
        justify-content: center;
        padding: 2rem 1rem;
        background: radial-gradient(circle at top, #f2f5ff, #dbe0ff 40%, #cfd8ff 70%);
        color: #13203a;
      }
      main {
        background: rgba(255, 255, 255, 0.92);
        border-radius: 18px;
        box-shadow: 0 20px 40px rgba(34, 47, 79, 0.16);
        padding: 2rem;
        width: min(480px, 100%);
        text-align: center;
      }
      .controls {
        display: flex;
        flex-wrap: wrap;
        gap: 0.75rem;
        justify-content: center;
        margin-bottom: 1.5rem;
      }
      button,
      select {
        font-size: 1rem;
        padding: 0.5rem 0.9rem;
        border-radius: 999px;
        border: 1px solid rgba(60, 70, 120, 0.25);
        background: white;
        cursor: pointer;
        font-family: inherit;
      }
      .board {
        display: grid;
        grid-template-columns: repeat(3, 96px);
        gap: 6px;
        justify-content: center;
        margin: 0 auto 1rem;
      }
      .cell {
        height: 96px;
        border-radius: 12px;
        font-size: 2.4rem;
        font-weight: 700;
      }
      .board.thinking .cell {
        cursor: progress;
      }
      #message {
        min-height: 1.5rem;
        color: #b42318;
      }
    </style>
  </head>
  <body>
    <main>
      <h1>ImpossibleXO</h1>
      <div class=\"controls\">
        <select id=\"opponent\">
          <option value=\"impossible\">Impossible computer</option>
          <option value=\"dumb\">Dumb computer</option>
          <option value=\"human\">Human</option>
        </select>
        <select id=\"depth\"></select>
        <select id=\"first\">
          <option value=\"true\">I go first</option>
          <option value=\"false\">Computer goes first</option>
        </select>
        <button id=\"new-game\">New game</button>
      </div>
      <p id=\"status\">Start a new game.</p>
      <div id=\"board\" class=\"board\"></div>
      <p id=\"message\"></p>
    </main>
    <script>
      const boardEl = document.getElementById('board');
      const statusEl = document.getElementById('status');
      const messageEl = document.getElementById('message');
      const depthEl = document.getElementById('depth');
      let gameId = null;
      let gameState = null;
      let pollHandle = null;

      for (let depth = 0; depth <= 9; depth += 1) {
        const option = document.createElement('option');
        option.value = String(depth);
        option.textContent = `Depth ${depth}`;
        option.selected = depth === 7;
        depthEl.appendChild(option);
      }

      function render() {
        boardEl.innerHTML = '';
        const spaces = gameState ? gameState.spaces : Array(9).fill('');
        const available = new Set(gameState ? gameState.availableSpaces : []);
        boardEl.classList.toggle('thinking', Boolean(gameState && gameState.aiPending));
        spaces.forEach((value, index) => {
          const cell = document.createElement('button');
          cell.className = 'cell';
          cell.textContent = value;
          cell.disabled = !available.has(index) || (gameState && gameState.aiPending);
          cell.addEventListener('click', () => sendMove(index));
          boardEl.appendChild(cell);
        });
        if (!gameState) return;
        if (gameState.winner) {
          statusEl.textContent = `${gameState.winner} wins!`;
        } else if (gameState.drawn) {
          statusEl.textContent = "It's a draw!";
        } else if (gameState.aiPending) {
          statusEl.textContent = 'Computer is thinking…';
        } else {
          statusEl.textContent = `${gameState.currentPlayer} to move`;
        }
      }

      function setState(state) {
        gameState = state;
        gameId = state.id;
        render();
        if (state.aiPending && pollHandle === null) {
          pollHandle = window.setTimeout(poll, 300);
        }
      }

      async function poll() {
        pollHandle = null;
        if (!gameId) return;
        const response = await fetch(`/api/game/${gameId}`);
        if (response.ok) {
          setState(await response.json());
        }
      }

      async function startGame() {
        messageEl.textContent = '';
        const response = await fetch('/api/game', {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify({
            depth: Number.parseInt(depthEl.value, 10),
            opponent: document.getElementById('opponent').value,
            humanFirst: document.getElementById('first').value === 'true',
          }),
        });
        if (!response.ok) {
          messageEl.textContent = 'Unable to start game';
          return;
        }
        setState(await response.json());
      }

      async function sendMove(space) {
        if (!gameId) return;
        messageEl.textContent = '';
        const response = await fetch(`/api/game/${gameId}/move`, {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify({ space }),
        });
        const payload = await response.json().catch(() => ({}));
        if (!response.ok) {
          messageEl.textContent = payload.detail || 'Invalid move';
          return;
        }
        setState(payload);
      }

      document.getElementById('new-game').addEventListener('click', startGame);
      render();
    </script>
  </body>
</html>
"""
