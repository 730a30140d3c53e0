"""FastAPI-powered web UI for playing tic-tac-toe against the computer."""

from __future__ import annotations

import logging
import uuid
from typing import Dict, Optional, Tuple

from fastapi import BackgroundTasks, FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field, field_validator, model_validator

from .ai import DIFFICULTIES, HARD
from .engine import AI_THINK_DELAY, GameEngine
from .rules import EMPTY, available_moves

logger = logging.getLogger(__name__)

SESSIONS: Dict[str, GameEngine] = {}
app = FastAPI(title="Tic-Tac-Toe", description="Play tic-tac-toe against the computer")


class DifficultyRequest(BaseModel):
    """Request payload carrying a difficulty token."""

    difficulty: Optional[str] = Field(
        default=HARD,
        description="EASY plays random moves, HARD plays perfectly",
    )

    @field_validator("difficulty")
    @classmethod
    def default_to_hard(cls, value: Optional[str]) -> str:
        # Unknown tokens fall back to the strongest play
        return value if value in DIFFICULTIES else HARD


class MoveRequest(BaseModel):
    """A move given either as a flat index or as a row/column pair."""

    index: Optional[int] = Field(default=None, ge=0, le=8)
    row: Optional[int] = Field(default=None, ge=0, le=2)
    col: Optional[int] = Field(default=None, ge=0, le=2)

    @model_validator(mode="after")
    def ensure_target(self) -> "MoveRequest":
        if self.index is None and (self.row is None or self.col is None):
            raise ValueError("Provide either 'index' or both 'row' and 'col'")
        return self


def _create_session() -> Tuple[str, GameEngine]:
    engine = GameEngine(think_delay=AI_THINK_DELAY)
    session_id = uuid.uuid4().hex
    SESSIONS[session_id] = engine
    return session_id, engine


def _get_session(game_id: str) -> GameEngine:
    try:
        return SESSIONS[game_id]
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found") from exc


def _serialize_session(game_id: str, engine: GameEngine) -> Dict[str, object]:
    snapshot = engine.state()
    return {
        "id": game_id,
        "board": ["" if c == EMPTY else c for c in snapshot.board],
        "currentPlayer": snapshot.current_player,
        "status": snapshot.status,
        "aiThinking": snapshot.thinking,
        "winningLine": list(snapshot.winning_line) if snapshot.winning_line else None,
        "difficulty": snapshot.difficulty,
        "gameStarted": snapshot.started,
        "gameOver": snapshot.game_over,
        "availableMoves": [] if snapshot.game_over else available_moves(snapshot.board),
    }


@app.post("/api/game")
def create_game(request: DifficultyRequest) -> Dict[str, object]:
    game_id, engine = _create_session()
    engine.start_game(request.difficulty)
    logger.info("Created game %s", game_id)
    return _serialize_session(game_id, engine)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    engine = _get_session(game_id)
    return _serialize_session(game_id, engine)


@app.post("/api/game/{game_id}/move")
def make_move(
    game_id: str, request: MoveRequest, background_tasks: BackgroundTasks
) -> Dict[str, object]:
    engine = _get_session(game_id)
    # The computer's reply runs after the response is sent
    scheduler = background_tasks.add_task
    if request.index is not None:
        accepted = engine.apply_human_move(request.index, scheduler)
    else:
        accepted = engine.apply_human_move_at(request.row, request.col, scheduler)
    if not accepted:
        raise HTTPException(status_code=400, detail="Move is not allowed right now")
    return _serialize_session(game_id, engine)


@app.post("/api/game/{game_id}/reset")
def reset_game(game_id: str) -> Dict[str, object]:
    engine = _get_session(game_id)
    engine.reset_game()
    return _serialize_session(game_id, engine)


@app.post("/api/game/{game_id}/new")
def new_game(game_id: str) -> Dict[str, object]:
    engine = _get_session(game_id)
    engine.start_new_game()
    return _serialize_session(game_id, engine)


@app.put("/api/game/{game_id}/difficulty")
def change_difficulty(game_id: str, request: DifficultyRequest) -> Dict[str, object]:
    engine = _get_session(game_id)
    if not engine.set_difficulty(request.difficulty):
        raise HTTPException(
            status_code=400, detail="Difficulty can only change before a game starts"
        )
    return _serialize_session(game_id, engine)


@app.get("/", response_class=HTMLResponse)
def index() -> str:
    return HTML_PAGE


HTML_PAGE = """<!DOCTYPE html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <title>Tic-Tac-Toe</title>
    <style>
      :root {
        color-scheme: light;
        font-family: system-ui, -apple-system, BlinkMacSystemFont, \"Segoe UI\", sans-serif;
      }
      body {
        margin: 0;
        background: radial-gradient(circle at top, #f2f5ff, #dbe0ff 40%, #cfd8ff 70%);
        min-height: 100vh;
        display: flex;
        justify-content: center;
        padding: 2rem 1rem;
        color: #13203a;
      }
      main {
        background: rgba(255, 255, 255, 0.92);
        border-radius: 18px;
        box-shadow: 0 20px 40px rgba(34, 47, 79, 0.16);
        padding: 2rem;
        width: min(420px, 100%);
        text-align: center;
      }
      .picker button,
      .controls button {
        font-size: 1rem;
        padding: 0.55rem 0.95rem;
        border-radius: 999px;
        border: 1px solid rgba(60, 70, 120, 0.25);
        background: white;
        cursor: pointer;
        margin: 0 0.25rem;
      }
      .board {
        display: grid;
        grid-template-columns: repeat(3, 96px);
        gap: 6px;
        justify-content: center;
        margin: 1.5rem 0;
      }
      .board.thinking {
        opacity: 0.7;
        pointer-events: none;
      }
      .cell {
        height: 96px;
        font-size: 2.5rem;
        font-weight: 700;
        border-radius: 12px;
        border: 1px solid rgba(60, 70, 120, 0.25);
        background: #f8f9ff;
        cursor: pointer;
      }
      .cell.win {
        background: #ffe6a8;
      }
      .hidden {
        display: none;
      }
    </style>
  </head>
  <body>
    <main>
      <h1>Tic-Tac-Toe</h1>
      <div class=\"picker\" id=\"picker\">
        <p>Choose a difficulty</p>
        <button data-difficulty=\"EASY\">Easy</button>
        <button data-difficulty=\"HARD\">Hard</button>
      </div>
      <section id=\"game\" class=\"hidden\">
        <p id=\"status\"></p>
        <div class=\"board\" id=\"board\"></div>
        <div class=\"controls\">
          <button id=\"again\">Play again</button>
          <button id=\"reset\">Change difficulty</button>
        </div>
      </section>
    </main>
    <script>
      const picker = document.getElementById('picker');
      const gameEl = document.getElementById('game');
      const boardEl = document.getElementById('board');
      const statusEl = document.getElementById('status');
      let gameId = null;
      let gameState = null;
      let pollHandle = null;

      const STATUS_TEXT = {
        PLAYER_WON: 'You win!',
        AI_WON: 'The computer wins.',
        DRAW: "It's a draw.",
      };

      function render() {
        boardEl.innerHTML = '';
        if (!gameState) return;
        const line = gameState.winningLine || [];
        gameState.board.forEach((value, index) => {
          const cell = document.createElement('button');
          cell.className = 'cell' + (line.includes(index) ? ' win' : '');
          cell.textContent = value;
          cell.addEventListener('click', () => sendMove(index));
          boardEl.appendChild(cell);
        });
        boardEl.classList.toggle('thinking', gameState.aiThinking);
        if (gameState.gameOver) {
          statusEl.textContent = STATUS_TEXT[gameState.status];
        } else if (gameState.aiThinking) {
          statusEl.textContent = 'Computer is thinking…';
        } else {
          statusEl.textContent = 'Your move (X)';
        }
      }

      function setState(data) {
        gameId = data.id;
        gameState = data;
        picker.classList.toggle('hidden', data.gameStarted);
        gameEl.classList.toggle('hidden', !data.gameStarted);
        render();
        if (data.aiThinking && pollHandle === null) {
          pollHandle = window.setTimeout(poll, 150);
        }
      }

      async function poll() {
        pollHandle = null;
        if (!gameId) return;
        const response = await fetch(`/api/game/${gameId}`);
        if (response.ok) setState(await response.json());
      }

      async function post(url, body) {
        const response = await fetch(url, {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify(body || {}),
        });
        if (response.ok) setState(await response.json());
      }

      async function sendMove(index) {
        if (!gameState || gameState.gameOver || gameState.aiThinking) return;
        await post(`/api/game/${gameId}/move`, { index });
      }

      picker.querySelectorAll('button').forEach((button) => {
        button.addEventListener('click', () =>
          post('/api/game', { difficulty: button.dataset.difficulty })
        );
      });
      document.getElementById('again').addEventListener('click', () =>
        post(`/api/game/${gameId}/new`)
      );
      document.getElementById('reset').addEventListener('click', () =>
        post(`/api/game/${gameId}/reset`)
      );
    </script>
  </body>
</html>
"""
